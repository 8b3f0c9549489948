# src/eloboard/exceptions.py

"""Custom exception hierarchy for EloBoard.

This module provides a structured exception hierarchy that enables:
1. Mapping each failure to a user-facing reply or an HTTP status code
2. Detailed error context for logging and debugging
3. Clear distinction between usage errors, rejections and operational failures
"""

from __future__ import annotations


class EloBoardError(Exception):
    """Base exception for all EloBoard errors.

    Attributes:
        message: Human-readable error description
        details: Optional dict with additional context for logging/debugging
    """

    def __init__(self, message: str, details: dict | None = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(message)


# =============================================================================
# Usage Errors (resolved to the help reply)
# =============================================================================


class UsageError(EloBoardError):
    """Base class for commands that should be answered with the help text."""

    pass


class MalformedCommandError(UsageError):
    """Raised when command text does not match the game report grammar."""

    def __init__(self, text: str) -> None:
        super().__init__(
            message="Command does not match the game report grammar",
            details={"text": text},
        )


# =============================================================================
# Resource Not Found Errors (HTTP 404)
# =============================================================================


class ResourceNotFoundError(EloBoardError):
    """Base class for resource not found errors."""

    pass


class GameTypeNotFoundError(ResourceNotFoundError):
    """Raised when a team has no game type with the given name."""

    def __init__(self, team_id: str, name: str) -> None:
        super().__init__(
            message=f"Game type '{name}' not found for team {team_id}",
            details={"team_id": team_id, "game_type_name": name},
        )


class RatingEntryNotFoundError(ResourceNotFoundError):
    """Raised when a composition has never played in a partition."""

    def __init__(self, member_key: str, game_type_id: int, team_size: int) -> None:
        super().__init__(
            message=f"No rating for {member_key} in game type {game_type_id}",
            details={
                "member_key": member_key,
                "game_type_id": game_type_id,
                "team_size": team_size,
            },
        )


# =============================================================================
# Validation Errors (user-facing rejections, HTTP 422/409)
# =============================================================================


class ValidationError(EloBoardError):
    """Base class for rejections that abort a command before any mutation."""

    pass


class UnfairTeamsError(ValidationError):
    """Raised when one side has two players and the other has one."""

    def __init__(self) -> None:
        super().__init__(message="2 on 1 isn't very fair :dusty_stick:")


class SelfReportError(ValidationError):
    """Raised when the invoking user is one of the participants."""

    def __init__(self, identity: str) -> None:
        super().__init__(
            message="A third-party witness must enter the game for it to count.",
            details={"identity": identity},
        )


class DisallowedIdentityError(ValidationError):
    """Raised when a participant is a bot or a broadcast mention."""

    def __init__(self, identities: list[str]) -> None:
        super().__init__(
            message=":areyoukiddingme:",
            details={"identities": identities},
        )


class DuplicateEntrantError(ValidationError):
    """Raised when the same identity is entered more than once."""

    def __init__(self, identities: list[str]) -> None:
        super().__init__(
            message="Am I seeing double or did you enter the same person "
            "multiple times? :twinsparrot:",
            details={"identities": identities},
        )


class GameTypeNotRegisteredError(ValidationError):
    """Raised when a command names a game type the team never registered."""

    def __init__(self, team_id: str, name: str) -> None:
        super().__init__(
            message=f"The game of {name} has not been registered for this team "
            "yet. Try `/elo games` to list the registered games or "
            f"`/elo register {name}` to register it.",
            details={"team_id": team_id, "game_type_name": name},
        )


class GameTypeAlreadyRegisteredError(ValidationError):
    """Raised when registering a game type that already exists for a team."""

    def __init__(self, team_id: str, name: str) -> None:
        super().__init__(
            message="That game has already been registered.",
            details={"team_id": team_id, "game_type_name": name},
        )


# =============================================================================
# Operational Errors (HTTP 500, generic failure reply)
# =============================================================================


class RatingEngineError(EloBoardError):
    """Base class for rating update errors."""

    pass


class ConcurrentUpdateError(RatingEngineError):
    """Raised when a match update keeps conflicting with concurrent writers."""

    def __init__(self, attempts: int, member_keys: list[str]) -> None:
        super().__init__(
            message=f"Rating update still conflicting after {attempts} attempt(s)",
            details={"attempts": attempts, "member_keys": member_keys},
        )


class DoubleReplyError(EloBoardError):
    """Raised when a single command tries to produce a second reply."""

    def __init__(self, first: str, second: str) -> None:
        super().__init__(
            message=f"double reply. original messages:\n{first}\n{second}",
            details={"first": first, "second": second},
        )
