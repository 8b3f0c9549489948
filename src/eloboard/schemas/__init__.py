# src/eloboard/schemas/__init__.py

"""Pydantic schemas for API validation and serialization."""

from .command import (
    CommandRequest,
    CommandResult,
    FailureResult,
    GameTypeListResult,
    GameTypeRegisteredResult,
    HelpResult,
    LeaderboardResult,
    MatchRecordedResult,
    RankedRow,
    RatingRow,
    RatingSummaryResult,
    RejectedResult,
)
from .game_type import GameTypeCreate, GameTypeRead
from .pagination import GameTypeSortField, PaginatedResponse, SortOrder
from .rating import RankedEntryRead, RatingEntryRead

__all__ = [
    # Command
    "CommandRequest",
    "CommandResult",
    "FailureResult",
    "GameTypeListResult",
    "GameTypeRegisteredResult",
    "HelpResult",
    "LeaderboardResult",
    "MatchRecordedResult",
    "RankedRow",
    "RatingRow",
    "RatingSummaryResult",
    "RejectedResult",
    # Game Type
    "GameTypeCreate",
    "GameTypeRead",
    # Pagination
    "GameTypeSortField",
    "PaginatedResponse",
    "SortOrder",
    # Rating
    "RankedEntryRead",
    "RatingEntryRead",
]
