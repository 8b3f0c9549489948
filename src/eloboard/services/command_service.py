# src/eloboard/services/command_service.py

"""Business logic for `/elo` commands."""

from __future__ import annotations

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from eloboard import config
from eloboard.commands.parser import (
    Command,
    CommandKind,
    Outcome,
    parse_command,
    parse_game_report,
)
from eloboard.exceptions import (
    DoubleReplyError,
    GameTypeNotRegisteredError,
    UsageError,
    ValidationError,
)
from eloboard.identity import normalize, team_tag, user_identity
from eloboard.rating import elo_engine
from eloboard.schemas import command as command_schema
from eloboard.services import game_type_service, leaderboard_service, validation

logger = logging.getLogger(__name__)


class Responder:
    """Holds the single reply a command is allowed to produce."""

    def __init__(self) -> None:
        self._result: command_schema.CommandResult | None = None

    @property
    def result(self) -> command_schema.CommandResult | None:
        return self._result

    def reply(self, result: command_schema.CommandResult, error: bool = False) -> None:
        """
        Records the reply.

        An error reply may replace an earlier one; anything else raises
        DoubleReplyError if a reply was already recorded.
        """
        if self._result is not None and not error:
            raise DoubleReplyError(
                self._result.model_dump_json(), result.model_dump_json()
            )
        self._result = result


async def handle_command(
    db: AsyncSession, command_in: command_schema.CommandRequest
) -> command_schema.CommandResult:
    """
    Processes one `/elo` command and returns exactly one tagged result.

    Usage errors become help, validation rules become rejections, and any
    other failure rolls back the session and becomes a generic failure so
    no partial rating update survives and no traceback reaches the user.
    """
    responder = Responder()
    command = parse_command(command_in.text)
    logger.info(
        "Processing command",
        extra={
            "team_id": command_in.team_id,
            "user_id": command_in.user_id,
            "command": command.kind.value,
        },
    )

    try:
        await _dispatch(db, command, command_in, responder)
    except Exception as e:
        logger.error(
            "Failed to process command",
            extra={
                "team_id": command_in.team_id,
                "command": command.kind.value,
                "error": str(e),
            },
            exc_info=True,
        )
        await db.rollback()
        responder.reply(
            command_schema.FailureResult(reason=config.GENERIC_FAILURE_MESSAGE),
            error=True,
        )

    assert responder.result is not None
    return responder.result


async def _dispatch(
    db: AsyncSession,
    command: Command,
    command_in: command_schema.CommandRequest,
    responder: Responder,
) -> None:
    team_id = command_in.team_id
    try:
        if command.kind == CommandKind.HELP:
            responder.reply(command_schema.HelpResult())
        elif command.kind == CommandKind.RATING:
            await _rating(db, team_id, user_identity(command_in.user_id), responder)
        elif command.kind == CommandKind.LEADERBOARD:
            await _leaderboard(db, team_id, command.argument, responder)
        elif command.kind == CommandKind.REGISTER:
            game_type = await game_type_service.register(db, team_id, command.argument)
            responder.reply(
                command_schema.GameTypeRegisteredResult(name=game_type.name)
            )
        elif command.kind == CommandKind.GAMES:
            game_types = await game_type_service.list_for_team(db, team_id)
            responder.reply(
                command_schema.GameTypeListResult(names=[g.name for g in game_types])
            )
        else:
            await _game(
                db, team_id, user_identity(command_in.user_id), command, responder
            )
    except UsageError as e:
        logger.debug("Answering with help", extra=e.details)
        responder.reply(command_schema.HelpResult())
    except ValidationError as e:
        logger.info("Command rejected: %s", type(e).__name__, extra=e.details)
        responder.reply(command_schema.RejectedResult(reason=e.message))


async def _rating(
    db: AsyncSession, team_id: str, identity: str, responder: Responder
) -> None:
    entries = await leaderboard_service.ratings_for_user(db, team_id, identity)
    responder.reply(
        command_schema.RatingSummaryResult(
            rows=[
                command_schema.RatingRow(
                    game_type_name=entry.game_type.name,
                    team_size=entry.team_size,
                    member_key=entry.member_key,
                    team_tag=team_tag(entry.member_key),
                    rating=entry.rating,
                    last_rating_change=entry.last_rating_change,
                )
                for entry in entries
            ]
        )
    )


def _ranked_rows(
    ranked: list[leaderboard_service.RankedEntry],
) -> list[command_schema.RankedRow]:
    return [
        command_schema.RankedRow(
            rank=r.rank,
            member_key=r.entry.member_key,
            team_tag=team_tag(r.entry.member_key),
            rating=r.entry.rating,
        )
        for r in ranked
    ]


async def _leaderboard(
    db: AsyncSession, team_id: str, name: str, responder: Responder
) -> None:
    game_type = await game_type_service.find(db, team_id, name)
    if game_type is None:
        raise GameTypeNotRegisteredError(team_id, name)

    board = await leaderboard_service.leaderboard(db, team_id, game_type)
    responder.reply(
        command_schema.LeaderboardResult(
            game_type_name=game_type.name,
            singles_rows=_ranked_rows(board.singles),
            doubles_rows=_ranked_rows(board.doubles),
        )
    )


async def _game(
    db: AsyncSession,
    team_id: str,
    identity: str,
    command: Command,
    responder: Responder,
) -> None:
    report = parse_game_report(command.argument)
    game_type = await validation.validate_report(db, report, team_id, identity)

    outcome = report.outcome
    if outcome == Outcome.UNRECOGNIZED:
        responder.reply(command_schema.HelpResult())
        return

    # Plain values: a retry inside record_match rolls back and expires ORM state
    game_type_id, game_type_name = game_type.id, game_type.name
    delta = await elo_engine.record_match(
        db,
        team_id=team_id,
        game_type_id=game_type_id,
        team_size=report.team_size,
        team1_key=normalize(report.p1, report.p2),
        team2_key=normalize(report.p3, report.p4),
        outcome=outcome,
    )
    responder.reply(
        command_schema.MatchRecordedResult(
            team1_tag=team_tag(delta.team1_key),
            team1_delta=delta.team1_change,
            team2_tag=team_tag(delta.team2_key),
            team2_delta=delta.team2_change,
            game_type_name=game_type_name,
            outcome=outcome,
        )
    )
