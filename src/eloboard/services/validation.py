# src/eloboard/services/validation.py

"""Fairness and integrity checks run on a game report before rating it."""

from __future__ import annotations

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from eloboard.commands.parser import GameReport
from eloboard.db import models
from eloboard.exceptions import (
    DisallowedIdentityError,
    DuplicateEntrantError,
    GameTypeNotRegisteredError,
    SelfReportError,
    UnfairTeamsError,
)
from eloboard.identity import RESERVED_IDENTITIES
from eloboard.services import game_type_service

logger = logging.getLogger(__name__)


def check_participants(report: GameReport, invoking_identity: str) -> None:
    """
    Validates who took part in a reported game.

    The rules run in a fixed order and the first one that fails wins.

    Raises:
        UnfairTeamsError: If exactly one side has two players
        SelfReportError: If the reporter is one of the participants
        DisallowedIdentityError: If a participant is a reserved identity
        DuplicateEntrantError: If an identity was entered more than once
    """
    if [report.p2, report.p4].count(None) == 1:
        raise UnfairTeamsError()

    entered = [p for p in report.participants if p]

    if invoking_identity in entered:
        raise SelfReportError(invoking_identity)

    reserved = [p for p in entered if p in RESERVED_IDENTITIES]
    if reserved:
        raise DisallowedIdentityError(reserved)

    if len(set(entered)) != report.team_size * 2:
        raise DuplicateEntrantError(entered)


async def validate_report(
    db: AsyncSession, report: GameReport, team_id: str, invoking_identity: str
) -> models.GameType:
    """
    Runs every check on a game report and resolves its game type.

    Nothing is written to the database here; the game type lookup is a
    plain read.

    Raises:
        ValidationError: The first rule the report breaks, see
            check_participants, or GameTypeNotRegisteredError if the team
            never registered the game.
    """
    check_participants(report, invoking_identity)

    game_type = await game_type_service.find(db, team_id, report.game_type_name)
    if game_type is None:
        raise GameTypeNotRegisteredError(team_id, report.game_type_name)

    logger.debug(
        "Game report passed validation",
        extra={"team_id": team_id, "game_type_id": game_type.id},
    )
    return game_type
