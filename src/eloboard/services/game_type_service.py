# src/eloboard/services/game_type_service.py

"""Registration and lookup of the game types a team plays."""

from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from eloboard.db import models
from eloboard.exceptions import GameTypeAlreadyRegisteredError

logger = logging.getLogger(__name__)


async def find(db: AsyncSession, team_id: str, name: str) -> models.GameType | None:
    """Return the team's game type with exactly this name, if any."""
    return await models.GameType.find_by_team_and_name(db, team_id, name)


async def list_for_team(db: AsyncSession, team_id: str) -> list[models.GameType]:
    """All game types registered by a team, ordered by name."""
    query = (
        select(models.GameType)
        .where(models.GameType.team_id == team_id)
        .order_by(models.GameType.name)
    )
    result = await db.execute(query)
    return list(result.scalars().all())


async def register(db: AsyncSession, team_id: str, name: str) -> models.GameType:
    """
    Registers a new game type for a team and commits it.

    Raises:
        GameTypeAlreadyRegisteredError: If the team already has this game,
            including when a concurrent request registered it first.
    """
    if await find(db, team_id, name) is not None:
        raise GameTypeAlreadyRegisteredError(team_id, name)

    game_type = models.GameType(team_id=team_id, name=name)
    try:
        db.add(game_type)
        await db.commit()
        await db.refresh(game_type)
    except IntegrityError:
        await db.rollback()
        raise GameTypeAlreadyRegisteredError(team_id, name)

    logger.info(
        "Registered game type",
        extra={"team_id": team_id, "game_type_id": game_type.id, "name": name},
    )
    return game_type
