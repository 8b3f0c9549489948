# src/eloboard/services/leaderboard_service.py

"""Ranked views over rating entries: top-N lists and surrounding ranks."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from eloboard import config
from eloboard.db import models
from eloboard.exceptions import RatingEntryNotFoundError
from eloboard.identity import members

logger = logging.getLogger(__name__)

SINGLES = 1
DOUBLES = 2


@dataclass
class RankedEntry:
    """A rating entry paired with its dense rank in its partition."""

    rank: int
    entry: models.RatingEntry


@dataclass
class Leaderboard:
    """Top entries for one game type, split by team size."""

    game_type: models.GameType
    singles: list[RankedEntry]
    doubles: list[RankedEntry]

    @property
    def is_empty(self) -> bool:
        return not self.singles and not self.doubles


# ===============================================
# == Pure Ranking
# ===============================================


def _ranking_key(entry: models.RatingEntry) -> tuple[float, str]:
    # Highest rating first, member_key keeps equal ratings in a stable order
    return (-entry.rating, entry.member_key)


def dense_rank(entries: Iterable[models.RatingEntry]) -> list[RankedEntry]:
    """
    Ranks entries by rating, highest first.

    Equal ratings share a rank and the next lower rating gets the next
    integer, so [100, 100, 90] ranks as [1, 1, 2].
    """
    ranked: list[RankedEntry] = []
    rank = 0
    previous_rating: float | None = None
    for entry in sorted(entries, key=_ranking_key):
        if entry.rating != previous_rating:
            rank += 1
            previous_rating = entry.rating
        ranked.append(RankedEntry(rank=rank, entry=entry))
    return ranked


def surrounding_window(ranked: list[RankedEntry], member_key: str) -> list[RankedEntry]:
    """
    Entries ranked one above, level with, and one below the target.

    Ties can make the window larger than three rows. Returns an empty list
    if the target isn't ranked.
    """
    target = next((r for r in ranked if r.entry.member_key == member_key), None)
    if target is None:
        return []
    low, high = target.rank - 1, target.rank + 1
    return [r for r in ranked if low <= r.rank <= high]


# ===============================================
# == Queries
# ===============================================


def _partition_query(team_id: str, game_type_id: int, team_size: int):
    return select(models.RatingEntry).where(
        models.RatingEntry.team_id == team_id,
        models.RatingEntry.game_type_id == game_type_id,
        models.RatingEntry.team_size == team_size,
    )


async def top_entries(
    db: AsyncSession,
    team_id: str,
    game_type_id: int,
    team_size: int,
    limit: int | None = None,
) -> list[RankedEntry]:
    """The highest-rated compositions in a partition, with their ranks."""
    limit = limit or config.LEADERBOARD_SIZE
    query = (
        _partition_query(team_id, game_type_id, team_size)
        .order_by(models.RatingEntry.rating.desc(), models.RatingEntry.member_key)
        .limit(limit)
    )
    result = await db.execute(query)
    # Dense ranks of a prefix of the ordering match those of the full partition
    return dense_rank(result.scalars().all())


async def surrounding_ranks(
    db: AsyncSession,
    team_id: str,
    game_type_id: int,
    team_size: int,
    member_key: str,
) -> list[RankedEntry]:
    """
    Compositions ranked next to `member_key` in its partition.

    Raises:
        RatingEntryNotFoundError: If the composition has no rating yet.
    """
    result = await db.execute(_partition_query(team_id, game_type_id, team_size))
    window = surrounding_window(dense_rank(result.scalars().all()), member_key)
    if not window:
        raise RatingEntryNotFoundError(member_key, game_type_id, team_size)
    return window


async def leaderboard(
    db: AsyncSession, team_id: str, game_type: models.GameType
) -> Leaderboard:
    """Singles and doubles top lists for a game type."""
    singles = await top_entries(db, team_id, game_type.id, SINGLES)
    doubles = await top_entries(db, team_id, game_type.id, DOUBLES)
    logger.debug(
        "Built leaderboard",
        extra={
            "game_type_id": game_type.id,
            "singles": len(singles),
            "doubles": len(doubles),
        },
    )
    return Leaderboard(game_type=game_type, singles=singles, doubles=doubles)


async def ratings_for_user(
    db: AsyncSession, team_id: str, identity: str
) -> list[models.RatingEntry]:
    """Every composition the identity plays in, across all game types."""
    query = (
        select(models.RatingEntry)
        .where(
            models.RatingEntry.team_id == team_id,
            models.RatingEntry.member_key.contains(identity, autoescape=True),
        )
        .options(selectinload(models.RatingEntry.game_type))
        .order_by(models.RatingEntry.game_type_id, models.RatingEntry.team_size)
    )
    result = await db.execute(query)
    # LIKE also matches longer ids sharing a prefix ('@U1' in '@U12')
    return [
        entry for entry in result.scalars().all() if identity in members(entry.member_key)
    ]
