# src/eloboard/rating/elo_engine.py

"""
Elo rating updates for head-to-head games between two compositions.

The expected score for side 1 is 1 / (1 + 10 ** ((R2 - R1) / 400)) and each
side moves by K * (actual - expected). A single match always updates exactly
two RatingEntry rows in one transaction.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.exc import StaleDataError

from eloboard import config
from eloboard.commands.parser import Outcome
from eloboard.db import models
from eloboard.exceptions import ConcurrentUpdateError, RatingEngineError

logger = logging.getLogger(__name__)

# ===============================================
# == Elo Core Implementation
# ===============================================


@dataclass
class MatchDelta:
    """New ratings and rating changes produced by one match."""

    team1_key: str
    team1_rating: float
    team1_change: float
    team2_key: str
    team2_rating: float
    team2_change: float


class EloEngine:
    """Encapsulates the Elo calculation logic."""

    def __init__(self, k_factor: float = config.K_FACTOR):
        self._k_factor = k_factor

    @property
    def k_factor(self) -> float:
        return self._k_factor

    @staticmethod
    def expected_score(rating: float, opponent_rating: float) -> float:
        """Probability-like expected score of `rating` against `opponent_rating`."""
        return 1.0 / (1.0 + 10 ** ((opponent_rating - rating) / 400))

    @staticmethod
    def actual_scores(outcome: Outcome) -> tuple[float, float]:
        """Scores for (side 1, side 2) given what happened to side 1."""
        if outcome == Outcome.WIN:
            return 1.0, 0.0
        if outcome == Outcome.TIE:
            return 0.5, 0.5
        raise RatingEngineError(
            f"Cannot rate a match with outcome {outcome.value}",
            details={"outcome": outcome.value},
        )

    def rating_changes(
        self, rating1: float, rating2: float, outcome: Outcome
    ) -> tuple[float, float]:
        """Rating deltas for both sides. They always sum to zero."""
        expected1 = self.expected_score(rating1, rating2)
        expected2 = 1.0 - expected1
        score1, score2 = self.actual_scores(outcome)
        return (
            self._k_factor * (score1 - expected1),
            self._k_factor * (score2 - expected2),
        )


# ===============================================
# == Persistence
# ===============================================


async def get_or_create_rating_entry(
    db: AsyncSession,
    team_id: str,
    game_type_id: int,
    team_size: int,
    member_key: str,
) -> models.RatingEntry:
    """
    Retrieves a composition's rating entry for update, creating it at the
    default rating if it doesn't exist.
    """
    # FOR UPDATE takes a row lock on backends that support it (PostgreSQL);
    # the version column still catches lost updates everywhere else.
    query = (
        select(models.RatingEntry)
        .where(
            models.RatingEntry.team_id == team_id,
            models.RatingEntry.game_type_id == game_type_id,
            models.RatingEntry.team_size == team_size,
            models.RatingEntry.member_key == member_key,
        )
        .with_for_update()
        .execution_options(populate_existing=True)
    )
    result = await db.execute(query)
    entry = result.scalar_one_or_none()

    if entry is None:
        entry = models.RatingEntry(
            team_id=team_id,
            game_type_id=game_type_id,
            team_size=team_size,
            member_key=member_key,
            rating=config.DEFAULT_RATING,
            last_rating_change=0.0,
        )
        db.add(entry)
        # NOTE: No commit here; record_match owns the transaction.
        await db.flush()
        logger.debug(
            "Created new RatingEntry",
            extra={"member_key": member_key, "game_type_id": game_type_id},
        )
    return entry


async def apply_match(
    db: AsyncSession,
    team_id: str,
    game_type_id: int,
    team_size: int,
    team1_key: str,
    team2_key: str,
    outcome: Outcome,
    engine: EloEngine | None = None,
) -> MatchDelta:
    """
    Applies one match to both compositions' rating entries.

    Changes are flushed but not committed so the caller can commit both
    rows atomically.
    """
    engine = engine or EloEngine()

    # Lock rows in a fixed order so two matches over the same pair of
    # compositions can't deadlock each other.
    keys = sorted({team1_key, team2_key})
    entries = {
        key: await get_or_create_rating_entry(
            db, team_id, game_type_id, team_size, key
        )
        for key in keys
    }
    team1, team2 = entries[team1_key], entries[team2_key]

    change1, change2 = engine.rating_changes(team1.rating, team2.rating, outcome)

    team1.rating = team1.rating + change1
    team1.last_rating_change = change1
    team2.rating = team2.rating + change2
    team2.last_rating_change = change2
    db.add_all([team1, team2])

    # Flush changes but don't commit - let the caller handle transaction boundaries
    await db.flush()

    return MatchDelta(
        team1_key=team1_key,
        team1_rating=team1.rating,
        team1_change=change1,
        team2_key=team2_key,
        team2_rating=team2.rating,
        team2_change=change2,
    )


async def record_match(
    db: AsyncSession,
    team_id: str,
    game_type_id: int,
    team_size: int,
    team1_key: str,
    team2_key: str,
    outcome: Outcome,
    engine: EloEngine | None = None,
    attempts: int | None = None,
) -> MatchDelta:
    """
    Applies a match and commits it, retrying on concurrent-update conflicts.

    A conflict is either a stale version on UPDATE (another writer committed
    a new rating for one of the rows after we read it) or a unique violation
    on INSERT (another writer created the same composition first). Each
    retry starts from a rolled-back session so it reads committed ratings.

    Raises:
        ConcurrentUpdateError: If every attempt conflicted.
    """
    attempts = attempts or config.MATCH_RETRY_ATTEMPTS

    for attempt in range(1, attempts + 1):
        try:
            delta = await apply_match(
                db,
                team_id,
                game_type_id,
                team_size,
                team1_key,
                team2_key,
                outcome,
                engine=engine,
            )
            await db.commit()
        except (StaleDataError, IntegrityError) as e:
            await db.rollback()
            logger.warning(
                "Rating update conflicted, retrying",
                extra={
                    "attempt": attempt,
                    "member_keys": [team1_key, team2_key],
                    "error": str(e),
                },
            )
            continue

        logger.info(
            "Match recorded",
            extra={
                "game_type_id": game_type_id,
                "team_size": team_size,
                "outcome": outcome.value,
                "attempt": attempt,
            },
        )
        return delta

    raise ConcurrentUpdateError(attempts, [team1_key, team2_key])
