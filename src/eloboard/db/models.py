# src/eloboard/db/models.py

"""Database models for the EloBoard application."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, List

from sqlalchemy import (
    ForeignKey,
    String,
    UniqueConstraint,
    select,
)
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import (
    Mapped,
    declarative_base,
    mapped_column,
    relationship,
)

from eloboard.identity import MEMBER_KEY_SEPARATOR

Base = declarative_base()


# ===============================================
# Mixins for Common Columns
# ===============================================


class TimestampMixin:
    """Mixin providing created_at and updated_at timestamp columns."""

    created_at: Mapped[datetime] = mapped_column(
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )
    updated_at: Mapped[datetime | None] = mapped_column(
        default=None,
        onupdate=lambda: datetime.now(timezone.utc),
        nullable=True,
    )


# ===============================================
# Core Tables: GameType and RatingEntry
# ===============================================


class GameType(Base, TimestampMixin):
    """A kind of game a team has registered, e.g. 'chess' or 'foosball'."""

    __tablename__ = "game_types"
    id: Mapped[int] = mapped_column(primary_key=True)
    team_id: Mapped[str] = mapped_column(String, nullable=False, index=True)
    name: Mapped[str] = mapped_column(String, nullable=False)

    rating_entries: Mapped[List["RatingEntry"]] = relationship(
        back_populates="game_type"
    )

    __table_args__ = (UniqueConstraint("team_id", "name", name="_team_game_type_uc"),)

    def __init__(self, **kw: Any):
        super().__init__(**kw)

    @classmethod
    async def find_by_team_and_name(
        cls, db: AsyncSession, team_id: str, name: str
    ) -> "GameType | None":
        """Find a game type by team and exact name."""
        query = select(cls).where(cls.team_id == team_id, cls.name == name)
        result = await db.execute(query)
        return result.scalar_one_or_none()


class RatingEntry(Base, TimestampMixin):
    """The rating of one composition (one or two players) at one game type.

    A player has an independent entry for singles and for every doubles
    partner. Only the current rating and the most recent change are kept.
    """

    __tablename__ = "rating_entries"
    id: Mapped[int] = mapped_column(primary_key=True)
    team_id: Mapped[str] = mapped_column(String, nullable=False, index=True)
    game_type_id: Mapped[int] = mapped_column(
        ForeignKey("game_types.id"), nullable=False, index=True
    )
    # 1 for singles, 2 for doubles
    team_size: Mapped[int] = mapped_column(nullable=False)
    # Sorted identities joined by MEMBER_KEY_SEPARATOR, e.g. '@U1-@U2'
    member_key: Mapped[str] = mapped_column(String, nullable=False)

    rating: Mapped[float] = mapped_column(nullable=False)
    last_rating_change: Mapped[float] = mapped_column(default=0.0, nullable=False)

    # Optimistic locking: UPDATEs carry "WHERE version = <loaded version>"
    version: Mapped[int] = mapped_column(nullable=False)

    game_type: Mapped["GameType"] = relationship(back_populates="rating_entries")

    __table_args__ = (
        UniqueConstraint(
            "team_id",
            "game_type_id",
            "team_size",
            "member_key",
            name="_team_game_size_members_uc",
        ),
    )
    __mapper_args__ = {"version_id_col": version}

    def __init__(self, **kw: Any):
        super().__init__(**kw)

    @property
    def members(self) -> list[str]:
        """The identities that make up this composition."""
        return self.member_key.split(MEMBER_KEY_SEPARATOR)

    @property
    def is_doubles(self) -> bool:
        return self.team_size == 2
