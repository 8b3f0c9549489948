# src/eloboard/schemas/rating.py

"""Rating and ranking schemas for the read endpoints."""

from pydantic import BaseModel, ConfigDict, Field


class RatingEntryRead(BaseModel):
    """A composition's current rating."""

    id: int
    game_type_id: int
    team_size: int
    member_key: str
    rating: float
    last_rating_change: float

    model_config = ConfigDict(from_attributes=True)


class RankedEntryRead(BaseModel):
    """A rating entry with its dense rank (1-indexed, ties share a rank)."""

    rank: int = Field(..., ge=1, description="Dense rank within the partition")
    entry: RatingEntryRead

    model_config = ConfigDict(from_attributes=True)
