# src/eloboard/schemas/game_type.py

"""Pydantic schemas for the GameType resource."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class GameTypeCreate(BaseModel):
    """Properties to receive via API on create."""

    name: str = Field(..., min_length=1, description="Name players use in commands")


class GameTypeRead(BaseModel):
    """Properties to return to the client."""

    id: int
    team_id: str
    name: str
    created_at: datetime

    # Enable ORM mode for this schema
    model_config = ConfigDict(from_attributes=True)
