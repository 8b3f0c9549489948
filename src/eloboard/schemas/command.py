# src/eloboard/schemas/command.py

"""Pydantic schemas for `/elo` commands and their tagged results."""

from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field

from eloboard.commands.parser import Outcome

# ===============================================
# == Inbound
# ===============================================


class CommandRequest(BaseModel):
    """A command as delivered by the chat platform.

    Examples:
        {"team_id": "T1", "user_id": "U3", "text": "<@U1> beat <@U2> at chess"}
        {"team_id": "T1", "user_id": "U3", "text": "leaderboard chess"}
    """

    team_id: str = Field(..., min_length=1, description="Workspace/team identifier")
    user_id: str = Field(..., min_length=1, description="User invoking the command")
    text: str = Field("", description="Everything typed after `/elo`")


# ===============================================
# == Result Rows
# ===============================================


class RankedRow(BaseModel):
    """One line of a leaderboard or surrounding-ranks listing."""

    rank: int = Field(..., ge=1, description="Dense rank within the partition")
    member_key: str
    team_tag: str
    rating: float


class RatingRow(BaseModel):
    """The invoking user's rating in one game type and team size."""

    game_type_name: str
    team_size: int = Field(..., ge=1, le=2)
    member_key: str
    team_tag: str
    rating: float
    last_rating_change: float


# ===============================================
# == Tagged Results
# ===============================================


class HelpResult(BaseModel):
    """Usage help; returned for help, malformed or unrecognized commands."""

    kind: Literal["help"] = "help"


class RejectedResult(BaseModel):
    """A command refused by one of the validation rules."""

    kind: Literal["rejected"] = "rejected"
    reason: str


class MatchRecordedResult(BaseModel):
    """A game report that updated both compositions' ratings."""

    kind: Literal["match_recorded"] = "match_recorded"
    team1_tag: str
    team1_delta: float
    team2_tag: str
    team2_delta: float
    game_type_name: str
    outcome: Outcome


class LeaderboardResult(BaseModel):
    """Top singles and doubles rows for a game type."""

    kind: Literal["leaderboard"] = "leaderboard"
    game_type_name: str
    singles_rows: list[RankedRow] = Field(default_factory=list)
    doubles_rows: list[RankedRow] = Field(default_factory=list)


class RatingSummaryResult(BaseModel):
    """Every rating the invoking user has on this team."""

    kind: Literal["rating_summary"] = "rating_summary"
    rows: list[RatingRow] = Field(default_factory=list)


class GameTypeRegisteredResult(BaseModel):
    kind: Literal["game_type_registered"] = "game_type_registered"
    name: str


class GameTypeListResult(BaseModel):
    kind: Literal["game_type_list"] = "game_type_list"
    names: list[str] = Field(default_factory=list)


class FailureResult(BaseModel):
    """An operational failure; the reason is deliberately generic."""

    kind: Literal["failure"] = "failure"
    reason: str


CommandResult = Annotated[
    Union[
        HelpResult,
        RejectedResult,
        MatchRecordedResult,
        LeaderboardResult,
        RatingSummaryResult,
        GameTypeRegisteredResult,
        GameTypeListResult,
        FailureResult,
    ],
    Field(discriminator="kind"),
]
