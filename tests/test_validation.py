# tests/test_validation.py

"""Tests for the fairness and integrity rules applied to game reports."""

import pytest
from eloboard.commands.parser import GameReport
from eloboard.db.models import GameType
from eloboard.exceptions import (
    DisallowedIdentityError,
    DuplicateEntrantError,
    GameTypeNotRegisteredError,
    SelfReportError,
    UnfairTeamsError,
)
from eloboard.services.validation import check_participants, validate_report
from sqlalchemy.ext.asyncio import AsyncSession

TEAM_ID = "T1"

WITNESS = "@U9"


def report(p1="@U1", p3="@U2", p2=None, p4=None, game="chess", verb="beat"):
    return GameReport(
        p1=p1, p2=p2, p3=p3, p4=p4, verb_phrase=verb, game_type_name=game
    )


# =============================================================================
# Participant Rules
# =============================================================================


def test_valid_singles_and_doubles_pass():
    check_participants(report(), WITNESS)
    check_participants(report(p2="@U3", p4="@U4"), WITNESS)


@pytest.mark.parametrize(
    "kwargs", [{"p2": "@U3"}, {"p4": "@U3"}], ids=["two-on-one", "one-on-two"]
)
def test_uneven_sides_are_unfair(kwargs):
    with pytest.raises(UnfairTeamsError):
        check_participants(report(**kwargs), WITNESS)


def test_unfair_teams_wins_over_every_later_rule():
    """Rule order: even a self-reported, duplicated 2-on-1 is 'unfair' first."""
    bad = report(p1=WITNESS, p2=WITNESS, p3="!channel")
    with pytest.raises(UnfairTeamsError):
        check_participants(bad, WITNESS)


@pytest.mark.parametrize("slot", ["p1", "p2", "p3", "p4"])
def test_reporter_cannot_be_a_participant(slot):
    players = {"p1": "@U1", "p2": "@U2", "p3": "@U3", "p4": "@U4", slot: WITNESS}
    with pytest.raises(SelfReportError):
        check_participants(report(**players), WITNESS)


def test_self_report_checked_before_reserved_identities():
    with pytest.raises(SelfReportError):
        check_participants(report(p1=WITNESS, p3="!here"), WITNESS)


@pytest.mark.parametrize("reserved", ["@USLACKBOT", "!channel", "!here"])
def test_reserved_identities_are_refused(reserved):
    with pytest.raises(DisallowedIdentityError) as exc_info:
        check_participants(report(p3=reserved), WITNESS)
    assert exc_info.value.details["identities"] == [reserved]


@pytest.mark.parametrize(
    "kwargs",
    [
        {"p1": "@U1", "p3": "@U1"},
        {"p1": "@U1", "p2": "@U1", "p3": "@U3", "p4": "@U4"},
        {"p1": "@U1", "p2": "@U2", "p3": "@U3", "p4": "@U1"},
    ],
    ids=["singles-same-player", "doubles-same-side", "doubles-across-sides"],
)
def test_duplicate_entrants_are_rejected(kwargs):
    with pytest.raises(DuplicateEntrantError):
        check_participants(report(**kwargs), WITNESS)


# =============================================================================
# Game Type Lookup
# =============================================================================


@pytest.mark.asyncio
async def test_validate_report_resolves_registered_game(
    db_session: AsyncSession, chess: GameType
):
    game_type = await validate_report(db_session, report(), TEAM_ID, WITNESS)
    assert game_type.id == chess.id


@pytest.mark.asyncio
async def test_unregistered_game_is_rejected_with_hint(
    db_session: AsyncSession, chess: GameType
):
    with pytest.raises(GameTypeNotRegisteredError) as exc_info:
        await validate_report(db_session, report(game="go"), TEAM_ID, WITNESS)
    assert "register go" in exc_info.value.message


@pytest.mark.asyncio
async def test_game_types_are_scoped_to_their_team(
    db_session: AsyncSession, chess: GameType
):
    with pytest.raises(GameTypeNotRegisteredError):
        await validate_report(db_session, report(), "OTHER_TEAM", WITNESS)


@pytest.mark.asyncio
async def test_participant_rules_run_before_game_lookup(db_session: AsyncSession):
    """No game is registered, but the participant rule fires first."""
    with pytest.raises(DuplicateEntrantError):
        await validate_report(db_session, report(p3="@U1"), TEAM_ID, WITNESS)
