# tests/test_command_parser.py

"""Tests for command text parsing and outcome classification."""

import pytest
from eloboard.commands.parser import (
    TIE_TERMS,
    VICTORY_TERMS,
    CommandKind,
    Outcome,
    classify_outcome,
    parse_command,
    parse_game_report,
)
from eloboard.exceptions import MalformedCommandError

# =============================================================================
# Sub-command Dispatch
# =============================================================================


@pytest.mark.parametrize("text", ["", "   ", "help", None])
def test_empty_text_and_help_yield_help(text):
    assert parse_command(text).kind == CommandKind.HELP


def test_sub_commands_are_recognized():
    assert parse_command("rating").kind == CommandKind.RATING
    assert parse_command("games").kind == CommandKind.GAMES

    leaderboard = parse_command("leaderboard table tennis")
    assert leaderboard.kind == CommandKind.LEADERBOARD
    assert leaderboard.argument == "table tennis"

    register = parse_command("register chess")
    assert register.kind == CommandKind.REGISTER
    assert register.argument == "chess"


@pytest.mark.parametrize("text", ["leaderboard", "register", "leaderboard   "])
def test_leaderboard_and_register_without_game_yield_help(text):
    assert parse_command(text).kind == CommandKind.HELP


def test_anything_else_is_a_game_report():
    command = parse_command("<@U1> beat <@U2> at chess")
    assert command.kind == CommandKind.GAME
    assert command.argument == "<@U1> beat <@U2> at chess"


# =============================================================================
# Game Report Grammar
# =============================================================================


def test_parse_singles_report():
    report = parse_game_report("<@U1> beat <@U2> at chess")

    assert report.p1 == "@U1"
    assert report.p2 is None
    assert report.p3 == "@U2"
    assert report.p4 is None
    assert report.verb_phrase == "beat"
    assert report.game_type_name == "chess"
    assert report.team_size == 1


def test_parse_doubles_report_with_labels_and_multiword_verb():
    report = parse_game_report(
        "<@U1|alex> and <@U2|sam> wiped the floor with <@U3> and <@U4|kim> "
        "at table tennis"
    )

    assert (report.p1, report.p2, report.p3, report.p4) == ("@U1", "@U2", "@U3", "@U4")
    assert report.verb_phrase.strip() == "wiped the floor with"
    assert report.game_type_name == "table tennis"
    assert report.team_size == 2
    assert report.outcome == Outcome.WIN


def test_parse_uneven_sides_keeps_both_shapes():
    """Two against one parses; rejecting it is the validator's job."""
    report = parse_game_report("<@U1> and <@U2> beat <@U3> at chess")

    assert report.p2 == "@U2"
    assert report.p4 is None
    assert report.team_size == 1


def test_parse_broadcast_mentions():
    report = parse_game_report("<!channel> beat <@U2> at chess")
    assert report.p1 == "!channel"


@pytest.mark.parametrize(
    "text",
    [
        "alex beat sam at chess",
        "<@U1> beat <@U2>",
        "<@U1> beat <@U2> at ",
        "<> beat <@U2> at chess",
        "<@U1> beat <> at chess",
        "<@U1> BEAT <@U2> at chess",
        "<@U1> beat at chess",
    ],
)
def test_malformed_reports_are_rejected(text):
    with pytest.raises(MalformedCommandError):
        parse_game_report(text)


# =============================================================================
# Outcome Classification
# =============================================================================


@pytest.mark.parametrize("phrase", sorted(VICTORY_TERMS))
def test_every_victory_term_is_a_win(phrase):
    assert classify_outcome(phrase) == Outcome.WIN


@pytest.mark.parametrize("phrase", sorted(TIE_TERMS))
def test_every_tie_term_is_a_tie(phrase):
    assert classify_outcome(phrase) == Outcome.TIE


def test_classification_trims_and_ignores_case():
    assert classify_outcome("  Won Against ") == Outcome.WIN
    assert classify_outcome("TIED") == Outcome.TIE


@pytest.mark.parametrize("phrase", ["lost to", "beat up", "", "tie"])
def test_unknown_phrases_are_unrecognized(phrase):
    assert classify_outcome(phrase) == Outcome.UNRECOGNIZED
