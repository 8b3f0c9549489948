# tests/test_identity.py

"""Tests for member key normalization."""

from eloboard.identity import members, normalize, team_tag, user_identity


def test_normalize_is_order_independent():
    """'A and B' and 'B and A' must resolve to the same composition."""
    assert normalize("@U2", "@U1") == normalize("@U1", "@U2") == "@U1-@U2"


def test_normalize_single_identity_ignores_missing_partner():
    assert normalize("@U1") == "@U1"
    assert normalize("@U1", None) == "@U1"
    assert normalize(None, "@U1") == "@U1"


def test_normalize_is_stable():
    keys = {normalize("@UB", "@UA") for _ in range(5)}
    assert keys == {"@UA-@UB"}


def test_members_round_trips_a_key():
    assert members(normalize("@U9", "@U3")) == ["@U3", "@U9"]


def test_team_tag_renders_mentions():
    assert team_tag("@U1") == "<@U1>"
    assert team_tag("@U1-@U2") == "<@U1> and <@U2>"


def test_user_identity_matches_mention_form():
    assert user_identity("U123") == "@U123"
