# src/eloboard/identity.py

"""Canonical keys for the one or two identities that make up a composition."""

from __future__ import annotations

MEMBER_KEY_SEPARATOR = "-"

# The bot user and broadcast mentions can never take part in a game
RESERVED_IDENTITIES = frozenset({"@USLACKBOT", "!channel", "!here"})


def normalize(*identities: str | None) -> str:
    """Build the order-independent member key for a composition.

    Empty and missing identities are ignored, so ``normalize("@a", None)``
    is the singles key for ``@a``.
    """
    return MEMBER_KEY_SEPARATOR.join(sorted(i for i in identities if i))


def members(member_key: str) -> list[str]:
    """Split a member key back into its identities."""
    return member_key.split(MEMBER_KEY_SEPARATOR)


def team_tag(member_key: str) -> str:
    """Mention-style tag for a composition, e.g. ``<@U1> and <@U2>``."""
    return " and ".join(f"<{member}>" for member in members(member_key))


def user_identity(user_id: str) -> str:
    """The identity a user has when they are mentioned in a command."""
    return f"@{user_id}"
