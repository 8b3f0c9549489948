# src/eloboard/commands/parser.py

"""Turns `/elo` command text into structured requests.

The text is either a sub-command (``rating``, ``leaderboard <game>``,
``register <game>``, ``games``, ``help``) or a game report such as::

    <@U1> and <@U2> wiped the floor with <@U3> and <@U4> at foosball
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum

from eloboard.exceptions import MalformedCommandError

VICTORY_TERMS = frozenset(
    {
        "beat",
        "defeated",
        "conquered",
        "won against",
        "got the better of",
        "vanquished",
        "trounced",
        "routed",
        "overpowered",
        "overcame",
        "overwhelmed",
        "overthrew",
        "subdued",
        "quashed",
        "crushed",
        "thrashed",
        "whipped",
        "wiped the floor with",
        "clobbered",
        "owned",
        "pwned",
        "wrecked",
    }
)
TIE_TERMS = frozenset({"tied", "drawed"})

# A mention token: "<@U123>" or "<@U123|alex>" captures "@U123"
MENTION_PATTERN = r"<([^|>]*)[^>]*>"

GAME_REPORT_REGEX = re.compile(
    rf"^{MENTION_PATTERN}(?: +and +{MENTION_PATTERN})?"
    rf" +([a-z ]*) +"
    rf"{MENTION_PATTERN}(?: +and +{MENTION_PATTERN})?"
    r" +at +(.*)$"
)


class Outcome(str, Enum):
    """What a verb phrase says happened to the first side."""

    WIN = "win"
    TIE = "tie"
    UNRECOGNIZED = "unrecognized"


class CommandKind(str, Enum):
    """Top-level `/elo` sub-commands."""

    HELP = "help"
    RATING = "rating"
    LEADERBOARD = "leaderboard"
    REGISTER = "register"
    GAMES = "games"
    GAME = "game"


@dataclass(frozen=True)
class Command:
    """A sub-command and whatever text followed its keyword."""

    kind: CommandKind
    argument: str = ""


@dataclass(frozen=True)
class GameReport:
    """A parsed game report. ``p2``/``p4`` are set only for doubles."""

    p1: str
    p3: str
    verb_phrase: str
    game_type_name: str
    p2: str | None = None
    p4: str | None = None

    @property
    def participants(self) -> list[str | None]:
        return [self.p1, self.p2, self.p3, self.p4]

    @property
    def team_size(self) -> int:
        return 2 if self.p2 and self.p4 else 1

    @property
    def outcome(self) -> Outcome:
        return classify_outcome(self.verb_phrase)


def parse_command(text: str | None) -> Command:
    """Split command text into its sub-command and argument."""
    text = (text or "").strip()
    if not text or text == "help":
        return Command(CommandKind.HELP)

    keyword, _, argument = text.partition(" ")
    argument = argument.strip()
    if keyword == CommandKind.RATING.value:
        return Command(CommandKind.RATING, argument)
    if keyword in (CommandKind.LEADERBOARD.value, CommandKind.REGISTER.value):
        # Both need a game name to act on
        if not argument:
            return Command(CommandKind.HELP)
        return Command(CommandKind(keyword), argument)
    if keyword == CommandKind.GAMES.value:
        return Command(CommandKind.GAMES, argument)
    return Command(CommandKind.GAME, text)


def parse_game_report(text: str) -> GameReport:
    """Parse ``P1 [and P2] VERB P3 [and P4] at GAME``.

    Raises:
        MalformedCommandError: If the text doesn't match the grammar, or
            p1, p3 or the game name are empty.
    """
    match = GAME_REPORT_REGEX.match(text.strip())
    if match is None:
        raise MalformedCommandError(text)

    p1, p2, verb, p3, p4, game_type_name = match.groups()
    game_type_name = game_type_name.strip()
    if not p1 or not p3 or not game_type_name:
        raise MalformedCommandError(text)

    return GameReport(
        p1=p1,
        p2=p2 or None,
        p3=p3,
        p4=p4 or None,
        verb_phrase=verb,
        game_type_name=game_type_name,
    )


def classify_outcome(verb_phrase: str) -> Outcome:
    """Map a free-form verb phrase onto WIN, TIE or UNRECOGNIZED."""
    phrase = verb_phrase.strip().lower()
    if phrase in VICTORY_TERMS:
        return Outcome.WIN
    if phrase in TIE_TERMS:
        return Outcome.TIE
    return Outcome.UNRECOGNIZED
