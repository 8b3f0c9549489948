"""EloBoard: Elo ratings and leaderboards for games reported through chat commands."""

__version__ = "0.1.0"
