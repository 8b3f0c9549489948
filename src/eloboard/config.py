# src/eloboard/config.py

"""Rating and leaderboard settings, read from the environment."""

import os

# --- Elo Configuration ---
# K-factor: maximum rating swing a single match can produce
K_FACTOR = float(os.getenv("ELO_K_FACTOR", "32"))
# Starting rating for a composition the first time it plays
DEFAULT_RATING = float(os.getenv("ELO_DEFAULT_RATING", "1500"))

# --- Match Recording ---
# How many times a conflicting two-row update is retried before giving up
MATCH_RETRY_ATTEMPTS = int(os.getenv("MATCH_RETRY_ATTEMPTS", "3"))

# --- Leaderboards ---
LEADERBOARD_SIZE = int(os.getenv("LEADERBOARD_SIZE", "10"))

# --- Startup ---
AUTO_CREATE_SCHEMA = os.getenv("AUTO_CREATE_SCHEMA", "true").lower() == "true"

# Reply used when an invocation fails for operational reasons
GENERIC_FAILURE_MESSAGE = "Uh oh! Something went wrong. Please try again later."
