"""
Centralized configuration for the Kickoff session engine.
"""

from __future__ import annotations

import os

from dotenv import load_dotenv

load_dotenv()


def _parse_int(env_var: str, default: int) -> int:
    raw = os.getenv(env_var)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _parse_float(env_var: str, default: float) -> float:
    raw = os.getenv(env_var)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _parse_optional_int(env_var: str) -> int | None:
    raw = os.getenv(env_var)
    if raw is None or not raw.strip():
        return None
    try:
        return int(raw.strip())
    except ValueError:
        return None


# Game settings defaults (used when a session does not override them)
DEFAULT_TEAMS_COUNT = _parse_int("DEFAULT_TEAMS_COUNT", 2)
DEFAULT_PLAYERS_PER_TEAM = _parse_int("DEFAULT_PLAYERS_PER_TEAM", 5)
DEFAULT_MATCH_DURATION = _parse_int("DEFAULT_MATCH_DURATION", 8)  # minutes
DEFAULT_GAMES_PER_TEAM = _parse_int("DEFAULT_GAMES_PER_TEAM", 3)
DEFAULT_FIELD_NUMBER = _parse_int("DEFAULT_FIELD_NUMBER", 1)

# Search budgets
BALANCE_MAX_ATTEMPTS = _parse_int("BALANCE_MAX_ATTEMPTS", 100)
SCHEDULE_MAX_ATTEMPTS = _parse_int("SCHEDULE_MAX_ATTEMPTS", 50)

# Scheduling constraints
MINIMUM_REST_GAMES = _parse_int("MINIMUM_REST_GAMES", 1)
PREFERRED_GAME_SPACING = _parse_int("PREFERRED_GAME_SPACING", 2)  # Informational only
INTER_MATCH_BUFFER_MINUTES = _parse_int("INTER_MATCH_BUFFER_MINUTES", 5)

# Team balance thresholds
MAX_SKILL_DIFFERENCE = _parse_float("MAX_SKILL_DIFFERENCE", 1.0)
# Suggestions at or below this improvement are treated as noise
SWAP_IMPROVEMENT_THRESHOLD = _parse_float("SWAP_IMPROVEMENT_THRESHOLD", 0.1)
MAX_SWAP_SUGGESTIONS = _parse_int("MAX_SWAP_SUGGESTIONS", 5)

# Seed for the engine's random source; unset means nondeterministic
ENGINE_RANDOM_SEED = _parse_optional_int("ENGINE_RANDOM_SEED")

# League points
POINTS_FOR_WIN = _parse_int("POINTS_FOR_WIN", 3)
POINTS_FOR_DRAW = _parse_int("POINTS_FOR_DRAW", 1)
POINTS_FOR_LOSS = _parse_int("POINTS_FOR_LOSS", 0)

# Input ranges
MIN_SKILL_LEVEL = 1
MAX_SKILL_LEVEL = 4
MIN_TEAMS = 2
MAX_TEAMS = 6
MIN_PLAYERS_PER_TEAM = 3
MAX_PLAYERS_PER_TEAM = 11
MIN_MATCH_DURATION = 5
MAX_MATCH_DURATION = 90
MIN_GAMES_PER_TEAM = 1
MAX_GAMES_PER_TEAM = 10
PLAYER_NAME_MIN_LENGTH = 2
PLAYER_NAME_MAX_LENGTH = 30
