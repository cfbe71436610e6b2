"""
Error codes for session service failures.

Callers branch on these instead of parsing messages:

    from services import error_codes

    if result.error_code == error_codes.INSUFFICIENT_TEAMS:
        ...
"""

# General errors
VALIDATION_ERROR = "validation_error"
STATE_ERROR = "state_error"

# Lookup errors
PLAYER_NOT_FOUND = "player_not_found"
TEAM_NOT_FOUND = "team_not_found"
MATCH_NOT_FOUND = "match_not_found"

# Player input errors
INVALID_PLAYER_NAME = "invalid_player_name"
INVALID_SKILL_LEVEL = "invalid_skill_level"

# Generation errors
INSUFFICIENT_PLAYERS = "insufficient_players"
INSUFFICIENT_TEAMS = "insufficient_teams"

# Match errors
INVALID_MATCHUP = "invalid_matchup"
INVALID_SCORE = "invalid_score"

# Captain errors
LAST_CAPTAIN = "last_captain"
