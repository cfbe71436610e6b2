"""
Domain models - pure data structures representing session entities.
"""

from domain.models.match import GameSettings, Match, MatchStatus, ScheduleConstraints, Standing
from domain.models.player import Player
from domain.models.team import Team, TeamColor

__all__ = [
    "GameSettings",
    "Match",
    "MatchStatus",
    "Player",
    "ScheduleConstraints",
    "Standing",
    "Team",
    "TeamColor",
]
