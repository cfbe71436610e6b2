"""
Match, settings and standings domain models.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from config import (
    DEFAULT_FIELD_NUMBER,
    DEFAULT_GAMES_PER_TEAM,
    DEFAULT_MATCH_DURATION,
    DEFAULT_PLAYERS_PER_TEAM,
    DEFAULT_TEAMS_COUNT,
    MINIMUM_REST_GAMES,
    PREFERRED_GAME_SPACING,
)
from domain.models.player import new_id


class MatchStatus(Enum):
    """Lifecycle of a scheduled game."""

    SCHEDULED = "scheduled"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"


@dataclass
class Match:
    """
    A single game between two teams.

    Created by the scheduler (or a manual add); the engine treats results as
    opaque and never simulates them.
    """

    game_number: int
    team_a_id: str
    team_b_id: str
    duration: int  # minutes
    id: str = field(default_factory=new_id)
    score_a: int = 0
    score_b: int = 0
    status: MatchStatus = MatchStatus.SCHEDULED
    start_time: datetime | None = None
    end_time: datetime | None = None

    @property
    def team_ids(self) -> tuple[str, str]:
        return (self.team_a_id, self.team_b_id)

    @property
    def pairing_key(self) -> tuple[str, str]:
        """Order-independent key identifying the matchup."""
        return tuple(sorted((self.team_a_id, self.team_b_id)))

    def involves(self, team_id: str) -> bool:
        return team_id in (self.team_a_id, self.team_b_id)

    @property
    def is_completed(self) -> bool:
        return self.status == MatchStatus.COMPLETED


@dataclass
class GameSettings:
    """Per-session settings supplied by the caller."""

    teams_count: int = DEFAULT_TEAMS_COUNT
    players_per_team: int = DEFAULT_PLAYERS_PER_TEAM
    match_duration: int = DEFAULT_MATCH_DURATION  # minutes
    games_per_team: int = DEFAULT_GAMES_PER_TEAM
    field_number: int | None = DEFAULT_FIELD_NUMBER


@dataclass(frozen=True)
class ScheduleConstraints:
    """Constraints for one scheduling run. Not persisted."""

    minimum_rest_games: int
    max_games_per_team: int
    preferred_game_spacing: int = PREFERRED_GAME_SPACING  # Soft hint, not enforced

    @classmethod
    def from_settings(cls, settings: GameSettings) -> "ScheduleConstraints":
        """Default constraints: one game of rest, capped at the session's games per team."""
        return cls(
            minimum_rest_games=MINIMUM_REST_GAMES,
            max_games_per_team=settings.games_per_team,
            preferred_game_spacing=PREFERRED_GAME_SPACING,
        )


@dataclass
class Standing:
    """One row of the league table."""

    team_id: str
    played: int = 0
    won: int = 0
    drawn: int = 0
    lost: int = 0
    goals_for: int = 0
    goals_against: int = 0
    goal_difference: int = 0
    points: int = 0
