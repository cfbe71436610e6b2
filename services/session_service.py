"""
SessionService: in-memory state for one pickup session.

Owns the player pool, teams, matches and settings for a session and calls the
balancing and scheduling engine on demand. Nothing is persisted; callers that
need storage snapshot the public attributes themselves.
"""

import logging
from dataclasses import replace
from datetime import datetime

from config import (
    MAX_GAMES_PER_TEAM,
    MAX_MATCH_DURATION,
    MAX_PLAYERS_PER_TEAM,
    MAX_SKILL_LEVEL,
    MAX_TEAMS,
    MIN_GAMES_PER_TEAM,
    MIN_MATCH_DURATION,
    MIN_PLAYERS_PER_TEAM,
    MIN_SKILL_LEVEL,
    MIN_TEAMS,
    PLAYER_NAME_MAX_LENGTH,
    PLAYER_NAME_MIN_LENGTH,
)
from domain.models.match import GameSettings, Match, MatchStatus, ScheduleConstraints, Standing
from domain.models.player import Player
from domain.models.team import Team, TeamColor
from domain.services.match_scheduler import MatchScheduler, create_match
from domain.services.schedule_validator import (
    ScheduleStats,
    ScheduleValidation,
    get_schedule_stats,
    validate_schedule,
)
from domain.services.standings_service import calculate_standings
from domain.services.team_balancer import MoveSuggestion, TeamBalanceReport, TeamBalancer
from services import error_codes
from services.result import Result

logger = logging.getLogger("kickoff.services.session")

# Settings field -> inclusive (min, max)
SETTINGS_RANGES: dict[str, tuple[int, int]] = {
    "teams_count": (MIN_TEAMS, MAX_TEAMS),
    "players_per_team": (MIN_PLAYERS_PER_TEAM, MAX_PLAYERS_PER_TEAM),
    "match_duration": (MIN_MATCH_DURATION, MAX_MATCH_DURATION),
    "games_per_team": (MIN_GAMES_PER_TEAM, MAX_GAMES_PER_TEAM),
}

EDITABLE_PLAYER_FIELDS = frozenset({"name", "skill_level"})


def _is_int(value) -> bool:
    # bool is an int subclass but never a valid count
    return isinstance(value, int) and not isinstance(value, bool)


class SessionService:
    """
    Manages a single pickup session.

    This service layer class handles:
    - Player signup, edits, waitlist and removal
    - Team generation and manual adjustments (moves, captains, rebalancing)
    - Schedule generation, manual games and score entry
    - Reports: team balance, schedule validation, stats and standings
    """

    def __init__(
        self,
        settings: GameSettings | None = None,
        balancer: TeamBalancer | None = None,
        scheduler: MatchScheduler | None = None,
    ):
        self.settings = settings or GameSettings()
        self.balancer = balancer or TeamBalancer()
        self.scheduler = scheduler or MatchScheduler()
        self.players: list[Player] = []
        self.teams: list[Team] = []
        self.matches: list[Match] = []

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    def get_player(self, player_id: str) -> Player | None:
        return next((p for p in self.players if p.id == player_id), None)

    def get_team(self, team_id: str) -> Team | None:
        return next((t for t in self.teams if t.id == team_id), None)

    def get_match(self, match_id: str) -> Match | None:
        return next((m for m in self.matches if m.id == match_id), None)

    def get_player_team(self, player_id: str) -> Team | None:
        return next((t for t in self.teams if t.has_player(player_id)), None)

    @property
    def active_players(self) -> list[Player]:
        return [p for p in self.players if not p.is_waitlist]

    @property
    def waitlist(self) -> list[Player]:
        return [p for p in self.players if p.is_waitlist]

    def _team_index(self, team_id: str) -> int | None:
        for index, team in enumerate(self.teams):
            if team.id == team_id:
                return index
        return None

    def _replace_player(self, updated: Player) -> None:
        """Swap in a new snapshot of a player everywhere it is referenced."""
        self.players = [updated if p.id == updated.id else p for p in self.players]
        for team in self.teams:
            team.players = [updated if p.id == updated.id else p for p in team.players]

    def _remove_from_teams(self, player_id: str, keep_team_id: str | None = None) -> None:
        for team in self.teams:
            if team.id == keep_team_id or not team.has_player(player_id):
                continue
            team.players = [p for p in team.players if p.id != player_id]
            team.ensure_captain()
            team.recompute_average_skill()

    # ------------------------------------------------------------------
    # Players
    # ------------------------------------------------------------------

    @staticmethod
    def _check_name(name) -> Result[str]:
        if not isinstance(name, str):
            return Result.fail("Player name must be text", code=error_codes.INVALID_PLAYER_NAME)
        name = name.strip()
        if not PLAYER_NAME_MIN_LENGTH <= len(name) <= PLAYER_NAME_MAX_LENGTH:
            return Result.fail(
                f"Player name must be {PLAYER_NAME_MIN_LENGTH}-{PLAYER_NAME_MAX_LENGTH} characters",
                code=error_codes.INVALID_PLAYER_NAME,
            )
        return Result.ok(name)

    @staticmethod
    def _check_skill(skill_level) -> Result[int]:
        if (
            not _is_int(skill_level)
            or not MIN_SKILL_LEVEL <= skill_level <= MAX_SKILL_LEVEL
        ):
            return Result.fail(
                f"Skill level must be between {MIN_SKILL_LEVEL} and {MAX_SKILL_LEVEL}",
                code=error_codes.INVALID_SKILL_LEVEL,
            )
        return Result.ok(skill_level)

    def add_player(self, name: str, skill_level: int, is_waitlist: bool = False) -> Result[Player]:
        """Sign up a player at the end of the signup order."""
        checked_name = self._check_name(name)
        if not checked_name:
            return checked_name
        checked_skill = self._check_skill(skill_level)
        if not checked_skill:
            return checked_skill
        name = checked_name.value

        player = Player(
            name=name,
            skill_level=skill_level,
            is_waitlist=is_waitlist,
            signup_order=len(self.players),
        )
        self.players.append(player)
        logger.info("Added player %s (skill %d, waitlist=%s)", name, skill_level, is_waitlist)
        return Result.ok(player)

    def remove_player(self, player_id: str) -> Result[Player]:
        player = self.get_player(player_id)
        if player is None:
            return Result.fail("Player not found", code=error_codes.PLAYER_NOT_FOUND)

        self.players = [p for p in self.players if p.id != player_id]
        self._remove_from_teams(player_id)
        logger.info("Removed player %s", player.name)
        return Result.ok(player)

    def toggle_waitlist(self, player_id: str) -> Result[Player]:
        player = self.get_player(player_id)
        if player is None:
            return Result.fail("Player not found", code=error_codes.PLAYER_NOT_FOUND)

        updated = replace(player, is_waitlist=not player.is_waitlist)
        self._replace_player(updated)
        return Result.ok(updated)

    def update_player(self, player_id: str, **changes) -> Result[Player]:
        """
        Edit a player's name and/or skill level.

        The new snapshot replaces the old one in the pool and on any team
        roster, and that team's average skill is refreshed.
        """
        player = self.get_player(player_id)
        if player is None:
            return Result.fail("Player not found", code=error_codes.PLAYER_NOT_FOUND)

        unknown = set(changes) - EDITABLE_PLAYER_FIELDS
        if unknown:
            return Result.fail(
                f"Cannot edit player field(s): {', '.join(sorted(unknown))}",
                code=error_codes.VALIDATION_ERROR,
            )
        if "name" in changes:
            checked = self._check_name(changes["name"])
            if not checked:
                return checked
            changes["name"] = checked.value
        if "skill_level" in changes:
            checked = self._check_skill(changes["skill_level"])
            if not checked:
                return checked

        updated = replace(player, **changes)
        self._replace_player(updated)
        team = self.get_player_team(player_id)
        if team is not None:
            team.recompute_average_skill()
        logger.info("Updated player %s", updated.name)
        return Result.ok(updated)

    def toggle_player_captain(self, player_id: str) -> Result[Player]:
        """
        Flip a player's captain preference and sync their team's captains.

        Refused when it would leave the player's team without a captain.
        """
        player = self.get_player(player_id)
        if player is None:
            return Result.fail("Player not found", code=error_codes.PLAYER_NOT_FOUND)

        make_captain = not player.is_captain
        team = self.get_player_team(player_id)
        if team is not None:
            if make_captain and player_id not in team.captain_ids:
                team.captain_ids = team.captain_ids + [player_id]
            elif not make_captain and player_id in team.captain_ids:
                if len(team.captain_ids) == 1:
                    return Result.fail("A team needs at least one captain", code=error_codes.LAST_CAPTAIN)
                team.captain_ids = [cid for cid in team.captain_ids if cid != player_id]

        updated = replace(player, is_captain=make_captain)
        self._replace_player(updated)
        return Result.ok(updated)

    # ------------------------------------------------------------------
    # Settings
    # ------------------------------------------------------------------

    def update_settings(self, **changes) -> Result[GameSettings]:
        """
        Apply partial settings changes after type and range validation.

        Either all changes apply or none do.
        """
        for key, value in changes.items():
            if key == "field_number":
                if value is not None and (not _is_int(value) or value < 1):
                    return Result.fail(
                        "field_number must be a positive whole number or None",
                        code=error_codes.VALIDATION_ERROR,
                    )
                continue
            if key not in SETTINGS_RANGES:
                return Result.fail(f"Unknown setting: {key}", code=error_codes.VALIDATION_ERROR)
            low, high = SETTINGS_RANGES[key]
            if not _is_int(value) or not low <= value <= high:
                return Result.fail(
                    f"{key} must be between {low} and {high}",
                    code=error_codes.VALIDATION_ERROR,
                )

        self.settings = replace(self.settings, **changes)
        return Result.ok(self.settings)

    # ------------------------------------------------------------------
    # Teams
    # ------------------------------------------------------------------

    def generate_teams(self, optimize: bool = True, max_attempts: int | None = None) -> Result[list[Team]]:
        """
        Build teams from the active (non-waitlisted) players.

        When there are more active players than team slots, the highest-skill
        players fill the slots and the rest move to the waitlist. Any existing
        schedule is discarded.
        """
        active = self.active_players
        if not active:
            logger.warning("No active players available for team generation")
            return Result.fail("Not enough players to form teams", code=error_codes.INSUFFICIENT_PLAYERS)

        team_count = self.settings.teams_count
        capacity = team_count * self.settings.players_per_team
        ranked = sorted(active, key=lambda p: p.skill_level, reverse=True)
        assigned, overflow = ranked[:capacity], ranked[capacity:]

        if optimize:
            kwargs = {} if max_attempts is None else {"max_attempts": max_attempts}
            teams = self.balancer.optimize_team_balance(assigned, team_count, **kwargs)
        else:
            teams = self.balancer.balance_teams(assigned, team_count)

        self.teams = teams
        self.matches = []
        for player in overflow:
            self._replace_player(replace(player, is_waitlist=True))

        logger.info(
            "Generated %d teams from %d players (%d moved to waitlist, balance score %.3f)",
            team_count,
            len(assigned),
            len(overflow),
            self.balancer.score(teams),
        )
        partial = sum(1 for t in teams if t.size < self.settings.players_per_team)
        if partial:
            logger.info("%d team(s) are partially filled", partial)
        return Result.ok(list(self.teams))

    def move_player(self, player_id: str, to_team_id: str | None) -> Result[Player]:
        """
        Move a player onto a team, or to the waitlist when to_team_id is None.
        """
        player = self.get_player(player_id)
        if player is None:
            return Result.fail("Player not found", code=error_codes.PLAYER_NOT_FOUND)
        target = None
        if to_team_id is not None:
            target = self.get_team(to_team_id)
            if target is None:
                return Result.fail("Team not found", code=error_codes.TEAM_NOT_FOUND)

        updated = replace(player, is_waitlist=target is None)
        self._replace_player(updated)
        self._remove_from_teams(player_id, keep_team_id=to_team_id)

        if target is not None and not target.has_player(player_id):
            target.players.append(updated)
            if not target.captain_ids:
                target.captain_ids = [updated.id]
            target.recompute_average_skill()

        return Result.ok(updated)

    def set_captain(self, team_id: str, player_id: str) -> Result[Team]:
        """Toggle captaincy for a player; the last captain cannot be removed."""
        team = self.get_team(team_id)
        if team is None:
            return Result.fail("Team not found", code=error_codes.TEAM_NOT_FOUND)
        if not team.has_player(player_id):
            return Result.fail("Player is not on this team", code=error_codes.PLAYER_NOT_FOUND)

        if player_id in team.captain_ids:
            if len(team.captain_ids) == 1:
                return Result.fail("A team needs at least one captain", code=error_codes.LAST_CAPTAIN)
            team.captain_ids = [cid for cid in team.captain_ids if cid != player_id]
        else:
            team.captain_ids = team.captain_ids + [player_id]
        return Result.ok(team)

    def rebalance(self, from_team_id: str, to_team_id: str) -> Result[list[Team]]:
        from_index = self._team_index(from_team_id)
        to_index = self._team_index(to_team_id)
        if from_index is None or to_index is None:
            return Result.fail("Team not found", code=error_codes.TEAM_NOT_FOUND)

        self.teams = self.balancer.rebalance_team(self.teams, from_index, to_index)
        return Result.ok(list(self.teams))

    def suggest_moves(self) -> Result[list[MoveSuggestion]]:
        return Result.ok(self.balancer.suggest_player_swaps(self.teams))

    def team_balance_report(self, max_skill_difference: float | None = None) -> Result[TeamBalanceReport]:
        if max_skill_difference is None:
            return Result.ok(self.balancer.validate_team_balance(self.teams))
        return Result.ok(self.balancer.validate_team_balance(self.teams, max_skill_difference))

    def update_team_color(self, team_id: str, color: TeamColor) -> Result[Team]:
        team = self.get_team(team_id)
        if team is None:
            return Result.fail("Team not found", code=error_codes.TEAM_NOT_FOUND)
        if not isinstance(color, TeamColor):
            return Result.fail(f"Unknown team color: {color!r}", code=error_codes.VALIDATION_ERROR)

        team.color = color
        return Result.ok(team)

    def reset_teams(self) -> Result[None]:
        """Drop all teams and the schedule; players stay signed up."""
        self.teams = []
        self.matches = []
        return Result.ok()

    # ------------------------------------------------------------------
    # Matches
    # ------------------------------------------------------------------

    def generate_schedule(
        self,
        optimize: bool = True,
        constraints: ScheduleConstraints | None = None,
        max_attempts: int | None = None,
    ) -> Result[list[Match]]:
        if len(self.teams) < 2:
            return Result.fail("At least two teams are needed to schedule games", code=error_codes.INSUFFICIENT_TEAMS)

        if optimize:
            kwargs = {} if max_attempts is None else {"max_attempts": max_attempts}
            matches = self.scheduler.optimize_schedule(
                self.teams, self.settings, constraints=constraints, **kwargs
            )
        else:
            matches = self.scheduler.generate_round_robin(self.teams, self.settings, constraints)

        self.matches = matches
        logger.info("Scheduled %d games for %d teams", len(matches), len(self.teams))
        return Result.ok(list(self.matches))

    def add_match(self, team_a_id: str, team_b_id: str) -> Result[Match]:
        """Append a manual game after the current last game number."""
        if self.get_team(team_a_id) is None or self.get_team(team_b_id) is None:
            return Result.fail("Team not found", code=error_codes.TEAM_NOT_FOUND)
        if team_a_id == team_b_id:
            return Result.fail("A team cannot play itself", code=error_codes.INVALID_MATCHUP)

        next_number = max((m.game_number for m in self.matches), default=0) + 1
        match = create_match(team_a_id, team_b_id, next_number, self.settings)
        self.matches.append(match)
        return Result.ok(match)

    def start_match(self, match_id: str) -> Result[Match]:
        match = self.get_match(match_id)
        if match is None:
            return Result.fail("Match not found", code=error_codes.MATCH_NOT_FOUND)
        if match.status != MatchStatus.SCHEDULED:
            return Result.fail("Match has already started", code=error_codes.STATE_ERROR)

        match.status = MatchStatus.IN_PROGRESS
        match.start_time = datetime.now()
        return Result.ok(match)

    def update_score(self, match_id: str, score_a: int, score_b: int) -> Result[Match]:
        """
        Record a score. A match with any goals counts as completed; 0-0 puts
        it back to scheduled.
        """
        match = self.get_match(match_id)
        if match is None:
            return Result.fail("Match not found", code=error_codes.MATCH_NOT_FOUND)
        if score_a < 0 or score_b < 0:
            return Result.fail("Scores cannot be negative", code=error_codes.INVALID_SCORE)

        is_completed = score_a > 0 or score_b > 0
        if is_completed and match.status != MatchStatus.COMPLETED:
            match.end_time = datetime.now()
        match.score_a = score_a
        match.score_b = score_b
        match.status = MatchStatus.COMPLETED if is_completed else MatchStatus.SCHEDULED
        return Result.ok(match)

    def swap_teams_in_match(self, match_id: str, team_a_id: str, team_b_id: str) -> Result[Match]:
        """Change a game's opponents; scores reset if it has not started."""
        match = self.get_match(match_id)
        if match is None:
            return Result.fail("Match not found", code=error_codes.MATCH_NOT_FOUND)
        if self.get_team(team_a_id) is None or self.get_team(team_b_id) is None:
            return Result.fail("Team not found", code=error_codes.TEAM_NOT_FOUND)
        if team_a_id == team_b_id:
            return Result.fail("A team cannot play itself", code=error_codes.INVALID_MATCHUP)

        match.team_a_id = team_a_id
        match.team_b_id = team_b_id
        if match.status == MatchStatus.SCHEDULED:
            match.score_a = 0
            match.score_b = 0
        return Result.ok(match)

    # ------------------------------------------------------------------
    # Reports
    # ------------------------------------------------------------------

    def schedule_report(self) -> Result[ScheduleValidation]:
        return Result.ok(validate_schedule(self.matches, self.teams, self.settings))

    def schedule_stats(self) -> Result[ScheduleStats]:
        return Result.ok(get_schedule_stats(self.matches, self.teams))

    def standings(self) -> Result[list[Standing]]:
        return Result.ok(calculate_standings(self.matches, self.teams))

    def reset_all(self) -> Result[None]:
        """Clear the whole session unless a game is being played."""
        if any(m.status == MatchStatus.IN_PROGRESS for m in self.matches):
            return Result.fail(
                "Cannot reset during an active match. Complete the current match first.",
                code=error_codes.STATE_ERROR,
            )
        self.players = []
        self.teams = []
        self.matches = []
        logger.info("Session reset")
        return Result.ok()
