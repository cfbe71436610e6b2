"""
Match scheduling domain service.

Builds round-robin schedules under rest and per-team game constraints, relaxing
the rest rule round by round when nothing else fits, and always terminating
with a consistent (possibly short) schedule.
"""

import itertools
import logging
import random
from dataclasses import dataclass, field

from config import SCHEDULE_MAX_ATTEMPTS
from domain.models.match import GameSettings, Match, ScheduleConstraints
from domain.models.team import Team
from domain.services.schedule_validator import validate_schedule
from utils.random_source import make_rng

logger = logging.getLogger("kickoff.domain.match_scheduler")

# Sentinel for teams that have not played yet; far enough back to satisfy any rest rule
NEVER_PLAYED = -999


@dataclass
class TeamScheduleInfo:
    """Running per-team counters during one generation run."""

    team_id: str
    games_played: int = 0
    last_game_number: int = NEVER_PLAYED
    opponents: set[str] = field(default_factory=set)

    def rest_games(self, game_number: int) -> int:
        return game_number - self.last_game_number - 1

    def record(self, game_number: int, opponent_id: str) -> None:
        self.games_played += 1
        self.last_game_number = game_number
        self.opponents.add(opponent_id)


def create_match(team_a_id: str, team_b_id: str, game_number: int, settings: GameSettings) -> Match:
    """
    Create a fresh scheduled match.

    Raises:
        ValueError: If both sides are the same team
    """
    if team_a_id == team_b_id:
        raise ValueError("A team cannot play itself")
    return Match(
        game_number=game_number,
        team_a_id=team_a_id,
        team_b_id=team_b_id,
        duration=settings.match_duration,
    )


class MatchScheduler:
    """
    Pure domain logic for generating match schedules.

    The only randomness is the injected rng, used to shuffle pairing order (and
    bracket seeding). Inputs are never mutated.
    """

    def __init__(self, rng: random.Random | None = None):
        """
        Initialize the scheduler.

        Args:
            rng: Random source for pairing order (default: engine rng from config)
        """
        self.rng = rng or make_rng()

    def _find_pairing(
        self,
        pairings: list[tuple[str, str]],
        info: dict[str, TeamScheduleInfo],
        game_number: int,
        constraints: ScheduleConstraints,
        enforce_rest: bool,
    ) -> tuple[str, str] | None:
        for team_a, team_b in pairings:
            a_info = info[team_a]
            b_info = info[team_b]

            if team_b in a_info.opponents:
                continue
            if (
                a_info.games_played >= constraints.max_games_per_team
                or b_info.games_played >= constraints.max_games_per_team
            ):
                continue
            if enforce_rest and (
                a_info.rest_games(game_number) < constraints.minimum_rest_games
                or b_info.rest_games(game_number) < constraints.minimum_rest_games
            ):
                continue
            return team_a, team_b
        return None

    def generate_round_robin(
        self,
        teams: list[Team],
        settings: GameSettings,
        constraints: ScheduleConstraints | None = None,
    ) -> list[Match]:
        """
        Generate a round-robin schedule, one match per game number.

        Each round takes the first shuffled pairing that is unused, keeps both
        teams under the per-team cap and respects minimum rest. If no pairing
        satisfies rest, the round is retried without the rest rule; if that
        also fails, generation stops early. Uniqueness and caps are never
        relaxed, and the loop runs at most once per possible pairing.

        Args:
            teams: Teams to schedule (fewer than two gives an empty schedule)
            settings: Session settings (match duration)
            constraints: Scheduling constraints (default derived from settings)

        Returns:
            Matches numbered 1..n in play order
        """
        if len(teams) < 2:
            return []

        if constraints is None:
            constraints = ScheduleConstraints.from_settings(settings)

        team_ids = [team.id for team in teams]
        info = {team_id: TeamScheduleInfo(team_id=team_id) for team_id in team_ids}

        all_pairings = list(itertools.combinations(team_ids, 2))
        pairings = list(all_pairings)
        self.rng.shuffle(pairings)

        target_games = min(
            len(all_pairings),
            (constraints.max_games_per_team * len(teams)) // 2,
        )

        matches: list[Match] = []
        game_number = 1
        while len(matches) < target_games:
            pairing = self._find_pairing(pairings, info, game_number, constraints, enforce_rest=True)
            if pairing is None:
                pairing = self._find_pairing(
                    pairings, info, game_number, constraints, enforce_rest=False
                )
                if pairing is not None:
                    logger.debug("Relaxed rest constraint for game %d", game_number)
            if pairing is None:
                logger.warning(
                    "Stopped scheduling after %d of %d games: no eligible pairing left",
                    len(matches),
                    target_games,
                )
                break

            team_a, team_b = pairing
            matches.append(create_match(team_a, team_b, game_number, settings))
            info[team_a].record(game_number, team_b)
            info[team_b].record(game_number, team_a)
            game_number += 1

        return matches

    def optimize_schedule(
        self,
        teams: list[Team],
        settings: GameSettings,
        max_attempts: int = SCHEDULE_MAX_ATTEMPTS,
        constraints: ScheduleConstraints | None = None,
    ) -> list[Match]:
        """
        Sample schedules and keep the one with the fewest warnings.

        Stops early on a warning-free schedule. If no attempt produced a valid
        schedule, falls back to a single unconditional generation so the
        caller always gets something back.

        Args:
            teams: Teams to schedule
            settings: Session settings
            max_attempts: Number of schedules to sample
            constraints: Passed through to generate_round_robin

        Returns:
            Best schedule found
        """
        best_schedule: list[Match] = []
        best_score = float("inf")

        for attempt in range(max_attempts):
            schedule = self.generate_round_robin(teams, settings, constraints)
            validation = validate_schedule(schedule, teams, settings)
            if not validation.is_valid:
                continue

            warning_count = len(validation.warnings)
            if warning_count < best_score:
                best_schedule, best_score = schedule, warning_count
                logger.debug("Attempt %d: %d warning(s)", attempt + 1, warning_count)
                if warning_count == 0:
                    break

        if best_schedule:
            return best_schedule

        logger.warning("No valid schedule in %d attempts, returning unoptimized schedule", max_attempts)
        return self.generate_round_robin(teams, settings, constraints)

    def generate_elimination_bracket(self, teams: list[Team], settings: GameSettings) -> list[Match]:
        """
        Generate a single-elimination bracket skeleton.

        Teams are seeded randomly and paired with their neighbour each round;
        an odd team out gets a bye. Results are not simulated, so the first
        team of each pairing stands in as the advancing side for later rounds.
        """
        if len(teams) < 2:
            return []

        current_round = [team.id for team in teams]
        self.rng.shuffle(current_round)

        matches: list[Match] = []
        game_number = 1
        while len(current_round) > 1:
            next_round = []
            for i in range(0, len(current_round), 2):
                if i + 1 < len(current_round):
                    matches.append(
                        create_match(current_round[i], current_round[i + 1], game_number, settings)
                    )
                    game_number += 1
                next_round.append(current_round[i])
            current_round = next_round

        return matches

    def generate_finals(self, top_teams: list[Team], settings: GameSettings) -> list[Match]:
        """Single final between the first two teams given."""
        if len(top_teams) < 2:
            return []
        return [create_match(top_teams[0].id, top_teams[1].id, 1, settings)]
