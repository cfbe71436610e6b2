"""
Team balancing domain service.

Partitions a player pool into skill-balanced teams with a snake draft, and
refines team sets with bounded resampling and single-player moves.
"""

import logging
import random
from dataclasses import dataclass, field

from config import (
    BALANCE_MAX_ATTEMPTS,
    MAX_SKILL_DIFFERENCE,
    MAX_SWAP_SUGGESTIONS,
    SWAP_IMPROVEMENT_THRESHOLD,
)
from domain.models.player import Player
from domain.models.team import TEAM_PALETTE, Team, pick_captain
from domain.services.balance_scorer import BalanceScorer
from utils.random_source import make_rng

logger = logging.getLogger("kickoff.domain.team_balancer")


@dataclass
class MoveSuggestion:
    """A profitable one-directional player move between two teams."""

    from_team_id: str
    to_team_id: str
    player_id: str
    improvement_score: float


@dataclass
class TeamBalanceReport:
    """Outcome of validate_team_balance. Issues and suggestions are index-paired."""

    is_balanced: bool
    issues: list[str] = field(default_factory=list)
    suggestions: list[str] = field(default_factory=list)


def _empty_teams(team_count: int) -> list[Team]:
    teams = []
    for i in range(team_count):
        name, color = TEAM_PALETTE[i % len(TEAM_PALETTE)]
        cycle = i // len(TEAM_PALETTE)
        if cycle:
            name = f"{name} {cycle + 1}"
        teams.append(Team(name=name, color=color))
    return teams


class TeamBalancer:
    """
    Pure domain logic for building and refining balanced teams.

    Responsibilities:
    - Snake-draft baseline distribution
    - Monte Carlo resampling over skill ties
    - Single-player rebalancing and move suggestions
    - Team balance validation

    None of the operations mutate the teams or player lists passed in.
    """

    def __init__(
        self,
        scorer: BalanceScorer | None = None,
        rng: random.Random | None = None,
        improvement_threshold: float = SWAP_IMPROVEMENT_THRESHOLD,
        max_suggestions: int = MAX_SWAP_SUGGESTIONS,
    ):
        """
        Initialize the balancer.

        Args:
            scorer: Balance scorer strategy (default: standard deviation of averages)
            rng: Random source for resampling (default: engine rng from config)
            improvement_threshold: Minimum improvement for a move to be suggested
            max_suggestions: Maximum number of move suggestions returned
        """
        self.scorer = scorer or BalanceScorer()
        self.rng = rng or make_rng()
        self.improvement_threshold = improvement_threshold
        self.max_suggestions = max_suggestions

    def score(self, teams: list[Team]) -> float:
        return self.scorer.score(teams)

    def balance_teams(self, players: list[Player], team_count: int) -> list[Team]:
        """
        Distribute players into teams with a snake draft.

        Players are sorted by skill descending (stable, so ties keep input
        order) and dealt 0..N-1, then N-1..0, and so on. Each non-empty team
        gets its average skill and a captain.

        Args:
            players: Players to distribute (not mutated)
            team_count: Number of teams to create

        Returns:
            team_count teams; an empty list when team_count <= 0
        """
        if team_count <= 0:
            return []

        sorted_players = sorted(players, key=lambda p: p.skill_level, reverse=True)
        teams = _empty_teams(team_count)

        team_index = 0
        direction = 1
        for player in sorted_players:
            teams[team_index].players.append(player)
            # Reverse at either end of the row
            if (direction == 1 and team_index == team_count - 1) or (
                direction == -1 and team_index == 0
            ):
                direction *= -1
            else:
                team_index += direction

        for team in teams:
            if team.players:
                team.recompute_average_skill()
                team.captain_ids = [pick_captain(team.players).id]

        return teams

    def optimize_team_balance(
        self,
        players: list[Player],
        team_count: int,
        max_attempts: int = BALANCE_MAX_ATTEMPTS,
    ) -> list[Team]:
        """
        Improve on the snake draft by resampling tie-break order.

        Each attempt shuffles a copy of the players and re-runs balance_teams,
        which changes slot assignment among equal-skill players only. The
        lowest-scoring team set wins; the deterministic baseline is the
        starting incumbent, so the result is never worse than it.

        Args:
            players: Players to distribute (not mutated)
            team_count: Number of teams to create
            max_attempts: Number of resampled candidates to evaluate

        Returns:
            Best team set found
        """
        best_teams = self.balance_teams(players, team_count)
        if not best_teams or not players:
            return best_teams
        best_score = self.score(best_teams)

        for attempt in range(max_attempts):
            shuffled = list(players)
            self.rng.shuffle(shuffled)
            candidate = self.balance_teams(shuffled, team_count)
            candidate_score = self.score(candidate)
            if candidate_score < best_score:
                logger.debug(
                    "Attempt %d improved balance score %.4f -> %.4f",
                    attempt + 1,
                    best_score,
                    candidate_score,
                )
                best_teams, best_score = candidate, candidate_score

        logger.debug(
            "Balanced %d players into %d teams (score %.4f, %d attempts)",
            len(players),
            team_count,
            best_score,
            max_attempts,
        )
        return best_teams

    def rebalance_team(self, teams: list[Team], from_index: int, to_index: int) -> list[Team]:
        """
        Move the single best player from one team to another.

        Every player on the source team is tried; the move giving the lowest
        resulting score is committed on copies of the teams.

        Args:
            teams: Current teams (not mutated)
            from_index: Index of the team giving up a player
            to_index: Index of the team receiving the player

        Returns:
            New team list, or the input unchanged for invalid indices or an
            empty source team
        """
        if (
            from_index == to_index
            or not 0 <= from_index < len(teams)
            or not 0 <= to_index < len(teams)
        ):
            return teams

        from_team = teams[from_index]
        to_team = teams[to_index]
        if not from_team.players:
            return teams

        best_player_index = -1
        best_score = float("inf")
        for player_index, player in enumerate(from_team.players):
            simulated = list(teams)
            simulated[from_index] = from_team.with_players(
                from_team.players[:player_index] + from_team.players[player_index + 1 :]
            )
            simulated[to_index] = to_team.with_players(to_team.players + [player])
            simulated_score = self.score(simulated)
            if simulated_score < best_score:
                best_player_index, best_score = player_index, simulated_score

        new_teams = [team.copy() for team in teams]
        moved = new_teams[from_index].players.pop(best_player_index)
        new_teams[to_index].players.append(moved)

        new_teams[from_index].ensure_captain()
        if not new_teams[to_index].captain_ids:
            new_teams[to_index].captain_ids = [moved.id]

        for team in new_teams:
            team.recompute_average_skill()

        logger.debug(
            "Moved %s from %s to %s (score %.4f)",
            moved.name,
            new_teams[from_index].name,
            new_teams[to_index].name,
            best_score,
        )
        return new_teams

    def suggest_player_swaps(self, teams: list[Team]) -> list[MoveSuggestion]:
        """
        Rank single-player moves that would improve balance.

        Despite the name this simulates one-directional moves (player X to team
        Y), not two-way trades. Moves improving the score by no more than the
        noise threshold are dropped.

        Returns:
            At most max_suggestions moves, best improvement first
        """
        current_score = self.score(teams)
        suggestions: list[MoveSuggestion] = []

        for from_index, from_team in enumerate(teams):
            for player in from_team.players:
                remaining = [p for p in from_team.players if p.id != player.id]
                for to_index, to_team in enumerate(teams):
                    if from_index == to_index:
                        continue

                    simulated = list(teams)
                    simulated[from_index] = from_team.with_players(remaining)
                    simulated[to_index] = to_team.with_players(to_team.players + [player])

                    improvement = current_score - self.score(simulated)
                    if improvement > self.improvement_threshold:
                        suggestions.append(
                            MoveSuggestion(
                                from_team_id=from_team.id,
                                to_team_id=to_team.id,
                                player_id=player.id,
                                improvement_score=improvement,
                            )
                        )

        suggestions.sort(key=lambda s: s.improvement_score, reverse=True)
        return suggestions[: self.max_suggestions]

    def validate_team_balance(
        self,
        teams: list[Team],
        max_skill_difference: float = MAX_SKILL_DIFFERENCE,
    ) -> TeamBalanceReport:
        """
        Report roster-size, skill-gap and empty-team problems.

        Never raises; is_balanced is simply "no issues found".
        """
        issues: list[str] = []
        suggestions: list[str] = []

        if not teams:
            return TeamBalanceReport(is_balanced=True)

        player_counts = [team.size for team in teams]
        if max(player_counts) - min(player_counts) > 1:
            issues.append("Teams have uneven player counts")
            suggestions.append("Redistribute players to balance team sizes")

        averages = [team.average_skill for team in teams]
        skill_gap = max(averages) - min(averages)
        if skill_gap > max_skill_difference:
            issues.append(f"Skill gap too large ({skill_gap:.1f} points)")
            suggestions.append("Consider swapping players between teams to balance skills")

        empty_count = sum(1 for team in teams if not team.players)
        if empty_count:
            issues.append(f"{empty_count} team(s) have no players")
            suggestions.append("Add players to empty teams or reduce team count")

        return TeamBalanceReport(is_balanced=not issues, issues=issues, suggestions=suggestions)
