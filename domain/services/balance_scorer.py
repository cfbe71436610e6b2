"""
Balance scoring for team sets.

The score is the population standard deviation of per-team average skill.
Lower is better; 0 means every team has the same average.
"""

import math

from domain.models.team import Team


def _team_average(team: Team) -> float:
    # Computed from the roster so simulated teams with a stale cache still score correctly
    if not team.players:
        return 0.0
    return sum(p.skill_level for p in team.players) / len(team.players)


class BalanceScorer:
    """
    Default scorer: standard deviation of team average skill.

    Kept separate from the balancer so alternative strategies can be passed to
    TeamBalancer without touching the partitioning logic.
    """

    def score(self, teams: list[Team]) -> float:
        """
        Score a set of teams.

        Args:
            teams: Teams to evaluate (empty teams count as average 0)

        Returns:
            Imbalance score; 0.0 for zero or one team
        """
        if len(teams) < 2:
            return 0.0

        averages = [_team_average(team) for team in teams]
        mean = sum(averages) / len(averages)
        variance = sum((avg - mean) ** 2 for avg in averages) / len(averages)
        return math.sqrt(variance)

    def __call__(self, teams: list[Team]) -> float:
        return self.score(teams)


class RosterWeightedBalanceScorer(BalanceScorer):
    """
    Weights each team's deviation by roster size.

    A short-handed team pulls the score less than a full one, which favours
    fixing large rosters first when sizes are uneven.
    """

    def score(self, teams: list[Team]) -> float:
        if len(teams) < 2:
            return 0.0

        total_players = sum(team.size for team in teams)
        if total_players == 0:
            return 0.0

        averages = [_team_average(team) for team in teams]
        weights = [team.size / total_players for team in teams]
        mean = sum(w * avg for w, avg in zip(weights, averages))
        variance = sum(w * (avg - mean) ** 2 for w, avg in zip(weights, averages))
        return math.sqrt(variance)


_default_scorer = BalanceScorer()


def calculate_team_balance(teams: list[Team]) -> float:
    """Score teams with the default standard deviation scorer."""
    return _default_scorer.score(teams)
