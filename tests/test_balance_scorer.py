"""
Tests for balance scoring.
"""

import math

import pytest

from domain.models.team import Team, TeamColor
from domain.services.balance_scorer import (
    BalanceScorer,
    RosterWeightedBalanceScorer,
    calculate_team_balance,
)


class TestBalanceScorer:
    """Tests for the default standard deviation scorer."""

    def test_no_teams_scores_zero(self):
        assert calculate_team_balance([]) == 0.0

    def test_single_team_scores_zero(self, make_team):
        assert calculate_team_balance([make_team("A", [4, 1])]) == 0.0

    def test_equal_averages_score_zero(self, make_team):
        teams = [make_team("A", [4, 1]), make_team("B", [3, 2])]
        assert calculate_team_balance(teams) == 0.0

    def test_population_standard_deviation(self, make_team):
        """Averages 4 and 2 give a population deviation of 1."""
        teams = [make_team("A", [4, 4]), make_team("B", [2, 2])]
        assert calculate_team_balance(teams) == pytest.approx(1.0)

    def test_three_teams(self, make_team):
        teams = [make_team("A", [1]), make_team("B", [2]), make_team("C", [3])]
        assert calculate_team_balance(teams) == pytest.approx(math.sqrt(2 / 3))

    def test_empty_team_counts_as_zero(self, make_team):
        """An empty team contributes an average of 0."""
        teams = [make_team("A", [2, 2]), Team(name="B", color=TeamColor.WHITE)]
        assert calculate_team_balance(teams) == pytest.approx(1.0)

    def test_uses_roster_not_cached_average(self, make_team):
        """A stale cached average does not affect the score."""
        a = make_team("A", [4])
        b = make_team("B", [2])
        a.average_skill = 0.0
        assert calculate_team_balance([a, b]) == pytest.approx(1.0)

    def test_idempotent(self, make_team):
        """Scoring twice gives the same value and leaves teams alone."""
        teams = [make_team("A", [4, 3, 1]), make_team("B", [2, 2])]
        first = calculate_team_balance(teams)
        second = calculate_team_balance(teams)
        assert first == second
        assert [t.size for t in teams] == [3, 2]

    def test_scorer_is_callable(self, make_team):
        teams = [make_team("A", [4, 4]), make_team("B", [2, 2])]
        scorer = BalanceScorer()
        assert scorer(teams) == scorer.score(teams)


class TestRosterWeightedBalanceScorer:
    """Tests for the roster-size weighted alternative."""

    def test_equal_sizes_match_default(self, make_team):
        teams = [make_team("A", [4, 4]), make_team("B", [2, 2])]
        assert RosterWeightedBalanceScorer().score(teams) == pytest.approx(
            BalanceScorer().score(teams)
        )

    def test_weights_by_roster_size(self, make_team):
        """A one-player team pulls the score less than a three-player team."""
        teams = [make_team("A", [4]), make_team("B", [2, 2, 2])]
        assert RosterWeightedBalanceScorer().score(teams) == pytest.approx(math.sqrt(0.75))

    def test_all_empty_teams_score_zero(self):
        teams = [Team(name="A", color=TeamColor.BLACK), Team(name="B", color=TeamColor.WHITE)]
        assert RosterWeightedBalanceScorer().score(teams) == 0.0
