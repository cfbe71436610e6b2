"""
Tests for standings calculation.
"""

from domain.models.match import Match, MatchStatus
from domain.models.team import Team, TeamColor
from domain.services.standings_service import calculate_standings


def _result(number, team_a, team_b, score_a, score_b, status=MatchStatus.COMPLETED):
    return Match(
        game_number=number,
        team_a_id=team_a,
        team_b_id=team_b,
        duration=8,
        score_a=score_a,
        score_b=score_b,
        status=status,
    )


def _teams():
    return [
        Team(name="A", color=TeamColor.BLACK, id="a"),
        Team(name="B", color=TeamColor.WHITE, id="b"),
        Team(name="C", color=TeamColor.ORANGE, id="c"),
    ]


class TestCalculateStandings:
    """Tests for calculate_standings."""

    def test_no_matches(self):
        standings = calculate_standings([], _teams())
        assert len(standings) == 3
        assert all(s.played == 0 and s.points == 0 for s in standings)

    def test_win_draw_loss_points(self):
        matches = [_result(1, "a", "b", 2, 1), _result(2, "b", "c", 0, 0)]
        # 0-0 counts only because it is explicitly completed
        by_team = {s.team_id: s for s in calculate_standings(matches, _teams())}

        assert by_team["a"].points == 3
        assert by_team["a"].won == 1
        assert by_team["b"].points == 1
        assert by_team["b"].lost == 1
        assert by_team["b"].drawn == 1
        assert by_team["c"].points == 1
        assert by_team["a"].goal_difference == 1
        assert by_team["b"].goals_against == 2

    def test_only_completed_matches_count(self):
        matches = [
            _result(1, "a", "b", 3, 0, status=MatchStatus.SCHEDULED),
            _result(2, "a", "c", 1, 0, status=MatchStatus.IN_PROGRESS),
        ]
        standings = calculate_standings(matches, _teams())
        assert all(s.played == 0 for s in standings)

    def test_ordering_tiebreaks(self):
        """Points first, then goal difference, then goals scored."""
        matches = [
            _result(1, "a", "c", 1, 0),
            _result(2, "b", "c", 3, 0),
        ]
        standings = calculate_standings(matches, _teams())
        assert [s.team_id for s in standings] == ["b", "a", "c"]

    def test_goals_for_breaks_equal_difference(self):
        matches = [_result(1, "a", "b", 3, 3), _result(2, "c", "a", 1, 1)]
        standings = calculate_standings(matches, _teams())
        assert standings[0].team_id == "a"
        assert standings[1].team_id == "b"

    def test_unknown_team_skipped(self):
        matches = [_result(1, "a", "ghost", 5, 0)]
        standings = calculate_standings(matches, _teams())
        assert all(s.played == 0 for s in standings)
