"""
Tests for the session domain models.
"""

import pytest

from domain.models.match import GameSettings, Match, MatchStatus, ScheduleConstraints
from domain.models.player import Player
from domain.models.team import Team, TeamColor, compute_average_skill, pick_captain


class TestPlayer:
    """Tests for Player."""

    def test_defaults(self):
        """New players are active, not captains, and get a unique id."""
        a = Player(name="Alex", skill_level=3)
        b = Player(name="Blair", skill_level=3)
        assert a.is_waitlist is False
        assert a.is_captain is False
        assert a.id != b.id

    @pytest.mark.parametrize("skill", [0, 5, -1])
    def test_skill_out_of_range_rejected(self, skill):
        """Skill levels outside 1-4 raise ValueError."""
        with pytest.raises(ValueError):
            Player(name="Bad", skill_level=skill)

    def test_players_are_immutable(self):
        """Players are frozen snapshots."""
        player = Player(name="Alex", skill_level=2)
        with pytest.raises(Exception):
            player.skill_level = 4


class TestTeam:
    """Tests for Team and roster helpers."""

    def test_average_skill_rounded_to_one_decimal(self, make_players):
        """Average is rounded to one decimal place."""
        players = make_players([4, 3, 3])
        assert compute_average_skill(players) == 3.3

    def test_average_skill_empty_roster(self):
        """Empty roster averages to zero."""
        assert compute_average_skill([]) == 0.0

    def test_with_players_returns_copy(self, make_team, make_players):
        """with_players leaves the original team untouched."""
        team = make_team("A", [4, 4])
        extra = make_players([1], prefix="X")
        copy = team.with_players(team.players + extra)

        assert team.size == 2
        assert team.average_skill == 4.0
        assert copy.size == 3
        assert copy.average_skill == 3.0
        assert copy.id == team.id

    def test_copy_has_independent_lists(self, make_team):
        """Mutating a copy's roster does not affect the original."""
        team = make_team("A", [4, 2])
        clone = team.copy()
        clone.players.pop()
        clone.captain_ids.clear()
        assert team.size == 2
        assert len(team.captain_ids) == 1

    def test_pick_captain_prefers_designated(self, make_players):
        """A pre-designated captain wins over skill."""
        players = make_players([4, 2])
        designated = Player(name="Cap", skill_level=1, is_captain=True)
        assert pick_captain(players + [designated]) is designated

    def test_pick_captain_first_highest_on_ties(self, make_players):
        """Ties go to the first highest-skill player in roster order."""
        players = make_players([2, 4, 4])
        assert pick_captain(players) is players[1]

    def test_ensure_captain_replaces_departed_captain(self, make_team):
        """Captains not on the roster are dropped and a new one appointed."""
        team = make_team("A", [2, 3])
        team.captain_ids = ["someone-else"]
        team.ensure_captain()
        assert team.captain_ids == [team.players[1].id]

    def test_team_color_values(self):
        """Colors serialize to their display keys."""
        assert TeamColor.NO_PENNIES.value == "no-pennies"
        assert Team(name="A", color=TeamColor.BLUE).color.value == "blue"


class TestMatch:
    """Tests for Match, GameSettings and ScheduleConstraints."""

    def test_match_defaults(self):
        """Matches start scheduled with zero scores."""
        match = Match(game_number=1, team_a_id="a", team_b_id="b", duration=8)
        assert match.score_a == 0
        assert match.score_b == 0
        assert match.status == MatchStatus.SCHEDULED
        assert match.start_time is None
        assert match.status.value == "scheduled"

    def test_pairing_key_is_order_independent(self):
        """The pairing key ignores which side is A."""
        one = Match(game_number=1, team_a_id="a", team_b_id="b", duration=8)
        two = Match(game_number=2, team_a_id="b", team_b_id="a", duration=8)
        assert one.pairing_key == two.pairing_key

    def test_constraints_from_settings(self):
        """Default constraints cap games at the session's games per team."""
        settings = GameSettings(games_per_team=4)
        constraints = ScheduleConstraints.from_settings(settings)
        assert constraints.max_games_per_team == 4
        assert constraints.minimum_rest_games == 1
        assert constraints.preferred_game_spacing == 2
