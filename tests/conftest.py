"""
Pytest fixtures for tests.

Factories for players and teams live here as fixtures so test modules do not
need to import from the tests directory.
"""

import random

import pytest

from domain.models.match import GameSettings
from domain.models.player import Player
from domain.models.team import Team, TeamColor

TEST_SEED = 1234
"""Seed for deterministic random sources in tests."""


class UnshuffledRandom(random.Random):
    """Random source whose shuffle keeps the original order."""

    def shuffle(self, x):
        return None


@pytest.fixture
def rng():
    """Seeded random source."""
    return random.Random(TEST_SEED)


@pytest.fixture
def unshuffled_rng():
    """Random source that leaves pairing order untouched."""
    return UnshuffledRandom(TEST_SEED)


@pytest.fixture
def settings():
    """Session settings used across scheduling tests."""
    return GameSettings(teams_count=4, players_per_team=5, match_duration=8, games_per_team=3)


@pytest.fixture
def make_players():
    """Factory: list of players from a list of skill levels."""

    def _make(skills, prefix="P"):
        return [
            Player(name=f"{prefix}{i}", skill_level=skill, signup_order=i)
            for i, skill in enumerate(skills)
        ]

    return _make


@pytest.fixture
def make_team(make_players):
    """Factory: team with players of the given skills and a refreshed average."""

    def _make(name, skills, color=TeamColor.BLACK, with_captain=True):
        players = make_players(skills, prefix=f"{name}-")
        team = Team(name=name, color=color, players=players)
        team.recompute_average_skill()
        if with_captain and players:
            team.captain_ids = [players[0].id]
        return team

    return _make
