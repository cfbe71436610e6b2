"""
Team domain model.
"""

from dataclasses import dataclass, field, replace
from enum import Enum

from domain.models.player import Player, new_id


class TeamColor(Enum):
    """Bib colors handed out to teams."""

    BLACK = "black"
    WHITE = "white"
    ORANGE = "orange"
    BLUE = "blue"
    YELLOW = "yellow"
    RED = "red"
    GREEN = "green"
    PURPLE = "purple"
    PINK = "pink"
    TEAL = "teal"
    NO_PENNIES = "no-pennies"


# Fixed palette for generated teams, in assignment order
TEAM_PALETTE: list[tuple[str, TeamColor]] = [
    ("Black", TeamColor.BLACK),
    ("White", TeamColor.WHITE),
    ("Orange", TeamColor.ORANGE),
    ("Blue", TeamColor.BLUE),
    ("Yellow", TeamColor.YELLOW),
    ("No Pennies", TeamColor.NO_PENNIES),
]


def compute_average_skill(players: list[Player]) -> float:
    """Mean skill level rounded to one decimal; 0 for an empty roster."""
    if not players:
        return 0.0
    total = sum(p.skill_level for p in players)
    return round(total / len(players), 1)


def pick_captain(players: list[Player]) -> Player | None:
    """
    Choose the default captain for a roster.

    A pre-designated captain wins; otherwise the highest-skill player, taking
    the first one in roster order on ties.
    """
    if not players:
        return None
    for player in players:
        if player.is_captain:
            return player
    captain = players[0]
    for player in players[1:]:
        if player.skill_level > captain.skill_level:
            captain = player
    return captain


@dataclass
class Team:
    """
    A team for one session.

    The team owns its player list exclusively while players are assigned to it.
    average_skill is a cached value and must be refreshed with
    recompute_average_skill() whenever membership changes.
    """

    name: str
    color: TeamColor
    id: str = field(default_factory=new_id)
    players: list[Player] = field(default_factory=list)
    captain_ids: list[str] = field(default_factory=list)
    average_skill: float = 0.0

    @property
    def player_ids(self) -> list[str]:
        return [p.id for p in self.players]

    @property
    def size(self) -> int:
        return len(self.players)

    def has_player(self, player_id: str) -> bool:
        return any(p.id == player_id for p in self.players)

    def recompute_average_skill(self) -> float:
        self.average_skill = compute_average_skill(self.players)
        return self.average_skill

    def copy(self) -> "Team":
        """Shallow copy with independent player and captain lists."""
        return replace(self, players=list(self.players), captain_ids=list(self.captain_ids))

    def with_players(self, players: list[Player]) -> "Team":
        """Copy of this team holding a different roster, average refreshed."""
        team = replace(self, players=list(players), captain_ids=list(self.captain_ids))
        team.recompute_average_skill()
        return team

    def ensure_captain(self) -> None:
        """Drop captains no longer on the roster and appoint one if none remain."""
        roster_ids = set(self.player_ids)
        self.captain_ids = [cid for cid in self.captain_ids if cid in roster_ids]
        if self.players and not self.captain_ids:
            captain = pick_captain(self.players)
            self.captain_ids = [captain.id]

    def __str__(self) -> str:
        player_names = ", ".join(p.name for p in self.players)
        return f"{self.name}: {player_names}"
