"""
Player domain model.
"""

import uuid
from dataclasses import dataclass, field
from datetime import datetime

from config import MAX_SKILL_LEVEL, MIN_SKILL_LEVEL


def new_id() -> str:
    """Generate an opaque identifier for players, teams and matches."""
    return uuid.uuid4().hex


@dataclass(frozen=True)
class Player:
    """
    Represents a signed-up player in a pickup session.

    Players are immutable inputs to the engine. Team membership is tracked by
    the Team that owns the player, never on the player itself.
    """

    name: str
    skill_level: int  # 1 (beginner) to 4 (expert)
    id: str = field(default_factory=new_id)
    is_waitlist: bool = False
    signup_order: int = 0  # Display order and tie-break stability only
    created_at: datetime = field(default_factory=datetime.now)
    is_captain: bool = False  # Pre-designated captain preference

    def __post_init__(self):
        if not MIN_SKILL_LEVEL <= self.skill_level <= MAX_SKILL_LEVEL:
            raise ValueError(
                f"Skill level must be between {MIN_SKILL_LEVEL} and {MAX_SKILL_LEVEL}, "
                f"got {self.skill_level}"
            )

    def __str__(self) -> str:
        return f"{self.name} (skill {self.skill_level})"
