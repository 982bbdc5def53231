"""Team identifiers and per-team helpers."""

from enum import Enum

from dodgeball.config.display import BLUE_COLOR, PURPLE_COLOR


class Team(Enum):
    """The two sides of the arena.

    PURPLE always plays the left half, BLUE the right half.
    """

    PURPLE = "purple"
    BLUE = "blue"

    @property
    def opponent(self) -> "Team":
        return Team.BLUE if self is Team.PURPLE else Team.PURPLE

    @property
    def color(self) -> str:
        return PURPLE_COLOR if self is Team.PURPLE else BLUE_COLOR

    @property
    def is_left(self) -> bool:
        return self is Team.PURPLE
