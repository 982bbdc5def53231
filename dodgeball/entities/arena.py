"""Arena geometry: outer walls, the centre line and spawn layout."""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import List, Tuple

from dodgeball.entities.team import Team
from dodgeball.math_utils import Vector2

SPAWN_JITTER = 40.0  # Max horizontal offset from the team base line


@dataclass(frozen=True)
class Arena:
    """Rectangular arena split into two halves by a vertical centre line.

    PURPLE plays x in [0, width/2], BLUE plays x in [width/2, width].
    """

    width: float
    height: float

    @property
    def center_x(self) -> float:
        return self.width / 2

    def team_x_bounds(self, team: Team, radius: float) -> Tuple[float, float]:
        """Allowed centre x range for a player of ``radius`` on ``team``."""
        if team.is_left:
            return radius, self.center_x - radius
        return self.center_x + radius, self.width - radius

    def y_bounds(self, radius: float) -> Tuple[float, float]:
        return radius, self.height - radius

    def base_x(self, team: Team) -> float:
        """Horizontal line the team lines up on (25% / 75% of the width)."""
        return self.width * 0.25 if team.is_left else self.width * 0.75

    def respawn_point(self, team: Team) -> Vector2:
        return Vector2(self.base_x(team), self.height * 0.5)

    def spawn_positions(self, team: Team, team_size: int, rng: random.Random) -> List[Vector2]:
        """Initial formation: a column spread over the middle 60% of the height.

        Args:
            team: Side to lay out
            team_size: Players on the team
            rng: Seeded RNG for the horizontal jitter
        """
        positions = []
        base_x = self.base_x(team)
        for i in range(team_size):
            x = base_x + (rng.random() - 0.5) * 2 * SPAWN_JITTER
            y = self.height * 0.2 + i * (self.height * 0.6) / team_size
            positions.append(Vector2(x, y))
        return positions
