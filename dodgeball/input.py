"""Human input state.

The front end writes into HumanInput whenever the user moves or clicks;
the engine samples it once at the start of each tick. There is no queue:
the latest steering value wins, and at most one throw request is pending.
"""

from typing import Iterable, Optional

from dodgeball.entities.player import Player, Steering
from dodgeball.math_utils import Vector2

CLICK_SNAP_MARGIN = 20.0  # Clicks this close to an enemy's edge aim at the enemy


class HumanInput:
    """Latest-value input for the human-controlled player."""

    def __init__(self) -> None:
        self._steering: Optional[Steering] = None
        self._throw_target: Optional[Vector2] = None

    @property
    def steering(self) -> Optional[Steering]:
        return self._steering

    @property
    def has_throw_request(self) -> bool:
        return self._throw_target is not None

    def steer_toward(self, point: Vector2) -> None:
        """Accelerate toward a point (e.g. the cursor while the button is held)."""
        self._steering = Steering.toward(point, persistent=True)

    def steer_direction(self, direction: Vector2) -> None:
        """Accelerate along a target-velocity vector; only its direction is used."""
        unit = direction.normalize()
        if unit.length_squared() == 0:
            self._steering = None
            return
        self._steering = Steering(direction=unit, persistent=True)

    def clear_steering(self) -> None:
        self._steering = None

    def request_throw(self, target: Vector2) -> None:
        self._throw_target = target.copy()

    def take_throw(self) -> Optional[Vector2]:
        """Consume the pending throw request, if any."""
        target = self._throw_target
        self._throw_target = None
        return target

    def reset(self) -> None:
        self._steering = None
        self._throw_target = None


def resolve_throw_target(
    click: Vector2,
    players: Iterable[Player],
    thrower: Player,
    snap_margin: float = CLICK_SNAP_MARGIN,
) -> Vector2:
    """Aim at an enemy if the click landed on or near one, else at the click.

    The first living opponent (roster order) within ``radius + snap_margin``
    of the click wins.
    """
    for player in players:
        if not player.is_alive or player.team == thrower.team:
            continue
        if player.position.distance_to(click) < player.radius + snap_margin:
            return player.position.copy()
    return click.copy()
