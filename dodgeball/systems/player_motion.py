"""Player movement integration.

This system turns steering intents into velocity and position:
acceleration toward the intent, speed cap (raised for the aura holder),
friction, integration and confinement to the player's own half.

Architecture Notes:
- Extends BaseSystem for uniform system management
- Runs in UpdatePhase.PLAYER_MOTION
- Dead players are skipped entirely
- AI steering is a one-shot impulse; human steering persists until replaced
"""

import logging
from typing import TYPE_CHECKING, Iterable, Optional

from dodgeball.config.physics import (
    PLAYER_TRAIL_SPEED_THRESHOLD,
    ROTATION_RATE,
    ROTATION_SPEED_THRESHOLD,
    SCALE_EASE_RATE,
    PhysicsParams,
)
from dodgeball.entities.arena import Arena
from dodgeball.entities.player import Player, Steering
from dodgeball.math_utils import Vector2
from dodgeball.systems.base import BaseSystem, SystemResult
from dodgeball.update_phases import UpdatePhase, runs_in_phase

if TYPE_CHECKING:
    from dodgeball.simulation.engine import MatchController

logger = logging.getLogger(__name__)


def find_aura_holder(players: Iterable[Player], min_kills: int) -> Optional[str]:
    """Return the id of the living player with the strictly highest streak.

    The streak must be at least ``min_kills``; a tie for the lead grants no
    aura to anyone.
    """
    best: Optional[Player] = None
    tied = False
    for player in players:
        if not player.is_alive:
            continue
        if best is None or player.kills > best.kills:
            best = player
            tied = False
        elif player.kills == best.kills:
            tied = True

    if best is None or tied or best.kills < min_kills:
        return None
    return best.player_id


def steering_acceleration(player: Player, steering: Steering, params: PhysicsParams) -> Vector2:
    """Acceleration contributed by a steering intent this tick."""
    if steering.target is not None:
        offset = steering.target - player.position
        if offset.length() <= params.steer_dead_zone:
            return Vector2(0.0, 0.0)
        direction = offset.normalize()
    elif steering.direction is not None:
        direction = steering.direction
    else:
        return Vector2(0.0, 0.0)
    return direction * (params.player_acceleration * steering.gain)


def confine_to_half(player: Player, arena: Arena, damping: float) -> bool:
    """Clamp a player inside its half, reflecting velocity on contact.

    Returns:
        True if any boundary was touched
    """
    min_x, max_x = arena.team_x_bounds(player.team, player.radius)
    min_y, max_y = arena.y_bounds(player.radius)
    pos = player.position
    vel = player.velocity
    touched = False

    if pos.x < min_x:
        pos.x = min_x
        vel.x *= -damping
        touched = True
    elif pos.x > max_x:
        pos.x = max_x
        vel.x *= -damping
        touched = True

    if pos.y < min_y:
        pos.y = min_y
        vel.y *= -damping
        touched = True
    elif pos.y > max_y:
        pos.y = max_y
        vel.y *= -damping
        touched = True

    return touched


def update_cosmetics(player: Player) -> None:
    """Advance spin, scale easing, throw animation and the movement trail."""
    speed = player.velocity.length()
    if speed > ROTATION_SPEED_THRESHOLD:
        player.rotation += speed * ROTATION_RATE

    if player.scale > 1.0:
        player.scale = max(1.0, player.scale - SCALE_EASE_RATE)
    elif player.scale < 1.0:
        player.scale = min(1.0, player.scale + SCALE_EASE_RATE)

    if player.throw_animation is not None:
        player.throw_animation -= 1
        if player.throw_animation <= 0:
            player.throw_animation = None

    if speed > PLAYER_TRAIL_SPEED_THRESHOLD:
        player.trail.append(player.position.copy())
    elif player.trail:
        player.trail.popleft()


def move_player(player: Player, params: PhysicsParams, arena: Arena, max_speed: float) -> None:
    """Run one tick of motion for a single living player."""
    steering = player.steering
    if steering is not None:
        player.velocity.add_inplace(steering_acceleration(player, steering, params))
        if not steering.persistent:
            player.steering = None

    player.velocity.limit_inplace(max_speed)
    player.velocity.mul_inplace(params.friction)
    player.position.add_inplace(player.velocity)

    confine_to_half(player, arena, params.wall_damping)
    update_cosmetics(player)


@runs_in_phase(UpdatePhase.PLAYER_MOTION)
class PlayerMotionSystem(BaseSystem):
    """Moves every living player according to its steering intent.

    Also recomputes the aura holder at the start of the phase, so the
    speed buff always reflects the streaks as of the previous tick's
    combat.
    """

    def __init__(self, engine: "MatchController") -> None:
        super().__init__(engine, "PlayerMotion")
        self._aura_holder_id: Optional[str] = None

    @property
    def aura_holder_id(self) -> Optional[str]:
        return self._aura_holder_id

    def _do_update(self, tick: int) -> SystemResult:
        engine = self._engine
        params = engine.config.physics
        arena = engine.arena

        holder = find_aura_holder(engine.players, params.aura_min_kills)
        if holder != self._aura_holder_id:
            logger.debug("Tick %d: aura holder %s -> %s", tick, self._aura_holder_id, holder)
        self._aura_holder_id = holder

        moved = 0
        for player in engine.players:
            if not player.is_alive:
                continue
            max_speed = params.player_max_speed
            if player.player_id == holder:
                max_speed *= params.aura_speed_multiplier
            move_player(player, params, arena, max_speed)
            moved += 1

        return SystemResult(entities_affected=moved, details={"aura_holder": holder})
