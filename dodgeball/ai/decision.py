"""Bot decision function.

``decide`` is pure apart from the RNG it is handed: same perception, same
RNG state, same decision. Priority is fixed:

    EVADE   a lethal enemy ball is inside the detection radius
    CHASE   no ball held and a free ball exists
    ATTACK  ball held, enemies alive, match started
    IDLE    anything else (occasional small wander)

Nearest-selection ties go to the first candidate in the perception's order.
"""

import random
from typing import Optional, Sequence

from dodgeball.ai.states import Decision, Perception
from dodgeball.config.ai import AIParams
from dodgeball.config.physics import THROW_FORCE
from dodgeball.entities.player import AIState, Steering
from dodgeball.math_utils import Vector2


def nearest_point(
    origin: Vector2,
    points: Sequence[Vector2],
    max_distance: Optional[float] = None,
) -> Optional[Vector2]:
    """Closest point to ``origin``, optionally limited to ``max_distance``.

    Returns None when no point qualifies. The first minimum wins.
    """
    best = None
    best_dist = max_distance if max_distance is not None else float("inf")
    for point in points:
        dist = origin.distance_to(point)
        if dist < best_dist:
            best = point
            best_dist = dist
    return best


def evade_direction(position: Vector2, threat: Vector2, dodge_factor: float, side: int) -> Vector2:
    """Away from the threat plus a sideways dodge to one side."""
    away = (position - threat).normalize()
    return away + away.perpendicular() * (dodge_factor * side)


def lead_target(
    shooter: Vector2,
    enemy_pos: Vector2,
    enemy_vel: Vector2,
    throw_force: float,
    damping: float,
) -> Vector2:
    """Aim ahead of a moving enemy by a damped flight-time estimate."""
    lead_time = shooter.distance_to(enemy_pos) / throw_force
    return enemy_pos + enemy_vel * (lead_time * damping)


def decide(
    perception: Perception,
    rng: random.Random,
    params: AIParams,
    throw_force: float = THROW_FORCE,
) -> Decision:
    """Choose a bot's next action.

    Args:
        perception: What the bot sees this tick
        rng: Source of randomness (dodge side, target choice, delays, wander)
        params: Bot tuning
        throw_force: Ball launch speed, used to lead moving targets

    Returns:
        The decision to apply
    """
    pos = perception.position

    threat = nearest_point(pos, perception.incoming, params.detection_radius)
    if threat is not None:
        side = 1 if rng.random() < 0.5 else -1
        direction = evade_direction(pos, threat, params.dodge_factor, side)
        return Decision(
            state=AIState.EVADE,
            steering=Steering.impulse(direction, params.evade_boost),
            throw_delay=perception.throw_delay,
            reset_reaction=True,
        )

    if not perception.has_ball:
        target = nearest_point(pos, perception.free_balls)
        if target is not None:
            direction = (target - pos).normalize()
            return Decision(
                state=AIState.CHASE,
                steering=Steering.impulse(direction, params.chase_gain),
                throw_delay=perception.throw_delay,
            )

    elif perception.enemies and perception.match_started:
        delay = perception.throw_delay - 1
        if delay > 0:
            return Decision(state=AIState.ATTACK, throw_delay=delay)

        enemy = rng.choice(perception.enemies)
        target = lead_target(pos, enemy.position, enemy.velocity, throw_force, params.lead_damping)
        return Decision(
            state=AIState.ATTACK,
            throw_target=target,
            throw_delay=rng.randint(params.throw_delay_min, params.throw_delay_max),
            reset_reaction=True,
        )

    steering = None
    if rng.random() < params.wander_chance:
        wander = Vector2((rng.random() - 0.5) * 2, (rng.random() - 0.5) * 2)
        steering = Steering.impulse(wander, params.wander_gain)
    return Decision(state=AIState.IDLE, steering=steering, throw_delay=perception.throw_delay)
