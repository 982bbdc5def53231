"""Atomic player actions shared by human input and bots.

A throw either happens completely (ball detached, launched, thrower
updated, event emitted) or not at all.
"""

import logging
from typing import Iterable, Optional

from dodgeball.config.physics import THROW_ANIMATION_TICKS
from dodgeball.entities.ball import Ball
from dodgeball.entities.player import Player
from dodgeball.events import BallThrownEvent, EventBus
from dodgeball.math_utils import Vector2

logger = logging.getLogger(__name__)

THROW_SCALE = 0.8
RELEASE_OFFSET = 20.0  # Burst appears this far ahead of the thrower


def find_owned_ball(player: Player, balls: Iterable[Ball]) -> Optional[Ball]:
    for ball in balls:
        if ball.owner_id == player.player_id:
            return ball
    return None


def execute_throw(
    thrower: Player,
    target: Vector2,
    balls: Iterable[Ball],
    throw_force: float,
    event_bus: Optional[EventBus] = None,
    tick: int = 0,
) -> Optional[Ball]:
    """Launch the thrower's ball toward ``target``.

    Args:
        thrower: Player releasing the ball
        target: Point to aim at
        balls: All balls in the match
        throw_force: Launch speed in pixels per tick
        event_bus: Bus to publish BallThrownEvent on, if any
        tick: Current simulation tick (for the event)

    Returns:
        The thrown ball, or None if the thrower is dead or holds no ball
    """
    if not thrower.is_alive:
        return None
    ball = find_owned_ball(thrower, balls)
    if ball is None:
        return None

    direction = (target - thrower.position).normalize()

    ball.release()
    ball.position = thrower.position.copy()
    ball.velocity = direction * throw_force
    ball.just_thrown = True
    ball.thrown_by = thrower.player_id
    ball.trail.clear()

    thrower.has_ball = False
    thrower.throw_animation = THROW_ANIMATION_TICKS
    thrower.scale = THROW_SCALE

    logger.debug("Tick %d: %s threw %s", tick, thrower.player_id, ball.ball_id)

    if event_bus is not None:
        event_bus.emit(
            BallThrownEvent(
                ball_id=ball.ball_id,
                thrower_id=thrower.player_id,
                x=thrower.position.x + direction.x * RELEASE_OFFSET,
                y=thrower.position.y + direction.y * RELEASE_OFFSET,
                tick=tick,
            )
        )
    return ball
