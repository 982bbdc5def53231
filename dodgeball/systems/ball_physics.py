"""Ball physics system.

Handles everything a ball does between throw and pickup:
- Owned balls follow their holder (or are released if the holder is gone)
- Free balls leave a fading trail, decay, integrate and bounce off walls
- Free balls collide with each other (equal-mass elastic impulse)
- Slow balls settle: velocity snaps to zero and the lethal window ends

Architecture Notes:
- Extends BaseSystem for uniform system management
- Runs in UpdatePhase.BALL_PHYSICS
- Emits BallBouncedEvent and BallsCollidedEvent for cosmetic bursts
"""

import logging
import math
from typing import TYPE_CHECKING, List, Optional, Tuple

from dodgeball.config.physics import BALL_TRAIL_FADE, PhysicsParams
from dodgeball.entities.ball import Ball, TrailPoint
from dodgeball.events import BallBouncedEvent, BallsCollidedEvent, EventBus
from dodgeball.math_utils import Vector2
from dodgeball.systems.base import BaseSystem, SystemResult
from dodgeball.update_phases import UpdatePhase, runs_in_phase

if TYPE_CHECKING:
    from dodgeball.simulation.engine import MatchController

logger = logging.getLogger(__name__)


def update_trail(ball: Ball) -> None:
    """Extend the trail while lethal, shrink it otherwise; fade every point."""
    if ball.just_thrown:
        ball.trail.append(TrailPoint(ball.position.x, ball.position.y, 1.0))
    elif ball.trail:
        ball.trail.popleft()

    for point in ball.trail:
        point.alpha -= BALL_TRAIL_FADE


def bounce_off_walls(ball: Ball, width: float, height: float, bounce: float) -> bool:
    """Reflect and clamp a ball against the outer walls.

    Returns:
        True if any wall was struck
    """
    pos = ball.position
    vel = ball.velocity
    r = ball.radius
    hit = False

    if pos.x - r < 0:
        pos.x = r
        vel.x *= -bounce
        hit = True
    elif pos.x + r > width:
        pos.x = width - r
        vel.x *= -bounce
        hit = True

    if pos.y - r < 0:
        pos.y = r
        vel.y *= -bounce
        hit = True
    elif pos.y + r > height:
        pos.y = height - r
        vel.y *= -bounce
        hit = True

    if hit:
        ball.neutralize()
    return hit


def keep_inside(ball: Ball, width: float, height: float) -> bool:
    """Clamp a ball back inside the walls without treating it as a bounce.

    Ball-ball separation runs after the wall pass and can nudge a ball that
    rests against a wall back through it.

    Returns:
        True if the position had to be corrected
    """
    pos = ball.position
    r = ball.radius
    x = min(max(pos.x, r), width - r)
    y = min(max(pos.y, r), height - r)
    if x == pos.x and y == pos.y:
        return False
    pos.update(x, y)
    return True


def resolve_ball_collision(a: Ball, b: Ball, restitution: float) -> Optional[float]:
    """Separate two overlapping balls and exchange momentum along the normal.

    Equal masses: each ball is pushed back by half the overlap, and the
    impulse ``(1 + e) * closing / 2`` is applied only while the balls are
    approaching.

    Returns:
        Closing speed along the normal if the balls overlapped and were
        approaching, 0.0 if they overlapped but were separating, None if
        they did not touch.
    """
    dx = b.position.x - a.position.x
    dy = b.position.y - a.position.y
    min_dist = a.radius + b.radius
    dist_sq = dx * dx + dy * dy
    if dist_sq >= min_dist * min_dist:
        return None

    dist = math.sqrt(dist_sq)
    if dist == 0:
        # Coincident centres: pick a fixed normal
        nx, ny = 1.0, 0.0
    else:
        nx, ny = dx / dist, dy / dist

    half_overlap = (min_dist - dist) / 2
    a.position.x -= nx * half_overlap
    a.position.y -= ny * half_overlap
    b.position.x += nx * half_overlap
    b.position.y += ny * half_overlap

    closing = (a.velocity.x - b.velocity.x) * nx + (a.velocity.y - b.velocity.y) * ny
    if closing <= 0:
        return 0.0

    j = (1 + restitution) * closing / 2
    a.velocity.x -= j * nx
    a.velocity.y -= j * ny
    b.velocity.x += j * nx
    b.velocity.y += j * ny
    return closing


def settle(ball: Ball, stop_speed: float) -> bool:
    """Snap a slow free ball to rest and end its lethal window.

    Returns:
        True if the ball was settled this call
    """
    if ball.velocity.length() < stop_speed:
        ball.velocity = Vector2(0.0, 0.0)
        ball.neutralize()
        return True
    return False


@runs_in_phase(UpdatePhase.BALL_PHYSICS)
class BallPhysicsSystem(BaseSystem):
    """Moves every ball for one tick.

    Order within the phase: owner-follow and free flight per ball, then
    pairwise ball-ball collisions over free balls, re-confinement of any ball
    the separation pushed past a wall, then the settle rule.
    """

    def __init__(self, engine: "MatchController") -> None:
        super().__init__(engine, "BallPhysics")
        self._total_bounces = 0
        self._total_collisions = 0

    def _do_update(self, tick: int) -> SystemResult:
        engine = self._engine
        params: PhysicsParams = engine.config.physics
        bus: EventBus = engine.event_bus
        arena = engine.arena

        free_balls: List[Ball] = []
        released = 0
        bounces = 0
        events = 0

        for ball in engine.balls:
            if ball.owner_id is not None:
                if self._follow_owner(ball):
                    continue
                released += 1

            if ball.owner_id is None:
                free_balls.append(ball)
                update_trail(ball)
                ball.velocity.mul_inplace(params.ball_friction)
                ball.position.add_inplace(ball.velocity)
                if bounce_off_walls(ball, arena.width, arena.height, params.ball_bounce):
                    bounces += 1
                    events += 1
                    bus.emit(BallBouncedEvent(ball.ball_id, ball.position.x, ball.position.y, tick))

        collisions = 0
        for a, b, impact in self._collide_pairs(free_balls, params.ball_restitution):
            collisions += 1
            if impact > params.ball_impact_particle_speed:
                events += 1
                bus.emit(
                    BallsCollidedEvent(
                        ball_ids=(a.ball_id, b.ball_id),
                        x=(a.position.x + b.position.x) / 2,
                        y=(a.position.y + b.position.y) / 2,
                        impact_speed=impact,
                        tick=tick,
                    )
                )

        for ball in free_balls:
            keep_inside(ball, arena.width, arena.height)

        settled = sum(1 for ball in free_balls if settle(ball, params.ball_stop_speed))

        self._total_bounces += bounces
        self._total_collisions += collisions

        return SystemResult(
            entities_affected=len(free_balls),
            events_emitted=events,
            details={
                "bounces": bounces,
                "collisions": collisions,
                "released": released,
                "settled": settled,
            },
        )

    def _follow_owner(self, ball: Ball) -> bool:
        """Snap an owned ball to its holder, or release it.

        Returns:
            True if the ball is still held
        """
        owner = self._engine.get_player(ball.owner_id)
        if owner is not None and owner.is_alive:
            ball.position.update(owner.position.x, owner.position.y)
            ball.velocity.update(0.0, 0.0)
            return True

        logger.debug("Releasing ball %s from missing or dead owner %s", ball.ball_id, ball.owner_id)
        if owner is not None:
            owner.has_ball = False
        ball.release()
        return False

    @staticmethod
    def _collide_pairs(balls: List[Ball], restitution: float) -> List[Tuple[Ball, Ball, float]]:
        """Resolve every overlapping pair; return those that were approaching."""
        impacts = []
        count = len(balls)
        for i in range(count):
            a = balls[i]
            for j in range(i + 1, count):
                b = balls[j]
                closing = resolve_ball_collision(a, b, restitution)
                if closing:
                    impacts.append((a, b, closing))
        return impacts

    def get_debug_info(self) -> dict:
        info = super().get_debug_info()
        info["total_bounces"] = self._total_bounces
        info["total_collisions"] = self._total_collisions
        return info
