"""Cosmetic particle bursts.

The particle system listens to domain events and spawns radial bursts, then
decays every live particle once per tick. Nothing in gameplay reads particle
state, and bursts draw from their own RNG so effects never perturb bot
decisions.

Architecture Notes:
- Extends BaseSystem for uniform system management
- Runs in UpdatePhase.PARTICLES
- Subscribes to the engine's EventBus on construction
"""

import logging
import math
import random
from typing import TYPE_CHECKING, Optional

from dodgeball.config.display import BOUNCE_COLOR, IMPACT_COLOR
from dodgeball.entities.particle import ParticlePool
from dodgeball.events import (
    BallBouncedEvent,
    BallPickedUpEvent,
    BallsCollidedEvent,
    BallThrownEvent,
    PlayerHitEvent,
    PlayerRespawnedEvent,
)
from dodgeball.systems.base import BaseSystem, SystemResult
from dodgeball.update_phases import UpdatePhase, runs_in_phase

if TYPE_CHECKING:
    from dodgeball.simulation.engine import MatchController

logger = logging.getLogger(__name__)

PARTICLE_LIFE = 60  # Ticks
PARTICLE_DRAG = 0.95
PARTICLE_MIN_SPEED = 2.0
PARTICLE_SPEED_RANGE = 4.0
PARTICLE_MIN_SIZE = 3.0
PARTICLE_SIZE_RANGE = 3.0
PARTICLE_ANGLE_JITTER = 0.5

# Burst sizes per event
THROW_BURST = 6
BOUNCE_BURST = 8
COLLISION_BURST = 6
HIT_VICTIM_BURST = 20
HIT_IMPACT_BURST = 10
PICKUP_BURST = 8
RESPAWN_BURST = 15


def spawn_burst(
    pool: ParticlePool,
    rng: random.Random,
    x: float,
    y: float,
    color: str,
    count: int,
) -> int:
    """Emit ``count`` particles fanned evenly around (x, y) with jitter."""
    for i in range(count):
        angle = (math.pi * 2 * i) / count + rng.random() * PARTICLE_ANGLE_JITTER
        speed = PARTICLE_MIN_SPEED + rng.random() * PARTICLE_SPEED_RANGE
        pool.acquire(
            x,
            y,
            math.cos(angle) * speed,
            math.sin(angle) * speed,
            PARTICLE_LIFE,
            color,
            PARTICLE_MIN_SIZE + rng.random() * PARTICLE_SIZE_RANGE,
        )
    return count


def decay_particles(pool: ParticlePool) -> int:
    """Move and age every particle, removing the expired ones.

    Returns:
        Number of particles removed
    """
    active = pool.active
    removed = 0
    # Walk backwards: swap-remove pulls the last particle into the freed slot
    for i in range(len(active) - 1, -1, -1):
        p = active[i]
        p.x += p.vx
        p.y += p.vy
        p.vx *= PARTICLE_DRAG
        p.vy *= PARTICLE_DRAG
        p.life -= 1
        if p.life <= 0:
            pool.remove_at(i)
            removed += 1
    return removed


@runs_in_phase(UpdatePhase.PARTICLES)
class ParticleSystem(BaseSystem):
    """Turns match events into bursts and decays particles each tick."""

    def __init__(self, engine: "MatchController", rng: Optional[random.Random] = None) -> None:
        super().__init__(engine, "Particles")
        self._rng = rng if rng is not None else random.Random()
        self._spawned_since_update = 0

        bus = engine.event_bus
        bus.subscribe(BallThrownEvent, self._on_ball_thrown)
        bus.subscribe(BallBouncedEvent, self._on_ball_bounced)
        bus.subscribe(BallsCollidedEvent, self._on_balls_collided)
        bus.subscribe(PlayerHitEvent, self._on_player_hit)
        bus.subscribe(BallPickedUpEvent, self._on_ball_picked_up)
        bus.subscribe(PlayerRespawnedEvent, self._on_player_respawned)

    def reseed(self, seed: Optional[int]) -> None:
        self._rng.seed(seed)

    @property
    def pool(self) -> ParticlePool:
        return self._engine.particles

    def _burst(self, x: float, y: float, color: str, count: int) -> None:
        self._spawned_since_update += spawn_burst(self.pool, self._rng, x, y, color, count)

    def _on_ball_thrown(self, event: BallThrownEvent) -> None:
        self._burst(event.x, event.y, BOUNCE_COLOR, THROW_BURST)

    def _on_ball_bounced(self, event: BallBouncedEvent) -> None:
        self._burst(event.x, event.y, BOUNCE_COLOR, BOUNCE_BURST)

    def _on_balls_collided(self, event: BallsCollidedEvent) -> None:
        self._burst(event.x, event.y, IMPACT_COLOR, COLLISION_BURST)

    def _on_player_hit(self, event: PlayerHitEvent) -> None:
        self._burst(event.victim_x, event.victim_y, event.victim_team.color, HIT_VICTIM_BURST)
        self._burst(event.ball_x, event.ball_y, IMPACT_COLOR, HIT_IMPACT_BURST)

    def _on_ball_picked_up(self, event: BallPickedUpEvent) -> None:
        self._burst(event.x, event.y, event.team.color, PICKUP_BURST)

    def _on_player_respawned(self, event: PlayerRespawnedEvent) -> None:
        self._burst(event.x, event.y, event.team.color, RESPAWN_BURST)

    def _do_update(self, tick: int) -> SystemResult:
        spawned = self._spawned_since_update
        self._spawned_since_update = 0
        removed = decay_particles(self.pool)
        return SystemResult(
            entities_affected=len(self.pool),
            entities_spawned=spawned,
            entities_removed=removed,
        )
