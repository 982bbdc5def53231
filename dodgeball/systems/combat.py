"""Combat resolution: hits, eliminations, pickups and respawns.

Architecture Notes:
- CombatSystem runs in UpdatePhase.COMBAT, after ball physics, so hit
  tests see this tick's final ball positions
- RespawnSystem runs in UpdatePhase.LIFECYCLE at the start of the tick
- Every transition is total: a missing thrower neutralises the ball and a
  second hit on an already-eliminated player is a no-op
"""

import logging
from typing import TYPE_CHECKING, Optional

from dodgeball.config.physics import DEATH_ANIMATION_TICKS
from dodgeball.entities.ball import Ball
from dodgeball.entities.player import AIState, Player
from dodgeball.events import BallPickedUpEvent, PlayerHitEvent, PlayerRespawnedEvent
from dodgeball.math_utils import Vector2
from dodgeball.systems.base import BaseSystem, SystemResult
from dodgeball.update_phases import UpdatePhase, runs_in_phase

if TYPE_CHECKING:
    from dodgeball.simulation.engine import MatchController

logger = logging.getLogger(__name__)

PICKUP_SCALE = 1.2
RESPAWN_SCALE = 0.5


def reflect_off_player(ball: Ball, victim: Player, bounce: float) -> None:
    """Bounce a ball off a player using the relative velocity along the normal."""
    normal = (ball.position - victim.position).normalize()
    relative = ball.velocity - victim.velocity
    along_normal = relative.dot(normal)
    ball.velocity = (ball.velocity - normal * (2 * along_normal)) * bounce


def find_hit_target(ball: Ball, thrower: Player, players, now_ms: float) -> Optional[Player]:
    """First living opponent of the thrower the ball is touching, in roster order."""
    for player in players:
        if not player.is_alive or player is thrower or player.team == thrower.team:
            continue
        if player.is_invulnerable(now_ms):
            continue
        if ball.position.distance_to(player.position) < ball.radius + player.radius:
            return player
    return None


def find_pickup_candidate(ball: Ball, players, pickup_radius: float) -> Optional[Player]:
    """Nearest living player without a ball inside the pickup radius.

    Either team may pick up a neutral ball. The first player in roster order
    wins ties.
    """
    nearest = None
    nearest_dist = pickup_radius
    for player in players:
        if not player.is_alive or player.has_ball:
            continue
        dist = ball.position.distance_to(player.position)
        if dist < nearest_dist:
            nearest = player
            nearest_dist = dist
    return nearest


@runs_in_phase(UpdatePhase.COMBAT)
class CombatSystem(BaseSystem):
    """Resolves ball-vs-player contact once per free ball per tick."""

    def __init__(self, engine: "MatchController") -> None:
        super().__init__(engine, "Combat")
        self._total_hits = 0
        self._total_pickups = 0

    @property
    def total_hits(self) -> int:
        return self._total_hits

    def _do_update(self, tick: int) -> SystemResult:
        hits = 0
        pickups = 0
        neutralized = 0

        for ball in self._engine.balls:
            if ball.owner_id is not None:
                continue

            if ball.just_thrown:
                thrower = self._engine.get_player(ball.thrown_by)
                if thrower is not None and thrower.is_alive:
                    if self._resolve_hit(ball, thrower, tick):
                        hits += 1
                    continue
                # Orphaned throw: the ball can no longer score
                ball.neutralize()
                neutralized += 1

            if self._resolve_pickup(ball, tick):
                pickups += 1

        self._total_hits += hits
        self._total_pickups += pickups

        return SystemResult(
            entities_affected=hits + pickups,
            entities_removed=hits,
            events_emitted=hits + pickups,
            details={"hits": hits, "pickups": pickups, "neutralized": neutralized},
        )

    def _resolve_hit(self, ball: Ball, thrower: Player, tick: int) -> bool:
        engine = self._engine
        now = engine.clock.now_ms
        victim = find_hit_target(ball, thrower, engine.players, now)
        if victim is None:
            return False

        params = engine.config.physics
        victim_pos = victim.position.copy()

        reflect_off_player(ball, victim, params.ball_bounce)
        ball.neutralize()

        victim.is_alive = False
        victim.hit_time_ms = now
        victim.death_animation = 0
        victim.respawn_at_ms = now + params.respawn_time_ms if engine.config.infinite else None
        victim.kills = 0
        victim.velocity = Vector2(0.0, 0.0)
        victim.clear_intents()
        if victim.has_ball:
            self._release_held_ball(victim)

        thrower.kills += 1

        logger.debug(
            "Tick %d: %s eliminated %s with %s (streak %d)",
            tick,
            thrower.player_id,
            victim.player_id,
            ball.ball_id,
            thrower.kills,
        )

        engine.event_bus.emit(
            PlayerHitEvent(
                victim_id=victim.player_id,
                victim_team=victim.team,
                thrower_id=thrower.player_id,
                ball_id=ball.ball_id,
                victim_x=victim_pos.x,
                victim_y=victim_pos.y,
                ball_x=ball.position.x,
                ball_y=ball.position.y,
                respawn_at_ms=victim.respawn_at_ms,
                tick=tick,
            )
        )
        return True

    def _release_held_ball(self, player: Player) -> None:
        for held in self._engine.balls:
            if held.owner_id == player.player_id:
                held.release()
        player.has_ball = False

    def _resolve_pickup(self, ball: Ball, tick: int) -> bool:
        engine = self._engine
        radius = engine.config.physics.ball_pickup_radius
        player = find_pickup_candidate(ball, engine.players, radius)
        if player is None:
            return False

        ball.attach_to(player.player_id, player.position)
        player.has_ball = True
        player.scale = PICKUP_SCALE

        engine.event_bus.emit(
            BallPickedUpEvent(
                ball_id=ball.ball_id,
                player_id=player.player_id,
                team=player.team,
                x=ball.position.x,
                y=ball.position.y,
                tick=tick,
            )
        )
        return True

    def get_debug_info(self) -> dict:
        info = super().get_debug_info()
        info["total_hits"] = self._total_hits
        info["total_pickups"] = self._total_pickups
        return info


def respawn_player(engine: "MatchController", player: Player) -> None:
    """Bring an eliminated player back at the team respawn point."""
    now = engine.clock.now_ms
    player.position = engine.arena.respawn_point(player.team)
    player.velocity = Vector2(0.0, 0.0)
    player.is_alive = True
    player.has_ball = False
    player.respawn_at_ms = None
    player.death_animation = None
    player.invulnerable_until_ms = now + engine.config.physics.spawn_invulnerability_ms
    player.scale = RESPAWN_SCALE
    player.ai_state = AIState.IDLE
    player.reaction_timer = 0
    player.trail.clear()
    player.clear_intents()


def process_respawns(engine: "MatchController", tick: int) -> int:
    """Advance death animations and respawn players whose timer elapsed.

    Respawns only happen in infinite mode; a fixed round keeps its dead.

    Returns:
        Number of players respawned
    """
    now = engine.clock.now_ms
    infinite = engine.config.infinite
    respawned = 0

    for player in engine.players:
        if player.is_alive:
            continue

        if player.death_animation is not None and player.death_animation < DEATH_ANIMATION_TICKS:
            player.death_animation += 1

        if not infinite or player.respawn_at_ms is None or now < player.respawn_at_ms:
            continue

        respawn_player(engine, player)
        respawned += 1
        logger.debug("Tick %d: %s respawned", tick, player.player_id)
        engine.event_bus.emit(
            PlayerRespawnedEvent(
                player_id=player.player_id,
                team=player.team,
                x=player.position.x,
                y=player.position.y,
                tick=tick,
            )
        )

    return respawned


@runs_in_phase(UpdatePhase.LIFECYCLE)
class RespawnSystem(BaseSystem):
    """Runs the respawn check at the start of each tick."""

    def __init__(self, engine: "MatchController") -> None:
        super().__init__(engine, "Respawn")

    def _do_update(self, tick: int) -> SystemResult:
        respawned = process_respawns(self._engine, tick)
        return SystemResult(
            entities_spawned=respawned,
            events_emitted=respawned,
            details={"respawned": respawned},
        )
