"""Match controller - the tick orchestrator.

This module owns the authoritative match state and runs one simulation
tick at a time. It coordinates systems but delegates the actual work.

Design Decisions:
-----------------
1. The controller is a COORDINATOR, not a DOER. Movement, ball physics,
   combat, bot decisions and particles live in their systems.

2. The controller is the sole owner of the players, balls and particle
   pool. Systems read and mutate them only while the controller is
   running their phase.

3. step() runs the phases in the order declared by UpdatePhase, each
   through its own _phase_xxx() method, and publishes a MatchSnapshot at
   the end. Nothing outside the controller observes a half-finished tick.

4. Duration timers use the logical MatchClock (milliseconds); cooldowns
   and animations count ticks.
"""

import logging
import random
from typing import Any, Dict, List, Optional

from dodgeball.actions import execute_throw
from dodgeball.ai.system import AIDecisionSystem
from dodgeball.config.ai import AI_THROW_SCALE
from dodgeball.config.display import SEPARATOR_WIDTH
from dodgeball.config.match_config import MatchConfig
from dodgeball.entities.arena import Arena
from dodgeball.entities.ball import Ball
from dodgeball.entities.particle import ParticlePool
from dodgeball.entities.player import Player
from dodgeball.entities.team import Team
from dodgeball.events import ALL_EVENT_TYPES, EventBus, MatchEvent
from dodgeball.exceptions import SimulationError
from dodgeball.input import HumanInput, resolve_throw_target
from dodgeball.math_utils import Vector2
from dodgeball.simulation.roster import build_roster
from dodgeball.simulation.snapshot import (
    MatchOutcome,
    MatchSnapshot,
    ScoreSnapshot,
    build_snapshot,
)
from dodgeball.simulation.system_registry import SystemRegistry
from dodgeball.systems.ball_physics import BallPhysicsSystem
from dodgeball.systems.base import BaseSystem, SystemResult
from dodgeball.systems.combat import CombatSystem, RespawnSystem
from dodgeball.systems.particles import ParticleSystem
from dodgeball.systems.player_motion import PlayerMotionSystem, find_aura_holder
from dodgeball.time_system import FixedTimestep, MatchClock
from dodgeball.update_phases import PHASE_DESCRIPTIONS, UpdatePhase

logger = logging.getLogger(__name__)


class MatchController:
    """Runs a dodgeball match tick by tick.

    Architecture:
        MatchController (coordinator)
        ├── MatchClock / FixedTimestep (time)
        ├── EventBus (domain events -> particles, snapshot)
        ├── HumanInput (latest-value input)
        └── Systems, one per phase
            ├── RespawnSystem        LIFECYCLE
            ├── PlayerMotionSystem   PLAYER_MOTION
            ├── BallPhysicsSystem    BALL_PHYSICS
            ├── CombatSystem         COMBAT
            ├── AIDecisionSystem     AI_DECISION
            └── ParticleSystem       PARTICLES

    Example:
        controller = MatchController()
        controller.reset(MatchConfig(team_size=3, seed=7))
        while not controller.is_over:
            snapshot = controller.step()
    """

    def __init__(self, config: Optional[MatchConfig] = None) -> None:
        """Create a controller. Call reset() before stepping.

        Args:
            config: Default configuration used by reset() without arguments
        """
        self.config = config if config is not None else MatchConfig()
        self.arena = Arena(self.config.arena_width, self.config.arena_height)
        self.clock = MatchClock(self.config.tick_ms)
        self.timestep = FixedTimestep(self.config.tick_ms)
        self.event_bus = EventBus()
        self.human_input = HumanInput()
        self.rng = random.Random()

        self.players: List[Player] = []
        self.balls: List[Ball] = []
        self.particles = ParticlePool()
        self._players_by_id: Dict[str, Player] = {}
        self._human: Optional[Player] = None

        self._initialized = False
        self._over = False
        self._outcome: Optional[MatchOutcome] = None
        self._start_logged = False
        self._aura_holder_id: Optional[str] = None
        self._snapshot: Optional[MatchSnapshot] = None
        self._tick_events: List[MatchEvent] = []
        self._last_results: Dict[str, SystemResult] = {}
        self._current_phase: Optional[UpdatePhase] = None

        for event_type in ALL_EVENT_TYPES:
            self.event_bus.subscribe(event_type, self._record_event)

        self.respawn_system = RespawnSystem(self)
        self.motion_system = PlayerMotionSystem(self)
        self.ball_physics_system = BallPhysicsSystem(self)
        self.combat_system = CombatSystem(self)
        self.ai_system = AIDecisionSystem(self, rng=self.rng)
        self.particle_system = ParticleSystem(self)

        self._system_registry = SystemRegistry()
        for system in (
            self.respawn_system,
            self.motion_system,
            self.ball_physics_system,
            self.combat_system,
            self.ai_system,
            self.particle_system,
        ):
            self._system_registry.register(system)

    # =========================================================================
    # Match lifecycle
    # =========================================================================

    def reset(self, config: Optional[MatchConfig] = None) -> MatchSnapshot:
        """Start a new match.

        The configuration is validated before any state is touched, so a
        rejected config leaves the previous match intact.

        Args:
            config: Match configuration (defaults to the current one)

        Returns:
            The initial snapshot (tick 0)

        Raises:
            ConfigurationError: If the configuration is invalid
        """
        config = config if config is not None else self.config
        config.validate()

        self.config = config
        self.arena = Arena(config.arena_width, config.arena_height)
        self.clock.reset(config.tick_ms)
        self.timestep = FixedTimestep(config.tick_ms)
        self.human_input.reset()

        self.rng = random.Random(config.seed)
        self.ai_system.reseed(self.rng)
        self.particle_system.reseed(config.seed)

        roster = build_roster(config, self.arena, self.rng)
        self.players = roster.players
        self.balls = roster.balls
        self._players_by_id = {p.player_id: p for p in self.players}
        self._human = next(p for p in self.players if p.is_human)
        self.particles.clear()

        self._over = False
        self._outcome = None
        self._aura_holder_id = None
        self._tick_events = []
        self._start_logged = False
        self._last_results = {}
        self._initialized = True

        logger.info(
            "Match reset: %dv%d, mode=%s, human=%s (%s), seed=%s",
            config.team_size,
            config.team_size,
            config.mode.value,
            self._human.player_id,
            config.human_nickname,
            config.seed,
        )

        self._snapshot = build_snapshot(self)
        return self._snapshot

    def initialize(self) -> MatchSnapshot:
        """Start a match with the current configuration."""
        return self.reset()

    # =========================================================================
    # Queries
    # =========================================================================

    @property
    def initialized(self) -> bool:
        return self._initialized

    @property
    def human(self) -> Optional[Player]:
        return self._human

    @property
    def human_team(self) -> Optional[Team]:
        return self._human.team if self._human is not None else None

    @property
    def tick(self) -> int:
        return self.clock.tick

    @property
    def match_started(self) -> bool:
        """False during the start countdown (no throws allowed)."""
        return self.clock.now_ms >= self.config.start_delay_ms

    @property
    def score(self) -> ScoreSnapshot:
        return ScoreSnapshot.from_players(self.players)

    @property
    def is_over(self) -> bool:
        return self._over

    @property
    def outcome(self) -> Optional[MatchOutcome]:
        return self._outcome

    @property
    def aura_holder_id(self) -> Optional[str]:
        return self._aura_holder_id

    @property
    def snapshot(self) -> Optional[MatchSnapshot]:
        """Latest published end-of-tick snapshot (None before reset)."""
        return self._snapshot

    def get_player(self, player_id: Optional[str]) -> Optional[Player]:
        if player_id is None:
            return None
        return self._players_by_id.get(player_id)

    def get_system(self, name: str) -> Optional[BaseSystem]:
        return self._system_registry.get(name)

    def set_system_enabled(self, name: str, enabled: bool) -> bool:
        return self._system_registry.set_enabled(name, enabled)

    def get_systems_debug_info(self) -> Dict[str, Any]:
        return self._system_registry.get_debug_info()

    def get_current_phase(self) -> Optional[UpdatePhase]:
        """Get the current update phase (None if not inside step())."""
        return self._current_phase

    def get_phase_description(self, phase: Optional[UpdatePhase] = None) -> str:
        if phase is None:
            phase = self._current_phase
        if phase is None:
            return "Not in update loop"
        return PHASE_DESCRIPTIONS.get(phase, phase.name)

    def get_last_results(self) -> Dict[str, SystemResult]:
        """Per-system results of the most recent tick."""
        return dict(self._last_results)

    # =========================================================================
    # Human input (latest value wins, sampled at tick start)
    # =========================================================================

    def set_human_steering(
        self,
        target: Optional[Vector2] = None,
        direction: Optional[Vector2] = None,
    ) -> None:
        """Steer the human toward a point, or along a target-velocity vector.

        Passing neither clears the steering input.
        """
        if target is not None and direction is not None:
            raise SimulationError("Pass either a steering target or a direction, not both")
        if target is not None:
            self.human_input.steer_toward(target)
        elif direction is not None:
            self.human_input.steer_direction(direction)
        else:
            self.human_input.clear_steering()

    def clear_human_steering(self) -> None:
        self.human_input.clear_steering()

    def request_human_throw(self, target: Vector2) -> None:
        """Ask the human to throw at ``target`` on the next tick.

        Ignored at tick time if the human has no ball or the countdown is
        still running.
        """
        self.human_input.request_throw(target)

    # =========================================================================
    # Core update loop
    # =========================================================================

    def step(self) -> MatchSnapshot:
        """Run one simulation tick and return its snapshot.

        Phase Order:
            1. FRAME_START: Advance tick counter and clock
            2. LIFECYCLE: Respawn eliminated players (infinite mode)
            3. INTENTS: Sample human input, execute pending throws
            4. PLAYER_MOTION: Move players
            5. BALL_PHYSICS: Move balls, wall and ball-ball collisions
            6. COMBAT: Hits and pickups
            7. AI_DECISION: Bots choose next tick's intents
            8. PARTICLES: Decay particles
            9. FRAME_END: Score, win condition, snapshot

        Raises:
            SimulationError: If called before reset()
        """
        if not self._initialized:
            raise SimulationError("step() called before reset()")
        if self._over:
            return self._snapshot

        tick = self._phase_frame_start()
        self._phase_lifecycle(tick)
        self._phase_intents(tick)
        self._phase_player_motion(tick)
        self._phase_ball_physics(tick)
        self._phase_combat(tick)
        self._phase_ai_decision(tick)
        self._phase_particles(tick)
        self._phase_frame_end(tick)
        return self._snapshot

    def advance(self, frame_ms: float) -> int:
        """Feed a frame's elapsed time to the fixed-timestep accumulator.

        Args:
            frame_ms: Wall-clock milliseconds since the previous frame

        Returns:
            Number of ticks actually run
        """
        if not self._initialized:
            raise SimulationError("advance() called before reset()")
        steps = self.timestep.consume(frame_ms)
        ran = 0
        for _ in range(steps):
            if self._over:
                break
            self.step()
            ran += 1
        return ran

    # -------------------------------------------------------------------------
    # Phase Implementations
    # -------------------------------------------------------------------------

    def _run_system(self, system: BaseSystem, tick: int) -> None:
        self._last_results[system.name] = system.update(tick)

    def _phase_frame_start(self) -> int:
        """FRAME_START: advance the tick counter and logical clock."""
        self._current_phase = UpdatePhase.FRAME_START
        self._tick_events = []
        tick = self.clock.advance()
        if not self._start_logged and self.match_started:
            self._start_logged = True
            logger.info("Match started at tick %d", tick)
        return tick

    def _phase_lifecycle(self, tick: int) -> None:
        """LIFECYCLE: respawn check."""
        self._current_phase = UpdatePhase.LIFECYCLE
        self._run_system(self.respawn_system, tick)

    def _phase_intents(self, tick: int) -> None:
        """INTENTS: sample human input, then execute every pending throw."""
        self._current_phase = UpdatePhase.INTENTS
        human = self._human
        throw_target = self.human_input.take_throw()

        if human is not None and human.is_alive:
            human.steering = self.human_input.steering
            if throw_target is not None and self.match_started and human.has_ball:
                human.pending_throw = resolve_throw_target(throw_target, self.players, human)

        throws = 0
        for player in self.players:
            target = player.pending_throw
            if target is None:
                continue
            player.pending_throw = None
            if not player.is_alive or not self.match_started:
                continue
            ball = execute_throw(
                player,
                target,
                self.balls,
                self.config.physics.throw_force,
                self.event_bus,
                tick,
            )
            if ball is not None:
                throws += 1
                if player.is_bot:
                    player.scale = AI_THROW_SCALE

        self._last_results["Intents"] = SystemResult(
            entities_affected=throws,
            events_emitted=throws,
            details={"throws": throws},
        )

    def _phase_player_motion(self, tick: int) -> None:
        """PLAYER_MOTION: integrate steering and movement."""
        self._current_phase = UpdatePhase.PLAYER_MOTION
        self._run_system(self.motion_system, tick)

    def _phase_ball_physics(self, tick: int) -> None:
        """BALL_PHYSICS: owner-follow, flight, wall and ball-ball collisions."""
        self._current_phase = UpdatePhase.BALL_PHYSICS
        self._run_system(self.ball_physics_system, tick)

    def _phase_combat(self, tick: int) -> None:
        """COMBAT: hits, eliminations and pickups."""
        self._current_phase = UpdatePhase.COMBAT
        self._run_system(self.combat_system, tick)

    def _phase_ai_decision(self, tick: int) -> None:
        """AI_DECISION: bots react to this tick's final positions."""
        self._current_phase = UpdatePhase.AI_DECISION
        self._run_system(self.ai_system, tick)

    def _phase_particles(self, tick: int) -> None:
        """PARTICLES: decay cosmetic particles."""
        self._current_phase = UpdatePhase.PARTICLES
        self._run_system(self.particle_system, tick)

    def _phase_frame_end(self, tick: int) -> None:
        """FRAME_END: score, win condition, snapshot."""
        self._current_phase = UpdatePhase.FRAME_END

        score = self.score
        self._aura_holder_id = find_aura_holder(
            self.players, self.config.physics.aura_min_kills
        )

        human = self._human
        human_alive = human is not None and human.is_alive
        if self.config.infinite:
            over = not human_alive
        else:
            over = score.purple == 0 or score.blue == 0 or not human_alive

        if over:
            self._over = True
            team_alive = score.for_team(human.team) if human is not None else 0
            self._outcome = (
                MatchOutcome.WIN if human_alive and team_alive > 0 else MatchOutcome.LOSE
            )
            logger.info(
                "Match over at tick %d: %s (purple %d, blue %d)",
                tick,
                self._outcome.value.upper(),
                score.purple,
                score.blue,
            )

        self._snapshot = build_snapshot(self, tuple(self._tick_events))
        self._current_phase = None

    def _record_event(self, event: MatchEvent) -> None:
        self._tick_events.append(event)

    # =========================================================================
    # Run Methods
    # =========================================================================

    def get_stats(self) -> Dict[str, Any]:
        """Current match statistics."""
        score = self.score
        leader = max(self.players, key=lambda p: p.kills, default=None)
        return {
            "tick": self.clock.tick,
            "time_ms": self.clock.now_ms,
            "purple_alive": score.purple,
            "blue_alive": score.blue,
            "balls_free": sum(1 for b in self.balls if b.is_free),
            "balls_hot": sum(1 for b in self.balls if b.is_lethal),
            "particles": len(self.particles),
            "top_streak": leader.kills if leader is not None else 0,
            "aura_holder": self._aura_holder_id,
            "is_over": self._over,
            "outcome": self._outcome.value if self._outcome else None,
        }

    def print_stats(self) -> None:
        """Log current match statistics."""
        stats = self.get_stats()
        logger.info(
            "Tick %d (%.1fs): purple %d vs blue %d | free balls %d, hot %d | "
            "particles %d | top streak %d",
            stats["tick"],
            stats["time_ms"] / 1000.0,
            stats["purple_alive"],
            stats["blue_alive"],
            stats["balls_free"],
            stats["balls_hot"],
            stats["particles"],
            stats["top_streak"],
        )

    def run_headless(self, max_ticks: int = 10000, stats_interval: int = 300) -> MatchSnapshot:
        """Run a match without a display.

        The human player receives no input, so it stands still and never
        throws; the match ends when the win condition fires or after
        ``max_ticks`` ticks.

        Returns:
            The final snapshot
        """
        sep = SEPARATOR_WIDTH
        logger.info("=" * sep)
        logger.info("HEADLESS DODGEBALL MATCH")
        logger.info("=" * sep)
        logger.info(
            "Running for up to %d ticks (%.1f seconds of match time)",
            max_ticks,
            max_ticks * self.config.tick_ms / 1000.0,
        )
        logger.info("Stats will be logged every %d ticks", stats_interval)
        logger.info("=" * sep)

        if not self._initialized:
            self.reset()

        for tick in range(max_ticks):
            if self._over:
                break
            self.step()
            if stats_interval > 0 and tick > 0 and tick % stats_interval == 0:
                self.print_stats()

        logger.info("")
        logger.info("=" * sep)
        logger.info("MATCH COMPLETE - Final Statistics")
        logger.info("=" * sep)
        self.print_stats()
        if self._outcome is not None:
            logger.info(
                "Outcome for %s: %s", self.config.human_nickname, self._outcome.value.upper()
            )
        else:
            logger.info("Match still running after %d ticks", self.clock.tick)

        return self._snapshot
