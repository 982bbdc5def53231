"""Bot decision system.

Runs after combat so bots react to this tick's final positions; the
intents it writes (a steering impulse and/or a throw target) are consumed
on the next tick.

Architecture Notes:
- Extends BaseSystem for uniform system management
- Runs in UpdatePhase.AI_DECISION
- Uses the engine's gameplay RNG so matches are reproducible per seed
"""

import logging
import random
from typing import TYPE_CHECKING, Optional

from dodgeball.ai.decision import decide
from dodgeball.ai.states import Decision, EnemyView, Perception
from dodgeball.entities.player import Player
from dodgeball.systems.base import BaseSystem, SystemResult
from dodgeball.update_phases import UpdatePhase, runs_in_phase

if TYPE_CHECKING:
    from dodgeball.simulation.engine import MatchController

logger = logging.getLogger(__name__)


def build_perception(engine: "MatchController", bot: Player) -> Perception:
    """Snapshot what ``bot`` can see right now."""
    incoming = []
    free_balls = []
    for ball in engine.balls:
        if ball.owner_id is not None:
            continue
        if ball.just_thrown:
            thrower = engine.get_player(ball.thrown_by)
            if thrower is not None and thrower.team != bot.team:
                incoming.append(ball.position.copy())
        else:
            free_balls.append(ball.position.copy())

    enemies = tuple(
        EnemyView(p.player_id, p.position.copy(), p.velocity.copy())
        for p in engine.players
        if p.is_alive and p.team != bot.team
    )

    return Perception(
        position=bot.position.copy(),
        team=bot.team,
        has_ball=bot.has_ball,
        throw_delay=bot.throw_delay,
        match_started=engine.match_started,
        incoming=tuple(incoming),
        free_balls=tuple(free_balls),
        enemies=enemies,
    )


@runs_in_phase(UpdatePhase.AI_DECISION)
class AIDecisionSystem(BaseSystem):
    """Lets every living bot choose its next intent."""

    def __init__(self, engine: "MatchController", rng: Optional[random.Random] = None) -> None:
        super().__init__(engine, "AIDecision")
        self._rng = rng if rng is not None else random.Random()
        self._throws_planned = 0

    def reseed(self, rng: random.Random) -> None:
        self._rng = rng

    def _do_update(self, tick: int) -> SystemResult:
        engine = self._engine
        params = engine.config.ai
        throw_force = engine.config.physics.throw_force
        decided = 0
        throws = 0

        for bot in engine.players:
            if not bot.is_alive or bot.is_human:
                continue

            if bot.reaction_timer > 0:
                bot.reaction_timer -= 1
                continue

            decision = decide(build_perception(engine, bot), self._rng, params, throw_force)
            self._apply(bot, decision, params.reaction_time)
            decided += 1
            if decision.throw_target is not None:
                throws += 1
                logger.debug(
                    "Tick %d: %s aims at (%.0f, %.0f)",
                    tick,
                    bot.player_id,
                    decision.throw_target.x,
                    decision.throw_target.y,
                )

        self._throws_planned += throws
        return SystemResult(entities_affected=decided, details={"throws_planned": throws})

    def get_debug_info(self) -> dict:
        info = super().get_debug_info()
        info["throws_planned"] = self._throws_planned
        return info

    @staticmethod
    def _apply(bot: Player, decision: Decision, reaction_time: int) -> None:
        bot.ai_state = decision.state
        bot.throw_delay = decision.throw_delay
        if decision.steering is not None:
            bot.steering = decision.steering
        if decision.throw_target is not None:
            bot.pending_throw = decision.throw_target
        if decision.reset_reaction:
            bot.reaction_timer = reaction_time
