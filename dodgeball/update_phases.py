"""Update phase definitions for explicit execution ordering.

One simulation tick runs these phases in order. Each phase has a single
owner, so no entity is mutated from two phases at once:

    FRAME_START    advance tick counter and logical clock
    LIFECYCLE      respawn eliminated players whose timer elapsed
    INTENTS        sample human input, execute pending throws
    PLAYER_MOTION  integrate player steering and movement
    BALL_PHYSICS   owner-follow, free flight, wall and ball-ball collisions
    COMBAT         hit tests, eliminations, pickups
    AI_DECISION    bots choose next tick's intents from post-update state
    PARTICLES      decay cosmetic particles
    FRAME_END      recompute score, evaluate win condition, publish snapshot

Usage:
------
    @runs_in_phase(UpdatePhase.COMBAT)
    class CombatSystem(BaseSystem):
        ...

    get_system_phase(combat_system)  # UpdatePhase.COMBAT
"""

from enum import Enum, auto
from typing import TYPE_CHECKING, Callable, Dict, Optional

# Explicit public API
__all__ = [
    "UpdatePhase",
    "PHASE_DESCRIPTIONS",
    "runs_in_phase",
    "get_system_phase",
]

if TYPE_CHECKING:
    from dodgeball.systems.base import BaseSystem


class UpdatePhase(Enum):
    """Phases of a simulation tick, in execution order."""

    FRAME_START = auto()
    LIFECYCLE = auto()
    INTENTS = auto()
    PLAYER_MOTION = auto()
    BALL_PHYSICS = auto()
    COMBAT = auto()
    AI_DECISION = auto()
    PARTICLES = auto()
    FRAME_END = auto()


# Human-readable descriptions for debugging
PHASE_DESCRIPTIONS: Dict[UpdatePhase, str] = {
    UpdatePhase.FRAME_START: "Advancing tick counter and match clock",
    UpdatePhase.LIFECYCLE: "Respawning eliminated players",
    UpdatePhase.INTENTS: "Sampling input and executing throws",
    UpdatePhase.PLAYER_MOTION: "Moving players",
    UpdatePhase.BALL_PHYSICS: "Moving balls and resolving ball collisions",
    UpdatePhase.COMBAT: "Resolving hits and pickups",
    UpdatePhase.AI_DECISION: "Bots choosing next intents",
    UpdatePhase.PARTICLES: "Decaying particles",
    UpdatePhase.FRAME_END: "Scoring and publishing snapshot",
}


def runs_in_phase(phase: UpdatePhase) -> Callable:
    """Decorator to declare which phase a system runs in.

    Example:
        @runs_in_phase(UpdatePhase.BALL_PHYSICS)
        class BallPhysicsSystem(BaseSystem):
            def _do_update(self, tick: int) -> None:
                ...
    """

    def decorator(cls):
        cls._phase = phase
        return cls

    return decorator


def get_system_phase(system: "BaseSystem") -> Optional[UpdatePhase]:
    """Get the phase a system is declared to run in."""
    return getattr(system, "_phase", None)
