"""Player entity.

A player is created once per match and never removed; elimination is the
``is_alive`` flag. Timer fields use one of two clocks, noted per field:
logical milliseconds from the match clock, or tick counts.
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from enum import Enum
from typing import Deque, Optional

from dodgeball.config.physics import PLAYER_RADIUS, PLAYER_TRAIL_LENGTH
from dodgeball.entities.team import Team
from dodgeball.math_utils import Vector2


class AIState(Enum):
    """Bot behaviour states, listed in decision priority order."""

    EVADE = "evade"
    CHASE = "chase"
    ATTACK = "attack"
    IDLE = "idle"


@dataclass
class Steering:
    """A movement intent consumed by PlayerMotionSystem.

    Exactly one of ``target`` or ``direction`` is set.

    Attributes:
        target: Point to accelerate toward (human "follow the cursor")
        direction: Acceleration direction, applied as given (AI impulses,
            human target-velocity input after normalisation)
        gain: Multiplier on the base acceleration
        persistent: Human input persists between ticks; AI impulses are
            consumed after one application
    """

    target: Optional[Vector2] = None
    direction: Optional[Vector2] = None
    gain: float = 1.0
    persistent: bool = False

    @classmethod
    def toward(cls, target: Vector2, gain: float = 1.0, persistent: bool = False) -> "Steering":
        return cls(target=target.copy(), gain=gain, persistent=persistent)

    @classmethod
    def impulse(cls, direction: Vector2, gain: float = 1.0) -> "Steering":
        return cls(direction=direction.copy(), gain=gain)


def make_player_id(team: Team, index: int) -> str:
    """Build the stable player id, e.g. ``purple-2``."""
    return f"{team.value}-{index}"


@dataclass
class Player:
    """A dodgeball player, human- or bot-controlled.

    Attributes:
        player_id: Unique id derived from team and roster index
        team: Side the player belongs to
        index: Roster index within the team
        position: Centre position (pixels)
        velocity: Velocity (pixels per tick)
        radius: Collision radius, fixed for the match
        is_alive: False once eliminated (until respawn in infinite mode)
        is_human: Exactly one player per match is human-controlled
        has_ball: Whether a ball is currently attached to this player
        ai_state: Last state chosen by the decision engine
        reaction_timer: Ticks until the bot may decide again
        throw_delay: Ticks until a ball-holding bot throws
        respawn_at_ms: Logical ms of the scheduled respawn; only meaningful
            while dead in infinite mode
        invulnerable_until_ms: Logical ms until which hits are ignored
        hit_time_ms: Logical ms of the last elimination (hit flash)
        kills: Current kill streak, reset to 0 on death
        steering: Movement intent for the next motion phase
        pending_throw: Throw target for the next intents phase
        scale: Cosmetic pulse scale, eases back to 1.0
        rotation: Cosmetic spin, grows with speed
        throw_animation: Ticks remaining in the throw animation
        death_animation: Ticks elapsed in the death animation
        trail: Recent positions for rendering
    """

    player_id: str
    team: Team
    index: int
    position: Vector2
    velocity: Vector2 = field(default_factory=Vector2)
    radius: float = PLAYER_RADIUS
    is_alive: bool = True
    is_human: bool = False
    has_ball: bool = False
    nickname: Optional[str] = None
    avatar: Optional[str] = None

    ai_state: AIState = AIState.IDLE
    reaction_timer: int = 0
    throw_delay: int = 0

    respawn_at_ms: Optional[float] = None
    invulnerable_until_ms: Optional[float] = None
    hit_time_ms: Optional[float] = None

    kills: int = 0

    steering: Optional[Steering] = None
    pending_throw: Optional[Vector2] = None

    scale: float = 1.0
    rotation: float = 0.0
    throw_animation: Optional[int] = None
    death_animation: Optional[int] = None
    trail: Deque[Vector2] = field(default_factory=lambda: deque(maxlen=PLAYER_TRAIL_LENGTH))

    @property
    def is_bot(self) -> bool:
        return not self.is_human

    def is_invulnerable(self, now_ms: float) -> bool:
        return self.invulnerable_until_ms is not None and now_ms < self.invulnerable_until_ms

    def clear_intents(self) -> None:
        self.steering = None
        self.pending_throw = None

    def __repr__(self) -> str:
        state = "alive" if self.is_alive else "dead"
        return f"Player({self.player_id!r}, {state}, has_ball={self.has_ball})"
