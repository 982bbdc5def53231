"""Ball entity.

A ball is either attached to an owner or free. Free balls fly under simple
physics (integrate, decay, bounce); a free ball is "hot" (lethal) only while
``just_thrown`` is set.

State rules:
    owner_id set    -> velocity is zero and position tracks the owner
    just_thrown     -> owner_id is None
    thrown_by set   -> only while just_thrown
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from typing import Deque, Optional

from dodgeball.config.physics import BALL_RADIUS, BALL_TRAIL_LENGTH
from dodgeball.math_utils import Vector2


@dataclass
class TrailPoint:
    """A fading sample of a ball's recent path, for rendering only."""

    x: float
    y: float
    alpha: float = 1.0


@dataclass
class Ball:
    """A dodgeball.

    Attributes:
        ball_id: Unique id, derived from the player it was issued to
        position: Centre position (pixels)
        velocity: Velocity (pixels per tick); zero while owned
        radius: Collision radius, smaller than a player's
        owner_id: Player currently holding the ball, if any
        just_thrown: True while the ball is in its lethal flight window
        thrown_by: Thrower id, valid only while just_thrown
        trail: Bounded ring of recent positions
    """

    ball_id: str
    position: Vector2
    velocity: Vector2 = field(default_factory=Vector2)
    radius: float = BALL_RADIUS
    owner_id: Optional[str] = None
    just_thrown: bool = False
    thrown_by: Optional[str] = None
    trail: Deque[TrailPoint] = field(default_factory=lambda: deque(maxlen=BALL_TRAIL_LENGTH))

    @property
    def is_free(self) -> bool:
        return self.owner_id is None

    @property
    def is_lethal(self) -> bool:
        return self.owner_id is None and self.just_thrown

    def neutralize(self) -> None:
        """End the lethal flight window."""
        self.just_thrown = False
        self.thrown_by = None

    def attach_to(self, owner_id: str, owner_pos: Vector2) -> None:
        """Attach to a holder: snap position and stop."""
        self.owner_id = owner_id
        self.neutralize()
        self.position = owner_pos.copy()
        self.velocity = Vector2(0.0, 0.0)

    def release(self) -> None:
        """Detach from the current owner without imparting velocity."""
        self.owner_id = None
