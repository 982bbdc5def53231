"""Domain event definitions for match happenings.

These events represent significant occurrences in a match. They are
data-only (frozen dataclasses) and carry all context needed by handlers:
the particle system turns them into bursts, the match controller collects
them into the per-tick snapshot.

Design principles:
- Immutable: Events are facts that happened, don't mutate them
- Complete: Include all data handlers need (no callbacks to domain)
- Typed: Use strong types for type-safe dispatch and IDE support
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

from dodgeball.entities.team import Team


@dataclass(frozen=True)
class BallThrownEvent:
    """A player released a ball toward a target.

    Attributes:
        ball_id: Ball that was thrown
        thrower_id: Player who threw it
        x: Release point x (slightly ahead of the thrower)
        y: Release point y
        tick: Simulation tick when this occurred
    """

    ball_id: str
    thrower_id: str
    x: float
    y: float
    tick: int


@dataclass(frozen=True)
class BallBouncedEvent:
    """A free ball struck an arena wall."""

    ball_id: str
    x: float
    y: float
    tick: int


@dataclass(frozen=True)
class BallsCollidedEvent:
    """Two free balls collided hard enough to be worth showing.

    Attributes:
        ball_ids: The two balls, in collision-pass order
        x: Midpoint x between the centres
        y: Midpoint y between the centres
        impact_speed: Closing speed along the contact normal
        tick: Simulation tick when this occurred
    """

    ball_ids: tuple[str, str]
    x: float
    y: float
    impact_speed: float
    tick: int


@dataclass(frozen=True)
class PlayerHitEvent:
    """A lethal ball eliminated a player.

    Attributes:
        victim_id: Eliminated player
        victim_team: Team of the eliminated player
        thrower_id: Player credited with the kill
        ball_id: Ball that made the hit
        victim_x, victim_y: Victim position at the moment of the hit
        ball_x, ball_y: Ball position at the moment of the hit
        respawn_at_ms: Scheduled respawn time (infinite mode), else None
        tick: Simulation tick when this occurred
    """

    victim_id: str
    victim_team: Team
    thrower_id: str
    ball_id: str
    victim_x: float
    victim_y: float
    ball_x: float
    ball_y: float
    respawn_at_ms: Optional[float]
    tick: int


@dataclass(frozen=True)
class BallPickedUpEvent:
    """A player took possession of a neutral ball."""

    ball_id: str
    player_id: str
    team: Team
    x: float
    y: float
    tick: int


@dataclass(frozen=True)
class PlayerRespawnedEvent:
    """An eliminated player came back (infinite mode)."""

    player_id: str
    team: Team
    x: float
    y: float
    tick: int


MatchEvent = Union[
    BallThrownEvent,
    BallBouncedEvent,
    BallsCollidedEvent,
    PlayerHitEvent,
    BallPickedUpEvent,
    PlayerRespawnedEvent,
]

ALL_EVENT_TYPES = (
    BallThrownEvent,
    BallBouncedEvent,
    BallsCollidedEvent,
    PlayerHitEvent,
    BallPickedUpEvent,
    PlayerRespawnedEvent,
)
