"""Inputs and outputs of the bot decision function.

Perception is an immutable view of what one bot can see at decision time;
Decision is what the bot wants to do about it. Neither holds references to
live entities, so ``decide`` can be tested without an engine.
"""

from dataclasses import dataclass
from typing import Optional, Tuple

from dodgeball.entities.player import AIState, Steering
from dodgeball.entities.team import Team
from dodgeball.math_utils import Vector2


@dataclass(frozen=True)
class EnemyView:
    """Position and velocity of a living opponent."""

    player_id: str
    position: Vector2
    velocity: Vector2


@dataclass(frozen=True)
class Perception:
    """What a bot knows when it decides.

    Attributes:
        position: Bot position
        team: Bot team
        has_ball: Whether the bot holds a ball
        throw_delay: Ticks left before the bot may throw
        match_started: False during the start countdown
        incoming: Positions of lethal balls thrown by opponents, in ball order
        free_balls: Positions of free, non-lethal balls, in ball order
        enemies: Living opponents, in roster order
    """

    position: Vector2
    team: Team
    has_ball: bool
    throw_delay: int
    match_started: bool
    incoming: Tuple[Vector2, ...] = ()
    free_balls: Tuple[Vector2, ...] = ()
    enemies: Tuple[EnemyView, ...] = ()


@dataclass(frozen=True)
class Decision:
    """A bot's chosen action for the next tick.

    Attributes:
        state: New behaviour state
        steering: One-shot steering impulse, if any
        throw_target: Point to throw at during the next intents phase
        throw_delay: New throw delay (ticks)
        reset_reaction: Restart the reaction timer after this decision
    """

    state: AIState
    steering: Optional[Steering] = None
    throw_target: Optional[Vector2] = None
    throw_delay: int = 0
    reset_reaction: bool = False
