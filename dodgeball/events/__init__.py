"""Domain events and the synchronous bus that dispatches them."""

from dodgeball.events.domain_events import (
    ALL_EVENT_TYPES,
    BallBouncedEvent,
    BallPickedUpEvent,
    BallsCollidedEvent,
    BallThrownEvent,
    MatchEvent,
    PlayerHitEvent,
    PlayerRespawnedEvent,
)
from dodgeball.events.event_bus import EventBus

__all__ = [
    "ALL_EVENT_TYPES",
    "BallBouncedEvent",
    "BallPickedUpEvent",
    "BallThrownEvent",
    "BallsCollidedEvent",
    "EventBus",
    "MatchEvent",
    "PlayerHitEvent",
    "PlayerRespawnedEvent",
]
