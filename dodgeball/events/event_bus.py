"""Synchronous pub/sub for match events.

Systems emit facts (a throw, a hit, a bounce) and whoever cares subscribes:
the particle system, the controller's per-tick event log and the front
end's hit feed. Dispatch happens inline during ``emit`` so a tick stays
deterministic; handler errors propagate to the emitting system.
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Callable
from typing import TypeVar

T = TypeVar("T")


class EventBus:
    """Routes each event to the handlers registered for its exact type.

    Example:
        bus = EventBus()
        bus.subscribe(PlayerHitEvent, feed.on_hit)
        bus.emit(PlayerHitEvent(...))
    """

    def __init__(self) -> None:
        self._handlers: dict[type, list[Callable]] = defaultdict(list)

    def emit(self, event: object) -> None:
        """Call every handler for ``type(event)`` in subscription order."""
        for handler in self._handlers.get(type(event), ()):
            handler(event)

    def subscribe(self, event_type: type[T], handler: Callable[[T], None]) -> None:
        self._handlers[event_type].append(handler)

    def unsubscribe(self, event_type: type[T], handler: Callable[[T], None]) -> bool:
        """Detach ``handler`` from ``event_type``.

        Returns:
            True if the handler was registered
        """
        handlers = self._handlers.get(event_type)
        if not handlers or handler not in handlers:
            return False
        handlers.remove(handler)
        return True
