"""Tests for the EventBus domain event dispatch system."""

import dataclasses

import pytest

from dodgeball.entities.team import Team
from dodgeball.events import (
    ALL_EVENT_TYPES,
    BallBouncedEvent,
    BallThrownEvent,
    EventBus,
    PlayerHitEvent,
)


def _hit_event(tick: int = 10) -> PlayerHitEvent:
    return PlayerHitEvent(
        victim_id="blue-0",
        victim_team=Team.BLUE,
        thrower_id="purple-0",
        ball_id="ball-purple-0",
        victim_x=900.0,
        victim_y=360.0,
        ball_x=875.0,
        ball_y=360.0,
        respawn_at_ms=None,
        tick=tick,
    )


class TestEventBus:
    """Test suite for EventBus functionality."""

    def test_emit_reaches_subscriber(self) -> None:
        """Verify events are delivered to subscribed handlers."""
        bus = EventBus()
        received_events: list = []

        bus.subscribe(PlayerHitEvent, received_events.append)

        event = _hit_event()
        bus.emit(event)

        assert len(received_events) == 1
        assert received_events[0] is event
        assert received_events[0].victim_id == "blue-0"

    def test_no_subscribers_no_crash(self) -> None:
        """Verify emitting with no subscribers is a no-op."""
        bus = EventBus()
        bus.emit(BallBouncedEvent("ball-blue-0", 8.0, 100.0, 3))

    def test_handlers_called_in_registration_order(self) -> None:
        """Verify multiple handlers for the same event type all receive it, in order."""
        bus = EventBus()
        results: list = []

        bus.subscribe(PlayerHitEvent, lambda e: results.append(("h1", e.tick)))
        bus.subscribe(PlayerHitEvent, lambda e: results.append(("h2", e.tick)))

        bus.emit(_hit_event(tick=7))

        assert results == [("h1", 7), ("h2", 7)]

    def test_dispatch_is_by_exact_type(self) -> None:
        """Verify handlers only see the type they subscribed to."""
        bus = EventBus()
        thrown: list = []
        bus.subscribe(BallThrownEvent, thrown.append)

        bus.emit(_hit_event())
        assert thrown == []

        bus.emit(BallThrownEvent("ball-purple-0", "purple-0", 320.0, 360.0, 1))
        assert len(thrown) == 1

    def test_unsubscribe(self) -> None:
        """Verify unsubscribe removes a handler and reports whether it was found."""
        bus = EventBus()
        received: list = []
        bus.subscribe(PlayerHitEvent, received.append)

        assert bus.unsubscribe(PlayerHitEvent, received.append) is True
        assert bus.unsubscribe(PlayerHitEvent, received.append) is False

        bus.emit(_hit_event())
        assert received == []


class TestDomainEvents:
    """Domain events are immutable facts."""

    def test_events_are_frozen(self) -> None:
        event = _hit_event()
        with pytest.raises(dataclasses.FrozenInstanceError):
            event.tick = 99  # type: ignore[misc]

    def test_all_event_types_are_distinct(self) -> None:
        assert len(set(ALL_EVENT_TYPES)) == len(ALL_EVENT_TYPES) == 6
