"""Tests for the EventBus notification dispatch."""

from angler.events import EventBus
from angler.events.domain_events import (
    FishCaughtEvent,
    FishLostEvent,
    PhaseChangedEvent,
)


class TestEventBus:
    """Test suite for EventBus functionality."""

    def test_emit_reaches_subscriber(self) -> None:
        """Verify events are delivered to subscribed handlers."""
        bus = EventBus()
        received_events: list = []

        bus.subscribe(PhaseChangedEvent, received_events.append)

        event = PhaseChangedEvent(previous="Idle", current="Casting")
        bus.emit(event)

        assert len(received_events) == 1
        assert received_events[0] is event

    def test_no_subscribers_no_crash(self) -> None:
        bus = EventBus()
        bus.emit(FishLostEvent(fish_id="bluegill", zone_id="lake", reason="MissedHook"))
        assert bus.subscriber_count(FishLostEvent) == 0

    def test_handlers_called_in_registration_order(self) -> None:
        bus = EventBus()
        order: list = []

        bus.subscribe(PhaseChangedEvent, lambda e: order.append("first"))
        bus.subscribe(PhaseChangedEvent, lambda e: order.append("second"))
        bus.emit(PhaseChangedEvent(previous=None, current="Idle"))

        assert order == ["first", "second"]

    def test_dispatch_is_by_exact_type(self) -> None:
        bus = EventBus()
        caught: list = []
        bus.subscribe(FishCaughtEvent, caught.append)

        bus.emit(FishLostEvent(fish_id="bass", zone_id="lake", reason="LineSnapped"))

        assert caught == []

    def test_catch_all_runs_after_typed_handlers(self) -> None:
        bus = EventBus()
        order: list = []
        bus.subscribe_all(lambda e: order.append(("all", type(e).__name__)))
        bus.subscribe(PhaseChangedEvent, lambda e: order.append(("typed", e.current)))

        bus.emit(PhaseChangedEvent(previous="Idle", current="Casting"))

        assert order == [("typed", "Casting"), ("all", "PhaseChangedEvent")]

    def test_unsubscribe(self) -> None:
        bus = EventBus()
        received: list = []
        bus.subscribe(PhaseChangedEvent, received.append)

        assert bus.unsubscribe(PhaseChangedEvent, received.append) is True
        assert bus.unsubscribe(PhaseChangedEvent, received.append) is False

        bus.emit(PhaseChangedEvent(previous="Idle", current="Casting"))
        assert received == []
        assert not bus.has_subscribers(PhaseChangedEvent)

    def test_handler_may_unsubscribe_during_dispatch(self) -> None:
        bus = EventBus()
        calls: list = []

        def once(event: PhaseChangedEvent) -> None:
            calls.append(event.current)
            bus.unsubscribe(PhaseChangedEvent, once)

        bus.subscribe(PhaseChangedEvent, once)
        bus.emit(PhaseChangedEvent(previous=None, current="Idle"))
        bus.emit(PhaseChangedEvent(previous="Idle", current="Casting"))

        assert calls == ["Idle"]

    def test_clear_subscribers(self) -> None:
        bus = EventBus()
        received: list = []
        bus.subscribe(FishCaughtEvent, received.append)
        bus.subscribe_all(received.append)

        bus.clear_subscribers()
        bus.emit(FishCaughtEvent(fish_id="koi", display_name="Koi", zone_id="lake", is_rare=True))

        assert received == []
        assert bus.subscriber_count(FishCaughtEvent) == 0
