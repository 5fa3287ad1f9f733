"""Synchronous event bus for encounter notifications.

The EventBus is a lightweight, synchronous pub/sub mechanism that keeps the
encounter core independent of whoever listens (UI, audio, journals, the web
layer). Each controller owns its own bus; there is no process-wide instance.

Design goals:
- Zero overhead when no subscribers (single dict lookup)
- Synchronous, so handlers run inside the tick that produced the event
- Type-safe dispatch via event type
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Callable
from typing import TypeVar

T = TypeVar("T")


class EventBus:
    """Synchronous event bus for domain events.

    Events are dispatched immediately to the handlers registered for their
    exact type, then to catch-all handlers. Handler exceptions propagate to
    the emitter.

    Example:
        bus = EventBus()
        bus.subscribe(PhaseChangedEvent, on_phase_changed)
        bus.emit(PhaseChangedEvent(previous="Idle", current="Casting"))
    """

    def __init__(self) -> None:
        """Initialize an empty event bus."""
        self._handlers: dict[type, list[Callable]] = defaultdict(list)
        self._catch_all: list[Callable[[object], None]] = []

    def emit(self, event: object) -> None:
        """Emit an event to all registered handlers.

        Handlers are called synchronously in registration order.

        Args:
            event: The domain event to dispatch
        """
        handlers = self._handlers.get(type(event))
        if handlers:
            # Copy so a handler may unsubscribe itself mid-dispatch
            for handler in list(handlers):
                handler(event)
        for handler in list(self._catch_all):
            handler(event)

    def subscribe(self, event_type: type[T], handler: Callable[[T], None]) -> None:
        """Register a handler for a specific event type.

        Args:
            event_type: The event class to subscribe to
            handler: Callable that receives the event instance
        """
        self._handlers[event_type].append(handler)

    def subscribe_all(self, handler: Callable[[object], None]) -> None:
        """Register a handler that receives every event, after typed handlers."""
        self._catch_all.append(handler)

    def unsubscribe(self, event_type: type[T], handler: Callable[[T], None]) -> bool:
        """Remove a handler for a specific event type.

        Returns:
            True if handler was found and removed, False otherwise
        """
        handlers = self._handlers.get(event_type)
        if handlers and handler in handlers:
            handlers.remove(handler)
            return True
        return False

    def clear_subscribers(self) -> None:
        """Remove all registered handlers, typed and catch-all."""
        self._handlers.clear()
        self._catch_all.clear()

    def has_subscribers(self, event_type: type) -> bool:
        """Check if any typed handlers are registered for an event type."""
        return bool(self._handlers.get(event_type))

    def subscriber_count(self, event_type: type) -> int:
        """Get the number of typed handlers registered for an event type."""
        return len(self._handlers.get(event_type, []))
