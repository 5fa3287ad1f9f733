"""Events module for domain event dispatch.

This module provides the EventBus for decoupling encounter logic from
presentation and bookkeeping, plus typed domain event definitions.
"""

from angler.events.domain_events import (
    FishCaughtEvent,
    FishLostEvent,
    FishSelectedEvent,
    PhaseChangedEvent,
)
from angler.events.event_bus import EventBus

__all__ = [
    "EventBus",
    "FishCaughtEvent",
    "FishLostEvent",
    "FishSelectedEvent",
    "PhaseChangedEvent",
]
