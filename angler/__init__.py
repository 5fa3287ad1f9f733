"""Fishing encounter engine.

This package contains the pure encounter logic, with no UI dependencies.
Key modules include:

- fishing: Phase state machine, phase behaviors, shared context, fish selection
- events: Domain events and the synchronous EventBus
- config: Tuning constants and per-phase configuration dataclasses
- util: RNG helpers

Design note: this module exposes a small, explicit public API via ``__all__``.
Use direct imports from subpackages for internal helpers.
"""

from . import events as events
from . import fishing as fishing

__all__ = [
    "events",
    "fishing",
]
