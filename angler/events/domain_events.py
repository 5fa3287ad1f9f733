"""Domain event definitions for fishing encounters.

These events represent significant occurrences during an encounter.
They are data-only (frozen dataclasses) and carry all context needed
for handlers to process them.

Design principles:
- Immutable: Events are facts that happened, don't mutate them
- Complete: Include all data handlers need (no callbacks to domain)
- Typed: Use strong types for type-safe dispatch and IDE support
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class PhaseChangedEvent:
    """The encounter moved to a new phase.

    Attributes:
        previous: Name of the phase that was left (None only on the first
            initialize of a machine)
        current: Name of the phase that was entered
    """

    previous: str | None
    current: str


@dataclass(frozen=True)
class FishSelectedEvent:
    """A fish species was chosen for a confirmed bite.

    Attributes:
        fish_id: Species id of the selected fish
        zone_id: Zone the encounter is taking place in
        candidate_count: Number of species that were eligible
    """

    fish_id: str
    zone_id: str
    candidate_count: int


@dataclass(frozen=True)
class FishCaughtEvent:
    """A fish was landed.

    Attributes:
        fish_id: Species id (None when no species was selected)
        display_name: Species display name (None when no species was selected)
        zone_id: Zone the fish was caught in
        is_rare: True if the species rarity is below the rare threshold
    """

    fish_id: str | None
    display_name: str | None
    zone_id: str
    is_rare: bool


@dataclass(frozen=True)
class FishLostEvent:
    """A fish got away or the line failed.

    Attributes:
        fish_id: Species id (None when no species was selected)
        zone_id: Zone the encounter took place in
        reason: LostReason name ("MissedHook", "LineSnapped", ...)
    """

    fish_id: str | None
    zone_id: str
    reason: str
