"""Fishing encounter state machine and its collaborators."""

from angler.fishing.autopilot import EncounterSummary, ScriptedAngler
from angler.fishing.context import EncounterContext
from angler.fishing.controller import EncounterController
from angler.fishing.phase import LostReason, Phase
from angler.fishing.selection import select_fish
from angler.fishing.species import (
    FishDescriptor,
    KeyframeCurve,
    default_species_catalog,
    load_species_catalog,
)
from angler.fishing.spots import FishingSpot
from angler.fishing.state_machine import EncounterStateMachine

__all__ = [
    "EncounterContext",
    "EncounterController",
    "EncounterStateMachine",
    "EncounterSummary",
    "FishDescriptor",
    "FishingSpot",
    "KeyframeCurve",
    "LostReason",
    "Phase",
    "ScriptedAngler",
    "default_species_catalog",
    "load_species_catalog",
    "select_fish",
]
