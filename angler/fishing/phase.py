"""Encounter phase and loss-reason enumerations.

Phases flow roughly:
Idle -> Casting -> LureDrift -> Stillness <-> MicroTwitch -> BiteCheck ->
HookOpportunity -> Hooked -> Reeling <-> SlackEvent -> Caught | Lost -> Idle
"""

from enum import Enum


class Phase(Enum):
    """One mutually exclusive stage of a fishing encounter.

    Values are the names published in phase-changed notifications.
    """

    IDLE = "Idle"  # Not fishing
    CASTING = "Casting"  # Line in the air
    LURE_DRIFT = "LureDrift"  # Lure settling on the water
    STILLNESS = "Stillness"  # Lure at rest, building toward a bite check
    MICRO_TWITCH = "MicroTwitch"  # Player nudged the lure
    BITE_CHECK = "BiteCheck"  # Rolling for a bite
    HOOK_OPPORTUNITY = "HookOpportunity"  # Fish nibbling, hook window open
    HOOKED = "Hooked"  # Hook set, fight about to begin
    REELING = "Reeling"  # Tension contest
    SLACK_EVENT = "SlackEvent"  # Player gave slack, must release the reel
    CAUGHT = "Caught"  # Terminal success display
    LOST = "Lost"  # Terminal failure display

    @property
    def is_terminal(self) -> bool:
        """True for the result display phases."""
        return self in (Phase.CAUGHT, Phase.LOST)

    @classmethod
    def from_name(cls, name: str) -> "Phase":
        """Look up a phase by notification name ("LureDrift") or member name ("LURE_DRIFT").

        Raises:
            ValueError: If no phase matches
        """
        try:
            return cls(name)
        except ValueError:
            pass
        try:
            return cls[name.upper()]
        except KeyError:
            raise ValueError(f"Unknown phase: {name!r}") from None


class LostReason(Enum):
    """Why a fish was lost."""

    UNKNOWN = "Unknown"
    MISSED_HOOK = "MissedHook"
    EARLY_HOOK = "EarlyHook"
    LINE_SNAPPED = "LineSnapped"
    FISH_ESCAPED = "FishEscaped"
    SLACK_EVENT_FAILURE = "SlackEventFailure"
