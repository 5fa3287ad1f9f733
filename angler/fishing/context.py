"""Shared encounter context.

The ``EncounterContext`` is the single mutable record every phase behavior
reads and writes. It is owned by the driver (normally an
``EncounterController``): the driver writes lure kinematics, input flags and
zone settings before each tick and clears the momentary flags afterwards;
the state machine writes ``phase`` and ``time_in_phase``; phase behaviors
keep their own timers and never cache context fields between calls.

Randomness is only ever drawn through ``uniform()`` and ``uniform_range()``,
which delegate to the injected source so tests can script every roll.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional

from angler.config.fishing import (
    DEFAULT_BITE_PROBABILITY_MODIFIER,
    DEFAULT_STRUGGLE_INTENSITY,
    DEFAULT_ZONE_ID,
)
from angler.fishing.phase import Phase
from angler.fishing.species import FishDescriptor
from angler.math_utils import Vector2, clamp01
from angler.util.rng import require_rng_param


@dataclass
class EncounterContext:
    """Mutable state shared by the state machine, its phases and the driver.

    Attributes:
        rng: Random source exposing ``random()``; required
        phase: Current phase (written by the state machine)
        time_in_phase: Seconds spent in the current phase
        lure_position: Lure world position, supplied by the drift routine
        lure_velocity: Lure velocity, supplied by the drift routine
        cast_direction: Facing direction used when casting
        line_length: Distance from angler to lure
        line_tension: Normalized line tension (0-1)
        cast_pressed: Cast/hook input pressed this tick
        slack_pressed: Slack input pressed this tick
        cancel_pressed: Cancel input pressed this tick
        reel_held: Reel input currently held
        has_fish_interest: A fish is circling the lure
        has_hooked_fish: A fish is on the line
        hooked_fish_id: Species id of the hooked fish
        struggle_intensity: How hard the hooked fish fights (0-1)
        selected_fish: Species chosen for the current bite
        available_fish: Species that can bite in the current zone
        zone_id: Current fishing zone
        bite_probability_modifier: Additive fractional bite modifier (>= 0)
    """

    rng: Any = None
    phase: Phase = Phase.IDLE
    time_in_phase: float = 0.0

    lure_position: Vector2 = field(default_factory=Vector2)
    lure_velocity: Vector2 = field(default_factory=Vector2)
    cast_direction: Vector2 = field(default_factory=lambda: Vector2(1.0, 0.0))
    line_length: float = 0.0
    line_tension: float = 0.0

    cast_pressed: bool = False
    slack_pressed: bool = False
    cancel_pressed: bool = False
    reel_held: bool = False

    has_fish_interest: bool = False
    has_hooked_fish: bool = False
    hooked_fish_id: Optional[str] = None
    struggle_intensity: float = 0.0
    selected_fish: Optional[FishDescriptor] = None
    available_fish: List[FishDescriptor] = field(default_factory=list)

    zone_id: str = DEFAULT_ZONE_ID
    bite_probability_modifier: float = DEFAULT_BITE_PROBABILITY_MODIFIER

    def __post_init__(self) -> None:
        self.rng = require_rng_param(self.rng, "EncounterContext")
        self.bite_probability_modifier = max(0.0, self.bite_probability_modifier)

    # ------------------------------------------------------------------
    # Randomness
    # ------------------------------------------------------------------

    def uniform(self) -> float:
        """Draw a float in [0, 1)."""
        return self.rng.random()

    def uniform_range(self, min_value: float, max_value: float) -> float:
        """Draw a float between ``min_value`` and ``max_value``."""
        return min_value + self.rng.random() * (max_value - min_value)

    # ------------------------------------------------------------------
    # Driver-side setters
    # ------------------------------------------------------------------

    def set_lure_kinematics(
        self,
        position: Vector2,
        velocity: Vector2,
        line_length: Optional[float] = None,
    ) -> None:
        """Record the lure state computed by the drift routine for this tick."""
        self.lure_position = position.copy()
        self.lure_velocity = velocity.copy()
        if line_length is not None:
            self.line_length = max(0.0, line_length)

    def set_cast_direction(self, direction: Vector2) -> None:
        """Set the facing direction; a zero vector is ignored."""
        if direction.length() > 0:
            self.cast_direction = direction.normalize()

    def clear_momentary_input(self) -> None:
        """Clear the pressed-this-tick flags. Called by the driver at end of tick."""
        self.cast_pressed = False
        self.slack_pressed = False
        self.cancel_pressed = False

    def set_line_tension(self, tension: float) -> None:
        self.line_tension = clamp01(tension)

    def set_fish_interest(self, has_interest: bool) -> None:
        self.has_fish_interest = has_interest

    def set_hooked_fish(
        self, fish_id: Optional[str], struggle_intensity: float = DEFAULT_STRUGGLE_INTENSITY
    ) -> None:
        """Mirror the hooked fish into the context. An empty id clears it."""
        if not fish_id:
            self.has_hooked_fish = False
            self.hooked_fish_id = None
            self.struggle_intensity = 0.0
            return
        self.has_hooked_fish = True
        self.hooked_fish_id = fish_id
        self.struggle_intensity = clamp01(struggle_intensity)

    def set_struggle_intensity(self, intensity: float) -> None:
        self.struggle_intensity = clamp01(intensity)

    def clear_hooked_fish(self) -> None:
        """Clear the hooked fish and the species selected for the bite."""
        self.set_hooked_fish(None)
        self.selected_fish = None

    def set_selected_fish(self, fish: Optional[FishDescriptor]) -> None:
        self.selected_fish = fish

    def set_available_fish(self, fish: Optional[Iterable[FishDescriptor]]) -> None:
        self.available_fish = list(fish) if fish else []

    def set_zone(
        self, zone_id: str, bite_probability_modifier: float = DEFAULT_BITE_PROBABILITY_MODIFIER
    ) -> None:
        """Set the zone and its bite modifier (negative modifiers clamp to 0)."""
        self.zone_id = zone_id
        self.bite_probability_modifier = max(0.0, bite_probability_modifier)

    def reset_encounter(self) -> None:
        """Clear per-attempt fish and line state.

        Zone settings, available species and lure kinematics are kept.
        """
        self.clear_hooked_fish()
        self.has_fish_interest = False
        self.line_tension = 0.0

    def to_dict(self) -> Dict[str, Any]:
        """Plain-data view for logging and serialization."""
        return {
            "phase": self.phase.value,
            "time_in_phase": self.time_in_phase,
            "lure_position": self.lure_position.to_tuple(),
            "lure_velocity": self.lure_velocity.to_tuple(),
            "line_length": self.line_length,
            "line_tension": self.line_tension,
            "reel_held": self.reel_held,
            "has_fish_interest": self.has_fish_interest,
            "has_hooked_fish": self.has_hooked_fish,
            "hooked_fish_id": self.hooked_fish_id,
            "struggle_intensity": self.struggle_intensity,
            "selected_fish": self.selected_fish.id if self.selected_fish else None,
            "zone_id": self.zone_id,
            "bite_probability_modifier": self.bite_probability_modifier,
        }
