"""Curated fishing spots.

A spot narrows or reshapes what bites at one place on the shore: its own
species list, a bite modifier, and optionally another zone's identity.
"""

from dataclasses import dataclass
from typing import Optional, Tuple

from angler.exceptions import ConfigurationError
from angler.fishing.species import FishDescriptor


@dataclass(frozen=True)
class FishingSpot:
    """Static description of one fishing spot.

    Attributes:
        spot_id: Unique identifier
        display_name: Name shown to the player (defaults to ``spot_id``)
        available_fish: Species that bite here. Empty means the zone's species.
        bite_probability_modifier: Additive bite modifier, 0.0 for normal
        zone_id_override: Zone to report instead of the current one
    """

    spot_id: str
    display_name: str = ""
    available_fish: Tuple[FishDescriptor, ...] = ()
    bite_probability_modifier: float = 0.0
    zone_id_override: Optional[str] = None

    def __post_init__(self) -> None:
        if not self.spot_id:
            raise ConfigurationError("Fishing spot needs a spot_id")
        if self.bite_probability_modifier < 0:
            raise ConfigurationError(
                f"bite_probability_modifier for spot {self.spot_id!r} must be >= 0, "
                f"got {self.bite_probability_modifier}"
            )
        # Accept any iterable of species but store an immutable tuple
        object.__setattr__(self, "available_fish", tuple(self.available_fish))
        if not self.display_name:
            object.__setattr__(self, "display_name", self.spot_id)

    @property
    def has_custom_fish(self) -> bool:
        return bool(self.available_fish)
