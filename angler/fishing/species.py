"""Fish species descriptors and catalog loading.

A ``FishDescriptor`` is static configuration for one species: how its bite
window responds over normalized time, how rare it is, and how long it keeps
the player waiting. Descriptors are loaded once and never mutated.
"""

from __future__ import annotations

import bisect
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Tuple, Union

import orjson

from angler.config.fishing import (
    DEFAULT_MAX_WAIT_TIME,
    DEFAULT_MIN_WAIT_TIME,
    DEFAULT_RARITY,
    RARE_RARITY_THRESHOLD,
)
from angler.exceptions import ConfigurationError
from angler.math_utils import clamp01, lerp

logger = logging.getLogger(__name__)

BiteCurve = Callable[[float], float]


def ease_in_out(t: float) -> float:
    """Smoothstep from (0, 0) to (1, 1) with flat tangents at both ends."""
    t = clamp01(t)
    return t * t * (3.0 - 2.0 * t)


def linear(t: float) -> float:
    return clamp01(t)


@dataclass(frozen=True)
class KeyframeCurve:
    """Piecewise-linear curve through ``(time, value)`` keyframes.

    Times outside the keyframe range hold the first/last value.
    """

    keys: Tuple[Tuple[float, float], ...]

    def __post_init__(self) -> None:
        if not self.keys:
            raise ConfigurationError("KeyframeCurve needs at least one keyframe")
        ordered = tuple(sorted((float(t), float(v)) for t, v in self.keys))
        object.__setattr__(self, "keys", ordered)

    def __call__(self, t: float) -> float:
        times = [k[0] for k in self.keys]
        if t <= times[0]:
            return self.keys[0][1]
        if t >= times[-1]:
            return self.keys[-1][1]
        index = bisect.bisect_right(times, t)
        (t0, v0), (t1, v1) = self.keys[index - 1], self.keys[index]
        if t1 == t0:
            return v1
        return v0 + (v1 - v0) * (t - t0) / (t1 - t0)


@dataclass(frozen=True)
class FishDescriptor:
    """Immutable configuration for one fish species.

    Attributes:
        id: Unique species identifier
        display_name: Name shown to the player
        bite_window_curve: Bite intensity over normalized time (0-1)
        min_wait_time: Minimum seconds before the fish shows interest
        max_wait_time: Maximum seconds before the fish shows interest
        rarity_base: Selection weight (0-1). Lower is rarer.
        flavor_text_id: Optional journal text reference
    """

    id: str
    display_name: str
    bite_window_curve: BiteCurve = field(default=ease_in_out, compare=False)
    min_wait_time: float = DEFAULT_MIN_WAIT_TIME
    max_wait_time: float = DEFAULT_MAX_WAIT_TIME
    rarity_base: float = DEFAULT_RARITY
    flavor_text_id: Optional[str] = None

    def evaluate_bite_window(self, normalized_time: float) -> float:
        """Evaluate the bite window curve at ``normalized_time`` clamped to [0, 1]."""
        return self.bite_window_curve(clamp01(normalized_time))

    def wait_time(self, random_value: float) -> float:
        """Map a [0, 1] random value onto the wait-time range."""
        return lerp(self.min_wait_time, self.max_wait_time, random_value)

    @property
    def is_rare(self) -> bool:
        return self.rarity_base < RARE_RARITY_THRESHOLD

    def is_valid(self) -> bool:
        """Check the descriptor has usable identification and wait times."""
        return (
            bool(self.id)
            and bool(self.display_name)
            and self.min_wait_time >= 0.0
            and self.max_wait_time >= self.min_wait_time
        )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "FishDescriptor":
        """Build a descriptor from catalog data.

        ``bite_window`` may be omitted (ease-in-out), ``"linear"``,
        ``"ease_in_out"``, or a list of ``[time, value]`` keyframes.

        Raises:
            ConfigurationError: If required fields are missing or the
                resulting descriptor is invalid.
        """
        try:
            descriptor = cls(
                id=str(data["id"]),
                display_name=str(data["display_name"]),
                bite_window_curve=_parse_curve(data.get("bite_window")),
                min_wait_time=float(data.get("min_wait_time", DEFAULT_MIN_WAIT_TIME)),
                max_wait_time=float(data.get("max_wait_time", DEFAULT_MAX_WAIT_TIME)),
                rarity_base=float(data.get("rarity_base", DEFAULT_RARITY)),
                flavor_text_id=data.get("flavor_text_id"),
            )
        except KeyError as e:
            raise ConfigurationError(f"Fish species entry is missing {e.args[0]!r}: {dict(data)}") from e
        except (TypeError, ValueError) as e:
            raise ConfigurationError(f"Fish species entry has a malformed value: {e}") from e

        if not descriptor.is_valid():
            raise ConfigurationError(f"Invalid fish species: {descriptor.id!r}")
        if not 0.0 <= descriptor.rarity_base <= 1.0:
            raise ConfigurationError(
                f"rarity_base for {descriptor.id!r} must be within [0, 1], got {descriptor.rarity_base}"
            )
        return descriptor

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "id": self.id,
            "display_name": self.display_name,
            "min_wait_time": self.min_wait_time,
            "max_wait_time": self.max_wait_time,
            "rarity_base": self.rarity_base,
            "is_rare": self.is_rare,
        }
        if self.flavor_text_id is not None:
            data["flavor_text_id"] = self.flavor_text_id
        return data


_NAMED_CURVES: Dict[str, BiteCurve] = {
    "ease_in_out": ease_in_out,
    "linear": linear,
}


def _parse_curve(spec: Union[None, str, Sequence[Sequence[float]]]) -> BiteCurve:
    if spec is None:
        return ease_in_out
    if isinstance(spec, str):
        try:
            return _NAMED_CURVES[spec]
        except KeyError:
            raise ConfigurationError(f"Unknown bite window curve: {spec!r}") from None
    return KeyframeCurve(tuple((float(t), float(v)) for t, v in spec))


def load_species_catalog(path: Union[str, Path]) -> List[FishDescriptor]:
    """Load fish descriptors from a JSON file.

    The file holds either a list of species objects or ``{"species": [...]}``.

    Raises:
        ConfigurationError: If the file cannot be read or parsed, an entry is
            invalid, or two entries share an id.
    """
    path = Path(path)
    try:
        raw = orjson.loads(path.read_bytes())
    except OSError as e:
        raise ConfigurationError(f"Cannot read species catalog {path}: {e}") from e
    except orjson.JSONDecodeError as e:
        raise ConfigurationError(f"Species catalog {path} is not valid JSON: {e}") from e

    entries = raw.get("species") if isinstance(raw, dict) else raw
    if not isinstance(entries, list):
        raise ConfigurationError(f"Species catalog {path} must contain a list of species")

    catalog = [FishDescriptor.from_dict(entry) for entry in entries]
    seen: set = set()
    for descriptor in catalog:
        if descriptor.id in seen:
            raise ConfigurationError(f"Duplicate fish species id in {path}: {descriptor.id!r}")
        seen.add(descriptor.id)

    logger.info("Loaded %d fish species from %s", len(catalog), path)
    return catalog


def default_species_catalog() -> List[FishDescriptor]:
    """Built-in species for the starting lake."""
    return [
        FishDescriptor(
            id="bluegill",
            display_name="Bluegill",
            min_wait_time=1.0,
            max_wait_time=4.0,
            rarity_base=0.8,
            flavor_text_id="journal.bluegill",
        ),
        FishDescriptor(
            id="yellow_perch",
            display_name="Yellow Perch",
            bite_window_curve=linear,
            min_wait_time=2.0,
            max_wait_time=6.0,
            rarity_base=0.6,
            flavor_text_id="journal.yellow_perch",
        ),
        FishDescriptor(
            id="rainbow_trout",
            display_name="Rainbow Trout",
            min_wait_time=3.0,
            max_wait_time=8.0,
            rarity_base=0.35,
            flavor_text_id="journal.rainbow_trout",
        ),
        FishDescriptor(
            id="largemouth_bass",
            display_name="Largemouth Bass",
            bite_window_curve=KeyframeCurve(((0.0, 0.0), (0.4, 1.0), (1.0, 0.3))),
            min_wait_time=4.0,
            max_wait_time=10.0,
            rarity_base=0.2,
            flavor_text_id="journal.largemouth_bass",
        ),
        FishDescriptor(
            id="golden_koi",
            display_name="Golden Koi",
            min_wait_time=6.0,
            max_wait_time=14.0,
            rarity_base=0.05,
            flavor_text_id="journal.golden_koi",
        ),
    ]
