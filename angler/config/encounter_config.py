"""Per-phase encounter configuration.

Each dataclass mirrors the constructor keywords of one phase behavior, so
``asdict(config)`` can be splatted straight into the behavior. Values are not
clamped here; behaviors apply their own minimums on construction.
"""

from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

import orjson

from angler.config.fishing import (
    BITE_BASE_PROBABILITY,
    BITE_CHECK_DURATION,
    BITE_NO_BITE_RETURN_CHANCE,
    BITE_TIMEOUT,
    CAST_DURATION,
    CAST_MAX_DISTANCE,
    CAST_MIN_DISTANCE,
    CAUGHT_DISPLAY_DURATION,
    DRIFT_MIN_TIME,
    DRIFT_VELOCITY_THRESHOLD,
    HOOK_EARLY_PENALTY_WINDOW,
    HOOK_SET_DURATION,
    HOOK_WINDOW_DURATION,
    LOST_DISPLAY_DURATION,
    MICRO_TWITCH_DURATION,
    REEL_ESCAPE_THRESHOLD,
    REEL_MAX_TENSION,
    REEL_PROGRESS_PER_SECOND,
    REEL_SLACK_CHANCE,
    REEL_SLACK_CHECK_INTERVAL,
    REEL_TENSION_DECREASE_RATE,
    REEL_TENSION_INCREASE_RATE,
    SLACK_MAX_HOLD_DURATION,
    SLACK_REQUIRED_RELEASE_DURATION,
    STILLNESS_THRESHOLD,
)
from angler.exceptions import ConfigurationError


@dataclass
class CastingConfig:
    duration: float = CAST_DURATION
    min_distance: float = CAST_MIN_DISTANCE
    max_distance: float = CAST_MAX_DISTANCE


@dataclass
class LureDriftConfig:
    velocity_threshold: float = DRIFT_VELOCITY_THRESHOLD
    min_drift_time: float = DRIFT_MIN_TIME


@dataclass
class StillnessConfig:
    threshold: float = STILLNESS_THRESHOLD


@dataclass
class MicroTwitchConfig:
    duration: float = MICRO_TWITCH_DURATION


@dataclass
class BiteCheckConfig:
    base_probability: float = BITE_BASE_PROBABILITY
    check_duration: float = BITE_CHECK_DURATION
    no_bite_return_chance: float = BITE_NO_BITE_RETURN_CHANCE
    timeout: float = BITE_TIMEOUT


@dataclass
class HookOpportunityConfig:
    window_duration: float = HOOK_WINDOW_DURATION
    early_penalty_window: float = HOOK_EARLY_PENALTY_WINDOW


@dataclass
class HookedConfig:
    duration: float = HOOK_SET_DURATION


@dataclass
class ReelingConfig:
    tension_increase_rate: float = REEL_TENSION_INCREASE_RATE
    tension_decrease_rate: float = REEL_TENSION_DECREASE_RATE
    max_tension: float = REEL_MAX_TENSION
    progress_per_second: float = REEL_PROGRESS_PER_SECOND
    slack_chance: float = REEL_SLACK_CHANCE
    slack_check_interval: float = REEL_SLACK_CHECK_INTERVAL
    escape_threshold: float = REEL_ESCAPE_THRESHOLD


@dataclass
class SlackEventConfig:
    required_release_duration: float = SLACK_REQUIRED_RELEASE_DURATION
    max_hold_duration: float = SLACK_MAX_HOLD_DURATION


@dataclass
class ResultDisplayConfig:
    duration: float = CAUGHT_DISPLAY_DURATION


@dataclass
class EncounterConfig:
    """Tuning for every phase of an encounter.

    Attributes:
        casting .. lost: One config dataclass per tunable phase. Idle has no
            tuning and is omitted.
    """

    casting: CastingConfig = field(default_factory=CastingConfig)
    lure_drift: LureDriftConfig = field(default_factory=LureDriftConfig)
    stillness: StillnessConfig = field(default_factory=StillnessConfig)
    micro_twitch: MicroTwitchConfig = field(default_factory=MicroTwitchConfig)
    bite_check: BiteCheckConfig = field(default_factory=BiteCheckConfig)
    hook_opportunity: HookOpportunityConfig = field(default_factory=HookOpportunityConfig)
    hooked: HookedConfig = field(default_factory=HookedConfig)
    reeling: ReelingConfig = field(default_factory=ReelingConfig)
    slack_event: SlackEventConfig = field(default_factory=SlackEventConfig)
    caught: ResultDisplayConfig = field(default_factory=ResultDisplayConfig)
    lost: ResultDisplayConfig = field(
        default_factory=lambda: ResultDisplayConfig(duration=LOST_DISPLAY_DURATION)
    )

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Mapping[str, Any]]]) -> "EncounterConfig":
        """Build a config from a nested mapping, e.g. parsed JSON.

        Sections and keys that are omitted keep their defaults.

        Raises:
            ConfigurationError: On non-mapping input or sections, unknown
                sections or keys, or non-numeric values.
        """
        config = cls()
        if data is None:
            return config
        if not isinstance(data, Mapping):
            raise ConfigurationError(
                f"Encounter config must be a mapping of sections, got {type(data).__name__}"
            )

        section_names = {f.name for f in fields(cls)}
        for section_name, overrides in data.items():
            if section_name not in section_names:
                raise ConfigurationError(f"Unknown encounter config section: {section_name!r}")
            if overrides is None:
                continue
            if not isinstance(overrides, Mapping):
                raise ConfigurationError(
                    f"Encounter config section {section_name!r} must be a mapping, "
                    f"got {type(overrides).__name__}"
                )
            section = getattr(config, section_name)
            allowed = {f.name for f in fields(section)}
            for key, value in overrides.items():
                if key not in allowed:
                    raise ConfigurationError(
                        f"Unknown key {key!r} in encounter config section {section_name!r}"
                    )
                if isinstance(value, bool) or not isinstance(value, (int, float)):
                    raise ConfigurationError(
                        f"{section_name}.{key} must be a number, got {value!r}"
                    )
                setattr(section, key, float(value))
        return config

    @classmethod
    def load(cls, path: Union[str, Path]) -> "EncounterConfig":
        """Read per-phase overrides from a JSON file.

        Raises:
            ConfigurationError: If the file cannot be read or parsed, or its
                contents are rejected by ``from_dict``.
        """
        path = Path(path)
        try:
            raw = orjson.loads(path.read_bytes())
        except OSError as e:
            raise ConfigurationError(f"Cannot read encounter config {path}: {e}") from e
        except orjson.JSONDecodeError as e:
            raise ConfigurationError(f"Encounter config {path} is not valid JSON: {e}") from e
        return cls.from_dict(raw)

    def to_dict(self) -> Dict[str, Dict[str, float]]:
        return asdict(self)
