"""Phases from the first cast until a bite check.

Idle -> Casting -> LureDrift -> Stillness, with MicroTwitch as a short
player-triggered detour out of (and back into) Stillness.
"""

from typing import TYPE_CHECKING, Optional

from angler.config.fishing import (
    CAST_DURATION,
    CAST_DURATION_MIN,
    CAST_MAX_DISTANCE,
    CAST_MIN_DISTANCE,
    DRIFT_MIN_TIME,
    DRIFT_VELOCITY_THRESHOLD,
    DRIFT_VELOCITY_THRESHOLD_MIN,
    MICRO_TWITCH_DURATION,
    MICRO_TWITCH_DURATION_MIN,
    STILLNESS_THRESHOLD,
    STILLNESS_THRESHOLD_MIN,
)
from angler.fishing.phase import Phase
from angler.fishing.phases.base import PhaseBehavior
from angler.math_utils import Vector2, lerp, progress_ratio

if TYPE_CHECKING:
    from angler.fishing.context import EncounterContext


class IdlePhase(PhaseBehavior):
    """Not fishing. A cast press starts a cast."""

    phase = Phase.IDLE

    def __init__(self) -> None:
        self._cast_requested = False

    @property
    def cast_requested(self) -> bool:
        return self._cast_requested

    def enter(self, context: "EncounterContext") -> None:
        self._cast_requested = False

    def update(self, context: "EncounterContext", dt: float) -> None:
        # Latched: the driver may clear the flag before the next query
        if context.cast_pressed:
            self._cast_requested = True

    def next_phase(self, context: "EncounterContext") -> Optional[Phase]:
        if self._cast_requested:
            return Phase.CASTING
        return None


class CastingPhase(PhaseBehavior):
    """The line is in the air.

    The landing point is fixed on entry: the lure position pushed out along
    the context's cast direction by a random distance between
    ``min_distance`` and ``max_distance``.
    """

    phase = Phase.CASTING

    def __init__(
        self,
        duration: float = CAST_DURATION,
        min_distance: float = CAST_MIN_DISTANCE,
        max_distance: float = CAST_MAX_DISTANCE,
    ) -> None:
        self.duration = max(CAST_DURATION_MIN, duration)
        self.min_distance = max(0.0, min_distance)
        self.max_distance = max(self.min_distance, max_distance)

        self._elapsed = 0.0
        self._landing_position = Vector2()
        self._cast_distance = 0.0

    @property
    def elapsed(self) -> float:
        return self._elapsed

    @property
    def progress(self) -> float:
        return progress_ratio(self._elapsed, self.duration)

    @property
    def landing_position(self) -> Vector2:
        return self._landing_position.copy()

    @property
    def cast_distance(self) -> float:
        return self._cast_distance

    def enter(self, context: "EncounterContext") -> None:
        self._elapsed = 0.0
        direction = context.cast_direction.normalize()
        if direction.length() == 0:
            direction = Vector2(1.0, 0.0)
        self._cast_distance = lerp(self.min_distance, self.max_distance, context.uniform())
        self._landing_position = context.lure_position + direction * self._cast_distance

    def update(self, context: "EncounterContext", dt: float) -> None:
        self._elapsed += dt

    def next_phase(self, context: "EncounterContext") -> Optional[Phase]:
        if self._elapsed >= self.duration:
            return Phase.LURE_DRIFT
        return None


class LureDriftPhase(PhaseBehavior):
    """The lure is settling. Waits for a minimum drift time and a slow lure."""

    phase = Phase.LURE_DRIFT

    def __init__(
        self,
        velocity_threshold: float = DRIFT_VELOCITY_THRESHOLD,
        min_drift_time: float = DRIFT_MIN_TIME,
    ) -> None:
        self.velocity_threshold = max(DRIFT_VELOCITY_THRESHOLD_MIN, velocity_threshold)
        self.min_drift_time = max(0.0, min_drift_time)

        self._elapsed = 0.0
        self._settled = False

    @property
    def drift_time(self) -> float:
        return self._elapsed

    @property
    def settled(self) -> bool:
        return self._settled

    def enter(self, context: "EncounterContext") -> None:
        self._elapsed = 0.0
        self._settled = False

    def update(self, context: "EncounterContext", dt: float) -> None:
        self._elapsed += dt
        if self._elapsed >= self.min_drift_time:
            self._settled = context.lure_velocity.length() <= self.velocity_threshold

    def next_phase(self, context: "EncounterContext") -> Optional[Phase]:
        if self._settled:
            return Phase.STILLNESS
        return None


class StillnessPhase(PhaseBehavior):
    """The lure is at rest; stillness builds toward a bite check.

    A cast press during stillness asks for a micro twitch, which wins over a
    threshold reached on the same tick.
    """

    phase = Phase.STILLNESS

    def __init__(self, threshold: float = STILLNESS_THRESHOLD) -> None:
        self.threshold = max(STILLNESS_THRESHOLD_MIN, threshold)

        self._stillness_time = 0.0
        self._twitch_requested = False

    @property
    def stillness_time(self) -> float:
        return self._stillness_time

    @property
    def progress(self) -> float:
        return progress_ratio(self._stillness_time, self.threshold)

    @property
    def threshold_reached(self) -> bool:
        return self._stillness_time >= self.threshold

    @property
    def twitch_requested(self) -> bool:
        return self._twitch_requested

    def enter(self, context: "EncounterContext") -> None:
        self._stillness_time = 0.0
        self._twitch_requested = False

    def update(self, context: "EncounterContext", dt: float) -> None:
        self._stillness_time += dt
        if context.cast_pressed:
            self._twitch_requested = True

    def next_phase(self, context: "EncounterContext") -> Optional[Phase]:
        if self._twitch_requested:
            return Phase.MICRO_TWITCH
        if self.threshold_reached:
            return Phase.BITE_CHECK
        return None


class MicroTwitchPhase(PhaseBehavior):
    """A brief lure nudge, after which stillness starts over."""

    phase = Phase.MICRO_TWITCH

    def __init__(self, duration: float = MICRO_TWITCH_DURATION) -> None:
        self.duration = max(MICRO_TWITCH_DURATION_MIN, duration)
        self._elapsed = 0.0

    @property
    def progress(self) -> float:
        return progress_ratio(self._elapsed, self.duration)

    @property
    def complete(self) -> bool:
        return self._elapsed >= self.duration

    def enter(self, context: "EncounterContext") -> None:
        self._elapsed = 0.0

    def update(self, context: "EncounterContext", dt: float) -> None:
        self._elapsed += dt

    def next_phase(self, context: "EncounterContext") -> Optional[Phase]:
        if self.complete:
            return Phase.STILLNESS
        return None
