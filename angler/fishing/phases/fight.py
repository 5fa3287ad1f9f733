"""Phases of the fight: the tension contest and the slack detour.

Reeling is the main contest. Holding the reel builds tension and reel
progress; releasing it sheds tension but lets a loosely held fish escape.
Pressing slack hands off to SlackEvent, where the player must let the reel go
long enough before the fight resumes.
"""

from typing import TYPE_CHECKING, Optional

from angler.config.fishing import (
    REEL_ESCAPE_THRESHOLD,
    REEL_MAX_TENSION,
    REEL_MAX_TENSION_MIN,
    REEL_PROGRESS_PER_SECOND,
    REEL_PROGRESS_PER_SECOND_MIN,
    REEL_SLACK_CHANCE,
    REEL_SLACK_CHECK_INTERVAL,
    REEL_SLACK_CHECK_INTERVAL_MIN,
    REEL_SLACK_SURGE_MULTIPLIER,
    REEL_START_TENSION_RATIO,
    REEL_TENSION_DECREASE_RATE,
    REEL_TENSION_INCREASE_RATE,
    REEL_TENSION_RATE_MIN,
    SLACK_MAX_HOLD_DURATION,
    SLACK_MAX_HOLD_DURATION_MIN,
    SLACK_REQUIRED_RELEASE_DURATION,
    SLACK_REQUIRED_RELEASE_DURATION_MIN,
)
from angler.fishing.phase import LostReason, Phase
from angler.fishing.phases.base import PhaseBehavior
from angler.math_utils import clamp, clamp01, progress_ratio

if TYPE_CHECKING:
    from angler.fishing.context import EncounterContext


class ReelingPhase(PhaseBehavior):
    """Tension contest between the player and the hooked fish.

    While the reel is held, tension rises at ``tension_increase_rate`` scaled
    by ``1 + struggle_intensity`` and reel progress grows at
    ``progress_per_second``. Every ``slack_check_interval`` seconds of reeling
    the fish may start a surge (``slack_chance``); reeling through a surge
    doubles the tension gain. While released, tension falls at
    ``tension_decrease_rate``, any surge ends, and at or below
    ``escape_threshold`` the fish may slip the hook.

    Outcomes latch: once the line snaps, the fish escapes or the fish is
    landed, further updates change nothing.
    """

    phase = Phase.REELING

    def __init__(
        self,
        tension_increase_rate: float = REEL_TENSION_INCREASE_RATE,
        tension_decrease_rate: float = REEL_TENSION_DECREASE_RATE,
        max_tension: float = REEL_MAX_TENSION,
        progress_per_second: float = REEL_PROGRESS_PER_SECOND,
        slack_chance: float = REEL_SLACK_CHANCE,
        slack_check_interval: float = REEL_SLACK_CHECK_INTERVAL,
        escape_threshold: float = REEL_ESCAPE_THRESHOLD,
    ) -> None:
        self.tension_increase_rate = max(REEL_TENSION_RATE_MIN, tension_increase_rate)
        self.tension_decrease_rate = max(REEL_TENSION_RATE_MIN, tension_decrease_rate)
        self.max_tension = max(REEL_MAX_TENSION_MIN, max_tension)
        self.progress_per_second = max(REEL_PROGRESS_PER_SECOND_MIN, progress_per_second)
        self.slack_chance = clamp01(slack_chance)
        self.slack_check_interval = max(REEL_SLACK_CHECK_INTERVAL_MIN, slack_check_interval)
        self.escape_threshold = clamp(escape_threshold, 0.0, self.max_tension * 0.5)

        self._tension = 0.0
        self._reel_progress = 0.0
        self._time_since_slack_check = 0.0
        self._surging = False
        self._slack_requested = False
        self._line_snapped = False
        self._fish_escaped = False
        self._fish_caught = False

    @property
    def tension(self) -> float:
        return self._tension

    @property
    def normalized_tension(self) -> float:
        """Tension as a fraction of ``max_tension``."""
        return clamp01(self._tension / self.max_tension)

    @property
    def reel_progress(self) -> float:
        return self._reel_progress

    @property
    def surging(self) -> bool:
        """The fish is surging against the line. Presentation only."""
        return self._surging

    @property
    def slack_requested(self) -> bool:
        return self._slack_requested

    @property
    def line_snapped(self) -> bool:
        return self._line_snapped

    @property
    def fish_escaped(self) -> bool:
        return self._fish_escaped

    @property
    def fish_caught(self) -> bool:
        return self._fish_caught

    @property
    def resolved(self) -> bool:
        return self._line_snapped or self._fish_escaped or self._fish_caught

    @property
    def lost_reason(self) -> LostReason:
        if self._line_snapped:
            return LostReason.LINE_SNAPPED
        if self._fish_escaped:
            return LostReason.FISH_ESCAPED
        return LostReason.UNKNOWN

    def enter(self, context: "EncounterContext") -> None:
        self._tension = self.max_tension * REEL_START_TENSION_RATIO
        self._reel_progress = 0.0
        self._time_since_slack_check = 0.0
        self._surging = False
        self._slack_requested = False
        self._line_snapped = False
        self._fish_escaped = False
        self._fish_caught = False

    def update(self, context: "EncounterContext", dt: float) -> None:
        if self.resolved or self._slack_requested:
            return

        if context.slack_pressed:
            self._slack_requested = True
            return

        if context.reel_held:
            self._reel(context, dt)
        else:
            self._release(context, dt)

        self._tension = clamp(self._tension, 0.0, self.max_tension)
        if self._tension >= self.max_tension:
            self._line_snapped = True
        elif self._reel_progress >= 1.0:
            self._fish_caught = True

    def _reel(self, context: "EncounterContext", dt: float) -> None:
        gain = self.tension_increase_rate * dt * (1.0 + context.struggle_intensity)
        if self._surging:
            gain *= REEL_SLACK_SURGE_MULTIPLIER
        self._tension += gain
        self._reel_progress = min(1.0, self._reel_progress + self.progress_per_second * dt)

        self._time_since_slack_check += dt
        if self._time_since_slack_check >= self.slack_check_interval:
            self._time_since_slack_check = 0.0
            self._surging = context.uniform() < self.slack_chance

    def _release(self, context: "EncounterContext", dt: float) -> None:
        self._tension -= self.tension_decrease_rate * dt
        self._surging = False

        tension = max(0.0, self._tension)
        if self.escape_threshold > 0 and tension <= self.escape_threshold:
            escape_chance = 1.0 - tension / self.escape_threshold
            if context.uniform() < escape_chance * dt:
                self._fish_escaped = True

    def next_phase(self, context: "EncounterContext") -> Optional[Phase]:
        if self._line_snapped or self._fish_escaped:
            return Phase.LOST
        if self._fish_caught:
            return Phase.CAUGHT
        if self._slack_requested:
            return Phase.SLACK_EVENT
        return None


class SlackEventPhase(PhaseBehavior):
    """The player gave slack and must now release the reel.

    Releasing for ``required_release_duration`` seconds in a row clears the
    event and the fight resumes. Holding the reel for a total of
    ``max_hold_duration`` seconds snaps the line. Grabbing the reel again
    restarts the release count.
    """

    phase = Phase.SLACK_EVENT

    def __init__(
        self,
        required_release_duration: float = SLACK_REQUIRED_RELEASE_DURATION,
        max_hold_duration: float = SLACK_MAX_HOLD_DURATION,
    ) -> None:
        self.required_release_duration = max(
            SLACK_REQUIRED_RELEASE_DURATION_MIN, required_release_duration
        )
        self.max_hold_duration = max(SLACK_MAX_HOLD_DURATION_MIN, max_hold_duration)

        self._elapsed = 0.0
        self._held_time = 0.0
        self._release_time = 0.0
        self._cleared = False
        self._line_snapped = False

    @property
    def progress(self) -> float:
        return progress_ratio(self._elapsed, self.max_hold_duration)

    @property
    def held_time(self) -> float:
        return self._held_time

    @property
    def release_time(self) -> float:
        return self._release_time

    @property
    def cleared(self) -> bool:
        return self._cleared

    @property
    def line_snapped(self) -> bool:
        return self._line_snapped

    @property
    def lost_reason(self) -> LostReason:
        if self._line_snapped:
            return LostReason.SLACK_EVENT_FAILURE
        return LostReason.UNKNOWN

    def enter(self, context: "EncounterContext") -> None:
        self._elapsed = 0.0
        self._held_time = 0.0
        self._release_time = 0.0
        self._cleared = False
        self._line_snapped = False

    def update(self, context: "EncounterContext", dt: float) -> None:
        if self._cleared or self._line_snapped:
            return

        self._elapsed += dt
        if context.reel_held:
            self._release_time = 0.0
            self._held_time += dt
            if self._held_time >= self.max_hold_duration:
                self._line_snapped = True
        else:
            self._release_time += dt
            if self._release_time >= self.required_release_duration:
                self._cleared = True

    def next_phase(self, context: "EncounterContext") -> Optional[Phase]:
        if self._cleared:
            return Phase.REELING
        if self._line_snapped:
            return Phase.LOST
        return None
