"""Terminal display phases. Both hold for a fixed time, then return to Idle."""

from typing import TYPE_CHECKING, Optional

from angler.config.fishing import (
    CAUGHT_DISPLAY_DURATION,
    LOST_DISPLAY_DURATION,
    RESULT_DISPLAY_DURATION_MIN,
)
from angler.fishing.phase import LostReason, Phase
from angler.fishing.phases.base import PhaseBehavior
from angler.math_utils import progress_ratio

if TYPE_CHECKING:
    from angler.fishing.context import EncounterContext


class _ResultDisplayPhase(PhaseBehavior):
    """Shared timer for the Caught and Lost displays.

    ``event_ready`` is raised on entry so a presenter can fire its one-shot
    effects, and dropped by ``clear_event_ready`` or on exit.
    """

    def __init__(self, duration: float) -> None:
        self.duration = max(RESULT_DISPLAY_DURATION_MIN, duration)
        self._elapsed = 0.0
        self._complete = False
        self._event_ready = False

    @property
    def elapsed(self) -> float:
        return self._elapsed

    @property
    def progress(self) -> float:
        return progress_ratio(self._elapsed, self.duration)

    @property
    def complete(self) -> bool:
        return self._complete

    @property
    def event_ready(self) -> bool:
        return self._event_ready

    def clear_event_ready(self) -> None:
        self._event_ready = False

    def enter(self, context: "EncounterContext") -> None:
        self._elapsed = 0.0
        self._complete = False
        self._event_ready = True

    def update(self, context: "EncounterContext", dt: float) -> None:
        if self._complete:
            return
        self._elapsed += dt
        if self._elapsed >= self.duration:
            self._complete = True

    def exit(self, context: "EncounterContext") -> None:
        self._event_ready = False

    def next_phase(self, context: "EncounterContext") -> Optional[Phase]:
        if self._complete:
            return Phase.IDLE
        return None


class CaughtPhase(_ResultDisplayPhase):
    """The fish was landed."""

    phase = Phase.CAUGHT

    def __init__(self, duration: float = CAUGHT_DISPLAY_DURATION) -> None:
        super().__init__(duration)


class LostPhase(_ResultDisplayPhase):
    """The fish got away.

    The reason is set from outside (normally by the controller as the phase
    is entered). Entering keeps it; leaving resets it to ``UNKNOWN``.
    """

    phase = Phase.LOST

    def __init__(self, duration: float = LOST_DISPLAY_DURATION) -> None:
        super().__init__(duration)
        self._reason = LostReason.UNKNOWN

    @property
    def reason(self) -> LostReason:
        return self._reason

    def set_reason(self, reason: LostReason) -> None:
        self._reason = reason

    def exit(self, context: "EncounterContext") -> None:
        super().exit(context)
        self._reason = LostReason.UNKNOWN
