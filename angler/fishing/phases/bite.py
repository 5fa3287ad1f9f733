"""Phases from the bite roll until the hook is set.

BiteCheck decides whether a fish bites, HookOpportunity times the player's
hook-set against the bite window, and Hooked is the short beat before the
fight starts.
"""

from typing import TYPE_CHECKING, Optional

from angler.config.fishing import (
    BITE_BASE_PROBABILITY,
    BITE_CHECK_DURATION,
    BITE_CHECK_DURATION_MIN,
    BITE_NO_BITE_RETURN_CHANCE,
    BITE_TIMEOUT,
    HOOK_EARLY_PENALTY_WINDOW,
    HOOK_SET_DURATION,
    HOOK_SET_DURATION_MIN,
    HOOK_WINDOW_DURATION,
    HOOK_WINDOW_DURATION_MIN,
)
from angler.fishing.phase import LostReason, Phase
from angler.fishing.phases.base import PhaseBehavior
from angler.math_utils import clamp, clamp01, progress_ratio

if TYPE_CHECKING:
    from angler.fishing.context import EncounterContext


class BiteCheckPhase(PhaseBehavior):
    """Roll once for a bite after ``check_duration`` seconds.

    The bite probability is ``base_probability * (1 + modifier)`` clamped to
    [0, 1], where the modifier comes from the zone. Without a bite the
    encounter either goes back to Stillness (``no_bite_return_chance``) or
    ends in Idle; running past ``timeout`` always ends in Idle.
    """

    phase = Phase.BITE_CHECK

    def __init__(
        self,
        base_probability: float = BITE_BASE_PROBABILITY,
        check_duration: float = BITE_CHECK_DURATION,
        no_bite_return_chance: float = BITE_NO_BITE_RETURN_CHANCE,
        timeout: float = BITE_TIMEOUT,
    ) -> None:
        self.base_probability = clamp01(base_probability)
        self.check_duration = max(BITE_CHECK_DURATION_MIN, check_duration)
        self.no_bite_return_chance = clamp01(no_bite_return_chance)
        self.timeout = max(self.check_duration, timeout)

        self._elapsed = 0.0
        self._bite_occurred = False
        self._check_complete = False
        self._final_probability = 0.0

    @property
    def elapsed(self) -> float:
        return self._elapsed

    @property
    def bite_occurred(self) -> bool:
        return self._bite_occurred

    @property
    def check_complete(self) -> bool:
        return self._check_complete

    @property
    def final_probability(self) -> float:
        """Probability used for the roll (0 until the roll happens)."""
        return self._final_probability

    @property
    def timed_out(self) -> bool:
        return self._elapsed >= self.timeout

    def bite_probability(self, modifier: float) -> float:
        """Final bite probability for a given zone modifier."""
        return clamp01(self.base_probability * (1.0 + modifier))

    def enter(self, context: "EncounterContext") -> None:
        self._elapsed = 0.0
        self._bite_occurred = False
        self._check_complete = False
        self._final_probability = 0.0

    def update(self, context: "EncounterContext", dt: float) -> None:
        self._elapsed += dt
        if not self._check_complete and self._elapsed >= self.check_duration:
            self._final_probability = self.bite_probability(context.bite_probability_modifier)
            self._bite_occurred = context.uniform() < self._final_probability
            self._check_complete = True

    def next_phase(self, context: "EncounterContext") -> Optional[Phase]:
        if not self._check_complete:
            return None
        if self._bite_occurred:
            return Phase.HOOK_OPPORTUNITY
        if self.timed_out:
            return Phase.IDLE
        if context.uniform() < self.no_bite_return_chance:
            return Phase.STILLNESS
        return Phase.IDLE


class HookOpportunityPhase(PhaseBehavior):
    """The fish is nibbling; the player must press cast inside the window.

    A press within ``early_penalty_window`` seconds of the bite spooks the
    fish. A press after it and before ``window_duration`` sets the hook. No
    press by ``window_duration`` misses the fish. The first press is final:
    once the hook is set, a later expiry cannot undo it.
    """

    phase = Phase.HOOK_OPPORTUNITY

    def __init__(
        self,
        window_duration: float = HOOK_WINDOW_DURATION,
        early_penalty_window: float = HOOK_EARLY_PENALTY_WINDOW,
    ) -> None:
        self.window_duration = max(HOOK_WINDOW_DURATION_MIN, window_duration)
        self.early_penalty_window = clamp(early_penalty_window, 0.0, self.window_duration * 0.5)

        self._elapsed = 0.0
        self._hook_received = False
        self._window_expired = False
        self._early_penalty = False

    @property
    def elapsed(self) -> float:
        return self._elapsed

    @property
    def progress(self) -> float:
        return progress_ratio(self._elapsed, self.window_duration)

    @property
    def hook_received(self) -> bool:
        return self._hook_received

    @property
    def window_expired(self) -> bool:
        return self._window_expired

    @property
    def early_penalty(self) -> bool:
        return self._early_penalty

    @property
    def lost_reason(self) -> LostReason:
        if self._early_penalty:
            return LostReason.EARLY_HOOK
        if self._window_expired:
            return LostReason.MISSED_HOOK
        return LostReason.UNKNOWN

    def enter(self, context: "EncounterContext") -> None:
        self._elapsed = 0.0
        self._hook_received = False
        self._window_expired = False
        self._early_penalty = False

    def update(self, context: "EncounterContext", dt: float) -> None:
        if self._hook_received or self._window_expired:
            return

        self._elapsed += dt
        if context.cast_pressed:
            self._hook_received = True
            self._early_penalty = self._elapsed <= self.early_penalty_window
        elif self._elapsed >= self.window_duration:
            self._window_expired = True

    def next_phase(self, context: "EncounterContext") -> Optional[Phase]:
        if self._early_penalty:
            return Phase.LOST
        if self._hook_received:
            return Phase.HOOKED
        if self._window_expired:
            return Phase.LOST
        return None


class HookedPhase(PhaseBehavior):
    """The hook is set; a short beat before reeling starts."""

    phase = Phase.HOOKED

    def __init__(self, duration: float = HOOK_SET_DURATION) -> None:
        self.duration = max(HOOK_SET_DURATION_MIN, duration)
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
            return Phase.REELING
        return None
