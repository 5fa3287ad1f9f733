"""Base class for encounter phase behaviors.

Each behavior owns only its transient fields (timers, latches) and must reset
all of them in ``enter``: instances are registered once and reused on every
visit to their phase. All shared data is read from and written to the
``EncounterContext`` passed into each call.
"""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Optional

from angler.fishing.phase import LostReason, Phase

if TYPE_CHECKING:
    from angler.fishing.context import EncounterContext


class PhaseBehavior(ABC):
    """Enter/update/exit/next-phase contract for one encounter phase."""

    #: The phase this behavior implements. Set by each subclass.
    phase: Phase

    @abstractmethod
    def enter(self, context: "EncounterContext") -> None:
        """Reset transient state. Called each time the phase becomes active."""

    @abstractmethod
    def update(self, context: "EncounterContext", dt: float) -> None:
        """Advance timers and react to input for one tick."""

    def exit(self, context: "EncounterContext") -> None:
        """Called once when the phase is left."""

    @abstractmethod
    def next_phase(self, context: "EncounterContext") -> Optional[Phase]:
        """Return the phase to move to, or None to stay.

        Called after ``update`` on every tick. May draw from the context RNG.
        """

    @property
    def lost_reason(self) -> LostReason:
        """Why this phase handed off to Lost, if it did."""
        return LostReason.UNKNOWN

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"
