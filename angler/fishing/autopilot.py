"""Scripted angler that plays an encounter without a human at the controls.

Used by the headless CLI and by tests that need a complete encounter. The
autopilot supplies the inputs a player and the lure drift routine would: it
casts from Idle, parks the lure at the landing point, sets the hook after a
fixed delay and keeps line tension between two marks while reeling.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from angler.events.domain_events import FishCaughtEvent, FishLostEvent, PhaseChangedEvent
from angler.fishing.controller import EncounterController
from angler.fishing.phase import Phase
from angler.fishing.phases.waiting import CastingPhase
from angler.math_utils import Vector2

logger = logging.getLogger(__name__)


@dataclass
class EncounterSummary:
    """Outcome of one scripted encounter."""

    outcome: Optional[str] = None
    fish_id: Optional[str] = None
    lost_reason: Optional[str] = None
    ticks: int = 0
    elapsed: float = 0.0
    casts: int = 0
    phases: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "outcome": self.outcome,
            "fish_id": self.fish_id,
            "lost_reason": self.lost_reason,
            "ticks": self.ticks,
            "elapsed": self.elapsed,
            "casts": self.casts,
            "phases": list(self.phases),
        }


class ScriptedAngler:
    """Drives an ``EncounterController`` until a fish is caught or lost.

    Args:
        controller: Encounter to play
        hook_delay: Seconds into the hook window before setting the hook
        tension_ceiling: Normalized tension at which the reel is released
        tension_floor: Normalized tension at which reeling resumes
    """

    def __init__(
        self,
        controller: EncounterController,
        *,
        hook_delay: float = 0.3,
        tension_ceiling: float = 0.8,
        tension_floor: float = 0.4,
    ) -> None:
        if tension_floor >= tension_ceiling:
            raise ValueError("tension_floor must be below tension_ceiling")
        self.controller = controller
        self.hook_delay = hook_delay
        self.tension_ceiling = tension_ceiling
        self.tension_floor = tension_floor

        self.summary = EncounterSummary()
        self._reeling = False
        controller.event_bus.subscribe(PhaseChangedEvent, self._on_phase_changed)
        controller.event_bus.subscribe(FishCaughtEvent, self._on_caught)
        controller.event_bus.subscribe(FishLostEvent, self._on_lost)

    @property
    def finished(self) -> bool:
        """A result was reached and the encounter is back in Idle."""
        return self.summary.outcome is not None and self.controller.phase is Phase.IDLE

    def step(self, dt: float) -> Phase:
        """Apply this tick's inputs, then advance the controller by ``dt``."""
        controller = self.controller
        phase = controller.phase

        if phase is Phase.IDLE:
            controller.press_cast()
            self.summary.casts += 1
        elif phase is Phase.HOOK_OPPORTUNITY:
            if controller.time_in_phase >= self.hook_delay:
                controller.press_cast()
        elif phase is Phase.REELING:
            tension = controller.context.line_tension
            if self._reeling and tension >= self.tension_ceiling:
                self._reeling = False
            elif not self._reeling and tension <= self.tension_floor:
                self._reeling = True
            controller.set_reel_held(self._reeling)
        elif phase is Phase.SLACK_EVENT:
            self._reeling = False
            controller.set_reel_held(False)

        phase = controller.tick(dt)
        self.summary.ticks += 1
        self.summary.elapsed += dt
        return phase

    def run(self, dt: float, max_ticks: int) -> EncounterSummary:
        """Step until ``finished`` or ``max_ticks`` ticks have run."""
        while not self.finished and self.summary.ticks < max_ticks:
            self.step(dt)
        if not self.finished:
            logger.warning("Scripted encounter stopped after %d ticks without a result", max_ticks)
        return self.summary

    def _on_phase_changed(self, event: PhaseChangedEvent) -> None:
        self.summary.phases.append(event.current)
        if event.current == Phase.LURE_DRIFT.value:
            # The lure settles where the cast landed
            casting = self.controller.behavior(Phase.CASTING)
            assert isinstance(casting, CastingPhase)
            self.controller.set_lure(casting.landing_position, Vector2(0.0, 0.0))
        elif event.current == Phase.REELING.value:
            self._reeling = True
        elif event.current == Phase.IDLE.value:
            self.controller.set_reel_held(False)

    def _on_caught(self, event: FishCaughtEvent) -> None:
        self.summary.outcome = Phase.CAUGHT.value
        self.summary.fish_id = event.fish_id

    def _on_lost(self, event: FishLostEvent) -> None:
        self.summary.outcome = Phase.LOST.value
        self.summary.fish_id = event.fish_id
        self.summary.lost_reason = event.reason
