"""Encounter controller: the orchestration layer around the state machine.

The controller owns one context, one state machine with all twelve phases
registered, and an EventBus. It is the "external driver" of the encounter:

- ``tick(dt)`` runs the machine once and clears momentary input afterwards
- input and lure data are written into the context before each tick
- phase changes are reacted to here, not inside the phases: a fish is
  selected when a bite is confirmed, the Lost reason is filled in from the
  phase that gave up the fish, and catch/loss events are published

Example:
    controller = EncounterController(seed=7, available_fish=default_species_catalog())
    controller.event_bus.subscribe(FishCaughtEvent, on_catch)

    controller.press_cast()
    controller.tick(1 / 30)
"""

import logging
from typing import Any, Dict, Iterable, List, Optional, Tuple

from angler.config.encounter_config import EncounterConfig
from angler.config.fishing import DEFAULT_STRUGGLE_INTENSITY
from angler.events.domain_events import (
    FishCaughtEvent,
    FishLostEvent,
    FishSelectedEvent,
    PhaseChangedEvent,
)
from angler.events.event_bus import EventBus
from angler.fishing.context import EncounterContext
from angler.fishing.phase import LostReason, Phase
from angler.fishing.phases import build_phase_behaviors
from angler.fishing.phases.base import PhaseBehavior
from angler.fishing.phases.fight import ReelingPhase
from angler.fishing.phases.results import CaughtPhase, LostPhase
from angler.fishing.selection import select_fish
from angler.fishing.species import FishDescriptor
from angler.fishing.spots import FishingSpot
from angler.fishing.state_machine import EncounterStateMachine
from angler.math_utils import Vector2
from angler.util.rng import make_rng

logger = logging.getLogger(__name__)

# Behavior attributes surfaced in snapshots when the active phase has them
_DETAIL_ATTRIBUTES = (
    "progress",
    "landing_position",
    "final_probability",
    "normalized_tension",
    "reel_progress",
    "surging",
    "reason",
)


class EncounterController:
    """Runs a single fishing encounter.

    Args:
        context: Existing context to drive. A new one is created when None.
        rng: Random source for a new context (wins over ``seed``)
        seed: Seed for a new context's RNG
        event_bus: Bus to publish on. A private bus is created when None.
        config: Phase tuning. Defaults when None.
        available_fish: Species that can bite, written into the context
    """

    def __init__(
        self,
        context: Optional[EncounterContext] = None,
        *,
        rng: Any = None,
        seed: Optional[int] = None,
        event_bus: Optional[EventBus] = None,
        config: Optional[EncounterConfig] = None,
        available_fish: Optional[Iterable[FishDescriptor]] = None,
    ) -> None:
        self.event_bus = event_bus if event_bus is not None else EventBus()
        self.config = config or EncounterConfig()
        self.context = context if context is not None else EncounterContext(rng=make_rng(rng, seed))
        if available_fish is not None:
            self.context.set_available_fish(available_fish)

        self.tick_count = 0
        self.spot: Optional[FishingSpot] = None
        self._home: Optional[Tuple[str, float, List[FishDescriptor]]] = None
        self.machine = EncounterStateMachine(self.context, on_phase_changed=self.event_bus.emit)
        self.event_bus.subscribe(PhaseChangedEvent, self._on_phase_changed)

        for phase, behavior in build_phase_behaviors(self.config).items():
            self.machine.register(phase, behavior)
        self.machine.initialize(Phase.IDLE)

        logger.debug(
            "EncounterController ready: %d phases, %d species in zone %s",
            self.machine.registered_count,
            len(self.context.available_fish),
            self.context.zone_id,
        )

    # ------------------------------------------------------------------
    # Read-only state
    # ------------------------------------------------------------------

    @property
    def phase(self) -> Phase:
        return self.context.phase

    @property
    def time_in_phase(self) -> float:
        return self.context.time_in_phase

    @property
    def current_behavior(self) -> PhaseBehavior:
        return self.behavior(self.context.phase)

    def behavior(self, phase: Phase) -> PhaseBehavior:
        """The registered behavior for ``phase``."""
        behavior = self.machine.behavior_for(phase)
        assert behavior is not None, f"{phase.value} is always registered"
        return behavior

    # ------------------------------------------------------------------
    # Driving
    # ------------------------------------------------------------------

    def tick(self, dt: float) -> Phase:
        """Advance the encounter by ``dt`` seconds.

        Returns:
            The phase after the tick.
        """
        if dt < 0:
            raise ValueError(f"dt must be non-negative, got {dt}")
        self.machine.update(dt)
        self._mirror_line_tension()
        self.context.clear_momentary_input()
        self.tick_count += 1
        return self.context.phase

    def press_cast(self) -> None:
        self.context.cast_pressed = True

    def press_slack(self) -> None:
        self.context.slack_pressed = True

    def press_cancel(self) -> None:
        """Record a cancel press. The core does not act on it."""
        self.context.cancel_pressed = True

    def set_reel_held(self, held: bool) -> None:
        self.context.reel_held = held

    def set_lure(self, position: Vector2, velocity: Vector2, line_length: Optional[float] = None) -> None:
        self.context.set_lure_kinematics(position, velocity, line_length)

    def apply_spot(self, spot: FishingSpot) -> None:
        """Fish at ``spot`` from the next bite on.

        The spot's species, bite modifier and zone override replace the
        settings in force before the first spot was applied. A spot without
        species of its own falls back to those earlier species, and one
        without an override keeps the earlier zone.
        """
        if self._home is None:
            self._home = (
                self.context.zone_id,
                self.context.bite_probability_modifier,
                list(self.context.available_fish),
            )
        zone_id, _, fish = self._home

        self.spot = spot
        self.context.set_zone(spot.zone_id_override or zone_id, spot.bite_probability_modifier)
        self.context.set_available_fish(spot.available_fish if spot.has_custom_fish else fish)
        logger.info(
            "Fishing at spot %s (zone %s, %d species, modifier %.2f)",
            spot.spot_id,
            self.context.zone_id,
            len(self.context.available_fish),
            self.context.bite_probability_modifier,
        )

    def clear_spot(self) -> None:
        """Leave the current spot and restore the earlier zone and species."""
        if self._home is None:
            return
        zone_id, modifier, fish = self._home
        self.context.set_zone(zone_id, modifier)
        self.context.set_available_fish(fish)
        self.spot = None
        self._home = None

    def set_lost_reason(self, reason: LostReason) -> None:
        """Set the reason reported by the Lost phase, e.g. before forcing Lost."""
        lost = self.behavior(Phase.LOST)
        assert isinstance(lost, LostPhase)
        lost.set_reason(reason)

    # ------------------------------------------------------------------
    # Administrative overrides
    # ------------------------------------------------------------------

    def force_transition(self, phase: Phase) -> None:
        """Jump straight to ``phase``. Ignored while the machine is stopped."""
        if self.machine.is_initialized:
            self.machine.transition_to(phase)

    def reset_to_idle(self) -> None:
        """Abort the attempt: clear fish and line state and return to Idle."""
        self.context.clear_hooked_fish()
        self.context.line_tension = 0.0
        self.context.has_fish_interest = False
        if self.machine.is_initialized:
            self.machine.transition_to(Phase.IDLE)

    # ------------------------------------------------------------------
    # Phase reactions
    # ------------------------------------------------------------------

    def _on_phase_changed(self, event: PhaseChangedEvent) -> None:
        current = Phase(event.current)
        previous = Phase(event.previous) if event.previous is not None else None

        if current is Phase.HOOK_OPPORTUNITY:
            self._select_fish()
        elif current is Phase.HOOKED:
            fish = self.context.selected_fish
            if fish is not None:
                self.context.set_hooked_fish(fish.id, DEFAULT_STRUGGLE_INTENSITY)
        elif current is Phase.CAUGHT:
            self._report_catch()
        elif current is Phase.LOST:
            self._report_loss(previous)
        elif current is Phase.IDLE and previous is not None and previous is not Phase.IDLE:
            self.context.reset_encounter()

    def _select_fish(self) -> None:
        fish = select_fish(self.context.available_fish, self.context.uniform)
        self.context.set_selected_fish(fish)
        self.context.set_fish_interest(True)
        if fish is None:
            logger.warning("Bite confirmed in zone %s but no fish are available", self.context.zone_id)
            return
        logger.info("Fish selected: %s (zone %s)", fish.id, self.context.zone_id)
        self.event_bus.emit(
            FishSelectedEvent(
                fish_id=fish.id,
                zone_id=self.context.zone_id,
                candidate_count=len(self.context.available_fish),
            )
        )

    def _report_catch(self) -> None:
        caught = self.behavior(Phase.CAUGHT)
        assert isinstance(caught, CaughtPhase)
        fish = self.context.selected_fish
        logger.info("Fish caught: %s (zone %s)", fish.id if fish else None, self.context.zone_id)
        self.event_bus.emit(
            FishCaughtEvent(
                fish_id=fish.id if fish else None,
                display_name=fish.display_name if fish else None,
                zone_id=self.context.zone_id,
                is_rare=fish.is_rare if fish else False,
            )
        )
        caught.clear_event_ready()

    def _report_loss(self, previous: Optional[Phase]) -> None:
        lost = self.behavior(Phase.LOST)
        assert isinstance(lost, LostPhase)
        if previous is not None:
            derived = self.behavior(previous).lost_reason
            # Keep a reason set by the caller when the previous phase has none
            if derived is not LostReason.UNKNOWN:
                lost.set_reason(derived)

        fish = self.context.selected_fish
        logger.info(
            "Fish lost: %s (zone %s, reason %s)",
            fish.id if fish else None,
            self.context.zone_id,
            lost.reason.value,
        )
        self.event_bus.emit(
            FishLostEvent(
                fish_id=fish.id if fish else None,
                zone_id=self.context.zone_id,
                reason=lost.reason.value,
            )
        )
        lost.clear_event_ready()

    def _mirror_line_tension(self) -> None:
        if self.context.phase is Phase.REELING:
            reeling = self.behavior(Phase.REELING)
            assert isinstance(reeling, ReelingPhase)
            self.context.set_line_tension(reeling.normalized_tension)

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def snapshot(self) -> Dict[str, Any]:
        """Plain-data view of the encounter for logging and the web layer."""
        detail: Dict[str, Any] = {}
        behavior = self.current_behavior
        for name in _DETAIL_ATTRIBUTES:
            value = getattr(behavior, name, None)
            if value is None:
                continue
            if isinstance(value, Vector2):
                value = value.to_tuple()
            elif isinstance(value, LostReason):
                value = value.value
            detail[name] = value

        data = self.context.to_dict()
        data["tick_count"] = self.tick_count
        data["spot_id"] = self.spot.spot_id if self.spot else None
        data["phase_detail"] = detail
        return data
