"""Encounter state machine.

The machine owns the phase registry and the current phase. Each tick it
updates the active behavior, asks it for a next phase and, when that differs
from the current one, runs exit -> enter and publishes a
``PhaseChangedEvent`` through the notification sink it was given.

Usage:
------
    machine = EncounterStateMachine(context, on_phase_changed=bus.emit)
    for phase, behavior in build_phase_behaviors().items():
        machine.register(phase, behavior)
    machine.initialize(Phase.IDLE)

    while running:
        machine.update(dt)
"""

import logging
from typing import Callable, Dict, Optional

from angler.events.domain_events import PhaseChangedEvent
from angler.exceptions import (
    MachineAlreadyInitializedError,
    MachineNotInitializedError,
    PhaseRegistrationError,
    UnregisteredPhaseError,
)
from angler.fishing.context import EncounterContext
from angler.fishing.phase import Phase
from angler.fishing.phases.base import PhaseBehavior

logger = logging.getLogger(__name__)

PhaseChangedSink = Callable[[PhaseChangedEvent], None]


class EncounterStateMachine:
    """Drives the registered phase behaviors against one context.

    The machine writes ``context.phase`` and ``context.time_in_phase``; the
    time is advanced by ``dt`` on every tick that does not change phase and
    zeroed on every transition.
    """

    def __init__(
        self,
        context: EncounterContext,
        on_phase_changed: Optional[PhaseChangedSink] = None,
    ) -> None:
        if context is None:
            raise TypeError("EncounterStateMachine requires a context")
        self._context = context
        self._on_phase_changed = on_phase_changed
        self._behaviors: Dict[Phase, PhaseBehavior] = {}
        self._current_phase: Optional[Phase] = None
        self._current_behavior: Optional[PhaseBehavior] = None
        self._initialized = False

    @property
    def context(self) -> EncounterContext:
        return self._context

    @property
    def current_phase(self) -> Optional[Phase]:
        return self._current_phase

    @property
    def is_initialized(self) -> bool:
        return self._initialized

    @property
    def registered_count(self) -> int:
        return len(self._behaviors)

    def register(self, phase: Phase, behavior: PhaseBehavior) -> None:
        """Register the behavior for ``phase``.

        Raises:
            PhaseRegistrationError: If ``behavior`` is None or ``phase`` is
                already registered.
        """
        if behavior is None:
            raise PhaseRegistrationError(f"Behavior for {phase.value} must not be None")
        if phase in self._behaviors:
            raise PhaseRegistrationError(f"Phase {phase.value} is already registered")
        self._behaviors[phase] = behavior

    def has_phase(self, phase: Phase) -> bool:
        return phase in self._behaviors

    def behavior_for(self, phase: Phase) -> Optional[PhaseBehavior]:
        """Return the registered behavior for ``phase``, or None."""
        return self._behaviors.get(phase)

    def initialize(self, start_phase: Phase) -> None:
        """Enter ``start_phase`` and start the machine.

        Raises:
            MachineAlreadyInitializedError: If already initialized.
            UnregisteredPhaseError: If ``start_phase`` has no behavior.
        """
        if self._initialized:
            raise MachineAlreadyInitializedError("Encounter state machine is already initialized")
        behavior = self._require(start_phase)

        self._current_phase = start_phase
        self._current_behavior = behavior
        self._initialized = True
        self._context.phase = start_phase
        self._context.time_in_phase = 0.0

        behavior.enter(self._context)
        logger.debug("Encounter initialized in %s", start_phase.value)
        self._notify(None, start_phase)

    def update(self, dt: float) -> None:
        """Run one tick of the active phase and apply its transition, if any.

        Raises:
            MachineNotInitializedError: If called before ``initialize``.
        """
        if not self._initialized:
            raise MachineNotInitializedError(
                "Encounter state machine must be initialized before update()"
            )
        behavior = self._current_behavior
        if behavior is None:
            return

        behavior.update(self._context, dt)
        self._context.time_in_phase += dt

        next_phase = behavior.next_phase(self._context)
        if next_phase is not None and next_phase is not self._current_phase:
            self.transition_to(next_phase)

    def transition_to(self, phase: Phase) -> None:
        """Move to ``phase``, running the current exit and the new enter.

        Transitioning to the current phase does nothing, including the phase
        left behind by ``reset``. ``enter`` only runs while the machine is
        initialized; the notification is always sent.

        Raises:
            UnregisteredPhaseError: If ``phase`` has no behavior.
        """
        behavior = self._require(phase)
        if phase is self._current_phase:
            return

        previous = self._current_phase
        if self._current_behavior is not None:
            self._current_behavior.exit(self._context)

        self._current_phase = phase
        self._current_behavior = behavior
        self._context.phase = phase
        self._context.time_in_phase = 0.0

        if self._initialized:
            behavior.enter(self._context)

        logger.debug(
            "Encounter phase %s -> %s", previous.value if previous else None, phase.value
        )
        self._notify(previous, phase)

    def reset(self) -> None:
        """Exit the current phase and return to the uninitialized state.

        Safe to call repeatedly.
        """
        if self._initialized and self._current_behavior is not None:
            self._current_behavior.exit(self._context)
        self._current_behavior = None
        self._initialized = False

    def _require(self, phase: Phase) -> PhaseBehavior:
        behavior = self._behaviors.get(phase)
        if behavior is None:
            raise UnregisteredPhaseError(f"Phase {phase.value} is not registered")
        return behavior

    def _notify(self, previous: Optional[Phase], current: Phase) -> None:
        if self._on_phase_changed is None:
            return
        self._on_phase_changed(
            PhaseChangedEvent(
                previous=previous.value if previous is not None else None,
                current=current.value,
            )
        )
