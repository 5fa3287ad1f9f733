"""Tests for the encounter state machine."""

from typing import Optional

import pytest

from angler.events.domain_events import PhaseChangedEvent
from angler.exceptions import (
    MachineAlreadyInitializedError,
    MachineNotInitializedError,
    PhaseRegistrationError,
    StateMachineError,
    UnregisteredPhaseError,
)
from angler.fishing.phase import Phase
from angler.fishing.phases.base import PhaseBehavior
from angler.fishing.state_machine import EncounterStateMachine


class RecordingBehavior(PhaseBehavior):
    """Logs every call and moves on when ``target`` is set."""

    def __init__(self, phase: Phase, log: list):
        self.phase = phase
        self.log = log
        self.target: Optional[Phase] = None

    def enter(self, context):
        self.log.append(("enter", self.phase.value))

    def update(self, context, dt):
        self.log.append(("update", self.phase.value, dt))

    def exit(self, context):
        self.log.append(("exit", self.phase.value))

    def next_phase(self, context):
        return self.target


@pytest.fixture
def calls():
    return []


@pytest.fixture
def notifications():
    return []


@pytest.fixture
def machine(context, notifications):
    return EncounterStateMachine(context, on_phase_changed=notifications.append)


def _register(machine, calls, *phases):
    behaviors = {}
    for phase in phases:
        behaviors[phase] = RecordingBehavior(phase, calls)
        machine.register(phase, behaviors[phase])
    return behaviors


class TestRegistration:
    def test_requires_context(self):
        with pytest.raises(TypeError):
            EncounterStateMachine(None)

    def test_duplicate_registration_rejected(self, machine, calls):
        _register(machine, calls, Phase.IDLE)
        with pytest.raises(PhaseRegistrationError):
            machine.register(Phase.IDLE, RecordingBehavior(Phase.IDLE, calls))

    def test_none_behavior_rejected(self, machine):
        with pytest.raises(PhaseRegistrationError):
            machine.register(Phase.IDLE, None)

    def test_registry_queries(self, machine, calls):
        behaviors = _register(machine, calls, Phase.IDLE, Phase.CASTING)
        assert machine.registered_count == 2
        assert machine.has_phase(Phase.CASTING)
        assert not machine.has_phase(Phase.REELING)
        assert machine.behavior_for(Phase.IDLE) is behaviors[Phase.IDLE]
        assert machine.behavior_for(Phase.REELING) is None

    def test_errors_share_a_base(self):
        assert issubclass(UnregisteredPhaseError, StateMachineError)
        assert issubclass(MachineNotInitializedError, StateMachineError)


class TestInitialize:
    def test_initialize_enters_and_notifies(self, machine, calls, notifications, context):
        _register(machine, calls, Phase.IDLE)
        machine.initialize(Phase.IDLE)

        assert machine.is_initialized
        assert machine.current_phase is Phase.IDLE
        assert context.phase is Phase.IDLE
        assert calls == [("enter", "Idle")]
        assert notifications == [PhaseChangedEvent(previous=None, current="Idle")]

    def test_initialize_unregistered_phase(self, machine):
        with pytest.raises(UnregisteredPhaseError):
            machine.initialize(Phase.IDLE)

    def test_initialize_twice(self, machine, calls):
        _register(machine, calls, Phase.IDLE)
        machine.initialize(Phase.IDLE)
        with pytest.raises(MachineAlreadyInitializedError):
            machine.initialize(Phase.IDLE)

    def test_update_before_initialize(self, machine, calls):
        _register(machine, calls, Phase.IDLE)
        with pytest.raises(MachineNotInitializedError):
            machine.update(0.1)


class TestUpdate:
    def test_update_accumulates_time_in_phase(self, machine, calls, context):
        _register(machine, calls, Phase.IDLE)
        machine.initialize(Phase.IDLE)

        machine.update(0.25)
        machine.update(0.25)

        assert context.time_in_phase == pytest.approx(0.5)
        assert calls[1:] == [("update", "Idle", 0.25), ("update", "Idle", 0.25)]

    def test_transition_runs_exit_then_enter(self, machine, calls, notifications, context):
        behaviors = _register(machine, calls, Phase.IDLE, Phase.CASTING)
        machine.initialize(Phase.IDLE)
        machine.update(0.25)
        behaviors[Phase.IDLE].target = Phase.CASTING

        machine.update(0.1)

        assert calls[-3:] == [("update", "Idle", 0.1), ("exit", "Idle"), ("enter", "Casting")]
        assert machine.current_phase is Phase.CASTING
        assert context.phase is Phase.CASTING
        assert context.time_in_phase == 0.0
        assert notifications[-1] == PhaseChangedEvent(previous="Idle", current="Casting")

    def test_next_phase_equal_to_current_is_ignored(self, machine, calls, notifications):
        behaviors = _register(machine, calls, Phase.IDLE)
        machine.initialize(Phase.IDLE)
        behaviors[Phase.IDLE].target = Phase.IDLE

        machine.update(0.1)

        assert ("exit", "Idle") not in calls
        assert len(notifications) == 1

    def test_next_phase_unregistered_raises(self, machine, calls):
        behaviors = _register(machine, calls, Phase.IDLE)
        machine.initialize(Phase.IDLE)
        behaviors[Phase.IDLE].target = Phase.REELING
        with pytest.raises(UnregisteredPhaseError):
            machine.update(0.1)


class TestTransitionTo:
    def test_self_transition_is_a_no_op(self, machine, calls, notifications, context):
        _register(machine, calls, Phase.IDLE)
        machine.initialize(Phase.IDLE)
        machine.update(0.5)

        machine.transition_to(Phase.IDLE)

        assert calls == [("enter", "Idle"), ("update", "Idle", 0.5)]
        assert len(notifications) == 1
        assert context.time_in_phase == pytest.approx(0.5)

    def test_transition_to_unregistered(self, machine, calls):
        _register(machine, calls, Phase.IDLE)
        machine.initialize(Phase.IDLE)
        with pytest.raises(UnregisteredPhaseError):
            machine.transition_to(Phase.LOST)

    def test_works_without_a_sink(self, context, calls):
        machine = EncounterStateMachine(context)
        _register(machine, calls, Phase.IDLE, Phase.LOST)
        machine.initialize(Phase.IDLE)
        machine.transition_to(Phase.LOST)
        assert machine.current_phase is Phase.LOST


class TestReset:
    def test_reset_exits_and_uninitializes(self, machine, calls):
        _register(machine, calls, Phase.IDLE)
        machine.initialize(Phase.IDLE)

        machine.reset()

        assert not machine.is_initialized
        assert calls[-1] == ("exit", "Idle")
        with pytest.raises(MachineNotInitializedError):
            machine.update(0.1)

    def test_reset_twice_is_safe(self, machine, calls):
        _register(machine, calls, Phase.IDLE)
        machine.initialize(Phase.IDLE)
        machine.reset()
        machine.reset()
        assert calls.count(("exit", "Idle")) == 1

    def test_can_initialize_again_after_reset(self, machine, calls, notifications):
        _register(machine, calls, Phase.IDLE, Phase.CASTING)
        machine.initialize(Phase.IDLE)
        machine.reset()

        machine.initialize(Phase.CASTING)

        assert machine.current_phase is Phase.CASTING
        assert notifications[-1] == PhaseChangedEvent(previous=None, current="Casting")

    def test_transition_to_last_phase_after_reset_is_silent(self, machine, calls, notifications):
        _register(machine, calls, Phase.IDLE)
        machine.initialize(Phase.IDLE)
        machine.reset()
        notifications.clear()
        calls.clear()

        machine.transition_to(Phase.IDLE)

        assert notifications == []
        assert calls == []
