"""Tests for Idle, Casting, LureDrift, Stillness and MicroTwitch."""

import pytest

from angler.fishing.context import EncounterContext
from angler.fishing.phase import Phase
from angler.fishing.phases.waiting import (
    CastingPhase,
    IdlePhase,
    LureDriftPhase,
    MicroTwitchPhase,
    StillnessPhase,
)
from angler.math_utils import Vector2
from tests.fakes.scripted_rng import ScriptedRandom


class TestIdlePhase:
    def test_stays_idle_without_input(self, context):
        idle = IdlePhase()
        idle.enter(context)
        idle.update(context, 0.1)
        assert idle.next_phase(context) is None

    def test_cast_press_is_latched(self, context):
        idle = IdlePhase()
        idle.enter(context)
        context.cast_pressed = True
        idle.update(context, 0.1)
        context.clear_momentary_input()

        assert idle.next_phase(context) is Phase.CASTING

    def test_enter_clears_latch(self, context):
        idle = IdlePhase()
        context.cast_pressed = True
        idle.update(context, 0.1)
        idle.enter(context)
        assert idle.next_phase(context) is None


class TestCastingPhase:
    def test_landing_point_along_cast_direction(self):
        context = EncounterContext(rng=ScriptedRandom([0.5]))
        context.set_lure_kinematics(Vector2(1.0, 1.0), Vector2())
        context.set_cast_direction(Vector2(0.0, 2.0))
        casting = CastingPhase()

        casting.enter(context)

        # lerp(2, 8, 0.5) == 5
        assert casting.cast_distance == pytest.approx(5.0)
        assert casting.landing_position == Vector2(1.0, 6.0)

    def test_distance_bounds(self):
        context = EncounterContext(rng=ScriptedRandom([0.0, 0.999999]))
        casting = CastingPhase(min_distance=2.0, max_distance=8.0)
        casting.enter(context)
        assert casting.cast_distance == pytest.approx(2.0)
        casting.enter(context)
        assert casting.cast_distance == pytest.approx(8.0, abs=1e-4)

    def test_moves_to_drift_after_duration(self, context):
        casting = CastingPhase(duration=0.5)
        casting.enter(context)

        casting.update(context, 0.25)
        assert casting.next_phase(context) is None
        assert casting.progress == pytest.approx(0.5)

        casting.update(context, 0.25)
        assert casting.next_phase(context) is Phase.LURE_DRIFT

    def test_constructor_minimums(self):
        casting = CastingPhase(duration=0.0, min_distance=-3.0, max_distance=-5.0)
        assert casting.duration == pytest.approx(0.1)
        assert casting.min_distance == 0.0
        assert casting.max_distance == 0.0

    def test_reenter_resets_timer(self, context):
        casting = CastingPhase(duration=0.5)
        casting.enter(context)
        casting.update(context, 0.5)
        casting.enter(context)
        assert casting.elapsed == 0.0
        assert casting.next_phase(context) is None


class TestLureDriftPhase:
    def test_waits_for_min_drift_time(self, context):
        drift = LureDriftPhase(velocity_threshold=0.1, min_drift_time=0.5)
        drift.enter(context)

        drift.update(context, 0.25)
        assert not drift.settled
        assert drift.next_phase(context) is None

        drift.update(context, 0.25)
        assert drift.settled
        assert drift.next_phase(context) is Phase.STILLNESS

    def test_fast_lure_keeps_drifting(self, context):
        drift = LureDriftPhase(velocity_threshold=0.1, min_drift_time=0.5)
        drift.enter(context)
        context.set_lure_kinematics(Vector2(), Vector2(0.3, 0.0))

        drift.update(context, 1.0)
        assert drift.next_phase(context) is None

        context.set_lure_kinematics(Vector2(), Vector2(0.05, 0.0))
        drift.update(context, 0.1)
        assert drift.next_phase(context) is Phase.STILLNESS

    def test_reenter_after_settling_starts_over(self, context):
        drift = LureDriftPhase(velocity_threshold=0.1, min_drift_time=0.5)
        drift.enter(context)
        drift.update(context, 0.6)
        assert drift.settled

        drift.enter(context)

        assert drift.drift_time == 0.0
        assert not drift.settled
        assert drift.next_phase(context) is None

    def test_threshold_minimum(self):
        assert LureDriftPhase(velocity_threshold=0.0).velocity_threshold == pytest.approx(0.01)


class TestStillnessPhase:
    def test_threshold_leads_to_bite_check(self, context):
        stillness = StillnessPhase(threshold=3.0)
        stillness.enter(context)

        for _ in range(2):
            stillness.update(context, 1.0)
            assert stillness.next_phase(context) is None

        stillness.update(context, 1.0)
        assert stillness.threshold_reached
        assert stillness.next_phase(context) is Phase.BITE_CHECK

    def test_twitch_wins_over_threshold(self, context):
        stillness = StillnessPhase(threshold=1.0)
        stillness.enter(context)
        context.cast_pressed = True

        stillness.update(context, 1.0)

        assert stillness.threshold_reached
        assert stillness.next_phase(context) is Phase.MICRO_TWITCH

    def test_reenter_restarts_stillness(self, context):
        stillness = StillnessPhase(threshold=3.0)
        stillness.enter(context)
        stillness.update(context, 2.0)
        stillness.enter(context)
        assert stillness.stillness_time == 0.0
        assert stillness.progress == 0.0


class TestMicroTwitchPhase:
    def test_returns_to_stillness(self, context):
        twitch = MicroTwitchPhase(duration=0.2)
        twitch.enter(context)

        twitch.update(context, 0.1)
        assert twitch.next_phase(context) is None

        twitch.update(context, 0.1)
        assert twitch.complete
        assert twitch.next_phase(context) is Phase.STILLNESS

    def test_reenter_after_completion_starts_over(self, context):
        twitch = MicroTwitchPhase(duration=0.2)
        twitch.enter(context)
        twitch.update(context, 0.3)
        assert twitch.complete

        twitch.enter(context)

        assert not twitch.complete
        assert twitch.progress == 0.0
        assert twitch.next_phase(context) is None
