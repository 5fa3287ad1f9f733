"""Tests for BiteCheck, HookOpportunity and Hooked."""

import pytest

from angler.fishing.context import EncounterContext
from angler.fishing.phase import LostReason, Phase
from angler.fishing.phases.bite import BiteCheckPhase, HookedPhase, HookOpportunityPhase
from tests.fakes.scripted_rng import ScriptedRandom


def _context(*rolls: float) -> EncounterContext:
    return EncounterContext(rng=ScriptedRandom(rolls))


class TestBiteCheckPhase:
    def test_no_roll_before_check_duration(self):
        rng = ScriptedRandom()
        context = EncounterContext(rng=rng)
        bite = BiteCheckPhase(check_duration=0.3)
        bite.enter(context)

        bite.update(context, 0.15)

        assert not bite.check_complete
        assert bite.next_phase(context) is None
        assert rng.calls == 0

    def test_bite_leads_to_hook_opportunity(self):
        context = _context(0.4)
        bite = BiteCheckPhase(base_probability=0.5, check_duration=0.3)
        bite.enter(context)

        bite.update(context, 0.15)
        bite.update(context, 0.15)

        assert bite.check_complete
        assert bite.bite_occurred
        assert bite.final_probability == pytest.approx(0.5)
        assert bite.next_phase(context) is Phase.HOOK_OPPORTUNITY

    def test_roll_happens_once(self):
        rng = ScriptedRandom([0.9])
        context = EncounterContext(rng=rng)
        bite = BiteCheckPhase(check_duration=0.3)
        bite.enter(context)

        bite.update(context, 0.3)
        bite.update(context, 0.3)

        assert rng.calls == 1

    def test_no_bite_may_return_to_stillness(self):
        context = _context(0.9, 0.2)
        bite = BiteCheckPhase(base_probability=0.5, check_duration=0.3, no_bite_return_chance=0.5)
        bite.enter(context)
        bite.update(context, 0.3)

        assert not bite.bite_occurred
        assert bite.next_phase(context) is Phase.STILLNESS

    def test_no_bite_may_end_in_idle(self):
        context = _context(0.9, 0.8)
        bite = BiteCheckPhase(base_probability=0.5, check_duration=0.3, no_bite_return_chance=0.5)
        bite.enter(context)
        bite.update(context, 0.3)

        assert bite.next_phase(context) is Phase.IDLE

    def test_timeout_ends_in_idle_without_return_roll(self):
        rng = ScriptedRandom([0.9])
        context = EncounterContext(rng=rng)
        bite = BiteCheckPhase(check_duration=0.3, timeout=0.3)
        bite.enter(context)
        bite.update(context, 0.3)

        assert bite.timed_out
        assert bite.next_phase(context) is Phase.IDLE
        assert rng.calls == 1

    def test_probability_is_clamped(self):
        bite = BiteCheckPhase(base_probability=0.5)
        assert bite.bite_probability(2.0) == 1.0
        assert bite.bite_probability(-0.5) == pytest.approx(0.25)
        assert bite.bite_probability(0.0) == pytest.approx(0.5)

    def test_zone_modifier_raises_probability(self):
        context = _context(0.95)
        context.set_zone("hot_spot", 2.0)
        bite = BiteCheckPhase(base_probability=0.5, check_duration=0.3)
        bite.enter(context)
        bite.update(context, 0.3)

        assert bite.final_probability == 1.0
        assert bite.bite_occurred

    def test_constructor_minimums(self):
        bite = BiteCheckPhase(base_probability=3.0, check_duration=0.0, timeout=0.0)
        assert bite.base_probability == 1.0
        assert bite.check_duration == pytest.approx(0.1)
        assert bite.timeout == pytest.approx(0.1)

    def test_reenter_resets(self):
        context = _context(0.1, 0.9)
        bite = BiteCheckPhase(check_duration=0.3)
        bite.enter(context)
        bite.update(context, 0.3)
        assert bite.bite_occurred

        bite.enter(context)
        assert not bite.check_complete
        assert not bite.bite_occurred
        assert bite.final_probability == 0.0


class TestHookOpportunityPhase:
    def test_press_inside_window_sets_hook(self, context):
        hook = HookOpportunityPhase(window_duration=0.8, early_penalty_window=0.1)
        hook.enter(context)
        hook.update(context, 0.15)

        context.cast_pressed = True
        hook.update(context, 0.15)

        assert hook.hook_received
        assert not hook.early_penalty
        assert hook.next_phase(context) is Phase.HOOKED

    def test_press_inside_early_window_loses_fish(self, context):
        hook = HookOpportunityPhase(window_duration=0.8, early_penalty_window=0.1)
        hook.enter(context)
        context.cast_pressed = True
        hook.update(context, 0.05)

        assert hook.early_penalty
        assert hook.next_phase(context) is Phase.LOST
        assert hook.lost_reason is LostReason.EARLY_HOOK

    def test_press_at_early_window_edge_is_early(self, context):
        hook = HookOpportunityPhase(window_duration=0.8, early_penalty_window=0.1)
        hook.enter(context)
        context.cast_pressed = True
        hook.update(context, 0.1)

        assert hook.next_phase(context) is Phase.LOST

    def test_no_press_misses_fish(self, context):
        hook = HookOpportunityPhase(window_duration=0.8)
        hook.enter(context)

        hook.update(context, 0.4)
        assert hook.next_phase(context) is None

        hook.update(context, 0.4)
        assert hook.window_expired
        assert hook.next_phase(context) is Phase.LOST
        assert hook.lost_reason is LostReason.MISSED_HOOK

    def test_first_outcome_is_final(self, context):
        hook = HookOpportunityPhase(window_duration=0.8)
        hook.enter(context)
        hook.update(context, 0.8)

        context.cast_pressed = True
        hook.update(context, 0.1)

        assert not hook.hook_received
        assert hook.next_phase(context) is Phase.LOST

    def test_early_window_clamped_to_half_window(self):
        hook = HookOpportunityPhase(window_duration=0.4, early_penalty_window=1.0)
        assert hook.early_penalty_window == pytest.approx(0.2)

    def test_reenter_resets(self, context):
        hook = HookOpportunityPhase()
        hook.enter(context)
        context.cast_pressed = True
        hook.update(context, 0.05)

        hook.enter(context)

        assert not hook.early_penalty
        assert not hook.hook_received
        assert hook.lost_reason is LostReason.UNKNOWN


class TestHookedPhase:
    def test_moves_to_reeling(self, context):
        hooked = HookedPhase(duration=0.3)
        hooked.enter(context)

        hooked.update(context, 0.15)
        assert hooked.next_phase(context) is None

        hooked.update(context, 0.15)
        assert hooked.next_phase(context) is Phase.REELING

    def test_reenter_after_completion_starts_over(self, context):
        hooked = HookedPhase(duration=0.3)
        hooked.enter(context)
        hooked.update(context, 0.5)
        assert hooked.complete

        hooked.enter(context)

        assert not hooked.complete
        assert hooked.progress == 0.0
        assert hooked.next_phase(context) is None
