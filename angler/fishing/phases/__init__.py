"""Phase behaviors for the encounter state machine.

One behavior per ``Phase``; ``build_phase_behaviors`` returns the complete,
closed table the controller registers.
"""

from typing import Dict, Optional

from angler.config.encounter_config import EncounterConfig
from angler.fishing.phase import Phase
from angler.fishing.phases.base import PhaseBehavior
from angler.fishing.phases.bite import BiteCheckPhase, HookedPhase, HookOpportunityPhase
from angler.fishing.phases.fight import ReelingPhase, SlackEventPhase
from angler.fishing.phases.results import CaughtPhase, LostPhase
from angler.fishing.phases.waiting import (
    CastingPhase,
    IdlePhase,
    LureDriftPhase,
    MicroTwitchPhase,
    StillnessPhase,
)


def build_phase_behaviors(config: Optional[EncounterConfig] = None) -> Dict[Phase, PhaseBehavior]:
    """Create one behavior per phase from ``config`` (defaults when None)."""
    config = config or EncounterConfig()
    behaviors: Dict[Phase, PhaseBehavior] = {
        Phase.IDLE: IdlePhase(),
        Phase.CASTING: CastingPhase(**vars(config.casting)),
        Phase.LURE_DRIFT: LureDriftPhase(**vars(config.lure_drift)),
        Phase.STILLNESS: StillnessPhase(**vars(config.stillness)),
        Phase.MICRO_TWITCH: MicroTwitchPhase(**vars(config.micro_twitch)),
        Phase.BITE_CHECK: BiteCheckPhase(**vars(config.bite_check)),
        Phase.HOOK_OPPORTUNITY: HookOpportunityPhase(**vars(config.hook_opportunity)),
        Phase.HOOKED: HookedPhase(**vars(config.hooked)),
        Phase.REELING: ReelingPhase(**vars(config.reeling)),
        Phase.SLACK_EVENT: SlackEventPhase(**vars(config.slack_event)),
        Phase.CAUGHT: CaughtPhase(**vars(config.caught)),
        Phase.LOST: LostPhase(**vars(config.lost)),
    }
    return behaviors


__all__ = [
    "BiteCheckPhase",
    "CastingPhase",
    "CaughtPhase",
    "HookOpportunityPhase",
    "HookedPhase",
    "IdlePhase",
    "LostPhase",
    "LureDriftPhase",
    "MicroTwitchPhase",
    "PhaseBehavior",
    "ReelingPhase",
    "SlackEventPhase",
    "StillnessPhase",
    "build_phase_behaviors",
]
