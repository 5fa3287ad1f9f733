"""Request and response models for the encounter API."""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class CreateEncounterRequest(BaseModel):
    """Request body for starting a new encounter session."""

    seed: Optional[int] = None
    zone_id: Optional[str] = None
    bite_probability_modifier: float = 0.0
    # Nested per-phase overrides, e.g. {"bite_check": {"base_probability": 0.9}}
    config: Optional[Dict[str, Dict[str, float]]] = None


class LureState(BaseModel):
    """Lure kinematics supplied by the client's drift routine."""

    position: List[float] = Field(default_factory=lambda: [0.0, 0.0], min_length=2, max_length=2)
    velocity: List[float] = Field(default_factory=lambda: [0.0, 0.0], min_length=2, max_length=2)
    line_length: Optional[float] = None


class TickRequest(BaseModel):
    """Inputs for one or more ticks.

    Momentary presses apply to the first tick only; ``reel_held`` and the
    lure state hold for every tick in the batch.
    """

    dt: float = Field(default=1.0 / 30.0, ge=0.0, le=1.0)
    ticks: int = Field(default=1, ge=1, le=600)
    cast: bool = False
    slack: bool = False
    cancel: bool = False
    reel_held: bool = False
    lure: Optional[LureState] = None


class ForcePhaseRequest(BaseModel):
    """Request body for jumping an encounter to a named phase."""

    phase: str


class EncounterEventData(BaseModel):
    """One notification recorded by a session."""

    type: str
    data: Dict[str, Any]


class EncounterStatus(BaseModel):
    """Public view of an encounter session."""

    encounter_id: str
    created_at: float
    state: Dict[str, Any]
    events: List[EncounterEventData] = Field(default_factory=list)


class SpeciesData(BaseModel):
    """A fish species available to encounters."""

    id: str
    display_name: str
    min_wait_time: float
    max_wait_time: float
    rarity_base: float
    is_rare: bool
    flavor_text_id: Optional[str] = None
