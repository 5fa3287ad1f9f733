"""Encounter API endpoints.

Sessions are created, stepped and inspected over plain HTTP. The client plays
the role of the encounter driver: it sends input flags and lure kinematics
with each tick request and reads back the snapshot and recorded events.
"""

import logging
from typing import List

from fastapi import APIRouter, HTTPException
from fastapi.responses import JSONResponse

from angler.exceptions import AnglerError
from angler.fishing.phase import Phase
from backend.models import (
    CreateEncounterRequest,
    EncounterStatus,
    ForcePhaseRequest,
    SpeciesData,
    TickRequest,
)
from backend.session_registry import EncounterRegistry, EncounterSession

logger = logging.getLogger(__name__)


def setup_encounters_router(registry: EncounterRegistry) -> APIRouter:
    """Create and configure the encounters router.

    Args:
        registry: The EncounterRegistry holding live sessions

    Returns:
        Configured APIRouter
    """
    router = APIRouter(prefix="/api", tags=["encounters"])

    async def _get_session(encounter_id: str) -> EncounterSession:
        session = await registry.get(encounter_id)
        if session is None:
            raise HTTPException(status_code=404, detail=f"Encounter not found: {encounter_id}")
        return session

    @router.get("/species", response_model=List[SpeciesData])
    async def list_species():
        """List the fish species offered to new encounters."""
        return [SpeciesData(**fish.to_dict()) for fish in registry.species]

    @router.post("/encounters")
    async def create_encounter(request: CreateEncounterRequest):
        """Start a new encounter in Idle."""
        try:
            session = await registry.create(
                seed=request.seed,
                zone_id=request.zone_id,
                bite_probability_modifier=request.bite_probability_modifier,
                config=request.config,
            )
        except AnglerError as e:
            raise HTTPException(status_code=400, detail=str(e))
        return JSONResponse(session.status().model_dump(), status_code=201)

    @router.get("/encounters")
    async def list_encounters():
        """List live encounters with their current phase."""
        sessions = await registry.list_sessions()
        return JSONResponse(
            {
                "encounters": [
                    {
                        "encounter_id": s.encounter_id,
                        "phase": s.controller.phase.value,
                        "zone_id": s.controller.context.zone_id,
                    }
                    for s in sessions
                ],
                "count": len(sessions),
            }
        )

    @router.get("/encounters/{encounter_id}", response_model=EncounterStatus)
    async def get_encounter(encounter_id: str):
        """Get the snapshot and recorded events of one encounter."""
        session = await _get_session(encounter_id)
        return session.status()

    @router.post("/encounters/{encounter_id}/tick", response_model=EncounterStatus)
    async def tick_encounter(encounter_id: str, request: TickRequest):
        """Apply inputs and advance the encounter by ``ticks`` steps of ``dt``."""
        session = await _get_session(encounter_id)
        try:
            session.apply(request)
        except AnglerError as e:
            raise HTTPException(status_code=400, detail=str(e))
        return session.status()

    @router.post("/encounters/{encounter_id}/phase", response_model=EncounterStatus)
    async def force_phase(encounter_id: str, request: ForcePhaseRequest):
        """Jump an encounter straight to a named phase."""
        session = await _get_session(encounter_id)
        try:
            phase = Phase.from_name(request.phase)
            session.controller.force_transition(phase)
        except (ValueError, AnglerError) as e:
            raise HTTPException(status_code=400, detail=str(e))
        logger.info("Encounter %s forced to %s", encounter_id, phase.value)
        return session.status()

    @router.post("/encounters/{encounter_id}/reset", response_model=EncounterStatus)
    async def reset_encounter(encounter_id: str):
        """Abort the current attempt and return to Idle."""
        session = await _get_session(encounter_id)
        session.controller.reset_to_idle()
        return session.status()

    @router.delete("/encounters/{encounter_id}")
    async def delete_encounter(encounter_id: str):
        """Remove an encounter."""
        if not await registry.remove(encounter_id):
            raise HTTPException(status_code=404, detail=f"Encounter not found: {encounter_id}")
        return JSONResponse({"encounter_id": encounter_id, "deleted": True})

    return router
