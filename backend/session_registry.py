"""Registry of live encounter sessions.

Each session owns one ``EncounterController`` (and therefore its own context,
state machine, RNG and EventBus). Sessions never share state; the registry
only maps ids to sessions and serializes access to the map.
"""

import asyncio
import logging
import time
import uuid
from dataclasses import dataclass, field
from functools import partial
from typing import Any, Dict, List, Optional, Sequence

from angler.config.encounter_config import EncounterConfig
from angler.events.event_bus import EventBus
from angler.fishing.controller import EncounterController
from angler.fishing.species import FishDescriptor
from angler.math_utils import Vector2
from backend.models import EncounterEventData, EncounterStatus, TickRequest

logger = logging.getLogger(__name__)

# Notifications kept per session for the status payload
MAX_RECORDED_EVENTS = 200


def _record_event(events: List[EncounterEventData], event: object) -> None:
    events.append(EncounterEventData(type=type(event).__name__, data=dict(vars(event))))
    if len(events) > MAX_RECORDED_EVENTS:
        del events[: len(events) - MAX_RECORDED_EVENTS]


@dataclass
class EncounterSession:
    """One encounter exposed over the API.

    ``events`` is filled by a catch-all subscription on the controller's bus,
    made before the controller starts so the initial Idle notice is kept.
    """

    encounter_id: str
    controller: EncounterController
    events: List[EncounterEventData] = field(default_factory=list)
    created_at: float = field(default_factory=time.time)

    def apply(self, request: TickRequest) -> None:
        """Run the ticks described by ``request``."""
        controller = self.controller
        if request.lure is not None:
            controller.set_lure(
                Vector2(*request.lure.position),
                Vector2(*request.lure.velocity),
                request.lure.line_length,
            )
        controller.set_reel_held(request.reel_held)
        if request.cast:
            controller.press_cast()
        if request.slack:
            controller.press_slack()
        if request.cancel:
            controller.press_cancel()

        for _ in range(request.ticks):
            controller.tick(request.dt)

    def status(self) -> EncounterStatus:
        return EncounterStatus(
            encounter_id=self.encounter_id,
            created_at=self.created_at,
            state=self.controller.snapshot(),
            events=list(self.events),
        )


class EncounterRegistry:
    """Creates, looks up and removes encounter sessions."""

    def __init__(self, species: Optional[Sequence[FishDescriptor]] = None):
        """Initialize the registry.

        Args:
            species: Species offered to every new encounter
        """
        self._sessions: Dict[str, EncounterSession] = {}
        self._species: List[FishDescriptor] = list(species or [])
        self._lock = asyncio.Lock()
        logger.info("EncounterRegistry initialized with %d species", len(self._species))

    @property
    def species(self) -> List[FishDescriptor]:
        return list(self._species)

    @property
    def session_count(self) -> int:
        return len(self._sessions)

    async def create(
        self,
        *,
        seed: Optional[int] = None,
        zone_id: Optional[str] = None,
        bite_probability_modifier: float = 0.0,
        config: Optional[Dict[str, Dict[str, Any]]] = None,
    ) -> EncounterSession:
        """Start a new encounter in Idle.

        Raises:
            ConfigurationError: If ``config`` contains unknown or invalid values.
        """
        encounter_config = EncounterConfig.from_dict(config)
        bus = EventBus()
        events: List[EncounterEventData] = []
        bus.subscribe_all(partial(_record_event, events))
        controller = EncounterController(
            seed=seed,
            event_bus=bus,
            config=encounter_config,
            available_fish=self._species,
        )
        controller.context.set_zone(zone_id or controller.context.zone_id, bite_probability_modifier)

        session = EncounterSession(
            encounter_id=str(uuid.uuid4()), controller=controller, events=events
        )
        async with self._lock:
            self._sessions[session.encounter_id] = session
        logger.info(
            "Created encounter %s (seed=%s, zone=%s)",
            session.encounter_id,
            seed,
            controller.context.zone_id,
        )
        return session

    async def get(self, encounter_id: str) -> Optional[EncounterSession]:
        async with self._lock:
            return self._sessions.get(encounter_id)

    async def list_sessions(self) -> List[EncounterSession]:
        async with self._lock:
            return list(self._sessions.values())

    async def remove(self, encounter_id: str) -> bool:
        """Remove a session.

        Returns:
            True if the session existed
        """
        async with self._lock:
            session = self._sessions.pop(encounter_id, None)
        if session is None:
            return False
        session.controller.event_bus.clear_subscribers()
        logger.info("Removed encounter %s", encounter_id)
        return True
