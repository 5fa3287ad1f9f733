"""Application factory and context for the Angler encounter API.

This module provides a factory for creating the FastAPI app, avoiding
import-time side effects. Runtime state lives in an AppContext instead of
module-level globals, so each test can build its own app with a fresh
registry.

Usage:
------
    # For production (settings from environment)
    app = create_app()

    # For testing (custom configuration)
    app = create_app(server_id="test-server", production_mode=False)
"""

import logging
import os
import time
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from typing import List, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from angler.fishing.species import FishDescriptor, default_species_catalog, load_species_catalog
from backend import __version__
from backend.logging_config import configure_logging
from backend.session_registry import EncounterRegistry

DEFAULT_API_PORT = 8000


def _load_species() -> List[FishDescriptor]:
    path = os.getenv("ANGLER_SPECIES_FILE")
    if path:
        return load_species_catalog(path)
    return default_species_catalog()


@dataclass
class AppContext:
    """Runtime context holding all application state."""

    registry: EncounterRegistry = field(
        default_factory=lambda: EncounterRegistry(species=_load_species())
    )

    # Configuration
    server_id: str = field(default_factory=lambda: os.getenv("ANGLER_SERVER_ID", "local-server"))
    server_version: str = __version__
    api_port: int = field(
        default_factory=lambda: int(os.getenv("ANGLER_API_PORT", str(DEFAULT_API_PORT)))
    )
    production_mode: bool = field(
        default_factory=lambda: os.getenv("PRODUCTION", "false").lower() == "true"
    )
    allowed_origins: list = field(
        default_factory=lambda: os.getenv("ALLOWED_ORIGINS", "*").split(",")
    )

    server_start_time: float = field(default_factory=time.time)
    logger: logging.Logger = field(default_factory=lambda: logging.getLogger("angler.backend"))

    def get_server_info(self) -> dict:
        """Basic information about this server."""
        return {
            "server_id": self.server_id,
            "version": self.server_version,
            "port": self.api_port,
            "uptime_seconds": time.time() - self.server_start_time,
            "encounter_count": self.registry.session_count,
            "species_count": len(self.registry.species),
        }


def create_app(
    *,
    server_id: Optional[str] = None,
    production_mode: Optional[bool] = None,
    context: Optional[AppContext] = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        server_id: Override server ID (default: from ANGLER_SERVER_ID env var)
        production_mode: Override production mode (default: from PRODUCTION env var)
        context: Pre-configured AppContext (for testing). If None, creates a new one.

    Returns:
        Configured FastAPI application with context attached as app.state.context
    """
    logger = configure_logging(extra_loggers=("backend",))

    if context is None:
        context = AppContext()

    if server_id is not None:
        context.server_id = server_id
    if production_mode is not None:
        context.production_mode = production_mode

    context.logger = logger

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Lifespan context manager for startup and shutdown."""
        ctx = app.state.context
        ctx.logger.info("Setting up API routers...")
        _setup_routers(app, ctx)
        ctx.logger.info("LIFESPAN: Startup complete (server %s)", ctx.server_id)
        yield
        ctx.logger.info("LIFESPAN: Shutting down with %d live encounters", ctx.registry.session_count)

    app = FastAPI(
        title="Angler Encounter API",
        version=context.server_version,
        lifespan=lifespan,
        docs_url=None if context.production_mode else "/docs",
        redoc_url=None if context.production_mode else "/redoc",
    )

    app.state.context = context

    app.add_middleware(
        CORSMiddleware,
        allow_origins=context.allowed_origins if context.production_mode else ["*"],
        allow_credentials=True,
        allow_methods=["GET", "POST", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )

    return app


def _setup_routers(app: FastAPI, ctx: AppContext) -> None:
    """Setup and include all API routers."""
    from backend.routers.encounters import setup_encounters_router

    app.include_router(setup_encounters_router(ctx.registry))

    @app.get("/api/server", tags=["server"])
    async def server_info():
        return ctx.get_server_info()

    ctx.logger.info("All API routers configured successfully")
