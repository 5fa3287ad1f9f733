"""FastAPI backend application entry point.

This module builds the application with the factory and serves as the
entry point for uvicorn.
"""
import os

import uvicorn

from backend.app_factory import DEFAULT_API_PORT, create_app

# Module-level app picked up by "uvicorn backend.main:app"
app = create_app()


def main() -> None:
    """Run the application using uvicorn when executed directly."""
    port = int(os.getenv("ANGLER_API_PORT", str(DEFAULT_API_PORT)))
    is_production = os.getenv("PRODUCTION", "false").lower() == "true"

    uvicorn.run(
        "backend.main:app",
        host="0.0.0.0",
        port=port,
        reload=not is_production,
        log_level="info",
    )


if __name__ == "__main__":
    main()
