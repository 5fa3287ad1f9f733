"""Main entry point for the Angler encounter engine.

This module provides command-line options to run the engine:
- Web mode (default): FastAPI backend hosting encounter sessions
- Headless mode: one scripted encounter, faster than realtime
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

import orjson

from angler.exceptions import AnglerError
from backend.logging_config import configure_logging

logger = logging.getLogger(__name__)

SEPARATOR_WIDTH = 60


def run_web_server(port: int) -> None:
    """Run the encounter API with uvicorn."""
    import uvicorn

    from backend.main import app

    logger.info("=" * SEPARATOR_WIDTH)
    logger.info("ANGLER ENCOUNTER API")
    logger.info("=" * SEPARATOR_WIDTH)
    logger.info("API docs available at http://localhost:%d/docs", port)
    logger.info("Press Ctrl+C to stop the server")
    logger.info("=" * SEPARATOR_WIDTH)

    uvicorn.run(app, host="0.0.0.0", port=port)


def run_headless(
    *,
    seed: Optional[int],
    dt: float,
    max_ticks: int,
    species_file: Optional[str] = None,
    config_file: Optional[str] = None,
    export: Optional[str] = None,
) -> dict:
    """Play one scripted encounter and report the outcome.

    Args:
        seed: Optional random seed for a reproducible run
        dt: Seconds per tick
        max_ticks: Give up after this many ticks
        species_file: Optional JSON species catalog (built-in species otherwise)
        config_file: Optional JSON file of per-phase tuning overrides
        export: Optional filename to write the result as JSON

    Returns:
        The result payload that was logged and exported.
    """
    from angler.config.encounter_config import EncounterConfig
    from angler.fishing.autopilot import ScriptedAngler
    from angler.fishing.controller import EncounterController
    from angler.fishing.species import default_species_catalog, load_species_catalog

    species = load_species_catalog(species_file) if species_file else default_species_catalog()
    config = EncounterConfig.load(config_file) if config_file else EncounterConfig()

    controller = EncounterController(seed=seed, config=config, available_fish=species)
    angler = ScriptedAngler(controller)
    summary = angler.run(dt, max_ticks)

    logger.info(
        "Encounter finished: outcome=%s fish=%s reason=%s after %d ticks (%.1fs, %d casts)",
        summary.outcome,
        summary.fish_id,
        summary.lost_reason,
        summary.ticks,
        summary.elapsed,
        summary.casts,
    )

    payload = {
        "seed": seed,
        "dt": dt,
        "summary": summary.to_dict(),
        "final_state": controller.snapshot(),
        "config": config.to_dict(),
    }
    if export:
        Path(export).write_bytes(orjson.dumps(payload, option=orjson.OPT_INDENT_2))
        logger.info("Result exported to %s", export)
    return payload


def main(argv: Optional[list] = None) -> int:
    """Parse command-line arguments and run the appropriate mode."""
    parser = argparse.ArgumentParser(
        description="Angler fishing encounter engine",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Run web server (default)
  python main.py

  # Play one scripted encounter
  python main.py --headless --seed 42

  # Custom species and tuning, exported for inspection
  python main.py --headless --seed 7 --species-file species.json --config tuning.json --export run.json
        """,
    )
    parser.add_argument(
        "--headless", action="store_true", help="Play one scripted encounter instead of serving"
    )
    parser.add_argument(
        "--seed", type=int, default=None, help="Random seed for deterministic behavior (optional)"
    )
    parser.add_argument(
        "--dt", type=float, default=1.0 / 30.0, help="Seconds per tick (default: 1/30)"
    )
    parser.add_argument(
        "--max-ticks",
        type=int,
        default=20000,
        help="Maximum ticks in headless mode (default: 20000)",
    )
    parser.add_argument(
        "--species-file", type=str, default=None, metavar="FILENAME", help="JSON species catalog"
    )
    parser.add_argument(
        "--config", type=str, default=None, metavar="FILENAME", help="JSON phase tuning overrides"
    )
    parser.add_argument(
        "--export", type=str, default=None, metavar="FILENAME", help="Write the result as JSON"
    )
    parser.add_argument("--port", type=int, default=8000, help="Web server port (default: 8000)")
    parser.add_argument("--log-level", type=str, default=None, help="Override ANGLER_LOG_LEVEL")

    args = parser.parse_args(argv)
    configure_logging(level=args.log_level, headless=args.headless)

    if args.dt <= 0:
        parser.error("--dt must be positive")

    if args.headless:
        try:
            run_headless(
                seed=args.seed,
                dt=args.dt,
                max_ticks=args.max_ticks,
                species_file=args.species_file,
                config_file=args.config,
                export=args.export,
            )
        except AnglerError as e:
            logger.error("Headless run failed: %s", e)
            return 1
    else:
        run_web_server(args.port)
    return 0


if __name__ == "__main__":
    sys.exit(main())
