"""Command line entry point for the HealthPlanet to Fitbit sync."""
from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from .credentials.application import PersistenceError
from .credentials.infrastructure import create_env_file_credential_store
from .healthplanet.application import HealthPlanetError
from .settings import ConfigError, load_settings
from .sync import SyncAbortedError
from .wiring import provide_sync_runtime

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_TOKENS_NOT_SAVED = 2


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Copy HealthPlanet weight and body fat readings into Fitbit.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument(
        "--env-file",
        default=".env",
        help="Dotenv file holding credentials; rotated Fitbit tokens are written back to it",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="INFO",
        help="Logging level",
    )
    return parser.parse_args(argv)


def setup_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        force=True,
    )
    # Request lines carry the HealthPlanet access token as a query parameter.
    logging.getLogger("httpx").setLevel(logging.WARNING)


def run(argv: Optional[List[str]] = None) -> int:
    """Run one sync and return the process exit code."""

    args = parse_args(argv)
    setup_logging(args.log_level)

    store = create_env_file_credential_store(args.env_file)
    try:
        settings = load_settings(store)
    except ConfigError as exc:
        logger.error("%s", exc)
        return EXIT_FAILED

    exit_code = EXIT_OK
    with provide_sync_runtime(settings, store) as runtime:
        try:
            runtime.coordinator.run()
        except SyncAbortedError as exc:
            logger.error("Sync aborted: %s", exc)
            exit_code = EXIT_FAILED
        except HealthPlanetError as exc:
            logger.error("Sync failed: %s", exc)
            exit_code = EXIT_FAILED

        persistence_error: Optional[PersistenceError] = (
            runtime.token_manager.persistence_error
        )

    if persistence_error is not None:
        logger.error(
            "Rotated Fitbit tokens were not saved to %s; update "
            "FITBIT_REFRESH_TOKEN before the next run",
            args.env_file,
        )
        if exit_code == EXIT_OK:
            exit_code = EXIT_TOKENS_NOT_SAVED
    return exit_code


def main() -> None:
    try:
        sys.exit(run())
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        sys.exit(130)


if __name__ == "__main__":
    main()
