# src/taskkeeper/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState, then runs the console menu in the main thread.
"""

from __future__ import annotations

import logging

from ..cli.bootstrap import create_initial_state
from ..config import get_settings
from ..connectors.console_connector import run_console_loop
from ..logging_setup import level_from_name, setup_logging

logger = logging.getLogger(__name__)


def main() -> None:
    settings = get_settings()

    console_level = level_from_name(settings.log_level, logging.WARNING)
    try:
        setup_logging(
            log_dir=settings.data_dir,
            console_level=console_level,
            log_to_file=settings.log_file_enabled,
        )
    except OSError:
        # Unwritable data dir: keep console logging only.
        setup_logging(console_level=console_level, log_to_file=False)
        logger.warning("File logging disabled: cannot write under %s", settings.data_dir)

    logger.info("Starting %s...", settings.app_name)

    state = create_initial_state(settings=settings)
    run_console_loop(state)

    logger.info("Bye.")


if __name__ == "__main__":
    main()
