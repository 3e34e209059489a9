# src/taskly/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState, then runs the console REPL.
The list is hydrated when the user leaves the landing screen (/start)
or on the first list command, never before.
"""

from __future__ import annotations

import logging

from ..cli.bootstrap import create_initial_state
from ..config import get_settings
from ..connectors.console_connector import run_console_loop
from ..logging_setup import resolve_level, setup_logging

logger = logging.getLogger(__name__)


def main() -> None:
    settings = get_settings()

    console_level = resolve_level(getattr(settings, "log_level", "INFO"))

    log_dir = getattr(settings, "data_dir", ".local/taskly")
    log_file = setup_logging(log_dir=log_dir, console_level=console_level)

    logger.info("Starting %s (log file: %s)...", settings.app_name, log_file)

    state = create_initial_state(settings=settings)
    try:
        run_console_loop(state)
    finally:
        state.list_view.close()
        logger.info("Bye.")


if __name__ == "__main__":
    main()
