# src/taskboard/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds the task API and the board, then runs the
console on an asyncio event loop.
"""

from __future__ import annotations

import asyncio
import logging

from ..cli.bootstrap import create_board, create_task_api
from ..config import Settings, get_settings
from ..connectors.console_connector import console_alert, console_confirm, run_console_loop
from ..logging_setup import setup_logging

logger = logging.getLogger(__name__)


async def run_app(settings: Settings) -> None:
    api = create_task_api(settings)
    board = create_board(
        confirm=console_confirm,
        alert=console_alert,
        settings=settings,
        api=api,
    )
    try:
        await run_console_loop(board, app_title=settings.app_name)
    finally:
        if api is not None:
            await api.aclose()


def main() -> None:
    settings = get_settings()

    level_name = str(getattr(settings, "log_level", "WARNING")).upper()
    console_level = getattr(logging, level_name, logging.WARNING)
    log_file = setup_logging(log_dir=settings.data_dir, console_level=console_level)

    # keep the HTTP client quiet in the log file too
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)

    logger.info("Starting %s... (log file: %s)", settings.app_name, log_file)

    try:
        asyncio.run(run_app(settings))
    except KeyboardInterrupt:
        logger.info("KeyboardInterrupt, exiting.")
        print()
    finally:
        logger.info("Bye.")


if __name__ == "__main__":
    main()
