# src/taskdesk/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds the TaskWorkspace, restores a saved session
(if any) and runs the console REPL until /exit or EOF.
"""

from __future__ import annotations

import asyncio
import logging

from ..cli.bootstrap import create_workspace
from ..config import get_settings
from ..connectors.console_connector import run_console_loop
from ..logging_setup import setup_logging

logger = logging.getLogger(__name__)


async def _run(settings) -> None:
    ws, client = create_workspace(settings=settings)
    try:
        if await ws.mount():
            logger.info("Resumed saved session.")
        await run_console_loop(ws, app_name=settings.app_name)
    finally:
        await client.aclose()


def main() -> None:
    settings = get_settings()

    level_name = str(getattr(settings, "log_level", "INFO")).upper()
    file_level = getattr(logging, level_name, logging.INFO)

    # Console shows warnings only; the REPL output is the UI.
    setup_logging(log_dir=settings.data_dir, console_level=logging.WARNING, file_level=file_level)

    logger.info("Starting %s (api=%s)...", settings.app_name, settings.api_base_url)

    try:
        asyncio.run(_run(settings))
    except KeyboardInterrupt:
        logger.info("Interrupted.")
    logger.info("Bye.")


if __name__ == "__main__":
    main()
