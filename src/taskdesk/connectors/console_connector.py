# src/taskdesk/connectors/console_connector.py

from __future__ import annotations

import asyncio
import logging
from datetime import datetime

from ..cli.commands import registry as command_registry
from ..cli.view import render_workspace
from ..core.workspace import TaskWorkspace

logger = logging.getLogger(__name__)


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


def _print_ts(text: str) -> None:
    print(f"[{_ts_local()}] {text}")


async def run_console_loop(ws: TaskWorkspace, *, app_name: str = "taskdesk") -> None:
    """
    Interactive REPL: one slash command per line, one workspace operation per command.

    input() runs in a worker thread so the event loop (and the HTTP client bound
    to it) stays on the main thread.
    """
    logger.info("Console connector started.")
    _print_ts(f"[{app_name}] Use /help for commands. Use /exit to quit.\n")
    print(render_workspace(ws))

    def emit(text: str) -> None:
        # Immediate feedback while a request is in flight.
        print(f"[{_ts_local()}] {text}", flush=True)

    while True:
        try:
            user_input = (await asyncio.to_thread(input, ">>> ")).strip()
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            print()
            break

        if not user_input:
            continue

        if user_input.lower() in ("/exit", "/quit"):
            logger.info("Console exit command received.")
            break

        if not user_input.startswith("/"):
            # Bare text is a shortcut for /add while logged in.
            user_input = f"/add {user_input}" if ws.is_authenticated else "/help"

        try:
            reply = await command_registry.handle(ws, user_input, emit=emit)
        except Exception:
            logger.exception("Command handler crashed.")
            reply = "Internal error while handling a command."

        if reply is not None:
            print(reply)
            print()

    logger.info("Console connector finished.")
