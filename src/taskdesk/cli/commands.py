# src/taskdesk/cli/commands.py

from __future__ import annotations

import inspect
import logging
from collections.abc import Awaitable, Callable
from typing import cast

from ..core.state import NotAuthenticatedError
from ..core.workspace import TaskWorkspace
from ..tasks.task_models import Task
from .view import render_workspace

CommandEmitter = Callable[[str], None]
CommandHandler2 = Callable[[TaskWorkspace, list[str]], Awaitable[str]]
CommandHandler3 = Callable[[TaskWorkspace, list[str], CommandEmitter | None], Awaitable[str]]
CommandHandler = CommandHandler2 | CommandHandler3

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Simple slash-command registry used by the console connector (/help, /add, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    async def handle(
        self,
        ws: TaskWorkspace,
        line: str,
        emit: CommandEmitter | None = None,
    ) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        try:
            nparams = len(inspect.signature(handler).parameters)
        except (TypeError, ValueError):
            nparams = 3

        try:
            if nparams >= 3:
                h3 = cast(CommandHandler3, handler)
                return await h3(ws, args, emit)
            h2 = cast(CommandHandler2, handler)
            return await h2(ws, args)
        except NotAuthenticatedError:
            return "Not logged in. Use /login or /register first."

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


def _pick(ws: TaskWorkspace, args: list[str]) -> Task | str:
    """Resolve a 1-based list position into a task, or return a usage/error reply."""
    if not args:
        return "Give the task number from /list."
    try:
        n = int(args[0])
    except ValueError:
        return f"Not a task number: {args[0]}"
    if not 1 <= n <= len(ws.tasks.tasks):
        return f"No task #{n}. Use /list to see your tasks."
    return ws.tasks.tasks[n - 1]


def _after(ws: TaskWorkspace, ok: bool, done: str) -> str:
    if ok:
        return f"{done}\n{render_workspace(ws)}"
    return render_workspace(ws)


async def cmd_help(ws: TaskWorkspace, args: list[str]) -> str:
    return registry.build_help()


async def cmd_status(ws: TaskWorkspace, args: list[str]) -> str:
    user = ws.user
    who = f"{user.display_name} ({user.username})" if user else "not logged in"
    mode = "login" if ws.auth_form.is_login else "register"
    return (
        "Status:\n"
        f"  User: {who}\n"
        f"  Auth mode: {mode}\n"
        f"  Tasks cached: {len(ws.tasks.tasks)}\n"
        f"  Sort: {ws.tasks.sort_direction.value}\n"
        f"  Error: {ws.status.error or '-'}"
    )


async def cmd_login(ws: TaskWorkspace, args: list[str], emit: CommandEmitter | None = None) -> str:
    """/login <username> <password>"""
    if ws.is_authenticated:
        return "Already logged in. Use /logout first."
    # Arguments are whitespace-split, so a password with spaces cannot be typed here.
    if len(args) != 2:
        return "Usage: /login <username> <password> (password without spaces)"
    if emit:
        emit("Processing...")
    await ws.login(args[0], args[1])
    return render_workspace(ws)


async def cmd_register(ws: TaskWorkspace, args: list[str], emit: CommandEmitter | None = None) -> str:
    """/register <username> <password> <name...>"""
    if ws.is_authenticated:
        return "Already logged in. Use /logout first."
    if len(args) < 3:
        return "Usage: /register <username> <password> <name>"
    if emit:
        emit("Processing...")
    await ws.register(" ".join(args[2:]), args[0], args[1])
    return render_workspace(ws)


async def cmd_mode(ws: TaskWorkspace, args: list[str]) -> str:
    if ws.is_authenticated:
        return "Already logged in."
    ws.toggle_auth_mode()
    return render_workspace(ws)


async def cmd_logout(ws: TaskWorkspace, args: list[str]) -> str:
    if not ws.is_authenticated:
        return "Not logged in."
    ws.logout()
    return render_workspace(ws)


async def cmd_list(ws: TaskWorkspace, args: list[str]) -> str:
    """/list        -> show cached tasks
    /list fresh  -> reload from the server first
    """
    if args and args[0].lower() in ("fresh", "reload"):
        await ws.tasks.load_tasks()
    return render_workspace(ws)


async def cmd_add(ws: TaskWorkspace, args: list[str], emit: CommandEmitter | None = None) -> str:
    """/add <title> [| <description>]"""
    text = " ".join(args)
    title, _, description = text.partition("|")
    ws.tasks.form.title = title.strip()
    ws.tasks.form.description = description.strip()
    if not ws.tasks.form.title:
        return "Usage: /add <title> [| <description>]"
    if emit:
        emit("Adding...")
    ok = await ws.tasks.add_task()
    return _after(ws, ok, "Added.")


async def cmd_rm(ws: TaskWorkspace, args: list[str]) -> str:
    picked = _pick(ws, args)
    if isinstance(picked, str):
        return picked
    ok = await ws.tasks.delete_task(picked.id)
    return _after(ws, ok, "Deleted.")


async def cmd_done(ws: TaskWorkspace, args: list[str]) -> str:
    picked = _pick(ws, args)
    if isinstance(picked, str):
        return picked
    ok = await ws.tasks.toggle_complete(picked.id)
    return _after(ws, ok, "Updated.")


async def cmd_edit(ws: TaskWorkspace, args: list[str]) -> str:
    picked = _pick(ws, args)
    if isinstance(picked, str):
        return picked
    ws.tasks.begin_edit(picked)
    return render_workspace(ws)


async def cmd_title(ws: TaskWorkspace, args: list[str]) -> str:
    draft = ws.tasks.draft
    if draft is None:
        return "No edit in progress. Use /edit <n> first."
    draft.title = " ".join(args)
    return render_workspace(ws)


async def cmd_desc(ws: TaskWorkspace, args: list[str]) -> str:
    draft = ws.tasks.draft
    if draft is None:
        return "No edit in progress. Use /edit <n> first."
    draft.description = " ".join(args)
    return render_workspace(ws)


async def cmd_save(ws: TaskWorkspace, args: list[str]) -> str:
    draft = ws.tasks.draft
    if draft is None:
        return "No edit in progress. Use /edit <n> first."
    if not draft.title.strip():
        return "Title cannot be empty. Use /title <text>."
    ok = await ws.tasks.save_edit()
    return _after(ws, ok, "Saved.")


async def cmd_cancel(ws: TaskWorkspace, args: list[str]) -> str:
    ws.tasks.cancel_edit()
    return render_workspace(ws)


async def cmd_sort(ws: TaskWorkspace, args: list[str]) -> str:
    ws.tasks.sort_by_date()
    return render_workspace(ws)


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("status", cmd_status, help_text="Show session and list status.")
registry.register("login", cmd_login, help_text="Log in: /login <username> <password> (password without spaces).")
registry.register("register", cmd_register, help_text="Create an account: /register <username> <password> <name>.")
registry.register("mode", cmd_mode, help_text="Switch between the login and register forms.")
registry.register("logout", cmd_logout, help_text="Log out and forget the saved session.")
registry.register("list", cmd_list, help_text="Show tasks (/list fresh reloads from the server).", aliases=["ls"])
registry.register("add", cmd_add, help_text="Add a task: /add <title> [| <description>].")
registry.register("rm", cmd_rm, help_text="Delete a task: /rm <n>.", aliases=["del"])
registry.register("done", cmd_done, help_text="Toggle complete: /done <n>.", aliases=["undo"])
registry.register("edit", cmd_edit, help_text="Start editing a task: /edit <n>.")
registry.register("title", cmd_title, help_text="Set the draft title: /title <text>.")
registry.register("desc", cmd_desc, help_text="Set the draft description: /desc <text>.")
registry.register("save", cmd_save, help_text="Save the open edit.")
registry.register("cancel", cmd_cancel, help_text="Discard the open edit.")
registry.register("sort", cmd_sort, help_text="Sort by creation date (toggles direction).")
