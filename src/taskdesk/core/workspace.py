# src/taskdesk/core/workspace.py

"""
Task Workspace: the single owner of client state.

Connectors (the console REPL, tests) talk to this object only:
- mount() restores a persisted session and loads tasks,
- submit_auth() logs in or registers from the auth form,
- logout() wipes the session and the cached tasks,
- task operations live on `tasks` (TaskList).

Every transition into Authenticated triggers exactly one load_tasks().
"""

from __future__ import annotations

import logging

from ..session.manager import SessionManager
from ..tasks.task_list import TaskList
from ..tasks.task_models import UserProfile
from .state import AuthForm
from .status import UiStatus

logger = logging.getLogger(__name__)

MISSING_FIELDS = "Please fill out all required fields"


class TaskWorkspace:
    def __init__(self, *, session: SessionManager, tasks: TaskList, status: UiStatus) -> None:
        self.session = session
        self.tasks = tasks
        self.status = status
        self.auth_form = AuthForm()

    @property
    def is_authenticated(self) -> bool:
        return self.session.is_authenticated

    @property
    def user(self) -> UserProfile | None:
        return self.session.user

    async def mount(self) -> bool:
        if await self.session.restore_session():
            await self.tasks.load_tasks()
            return True
        return False

    def toggle_auth_mode(self) -> bool:
        """Switch between login and register; clears the error. Returns is_login."""
        self.auth_form.is_login = not self.auth_form.is_login
        self.status.clear_error()
        return self.auth_form.is_login

    def set_auth_mode(self, *, is_login: bool) -> None:
        if self.auth_form.is_login != is_login:
            self.toggle_auth_mode()

    async def submit_auth(self) -> bool:
        """Log in or register from the auth form. Refused while a session is active (use logout first)."""
        if self.is_authenticated:
            logger.debug("Auth form submitted while logged in; ignored")
            return False

        form = self.auth_form
        missing = form.missing_fields()
        if missing:
            logger.debug("Auth form rejected, missing: %s", ", ".join(missing))
            self.status.fail(MISSING_FIELDS)
            return False

        if form.is_login:
            ok = await self.session.login(form.username, form.password)
        else:
            ok = await self.session.register(form.name, form.username, form.password)

        if not ok:
            return False

        form.clear()
        await self.tasks.load_tasks()
        return True

    async def login(self, username: str, password: str) -> bool:
        if self.is_authenticated:
            return False
        self.set_auth_mode(is_login=True)
        self.auth_form.username = username
        self.auth_form.password = password
        return await self.submit_auth()

    async def register(self, name: str, username: str, password: str) -> bool:
        if self.is_authenticated:
            return False
        self.set_auth_mode(is_login=False)
        self.auth_form.name = name
        self.auth_form.username = username
        self.auth_form.password = password
        return await self.submit_auth()

    def logout(self) -> None:
        self.session.logout()
        self.tasks.reset()
