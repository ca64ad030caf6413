# src/taskdesk/tasks/task_list.py

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable

from ..core.ports import TaskGateway
from ..core.state import NotAuthenticatedError, TaskForm
from ..core.status import UiStatus
from .task_models import EditDraft, SortDirection, Task, sort_tasks

logger = logging.getLogger(__name__)

FETCH_FAILED = "Failed to fetch todos"
ADD_FAILED = "Failed to add todo"
DELETE_FAILED = "Failed to delete todo"
UPDATE_FAILED = "Failed to update todo"
TOGGLE_FAILED = "Failed to update todo status"


class TaskList:
    """
    Local cache of the user's tasks, reconciled with the Task Store.

    The cache only changes after the server confirms a mutation, and then only
    with the server's own record. Mutating calls go through one lock, so a
    second call waits for the first to finish instead of racing it.
    """

    def __init__(
        self,
        *,
        api: TaskGateway,
        status: UiStatus,
        is_authenticated: Callable[[], bool],
    ) -> None:
        self._api = api
        self._status = status
        self._is_authenticated = is_authenticated
        self._lock = asyncio.Lock()

        self.tasks: list[Task] = []
        self.form = TaskForm()
        self.draft: EditDraft | None = None
        self.sort_direction = SortDirection.DESC

    def _require_auth(self) -> None:
        if not self._is_authenticated():
            raise NotAuthenticatedError("task operations require a logged-in session")

    def find(self, task_id: str) -> Task | None:
        for t in self.tasks:
            if t.id == task_id:
                return t
        return None

    def _replace(self, updated: Task) -> None:
        self.tasks = [updated if t.id == updated.id else t for t in self.tasks]

    def reset(self) -> None:
        """Forget everything user-specific (logout)."""
        self.tasks = []
        self.form.clear()
        self.draft = None

    # ---- network-backed operations ----

    async def load_tasks(self) -> bool:
        self._require_auth()
        async with self._lock:
            with self._status.track("fetch tasks", FETCH_FAILED) as outcome:
                fetched = await self._api.list_tasks()
                self.tasks = list(fetched)
                logger.info("Loaded %d tasks", len(self.tasks))
        return outcome.ok

    async def add_task(self, title: str | None = None, description: str | None = None) -> bool:
        """Create a task from the arguments, or from the task form when omitted."""
        self._require_auth()
        title = self.form.title if title is None else title
        description = self.form.description if description is None else description
        if not title.strip():
            return False

        async with self._lock:
            with self._status.track("add task", ADD_FAILED) as outcome:
                created = await self._api.create_task(title=title, description=description)
                self.tasks = [*self.tasks, created]
                self.form.clear()
                logger.info("Added task id=%s", created.id)
        return outcome.ok

    async def delete_task(self, task_id: str) -> bool:
        self._require_auth()
        async with self._lock:
            with self._status.track("delete task", DELETE_FAILED) as outcome:
                await self._api.delete_task(task_id)
                self.tasks = [t for t in self.tasks if t.id != task_id]
                logger.info("Deleted task id=%s", task_id)
        return outcome.ok

    async def save_edit(self) -> bool:
        self._require_auth()
        draft = self.draft
        if draft is None or not draft.title.strip():
            return False

        async with self._lock:
            with self._status.track("update task", UPDATE_FAILED) as outcome:
                updated = await self._api.update_task(
                    draft.target_id,
                    {"title": draft.title, "description": draft.description},
                )
                self._replace(updated)
                # A newer begin_edit() may have replaced the draft while we waited.
                if self.draft is draft:
                    self.draft = None
                logger.info("Updated task id=%s", updated.id)
        return outcome.ok

    async def toggle_complete(self, task_id: str) -> bool:
        self._require_auth()
        async with self._lock:
            current = self.find(task_id)
            if current is None:
                logger.debug("toggle_complete: id=%s is not in the local list; nothing sent", task_id)
                return False

            with self._status.track("toggle task", TOGGLE_FAILED) as outcome:
                updated = await self._api.update_task(
                    task_id,
                    current.to_payload(completed=not current.completed),
                )
                self._replace(updated)
                logger.info("Task id=%s completed=%s", updated.id, updated.completed)
        return outcome.ok

    # ---- local-only operations ----

    def begin_edit(self, task: Task) -> EditDraft:
        self._require_auth()
        if self.draft is not None and self.draft.target_id != task.id:
            logger.debug("Discarding unsaved draft for id=%s", self.draft.target_id)
        self.draft = EditDraft(target_id=task.id, title=task.title, description=task.description)
        return self.draft

    def cancel_edit(self) -> None:
        self.draft = None

    def sort_by_date(self) -> SortDirection:
        self._require_auth()
        self.sort_direction = self.sort_direction.toggled()
        self.tasks = sort_tasks(self.tasks, self.sort_direction)
        return self.sort_direction
