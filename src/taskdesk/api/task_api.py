# src/taskdesk/api/task_api.py

from __future__ import annotations

from typing import Any
from urllib.parse import quote

from ..tasks.task_models import Task
from .client import ApiClient, ApiError


def _task_from(body: Any) -> Task:
    try:
        return Task.from_api(body)
    except ValueError as e:
        raise ApiError(f"malformed task: {e}") from e


def _task_path(task_id: str) -> str:
    return f"/api/tasks/{quote(str(task_id), safe='')}"


class TaskApi:
    """Task Store endpoints (/api/tasks...). Every call carries the bearer credential."""

    def __init__(self, client: ApiClient) -> None:
        self._client = client

    async def list_tasks(self) -> list[Task]:
        body = await self._client.get("/api/tasks")
        if not isinstance(body, list):
            raise ApiError("task list response is not an array")
        return [_task_from(item) for item in body]

    async def create_task(self, *, title: str, description: str) -> Task:
        body = await self._client.post("/api/tasks", {"title": title, "description": description})
        return _task_from(body)

    async def update_task(self, task_id: str, fields: dict[str, Any]) -> Task:
        body = await self._client.put(_task_path(task_id), fields)
        return _task_from(body)

    async def delete_task(self, task_id: str) -> None:
        await self._client.delete(_task_path(task_id))
