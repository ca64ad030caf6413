# src/taskdesk/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The session manager and task list depend on Protocols instead of the concrete
httpx-backed gateways and the JSON file store, so tests can plug in fakes.
"""

from typing import Any, Protocol

from ..tasks.task_models import Task, UserProfile


class KeyValueStore(Protocol):
    """Persistent string storage that outlives the process (token persistence)."""

    def get_item(self, key: str) -> str | None: ...
    def set_item(self, key: str, value: str) -> None: ...
    def remove_item(self, key: str) -> None: ...


class Credential(Protocol):
    """The credential attached to every outgoing request once set."""

    def attach(self, token: str) -> None: ...
    def detach(self) -> None: ...


class AuthGateway(Protocol):
    async def register(self, *, name: str, username: str, password: str) -> str: ...
    async def login(self, *, username: str, password: str) -> str: ...
    async def profile(self) -> UserProfile: ...


class TaskGateway(Protocol):
    async def list_tasks(self) -> list[Task]: ...
    async def create_task(self, *, title: str, description: str) -> Task: ...
    async def update_task(self, task_id: str, fields: dict[str, Any]) -> Task: ...
    async def delete_task(self, task_id: str) -> None: ...
