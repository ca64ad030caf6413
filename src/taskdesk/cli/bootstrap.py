# src/taskdesk/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- wires the HTTP client, gateways, token store and state into a TaskWorkspace.
"""

from __future__ import annotations

import logging

import httpx

from ..api.auth_api import AuthApi
from ..api.client import ApiClient
from ..api.task_api import TaskApi
from ..config import get_settings
from ..core.status import UiStatus
from ..core.workspace import TaskWorkspace
from ..session.manager import SessionManager
from ..storage.local_store import LocalStore
from ..tasks.task_list import TaskList

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.storage_path.parent.mkdir(parents=True, exist_ok=True)


def create_workspace(
    *,
    settings=None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> tuple[TaskWorkspace, ApiClient]:
    """
    Build a TaskWorkspace from the provided settings.

    Returns the workspace together with the ApiClient so the caller owns the
    client's lifetime (await client.aclose() on shutdown). `transport` lets
    tests route requests to an in-process fake server.
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    client = ApiClient.from_settings(settings, transport=transport)
    status = UiStatus()

    session = SessionManager(
        auth=AuthApi(client),
        store=LocalStore(settings.storage_path),
        credential=client.context,
        status=status,
    )
    tasks = TaskList(
        api=TaskApi(client),
        status=status,
        is_authenticated=lambda: session.is_authenticated,
    )

    logger.debug("Workspace wired (api=%s, storage=%s)", settings.api_base_url, settings.storage_path)
    return TaskWorkspace(session=session, tasks=tasks, status=status), client
