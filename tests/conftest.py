# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from taskdesk.cli.bootstrap import create_workspace
from taskdesk.core.workspace import TaskWorkspace
from taskdesk.session.manager import TOKEN_KEY
from taskdesk.storage.local_store import LocalStore

from .fakes import FakeTaskServer


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with create_workspace().

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated from the environment and any local .env.
    """
    data_dir = tmp_path / "data"
    return SimpleNamespace(
        app_name="taskdesk-test",
        log_level="DEBUG",
        api_base_url="http://tasks.test",
        request_timeout_seconds=5.0,
        data_dir=data_dir,
        storage_path=data_dir / "storage.json",
    )


@pytest.fixture()
def server() -> FakeTaskServer:
    return FakeTaskServer()


@pytest.fixture()
def store(settings: SimpleNamespace) -> LocalStore:
    """The same file-backed store the workspace reads its token from."""
    return LocalStore(settings.storage_path)


@pytest.fixture()
def workspace(settings: SimpleNamespace, server: FakeTaskServer) -> TaskWorkspace:
    """
    TaskWorkspace wired exactly like the CLI does it, but talking to FakeTaskServer.

    NOTE: the token store is the real LocalStore on tmp_path, since token
    persistence across "restarts" is part of what we test.
    """
    ws, _client = create_workspace(settings=settings, transport=server.transport())
    return ws


@pytest.fixture()
def alice_token(server: FakeTaskServer, store: LocalStore) -> str:
    """A registered user 'alice' whose valid token is already persisted."""
    token = server.add_user("alice", "secret", name="Alice")
    store.set_item(TOKEN_KEY, token)
    return token
