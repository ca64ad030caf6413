# tests/test_workspace.py

"""End-to-end flows through TaskWorkspace against the fake service."""

from __future__ import annotations

import pytest

from taskdesk.cli.bootstrap import create_workspace
from taskdesk.core.workspace import TaskWorkspace
from taskdesk.session.manager import TOKEN_KEY
from taskdesk.storage.local_store import LocalStore

from .fakes import FakeTaskServer


@pytest.mark.asyncio
async def test_alice_logs_in_and_sees_her_tasks(
    workspace: TaskWorkspace, server: FakeTaskServer, store: LocalStore
) -> None:
    server.add_user("alice", "secret", name="Alice")
    server.add_task("alice", "Existing task")
    server.add_user("mallory", "x")
    server.add_task("mallory", "Not yours")

    workspace.auth_form.username = "alice"
    workspace.auth_form.password = "secret"
    assert await workspace.submit_auth() is True

    assert workspace.is_authenticated
    assert store.get_item(TOKEN_KEY)
    assert [t.title for t in workspace.tasks.tasks] == ["Existing task"]
    assert len(server.calls("GET", "/api/tasks")) == 1


@pytest.mark.asyncio
async def test_buy_milk_on_an_empty_list(workspace: TaskWorkspace, server: FakeTaskServer) -> None:
    server.add_user("alice", "secret")
    await workspace.login("alice", "secret")
    assert workspace.tasks.tasks == []

    await workspace.tasks.add_task("Buy milk", "2%")

    [task] = workspace.tasks.tasks
    assert (task.title, task.description, task.completed) == ("Buy milk", "2%", False)
    assert task.raw == server.tasks[task.id]


@pytest.mark.asyncio
async def test_session_survives_a_restart(settings, server: FakeTaskServer) -> None:
    server.add_user("alice", "secret")
    first, client = create_workspace(settings=settings, transport=server.transport())
    await first.login("alice", "secret")
    await first.tasks.add_task("persisted on the server", "")
    await client.aclose()

    second, client = create_workspace(settings=settings, transport=server.transport())
    assert await second.mount() is True
    assert [t.title for t in second.tasks.tasks] == ["persisted on the server"]

    second.logout()
    await client.aclose()

    third, client = create_workspace(settings=settings, transport=server.transport())
    assert await third.mount() is False
    await client.aclose()


@pytest.mark.asyncio
async def test_token_revoked_between_runs_shows_login_without_error(
    workspace: TaskWorkspace, server: FakeTaskServer, alice_token: str
) -> None:
    del server.tokens[alice_token]

    assert await workspace.mount() is False

    assert not workspace.is_authenticated
    assert workspace.status.error is None
    assert workspace.auth_form.is_login is True
