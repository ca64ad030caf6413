# tests/test_api_client.py

from __future__ import annotations

import httpx
import pytest

from taskdesk.api.auth_api import AuthApi
from taskdesk.api.client import ApiClient, ApiError
from taskdesk.api.task_api import TaskApi

from .fakes import FakeTaskServer


def _client(server: FakeTaskServer) -> ApiClient:
    return ApiClient(base_url="http://tasks.test", transport=server.transport())


@pytest.mark.asyncio
async def test_bearer_header_follows_the_session_context(server: FakeTaskServer) -> None:
    token = server.add_user("alice", "secret")
    client = _client(server)
    tasks = TaskApi(client)

    with pytest.raises(ApiError) as anon:
        await tasks.list_tasks()
    assert anon.value.status_code == 401
    assert server.requests[-1].authorization is None

    client.context.attach(token)
    assert await tasks.list_tasks() == []
    assert server.requests[-1].authorization == f"Bearer {token}"

    client.context.detach()
    with pytest.raises(ApiError):
        await tasks.list_tasks()
    assert server.requests[-1].authorization is None

    await client.aclose()


@pytest.mark.asyncio
async def test_login_never_sends_the_credential(server: FakeTaskServer) -> None:
    server.add_user("alice", "secret")
    client = _client(server)
    client.context.attach("stale-token")

    token = await AuthApi(client).login(username="alice", password="secret")

    assert token
    assert server.calls("POST", "/api/users/login")[0].authorization is None
    await client.aclose()


@pytest.mark.asyncio
async def test_error_carries_server_message(server: FakeTaskServer) -> None:
    client = _client(server)

    with pytest.raises(ApiError) as err:
        await AuthApi(client).login(username="nobody", password="x")

    assert err.value.status_code == 401
    assert err.value.server_message == "Invalid username or password"
    await client.aclose()


@pytest.mark.asyncio
async def test_transport_failure_maps_to_api_error() -> None:
    def boom(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    client = ApiClient(base_url="http://tasks.test", transport=httpx.MockTransport(boom))

    with pytest.raises(ApiError) as err:
        await client.get("/api/tasks")

    assert err.value.status_code is None
    assert err.value.server_message is None
    assert isinstance(err.value.__cause__, httpx.ConnectError)
    await client.aclose()


@pytest.mark.asyncio
async def test_auth_response_without_token_is_an_error() -> None:
    def no_token(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"username": "alice"})

    client = ApiClient(base_url="http://tasks.test", transport=httpx.MockTransport(no_token))

    with pytest.raises(ApiError):
        await AuthApi(client).login(username="alice", password="secret")
    await client.aclose()

