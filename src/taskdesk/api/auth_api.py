# src/taskdesk/api/auth_api.py

from __future__ import annotations

from typing import Any

from ..tasks.task_models import UserProfile
from .client import ApiClient, ApiError


def _token_from(body: Any) -> str:
    token = body.get("token") if isinstance(body, dict) else None
    if not isinstance(token, str) or not token:
        raise ApiError("auth response carries no token")
    return token


class AuthApi:
    """Auth Gateway endpoints (/api/users...)."""

    def __init__(self, client: ApiClient) -> None:
        self._client = client

    async def register(self, *, name: str, username: str, password: str) -> str:
        body = await self._client.post(
            "/api/users",
            {"name": name, "username": username, "password": password},
            anonymous=True,
        )
        return _token_from(body)

    async def login(self, *, username: str, password: str) -> str:
        body = await self._client.post(
            "/api/users/login",
            {"username": username, "password": password},
            anonymous=True,
        )
        return _token_from(body)

    async def profile(self) -> UserProfile:
        body = await self._client.get("/api/users/profile")
        try:
            return UserProfile.from_api(body)
        except ValueError as e:
            raise ApiError(f"malformed profile: {e}") from e
