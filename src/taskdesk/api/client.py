# src/taskdesk/api/client.py

"""
Shared HTTP client for the task service.

- One httpx.AsyncClient per workspace (base URL + timeout from settings).
- The bearer credential lives in an explicit SessionContext; BearerAuth reads it
  at dispatch time, so attaching/detaching the token affects every later request.
- Every failure (transport or non-2xx) surfaces as ApiError.
"""

from __future__ import annotations

import logging
from collections.abc import Generator
from dataclasses import dataclass
from typing import Any

import httpx

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Request failed: transport error (status_code is None) or non-2xx response."""

    def __init__(self, message: str, *, status_code: int | None = None, server_message: str | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.server_message = server_message


def _server_message(response: httpx.Response) -> str | None:
    """Extract {"message": "..."} from an error body, if the server sent one."""
    try:
        body = response.json()
    except ValueError:
        return None
    if isinstance(body, dict):
        msg = body.get("message")
        if isinstance(msg, str) and msg.strip():
            return msg.strip()
    return None


@dataclass(slots=True)
class SessionContext:
    """The credential attached to outgoing requests (None = anonymous)."""

    token: str | None = None

    def attach(self, token: str) -> None:
        self.token = token

    def detach(self) -> None:
        self.token = None

    @property
    def has_credential(self) -> bool:
        return bool(self.token)


class BearerAuth(httpx.Auth):
    def __init__(self, context: SessionContext) -> None:
        self._context = context

    def auth_flow(self, request: httpx.Request) -> Generator[httpx.Request, httpx.Response, None]:
        token = self._context.token
        if token:
            request.headers["Authorization"] = f"Bearer {token}"
        yield request


class ApiClient:
    def __init__(
        self,
        *,
        base_url: str,
        context: SessionContext | None = None,
        timeout_seconds: float | None = 15.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.context = context if context is not None else SessionContext()
        timeout = timeout_seconds if timeout_seconds and timeout_seconds > 0 else None
        self._http = httpx.AsyncClient(
            base_url=base_url,
            auth=BearerAuth(self.context),
            timeout=timeout,
            transport=transport,
            headers={"Accept": "application/json"},
        )

    @classmethod
    def from_settings(cls, settings, *, transport: httpx.AsyncBaseTransport | None = None) -> ApiClient:
        return cls(
            base_url=str(getattr(settings, "api_base_url", "http://localhost:5000")),
            timeout_seconds=float(getattr(settings, "request_timeout_seconds", 15.0)),
            transport=transport,
        )

    async def aclose(self) -> None:
        await self._http.aclose()

    async def request(
        self,
        method: str,
        path: str,
        *,
        json: Any = None,
        anonymous: bool = False,
    ) -> Any:
        """
        Send one request and return the decoded JSON body (None for empty bodies).

        anonymous=True skips the bearer credential (login/register).
        """
        kwargs: dict[str, Any] = {}
        if json is not None:
            kwargs["json"] = json
        if anonymous:
            kwargs["auth"] = None

        try:
            response = await self._http.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            logger.debug("%s %s transport error: %r", method, path, e)
            raise ApiError(f"{method} {path} failed: {e.__class__.__name__}") from e

        if response.is_error:
            server_msg = _server_message(response)
            logger.debug("%s %s -> %s (%s)", method, path, response.status_code, server_msg)
            raise ApiError(
                f"{method} {path} -> HTTP {response.status_code}",
                status_code=response.status_code,
                server_message=server_msg,
            )

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise ApiError(
                f"{method} {path} returned a non-JSON body",
                status_code=response.status_code,
            ) from e

    async def get(self, path: str) -> Any:
        return await self.request("GET", path)

    async def post(self, path: str, payload: Any, *, anonymous: bool = False) -> Any:
        return await self.request("POST", path, json=payload, anonymous=anonymous)

    async def put(self, path: str, payload: Any) -> Any:
        return await self.request("PUT", path, json=payload)

    async def delete(self, path: str) -> Any:
        return await self.request("DELETE", path)
