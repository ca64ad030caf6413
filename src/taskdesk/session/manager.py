# src/taskdesk/session/manager.py

"""
Session lifecycle: restore at startup, login/register, logout.

States: Unauthenticated -> Authenticating -> Authenticated(profile).
Any failed step while Authenticating falls back to Unauthenticated and drops
the persisted token. Restoration failures are silent; login/register failures
surface a message (server's own message preferred).
"""

from __future__ import annotations

import logging

from ..api.client import ApiError
from ..core.ports import AuthGateway, Credential, KeyValueStore
from ..core.state import Authenticated, Authenticating, SessionState, Unauthenticated
from ..core.status import UiStatus
from ..tasks.task_models import UserProfile

logger = logging.getLogger(__name__)

TOKEN_KEY = "token"
AUTH_FAILED = "Authentication failed"


def auth_failure_message(err: ApiError) -> str:
    return err.server_message or AUTH_FAILED


class SessionManager:
    def __init__(
        self,
        *,
        auth: AuthGateway,
        store: KeyValueStore,
        credential: Credential,
        status: UiStatus,
    ) -> None:
        self._auth = auth
        self._store = store
        self._credential = credential
        self._status = status
        self.state: SessionState = Unauthenticated()

    @property
    def is_authenticated(self) -> bool:
        return isinstance(self.state, Authenticated)

    @property
    def user(self) -> UserProfile | None:
        return self.state.profile if isinstance(self.state, Authenticated) else None

    def _drop_token(self) -> None:
        self._store.remove_item(TOKEN_KEY)
        self._credential.detach()

    async def restore_session(self) -> bool:
        """Re-validate a persisted token. Never writes a user-visible error."""
        token = self._store.get_item(TOKEN_KEY)
        if not token:
            logger.debug("No persisted token; starting unauthenticated")
            return False

        self._credential.attach(token)
        self.state = Authenticating()

        profile: UserProfile | None = None
        with self._status.track("restore session", None) as outcome:
            profile = await self._auth.profile()

        if not outcome.ok or profile is None:
            logger.info("Persisted token rejected; discarding it")
            self._drop_token()
            self.state = Unauthenticated()
            return False

        self.state = Authenticated(profile)
        logger.info("Session restored for %s", profile.username)
        return True

    async def login(self, username: str, password: str) -> bool:
        return await self._authenticate("login", username=username, password=password)

    async def register(self, name: str, username: str, password: str) -> bool:
        return await self._authenticate("register", name=name, username=username, password=password)

    async def _authenticate(self, mode: str, *, username: str, password: str, name: str = "") -> bool:
        self.state = Authenticating()

        profile: UserProfile | None = None
        ok = False
        try:
            with self._status.track(mode, auth_failure_message) as outcome:
                if mode == "login":
                    token = await self._auth.login(username=username, password=password)
                else:
                    token = await self._auth.register(name=name, username=username, password=password)

                self._store.set_item(TOKEN_KEY, token)
                self._credential.attach(token)
                profile = await self._auth.profile()
            ok = outcome.ok
        except OSError:
            logger.exception("%s: could not persist the session token", mode)
            self._status.fail(AUTH_FAILED)

        if not ok or profile is None:
            self._drop_token()
            self.state = Unauthenticated()
            return False

        self.state = Authenticated(profile)
        logger.info("%s succeeded for %s", mode.capitalize(), profile.username)
        return True

    def logout(self) -> None:
        """Local only: no request is sent."""
        self._drop_token()
        user = self.user
        self.state = Unauthenticated()
        logger.info("Logged out%s", f" ({user.username})" if user else "")
