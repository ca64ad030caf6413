# src/taskdesk/core/state.py

"""
Client-side state types.

The session is a tagged variant rather than an (is_authenticated, user) pair,
so "authenticated without a profile" cannot be represented.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..tasks.task_models import UserProfile


@dataclass(frozen=True, slots=True)
class Unauthenticated:
    pass


@dataclass(frozen=True, slots=True)
class Authenticating:
    pass


@dataclass(frozen=True, slots=True)
class Authenticated:
    profile: UserProfile


SessionState = Unauthenticated | Authenticating | Authenticated


class NotAuthenticatedError(RuntimeError):
    """A task operation was called outside the Authenticated state."""


@dataclass(slots=True)
class AuthForm:
    name: str = ""
    username: str = ""
    password: str = ""
    is_login: bool = True

    def clear(self) -> None:
        self.name = ""
        self.username = ""
        self.password = ""

    def missing_fields(self) -> list[str]:
        required = ["username", "password"] if self.is_login else ["name", "username", "password"]
        return [f for f in required if not getattr(self, f).strip()]


@dataclass(slots=True)
class TaskForm:
    title: str = ""
    description: str = ""

    def clear(self) -> None:
        self.title = ""
        self.description = ""
