# src/taskdesk/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import StrEnum
from typing import Any

# Earliest representable instant; unparsable dates sort here.
INVALID_DATE = datetime.min.replace(tzinfo=UTC)


class SortDirection(StrEnum):
    ASC = "asc"
    DESC = "desc"

    def toggled(self) -> SortDirection:
        return SortDirection.ASC if self is SortDirection.DESC else SortDirection.DESC

    @property
    def arrow(self) -> str:
        return "↓" if self is SortDirection.DESC else "↑"


def parse_timestamp(raw: Any) -> datetime | None:
    """
    Parse a server timestamp into an aware datetime.

    Accepts ISO-8601 strings (with or without "Z"/offset) and numbers as epoch
    milliseconds. Naive values are read as UTC. Returns None when unparsable.
    """
    if raw is None or isinstance(raw, bool):
        return None

    if isinstance(raw, (int, float)):
        try:
            return datetime.fromtimestamp(float(raw) / 1000.0, tz=UTC)
        except (OverflowError, OSError, ValueError):
            return None

    if not isinstance(raw, str) or not raw.strip():
        return None

    try:
        dt = datetime.fromisoformat(raw.strip())
    except ValueError:
        return None

    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    return dt


@dataclass(frozen=True, slots=True)
class UserProfile:
    id: str
    name: str
    username: str

    @property
    def display_name(self) -> str:
        return self.name or self.username

    @classmethod
    def from_api(cls, data: Any) -> UserProfile:
        if not isinstance(data, dict):
            raise ValueError("profile payload is not an object")
        raw_id = data.get("_id", data.get("id"))
        return cls(
            id="" if raw_id is None else str(raw_id),
            name=str(data.get("name") or ""),
            username=str(data.get("username") or ""),
        )


@dataclass(frozen=True, slots=True)
class Task:
    """
    Local copy of a server task record.

    `raw` keeps the record exactly as the server sent it (including fields we
    don't model), so a "send the full record" update round-trips them.
    """

    id: str
    title: str
    description: str
    completed: bool
    created_at: datetime | None
    raw: dict[str, Any] = field(default_factory=dict, compare=False, repr=False)

    @classmethod
    def from_api(cls, data: Any) -> Task:
        if not isinstance(data, dict):
            raise ValueError("task payload is not an object")

        raw_id = data.get("_id", data.get("id"))
        if raw_id is None or str(raw_id) == "":
            raise ValueError("task payload has no id")

        # Legacy records carry "date" instead of "createdAt".
        created_raw = data.get("createdAt") or data.get("date")

        return cls(
            id=str(raw_id),
            title=str(data.get("title") or ""),
            description=str(data.get("description") or ""),
            completed=bool(data.get("completed", False)),
            created_at=parse_timestamp(created_raw),
            raw=dict(data),
        )

    @property
    def sort_key(self) -> datetime:
        return self.created_at if self.created_at is not None else INVALID_DATE

    def to_payload(self, **changes: Any) -> dict[str, Any]:
        """Full record for PUT, with `changes` applied on top."""
        payload = dict(self.raw)
        payload.update(changes)
        return payload


@dataclass(slots=True)
class EditDraft:
    target_id: str
    title: str
    description: str


def sort_tasks(tasks: list[Task], direction: SortDirection) -> list[Task]:
    """
    Chronological order by creation time.

    Tasks without a parsable date sort as the earliest instant: first when
    ascending, last when descending. Equal keys keep their relative order.
    """
    return sorted(tasks, key=lambda t: t.sort_key, reverse=direction is SortDirection.DESC)
