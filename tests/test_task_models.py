# tests/test_task_models.py

from __future__ import annotations

from datetime import UTC, datetime

import pytest

from taskdesk.tasks.task_models import (
    SortDirection,
    Task,
    UserProfile,
    parse_timestamp,
    sort_tasks,
)


def _task(task_id: str, created: object) -> Task:
    return Task.from_api({"_id": task_id, "title": task_id, "createdAt": created})


def test_from_api_accepts_mongo_and_plain_ids() -> None:
    a = Task.from_api({"_id": "abc", "title": "A"})
    b = Task.from_api({"id": 7, "title": "B", "completed": True})

    assert a.id == "abc" and a.completed is False and a.description == ""
    assert b.id == "7" and b.completed is True


def test_from_api_rejects_records_without_id() -> None:
    with pytest.raises(ValueError):
        Task.from_api({"title": "no id"})


def test_legacy_date_field_is_used_when_created_at_missing() -> None:
    t = Task.from_api({"_id": "1", "title": "old", "date": "2023-05-01T10:00:00Z"})
    assert t.created_at == datetime(2023, 5, 1, 10, tzinfo=UTC)


def test_to_payload_keeps_unknown_server_fields() -> None:
    t = Task.from_api({"_id": "1", "title": "x", "user": "u1", "__v": 0})
    payload = t.to_payload(completed=True)

    assert payload == {"_id": "1", "title": "x", "user": "u1", "__v": 0, "completed": True}


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("2024-01-02T03:04:05.678Z", datetime(2024, 1, 2, 3, 4, 5, 678000, tzinfo=UTC)),
        ("2024-01-02T03:04:05", datetime(2024, 1, 2, 3, 4, 5, tzinfo=UTC)),
        (1704067200000, datetime(2024, 1, 1, tzinfo=UTC)),
        ("not a date", None),
        ("", None),
        (None, None),
    ],
)
def test_parse_timestamp(raw, expected) -> None:
    assert parse_timestamp(raw) == expected


def test_invalid_dates_sort_as_earliest() -> None:
    tasks = [_task("new", "2024-03-01T00:00:00Z"), _task("bad", "garbage"), _task("old", "2024-01-01T00:00:00Z")]

    asc = [t.id for t in sort_tasks(tasks, SortDirection.ASC)]
    desc = [t.id for t in sort_tasks(tasks, SortDirection.DESC)]

    assert asc == ["bad", "old", "new"]
    assert desc == ["new", "old", "bad"]


def test_equal_dates_keep_relative_order() -> None:
    tasks = [_task("a", "2024-01-01T00:00:00Z"), _task("b", "2024-01-01T00:00:00Z")]

    assert [t.id for t in sort_tasks(tasks, SortDirection.ASC)] == ["a", "b"]
    assert [t.id for t in sort_tasks(tasks, SortDirection.DESC)] == ["a", "b"]


def test_profile_display_name_falls_back_to_username() -> None:
    assert UserProfile.from_api({"_id": "u1", "name": "Alice", "username": "alice"}).display_name == "Alice"
    assert UserProfile.from_api({"_id": "u1", "username": "alice"}).display_name == "alice"


def test_sort_direction_toggles_and_arrow() -> None:
    assert SortDirection.DESC.toggled() is SortDirection.ASC
    assert SortDirection.ASC.toggled() is SortDirection.DESC
    assert SortDirection.DESC.arrow == "↓"
