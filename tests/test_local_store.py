# tests/test_local_store.py

from __future__ import annotations

import os
import stat
import sys

import pytest

from taskdesk.storage.local_store import LocalStore


def test_values_survive_a_new_instance(tmp_path) -> None:
    path = tmp_path / "nested" / "storage.json"
    LocalStore(path).set_item("token", "abc")

    assert LocalStore(path).get_item("token") == "abc"


def test_remove_item_and_missing_keys(tmp_path) -> None:
    store = LocalStore(tmp_path / "storage.json")
    assert store.get_item("token") is None

    store.set_item("token", "abc")
    store.set_item("other", "keep")
    store.remove_item("token")
    store.remove_item("token")  # already gone: no-op

    assert store.get_item("token") is None
    assert store.get_item("other") == "keep"


def test_corrupt_file_reads_as_empty(tmp_path) -> None:
    path = tmp_path / "storage.json"
    path.write_text("{not json", "utf-8")
    store = LocalStore(path)

    assert store.get_item("token") is None
    store.set_item("token", "fresh")
    assert LocalStore(path).get_item("token") == "fresh"


@pytest.mark.skipif(sys.platform == "win32", reason="POSIX permissions")
def test_file_is_private(tmp_path) -> None:
    path = tmp_path / "storage.json"
    LocalStore(path).set_item("token", "abc")

    assert stat.S_IMODE(os.stat(path).st_mode) == 0o600
