# src/taskdesk/storage/local_store.py

from __future__ import annotations

import contextlib
import json
import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)


class LocalStore:
    """
    Small persistent string key-value store backed by one JSON file.

    Plays the role a browser's local storage plays for a web client: values
    survive restarts until removed. Writes are atomic (tmp + replace) and the
    file is kept private (0600), since it holds the bearer token.

    Every call re-reads the file; the store is tiny and may be shared by
    several processes of the same user.
    """

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def _read(self) -> dict[str, str]:
        if not self._path.exists():
            return {}
        try:
            data = json.loads(self._path.read_text("utf-8"))
        except (OSError, ValueError):
            logger.warning("Local store %s is unreadable; treating it as empty", self._path)
            return {}
        if not isinstance(data, dict):
            logger.warning("Local store %s is not a JSON object; treating it as empty", self._path)
            return {}
        return {str(k): v for k, v in data.items() if isinstance(v, str)}

    def _write(self, data: dict[str, str]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self._path.with_suffix(".tmp")
        tmp.write_text(json.dumps(data, ensure_ascii=False, indent=2), "utf-8")
        os.replace(tmp, self._path)
        with contextlib.suppress(OSError):
            # Not critical on Windows or restricted FS.
            os.chmod(self._path, 0o600)

    def get_item(self, key: str) -> str | None:
        return self._read().get(key)

    def set_item(self, key: str, value: str) -> None:
        data = self._read()
        data[key] = value
        self._write(data)
        logger.debug("Local store: set %s", key)

    def remove_item(self, key: str) -> None:
        data = self._read()
        if data.pop(key, None) is None:
            return
        self._write(data)
        logger.debug("Local store: removed %s", key)
