# src/taskdesk/core/status.py

from __future__ import annotations

import contextlib
import logging
from collections.abc import Callable, Iterator
from dataclasses import dataclass

from ..api.client import ApiError

logger = logging.getLogger(__name__)

FailureMessage = str | Callable[[ApiError], str] | None


@dataclass(slots=True)
class Outcome:
    ok: bool = False
    error: ApiError | None = None


class UiStatus:
    """
    Shared {is_loading, error} for every network-backed operation.

    track() is the only writer during operations:
    - clears the previous error and raises the loading flag,
    - on ApiError: logs it and sets the user-visible message (None = silent),
    - always drops the loading flag.

    Anything other than ApiError is a bug and propagates.
    """

    def __init__(self) -> None:
        self.is_loading = False
        self.error: str | None = None

    def clear_error(self) -> None:
        self.error = None

    def fail(self, message: str) -> None:
        self.error = message

    @contextlib.contextmanager
    def track(self, what: str, failure: FailureMessage) -> Iterator[Outcome]:
        outcome = Outcome()
        self.is_loading = True
        if failure is not None:
            self.error = None
        try:
            yield outcome
            outcome.ok = True
        except ApiError as e:
            outcome.error = e
            if failure is None:
                logger.info("%s failed (silent): %s", what, e)
            else:
                logger.error("%s failed: %s (status=%s)", what, e, e.status_code)
                self.error = failure(e) if callable(failure) else failure
        finally:
            self.is_loading = False
