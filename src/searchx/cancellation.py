"""Caller-owned cancellation signal for long-running searches.

A token fires either when ``cancel()`` is called (from any thread) or when its
optional deadline passes. The engine polls it before a scan and at every
document; it never imposes a timeout of its own.
"""

from __future__ import annotations

import threading
import time

from searchx.errors import SearchCancelledError, SearchTimeoutError


class CancellationToken:
    """Thread-safe cancel flag with an optional monotonic deadline."""

    def __init__(self, timeout: float | None = None) -> None:
        self._event = threading.Event()
        self._deadline = time.monotonic() + timeout if timeout is not None else None

    @classmethod
    def with_timeout(cls, seconds: float) -> CancellationToken:
        return cls(timeout=seconds)

    def cancel(self) -> None:
        self._event.set()

    @property
    def expired(self) -> bool:
        return self._deadline is not None and time.monotonic() >= self._deadline

    @property
    def cancelled(self) -> bool:
        return self._event.is_set() or self.expired

    @property
    def remaining(self) -> float | None:
        """Seconds left before the deadline, or ``None`` without one."""
        if self._deadline is None:
            return None
        return max(0.0, self._deadline - time.monotonic())

    def raise_if_cancelled(self) -> None:
        if self._event.is_set():
            raise SearchCancelledError()
        if self.expired:
            raise SearchTimeoutError()

