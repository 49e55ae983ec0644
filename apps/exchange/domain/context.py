"""
Cancellation and deadline signal passed down to rate fetches.

A request handler creates one FetchContext, optionally with a deadline,
and may cancel it from another thread. Blocking fetches watch it and
give up as soon as it fires.
"""

import threading
import time
from typing import Callable, List, Optional


class FetchContext:

    def __init__(self, deadline: Optional[float] = None):
        """
        Args:
            deadline: Absolute time.monotonic() value after which the
                      context counts as expired. None means no deadline.
        """
        self._deadline = deadline
        self._cancelled = threading.Event()
        self._callbacks: List[Callable[[], None]] = []
        self._lock = threading.Lock()

    @classmethod
    def with_timeout(cls, seconds: float) -> "FetchContext":
        return cls(deadline=time.monotonic() + seconds)

    @property
    def deadline(self) -> Optional[float]:
        return self._deadline

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set()

    def cancel(self) -> None:
        with self._lock:
            if self._cancelled.is_set():
                return
            self._cancelled.set()
            callbacks = list(self._callbacks)
            self._callbacks.clear()

        for callback in callbacks:
            callback()

    def remaining(self) -> Optional[float]:
        """Seconds left before the deadline (never negative), or None."""
        if self._deadline is None:
            return None
        return max(0.0, self._deadline - time.monotonic())

    def expired(self) -> bool:
        remaining = self.remaining()
        return remaining is not None and remaining <= 0

    def done(self) -> bool:
        return self.cancelled or self.expired()

    def on_cancel(self, callback: Callable[[], None]) -> Callable[[], None]:
        """
        Register a callback fired once on cancel().
        Fires immediately if already cancelled. Returns an unsubscribe function.
        """
        with self._lock:
            if not self._cancelled.is_set():
                self._callbacks.append(callback)

                def unsubscribe():
                    with self._lock:
                        if callback in self._callbacks:
                            self._callbacks.remove(callback)

                return unsubscribe

        callback()
        return lambda: None
