"""Per-call cancellation and deadline handle.

A :class:`RequestContext` is handed to :meth:`mailnow.Client.send_email`
(and to :func:`mailnow.transport.make_request`).  It can be cancelled from
any thread and may carry a deadline.  The transport checks it right before
dispatching the request and derives the socket timeout from the remaining
time, so a context that expires while the request is in flight surfaces as
a timeout.  Once a response has been received the context is no longer
consulted.
"""

from __future__ import annotations

import threading
import time
from typing import Optional


class ContextCancelled(Exception):
    """Raised (as a cause) when a context was cancelled explicitly."""

    def __init__(self) -> None:
        super().__init__("context canceled")


class DeadlineExceeded(Exception):
    """Raised (as a cause) when a context deadline has passed."""

    def __init__(self) -> None:
        super().__init__("context deadline exceeded")


class RequestContext:
    """Cancellation token with an optional deadline.

    Args:
        timeout: Seconds from now after which the context expires.  ``None``
            means no deadline.
    """

    def __init__(self, timeout: Optional[float] = None) -> None:
        self._cancelled = threading.Event()
        self._deadline: Optional[float] = None
        if timeout is not None:
            self._deadline = time.monotonic() + timeout

    @classmethod
    def background(cls) -> "RequestContext":
        """Return a context that never expires unless cancelled."""
        return cls()

    def with_timeout(self, timeout: float) -> "RequestContext":
        """Derive a child context with a deadline no later than this one's.

        Cancelling the parent does not propagate to an already derived
        child; the child inherits the parent's cancelled state at creation.
        """
        child = RequestContext(timeout)
        if self._deadline is not None and (
            child._deadline is None or self._deadline < child._deadline
        ):
            child._deadline = self._deadline
        if self.cancelled:
            child.cancel()
        return child

    def cancel(self) -> None:
        self._cancelled.set()

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set()

    @property
    def deadline(self) -> Optional[float]:
        """Deadline on the ``time.monotonic`` clock, if any."""
        return self._deadline

    def remaining(self) -> Optional[float]:
        """Seconds left before the deadline, ``None`` without a deadline."""
        if self._deadline is None:
            return None
        return max(0.0, self._deadline - time.monotonic())

    def error(self) -> Optional[Exception]:
        """Return why the context is done, or ``None`` while it is live."""
        if self.cancelled:
            return ContextCancelled()
        if self._deadline is not None and time.monotonic() >= self._deadline:
            return DeadlineExceeded()
        return None

    def __repr__(self) -> str:
        return (
            f"RequestContext(cancelled={self.cancelled}, "
            f"remaining={self.remaining()!r})"
        )


__all__ = ["RequestContext", "ContextCancelled", "DeadlineExceeded"]
