"""Cancellable run context passed to every external call."""

from __future__ import annotations

import threading
import time

from confaudit.utils.errors import ContextCancelledError, DeadlineExceededError


class RunContext:
    """Carries cancellation and an optional deadline for one test run.

    Collaborators call ``raise_if_done()`` between units of work so that a
    cancelled or expired run stops at the next checkpoint.

    Example:
        ctx = RunContext.with_timeout(30)
        engine = loader.load(ctx, ["policy"], [])
        ctx.raise_if_done()
    """

    def __init__(self, deadline: float | None = None, timeout: float | None = None) -> None:
        """Initialize the context.

        Args:
            deadline: Absolute ``time.monotonic()`` value after which the run expires
            timeout: Original timeout in seconds, kept for error reporting
        """
        self._event = threading.Event()
        self._deadline = deadline
        self._timeout = timeout

    @classmethod
    def background(cls) -> "RunContext":
        """Create a context with no deadline."""
        return cls()

    @classmethod
    def with_timeout(cls, seconds: float) -> "RunContext":
        """Create a context that expires ``seconds`` from now."""
        return cls(deadline=time.monotonic() + seconds, timeout=seconds)

    @property
    def deadline(self) -> float | None:
        return self._deadline

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def cancel(self) -> None:
        """Cancel the run. Safe to call from any thread."""
        self._event.set()

    def remaining(self) -> float | None:
        """Seconds left before the deadline, or None without a deadline."""
        if self._deadline is None:
            return None
        return max(0.0, self._deadline - time.monotonic())

    def expired(self) -> bool:
        return self._deadline is not None and time.monotonic() >= self._deadline

    def raise_if_done(self) -> None:
        """Raise if the context was cancelled or its deadline passed.

        Raises:
            ContextCancelledError: If ``cancel()`` was called
            DeadlineExceededError: If the deadline passed
        """
        if self._event.is_set():
            raise ContextCancelledError()
        if self.expired():
            raise DeadlineExceededError(self._timeout)
