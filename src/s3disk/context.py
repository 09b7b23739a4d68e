"""Cancellation and deadline tokens for remote calls."""

import threading
from datetime import datetime, timedelta, timezone
from typing import Optional

from s3disk.core.exceptions import DeadlineExceededError, OperationCancelledError


class OperationContext:
    """A cancellation token with an optional deadline.

    Every remote call made by a disk checks its bound context first, so a
    cancelled or expired context stops work at the next call boundary.
    Child contexts created with ``with_timeout``/``with_deadline`` are
    cancelled together with their parent.

    Example:
        ctx = OperationContext.background().with_timeout(30)
        disk = disk.with_context(ctx)
        ...
        ctx.cancel()
    """

    def __init__(
        self,
        deadline: Optional[datetime] = None,
        parent: Optional["OperationContext"] = None,
    ):
        if deadline is not None and deadline.tzinfo is None:
            deadline = deadline.astimezone(timezone.utc)
        if parent is not None and parent.deadline is not None:
            if deadline is None or parent.deadline < deadline:
                deadline = parent.deadline

        self.deadline = deadline
        self._parent = parent
        self._cancelled = threading.Event()

    @classmethod
    def background(cls) -> "OperationContext":
        """A context that is never cancelled and has no deadline."""
        return cls()

    def with_deadline(self, deadline: datetime) -> "OperationContext":
        return OperationContext(deadline=deadline, parent=self)

    def with_timeout(self, seconds: float) -> "OperationContext":
        deadline = datetime.now(timezone.utc) + timedelta(seconds=seconds)
        return OperationContext(deadline=deadline, parent=self)

    def cancel(self) -> None:
        self._cancelled.set()

    @property
    def cancelled(self) -> bool:
        if self._cancelled.is_set():
            return True
        return self._parent is not None and self._parent.cancelled

    def remaining(self) -> Optional[timedelta]:
        """Time left before the deadline, or None without a deadline."""
        if self.deadline is None:
            return None
        return self.deadline - datetime.now(timezone.utc)

    def raise_if_done(self) -> None:
        """Raise if the context is cancelled or past its deadline."""
        if self.cancelled:
            raise OperationCancelledError("operation context cancelled")

        remaining = self.remaining()
        if remaining is not None and remaining <= timedelta(0):
            raise DeadlineExceededError(
                f"operation context deadline exceeded at {self.deadline.isoformat()}"
            )
