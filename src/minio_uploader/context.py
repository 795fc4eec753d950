"""Per-call cancellation and deadline handling for uploads."""

import threading
import time

from minio_uploader.exceptions import TransferCancelledError

CANCELED = "context canceled"
DEADLINE_EXCEEDED = "context deadline exceeded"


class UploadContext:
    """
    Carries a deadline and a cancellation flag for a single upload.

    Deadlines are absolute values of `time.monotonic()`. A context built
    with a parent is cancelled together with it and never outlives the
    parent's deadline. Contexts are safe to cancel from another thread.
    """

    def __init__(
        self,
        deadline: float | None = None,
        parent: "UploadContext | None" = None,
    ):
        if parent is not None and parent.deadline is not None:
            deadline = (
                parent.deadline if deadline is None else min(deadline, parent.deadline)
            )
        self._deadline = deadline
        self._parent = parent
        self._cancelled = threading.Event()

    @classmethod
    def background(cls) -> "UploadContext":
        """Returns a context that is never done unless cancelled."""
        return cls()

    @classmethod
    def with_timeout(
        cls, seconds: float, parent: "UploadContext | None" = None
    ) -> "UploadContext":
        return cls(time.monotonic() + seconds, parent)

    @classmethod
    def with_deadline(
        cls, deadline: float, parent: "UploadContext | None" = None
    ) -> "UploadContext":
        return cls(deadline, parent)

    @property
    def deadline(self) -> float | None:
        return self._deadline

    @property
    def cancelled(self) -> bool:
        if self._cancelled.is_set():
            return True
        return self._parent is not None and self._parent.cancelled

    @property
    def expired(self) -> bool:
        return self._deadline is not None and time.monotonic() >= self._deadline

    @property
    def done(self) -> bool:
        return self.err() is not None

    def cancel(self) -> None:
        self._cancelled.set()

    def remaining(self) -> float | None:
        """Seconds left before the deadline, or None when there is no deadline."""
        if self._deadline is None:
            return None
        return max(0.0, self._deadline - time.monotonic())

    def err(self) -> str | None:
        """Returns why the context is done, or None while it is still live."""
        if self.cancelled:
            return CANCELED
        if self.expired:
            return DEADLINE_EXCEEDED
        return None

    def check(self, object_name: str) -> None:
        """
        Raises if the context is done.

        Args:
            object_name: The object being uploaded, reported in the error.

        Raises:
            TransferCancelledError: If the context was cancelled or has expired.
        """
        reason = self.err()
        if reason is not None:
            raise TransferCancelledError(object_name, reason)
