"""
Cancellation and deadlines for extraction calls.

A Context is threaded through every extractor and runtime call. Calls check it
before and after they block so that a cancelled or expired extraction stops at
the next remote call instead of running to completion.
"""
import threading
import time
from typing import Optional

from ..EXTRACTORS.errors import ExtractionCancelled


class Context:
    """
    Carries a cancellation signal and an optional deadline.

    Contexts derived with with_timeout() share their parent's cancellation
    signal, so cancelling the parent cancels every child.
    """

    def __init__(self, deadline: Optional[float] = None, _event: Optional[threading.Event] = None):
        """
        :param deadline: Absolute time.monotonic() value after which calls fail.
        """
        self.deadline = deadline
        self._event = _event or threading.Event()

    @classmethod
    def background(cls) -> "Context":
        """A context that is never cancelled and has no deadline."""
        return cls()

    def with_timeout(self, seconds: Optional[float]) -> "Context":
        """
        Derives a context that expires after ``seconds`` (or at this context's
        deadline, whichever comes first). ``None`` keeps the current deadline.
        """
        if seconds is None:
            return Context(self.deadline, self._event)
        deadline = time.monotonic() + seconds
        if self.deadline is not None:
            deadline = min(deadline, self.deadline)
        return Context(deadline, self._event)

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def remaining(self) -> Optional[float]:
        """Seconds left before the deadline, or None without one."""
        if self.deadline is None:
            return None
        return max(0.0, self.deadline - time.monotonic())

    def check(self) -> None:
        """
        Raises ExtractionCancelled if the context is cancelled or expired.
        """
        if self._event.is_set():
            raise ExtractionCancelled("context cancelled")
        if self.deadline is not None and time.monotonic() >= self.deadline:
            raise ExtractionCancelled("context deadline exceeded")
