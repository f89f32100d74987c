"""
Caller-supplied timeout and cancellation for BOQ operations.

Usage:
    deadline = Deadline(timeout=5)
    service.add_boq_job(boq_id, job_request, deadline=deadline)

The service checks the deadline between statements; on PostgreSQL the
remaining budget is also pushed down as ``statement_timeout``.
"""

import threading
import time
from typing import Optional

from utils.errors import OperationCancelledError


class Deadline:
    """Timeout and/or cancel flag shared between a caller and one operation"""

    def __init__(self, timeout: Optional[float] = None, cancel_event: Optional[threading.Event] = None):
        self.timeout = timeout
        self.cancel_event = cancel_event
        self._expires_at = time.monotonic() + timeout if timeout is not None else None

    def cancel(self):
        """Cancel the operation from another thread"""
        if self.cancel_event is None:
            self.cancel_event = threading.Event()
        self.cancel_event.set()

    @property
    def cancelled(self) -> bool:
        return self.cancel_event is not None and self.cancel_event.is_set()

    def remaining(self) -> Optional[float]:
        """Seconds left before expiry, None when there is no timeout"""
        if self._expires_at is None:
            return None
        return max(0.0, self._expires_at - time.monotonic())

    @property
    def expired(self) -> bool:
        remaining = self.remaining()
        return remaining is not None and remaining <= 0

    def check(self, operation: str):
        """
        Raise if the operation should stop now

        Args:
            operation: Description of the running operation, used in the message

        Raises:
            OperationCancelledError: If cancelled or past the timeout
        """
        if self.cancelled:
            raise OperationCancelledError(f"{operation} cancelled by caller", operation=operation)
        if self.expired:
            raise OperationCancelledError(
                f"{operation} timed out after {self.timeout}s", operation=operation, timeout=self.timeout
            )
