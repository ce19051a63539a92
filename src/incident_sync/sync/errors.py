# src/incident_sync/sync/errors.py

from __future__ import annotations


class SyncError(RuntimeError):
    """Base error for synchronization operations."""


class MalformedURLError(SyncError):
    """Raised when a request URL cannot be used (bad syntax, missing scheme)."""


class NetworkIOError(SyncError):
    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class PayloadDecodeError(SyncError):
    """Raised when a response body is not JSON or does not have the expected shape."""


class DateDecodeError(SyncError):
    """Raised when an incident timestamp does not match the wire format."""


class QueueFullError(SyncError):
    """Raised when a task cannot be queued because the queue stayed full."""
