"""
crudsync — Transport failure taxonomy.

Only two kinds are distinguished: no response at all (NetworkFailure) and a
response with a non-success status (ApplicationFailure). Anything finer is up
to the caller, who can inspect raw_data.
"""

from __future__ import annotations

from typing import Any


class CrudSyncError(Exception):
    """Base class for crudsync errors."""
    pass


class TransportFailure(CrudSyncError):
    """A transport call ended without a usable success payload."""

    def __init__(self, message: str, raw_data: Any = None) -> None:
        super().__init__(message)
        self.message = message
        self.raw_data = raw_data


class NetworkFailure(TransportFailure):
    """No response was received (connection error, timeout)."""

    def __init__(self, message: str) -> None:
        super().__init__(message, raw_data=None)


class ApplicationFailure(TransportFailure):
    """A response arrived with a status outside the 2xx range."""

    def __init__(self, message: str, raw_data: Any = None, status_code: int | None = None) -> None:
        super().__init__(message, raw_data)
        self.status_code = status_code
