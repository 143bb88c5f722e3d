"""
crudsync configuration — process-wide defaults in one place.

Read from environment at import time. Per-resource options live on
ResourceSettings (crudsync.models); these are the fallbacks it uses.
"""

from __future__ import annotations

import os


def _float_env(name: str, default: str) -> float:
    value = os.environ.get(name, default)
    try:
        return float(value)
    except ValueError:
        raise RuntimeError(f"{name} must be a number of seconds, got {value!r}") from None


class Settings:
    """Library defaults from environment variables."""

    # Transport
    HTTP_TIMEOUT: float = _float_env("CRUDSYNC_HTTP_TIMEOUT", "30.0")
    NETWORK_ERROR_MESSAGE: str = "Network error"

    # Action vocabulary
    RESET_ACTION_TYPE: str = os.environ.get("CRUDSYNC_RESET_ACTION_TYPE", "RESET_ALL_DATA")

    # Items
    PRIMARY_KEY: str = os.environ.get("CRUDSYNC_PRIMARY_KEY", "id")


# Singleton instance
settings = Settings()

if settings.HTTP_TIMEOUT <= 0:
    raise RuntimeError("CRUDSYNC_HTTP_TIMEOUT must be a positive number of seconds")
if not settings.RESET_ACTION_TYPE:
    raise RuntimeError("CRUDSYNC_RESET_ACTION_TYPE must not be empty")
if not settings.PRIMARY_KEY:
    raise RuntimeError("CRUDSYNC_PRIMARY_KEY must not be empty")
