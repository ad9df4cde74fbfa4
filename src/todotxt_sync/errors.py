# src/todotxt_sync/errors.py

from __future__ import annotations


class TodoSyncError(Exception):
    """Base class for everything this package raises on purpose."""


class FormatError(TodoSyncError, ValueError):
    """A todo.txt line, date or record that does not follow the format."""


class ConfigError(TodoSyncError):
    """Missing or invalid settings."""


class FeedError(TodoSyncError):
    """The remote feed could not be fetched or decoded."""


class SyncError(TodoSyncError):
    """A pipeline phase failed. The cause is chained."""

    def __init__(self, phase: str, message: str) -> None:
        super().__init__(f"{phase}: {message}")
        self.phase = phase
