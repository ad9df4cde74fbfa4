# src/todotxt_sync/sync/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the sync pipeline.

The pipeline depends on a Protocol instead of the concrete GitLab client,
so a JSON dump or a fake can stand in for the API.
"""

from typing import Protocol

from ..feed.models import FeedItem


class FeedClient(Protocol):
    """Source of remote To-Do items."""

    async def fetch_todos(self, *, include_done: bool) -> list[FeedItem]: ...
