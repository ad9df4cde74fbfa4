# src/todotxt_sync/sync/pipeline.py

from __future__ import annotations

"""
One sync run, strictly in sequence:

    fetch feed -> transform -> load todo file -> partition -> reconcile -> persist

The todo file is only rewritten once the complete result is in memory,
so any failure before that leaves it untouched.
"""

import logging
import sys
from dataclasses import dataclass, field
from typing import Any

from ..config import DonePolicy
from ..errors import FeedError, FormatError, SyncError
from ..todo.codec import dump_todos, load_todo_file, save_todo_file
from ..todo.grammar import has_context
from ..todo.models import Todo
from .ports import FeedClient
from .reconcile import SyncCounts, update_todos
from .transform import build_incoming

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class SyncResult:
    counts: SyncCounts
    todos: list[Todo] = field(default_factory=list)
    foreign: int = 0
    bytes_written: int = 0
    written: bool = False


def partition_todos(todos: list[Todo], context_tag: str | None) -> tuple[list[Todo], list[Todo]]:
    """Split into (synced, foreign). Without a context tag every todo is synced."""
    if not context_tag:
        return list(todos), []
    synced: list[Todo] = []
    foreign: list[Todo] = []
    for t in todos:
        (synced if has_context(t, context_tag) else foreign).append(t)
    return synced, foreign


async def run_sync(settings: Any, feed: FeedClient) -> SyncResult:
    """
    Run one full sync with `settings` (Settings or anything with the same fields).

    Raises SyncError naming the phase that failed; the cause is chained.
    """
    policy = DonePolicy(settings.done_policy)
    include_done = policy != DonePolicy.IGNORE

    try:
        items = await feed.fetch_todos(include_done=include_done)
    except FeedError as e:
        raise SyncError("fetch", str(e)) from e
    if not include_done:
        items = [it for it in items if not it.is_done]
    logger.info("Fetched %d todos from the feed (include_done=%s)", len(items), include_done)

    try:
        incoming = build_incoming(
            items,
            context_tag=settings.context_tag,
            escape_meta=not settings.no_escape_meta,
        )
    except FormatError as e:
        raise SyncError("transform", str(e)) from e

    try:
        existing = load_todo_file(settings.todo_file)
    except (OSError, UnicodeDecodeError, FormatError) as e:
        raise SyncError("read", f"{settings.todo_file}: {e}") from e

    synced, foreign = partition_todos(existing, settings.context_tag)
    counts = update_todos(synced, incoming, add_done=policy == DonePolicy.ADD)
    todos = foreign + synced
    logger.info(
        "Reconciled: new=%d updated=%d removed=%d skipped_done=%d foreign=%d",
        counts.new,
        counts.updated,
        counts.removed,
        counts.skipped,
        len(foreign),
    )

    result = SyncResult(counts=counts, todos=todos, foreign=len(foreign))

    if settings.dry_run:
        logger.info("Dry run: not writing %s", settings.todo_file)
        sys.stdout.write(dump_todos(todos))
        sys.stdout.flush()
        return result

    try:
        result.bytes_written = save_todo_file(settings.todo_file, todos)
    except OSError as e:
        raise SyncError("write", f"{settings.todo_file}: {e}") from e
    result.written = True
    logger.info(
        "Wrote %d todos to %s (%d bytes)",
        len(todos),
        settings.todo_file,
        result.bytes_written,
    )
    return result
