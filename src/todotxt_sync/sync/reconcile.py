# src/todotxt_sync/sync/reconcile.py

from __future__ import annotations

import logging
from dataclasses import dataclass

from ..todo.grammar import get_data
from ..todo.models import Todo

logger = logging.getLogger(__name__)

ID_KEY = "id"


@dataclass(frozen=True, slots=True)
class SyncCounts:
    new: int = 0
    updated: int = 0
    removed: int = 0
    # New done items left out because the policy does not add them.
    skipped: int = 0


def get_external_id(todo: Todo) -> int | None:
    """Return the `id:` tag as an int, or None (with a warning) if missing or unparsable."""
    raw = get_data(todo, ID_KEY)
    if raw is None:
        logger.warning("Todo is missing an %s data tag: %r", ID_KEY, todo.description)
        return None
    if not (raw.isascii() and raw.isdigit()):
        logger.warning("Couldn't parse %s as a non-negative integer: %r", ID_KEY, raw)
        return None
    return int(raw)


def update_todos(
    existing: list[Todo],
    incoming: dict[int, Todo],
    *,
    add_done: bool,
) -> SyncCounts:
    """
    Merge `incoming` (external id -> todo) into `existing`.

    - local todo whose id is in `incoming`: replaced if different, kept otherwise
    - local todo whose id is not in `incoming`: removed
    - local todo without a usable id: kept untouched
    - ids left in `incoming` are appended (done ones only when `add_done`)

    `existing` is updated in place and `incoming` is consumed.
    """
    result: list[Todo] = []
    updated = 0
    removed = 0

    for local in existing:
        ext_id = get_external_id(local)
        if ext_id is None:
            result.append(local)
            continue

        fresh = incoming.pop(ext_id, None)
        if fresh is None:
            removed += 1
            logger.debug("Removing todo id=%s (gone upstream)", ext_id)
            continue

        if local != fresh:
            updated += 1
            logger.debug("Updating todo id=%s", ext_id)
            result.append(fresh)
        else:
            result.append(local)

    new = len(incoming)
    skipped = 0
    for todo in incoming.values():
        if todo.done and not add_done:
            skipped += 1
            continue
        result.append(todo)
    incoming.clear()

    existing[:] = result
    return SyncCounts(new=new, updated=updated, removed=removed, skipped=skipped)
