# src/todotxt_sync/sync/transform.py

from __future__ import annotations

import re
from collections.abc import Iterable

from ..errors import FormatError
from ..feed.models import FeedItem
from ..todo.grammar import add_tag, escape_description
from ..todo.models import Context, Data, Date, Project, Todo
from .reconcile import ID_KEY

_LINE_BREAK_RE = re.compile(r"\s*[\r\n]+\s*")


def parse_feed_date(raw: str) -> Date:
    """Date part of an ISO timestamp ("2024-01-05T10:00:00.000Z" -> 2024-01-05)."""
    date_part, _, _ = raw.strip().partition("T")
    try:
        return Date.parse(date_part)
    except FormatError as e:
        raise FormatError(f"Couldn't parse date from {raw!r}") from e


def feed_item_to_todo(
    item: FeedItem,
    *,
    context_tag: str | None = None,
    escape_meta: bool = True,
) -> Todo:
    """
    Build the todo.txt record for a GitLab To-Do.

    Layout: "[<target type>:<action>] <body> +<project> id:<id> @<context>".
    The body is escaped so tag-like text from GitLab does not turn into tags.
    """
    done = item.is_done
    # One record per line: multi-line bodies are folded.
    body = _LINE_BREAK_RE.sub(" ", item.body).strip()
    if escape_meta:
        body = escape_description(body)
    prefix = f"[{item.target_type}:{item.action_name}]"

    todo = Todo(
        done=done,
        created=parse_feed_date(item.created_at),
        completed=parse_feed_date(item.updated_at) if done else None,
        description=f"{prefix} {body}" if body else prefix,
    )

    if item.project:
        add_tag(todo, Project(item.project))
    elif item.group:
        add_tag(todo, Project(item.group))
    add_tag(todo, Data(ID_KEY, str(item.id)))
    if context_tag:
        add_tag(todo, Context(context_tag))
    return todo


def build_incoming(
    items: Iterable[FeedItem],
    *,
    context_tag: str | None = None,
    escape_meta: bool = True,
) -> dict[int, Todo]:
    """Map feed item id -> todo. A later item with the same id wins."""
    return {
        item.id: feed_item_to_todo(item, context_tag=context_tag, escape_meta=escape_meta)
        for item in items
    }
