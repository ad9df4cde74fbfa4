# src/todotxt_sync/feed/models.py

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from ..errors import FeedError

STATE_PENDING = "pending"
STATE_DONE = "done"


def _nested_str(obj: Any, *keys: str) -> str | None:
    """First non-empty string under one of `keys` in a nested object (e.g. project.path_with_namespace)."""
    if not isinstance(obj, Mapping):
        return None
    for key in keys:
        v = obj.get(key)
        if isinstance(v, str) and v.strip():
            return v
    return None


@dataclass(frozen=True, slots=True)
class FeedItem:
    """One entry of GET /api/v4/todos."""

    id: int
    body: str
    state: str
    created_at: str
    updated_at: str
    action_name: str
    target_type: str
    target_url: str = ""
    author: str | None = None
    project: str | None = None
    group: str | None = None

    @property
    def is_done(self) -> bool:
        return self.state == STATE_DONE

    @classmethod
    def from_json(cls, data: Any) -> FeedItem:
        if not isinstance(data, Mapping):
            raise FeedError(f"Expected a JSON object for a todo, got {type(data).__name__}")
        try:
            raw_id = data["id"]
            if isinstance(raw_id, bool) or not isinstance(raw_id, int) or raw_id < 0:
                raise FeedError(f"Todo id must be a non-negative integer, got {raw_id!r}")
            return cls(
                id=raw_id,
                body=str(data.get("body") or ""),
                state=str(data["state"]),
                created_at=str(data["created_at"]),
                updated_at=str(data.get("updated_at") or data["created_at"]),
                action_name=str(data.get("action_name") or ""),
                target_type=str(data.get("target_type") or ""),
                target_url=str(data.get("target_url") or ""),
                author=_nested_str(data.get("author"), "username"),
                project=_nested_str(data.get("project"), "path_with_namespace"),
                group=_nested_str(data.get("group"), "full_path", "path_with_namespace"),
            )
        except KeyError as e:
            raise FeedError(f"Todo JSON is missing field {e.args[0]!r}") from e
