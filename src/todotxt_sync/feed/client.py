# src/todotxt_sync/feed/client.py

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import httpx

from ..config import SecretStr, Settings
from ..errors import ConfigError, FeedError
from .models import STATE_DONE, STATE_PENDING, FeedItem

logger = logging.getLogger(__name__)

API_BASE = "api/v4/"
TODO_ENDPOINT = "todos"
PER_PAGE = 100


def _make_timeout_obj(timeout_s: float) -> httpx.Timeout:
    return httpx.Timeout(timeout_s, connect=min(timeout_s, 10.0))


def _parse_items(payload: Any, source: str) -> list[FeedItem]:
    if not isinstance(payload, list):
        raise FeedError(f"Expected a JSON list of todos from {source}, got {type(payload).__name__}")
    return [FeedItem.from_json(item) for item in payload]


class GitlabTodoClient:
    """
    Minimal async client for the GitLab To-Do API.

    Usage:
        async with GitlabTodoClient(host, token) as api:
            items = await api.fetch_todos(include_done=True)

    The token is only unwrapped when building the request headers.
    """

    def __init__(
        self,
        base_url: str,
        token: SecretStr,
        *,
        timeout_seconds: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        if not base_url.strip():
            raise ConfigError("GitLab host is not set. Set TODOSYNC_GITLAB_HOST in your .env.")
        if not token:
            raise ConfigError("GitLab token is not set. Set TODOSYNC_GITLAB_TOKEN in your .env.")

        self._base = httpx.URL(base_url.rstrip("/") + "/").join(API_BASE)
        self._token = token
        self._client = httpx.AsyncClient(
            base_url=self._base,
            headers={"Authorization": f"Bearer {token.get_secret_value()}"},
            timeout=_make_timeout_obj(timeout_seconds),
            transport=transport,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> GitlabTodoClient:
        if settings.gitlab_token is None:
            raise ConfigError("GitLab token is not set. Set TODOSYNC_GITLAB_TOKEN in your .env.")
        return cls(
            settings.gitlab_host,
            settings.gitlab_token,
            timeout_seconds=settings.http_timeout_seconds,
        )

    def __repr__(self) -> str:
        return f"GitlabTodoClient(base={str(self._base)!r}, token={self._token!r})"

    async def __aenter__(self) -> GitlabTodoClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _get_todos(self, state: str) -> list[FeedItem]:
        items: list[FeedItem] = []
        page = "1"
        while page:
            params = {"state": state, "per_page": str(PER_PAGE), "page": page}
            try:
                response = await self._client.get(TODO_ENDPOINT, params=params)
                logger.info(
                    "GET %s state=%s page=%s -> %s",
                    response.url.path,
                    state,
                    page,
                    response.status_code,
                )
                response.raise_for_status()
                payload = response.json()
            except httpx.HTTPStatusError as e:
                raise FeedError(
                    f"GitLab returned HTTP {e.response.status_code} for state={state} todos"
                ) from e
            except httpx.HTTPError as e:
                raise FeedError(f"Request for state={state} todos failed: {e.__class__.__name__}") from e
            except json.JSONDecodeError as e:
                raise FeedError(f"GitLab returned invalid JSON for state={state} todos") from e

            items.extend(_parse_items(payload, f"GitLab (state={state}, page={page})"))
            page = response.headers.get("X-Next-Page", "").strip()
        return items

    async def get_pending_todos(self) -> list[FeedItem]:
        return await self._get_todos(STATE_PENDING)

    async def get_done_todos(self) -> list[FeedItem]:
        return await self._get_todos(STATE_DONE)

    async def fetch_todos(self, *, include_done: bool) -> list[FeedItem]:
        items = await self.get_pending_todos()
        if include_done:
            items.extend(await self.get_done_todos())
        return items


class JsonFileFeed:
    """Feed source backed by a JSON dump of GET /todos (a list of todo objects)."""

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    async def __aenter__(self) -> JsonFileFeed:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        return None

    async def fetch_todos(self, *, include_done: bool) -> list[FeedItem]:
        logger.info("Loading todos from file %s", self._path)
        try:
            payload = json.loads(self._path.read_text("utf-8"))
        except OSError as e:
            raise FeedError(f"Couldn't read todos JSON {self._path}: {e}") from e
        except json.JSONDecodeError as e:
            raise FeedError(f"Invalid JSON in {self._path}: {e}") from e

        items = _parse_items(payload, str(self._path))
        if not include_done:
            items = [it for it in items if not it.is_done]
        return items
