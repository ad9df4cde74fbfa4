# src/todotxt_sync/cli/main.py

"""
CLI entrypoint.

Initializes logging, loads settings, picks the feed source (GitLab API or a
JSON dump from TODOSYNC_TODOS_JSON), then runs one sync pass.
"""

from __future__ import annotations

import asyncio
import logging

from ..config import Settings, get_settings
from ..errors import ConfigError, SyncError
from ..feed.client import GitlabTodoClient, JsonFileFeed
from ..logging_setup import setup_logging
from ..sync.pipeline import SyncResult, run_sync

logger = logging.getLogger(__name__)


def build_feed(settings: Settings) -> GitlabTodoClient | JsonFileFeed:
    if settings.todos_json_path is not None:
        return JsonFileFeed(settings.todos_json_path)
    return GitlabTodoClient.from_settings(settings)


async def _run(settings: Settings) -> SyncResult:
    async with build_feed(settings) as feed:
        return await run_sync(settings, feed)


def main() -> int:
    try:
        settings = get_settings()
    except ConfigError as e:
        setup_logging()
        logger.error("Invalid configuration: %s", e)
        return 1

    console_level = getattr(logging, settings.log_level, logging.INFO)
    try:
        setup_logging(log_dir=settings.log_dir, console_level=console_level)
    except OSError:
        setup_logging(console_level=console_level)
        logger.warning("Couldn't create log dir %s, logging to console only", settings.log_dir)

    logger.info(
        "Syncing %s (policy=%s, context=%s)",
        settings.todo_file,
        settings.done_policy,
        settings.context_tag,
    )

    try:
        result = asyncio.run(_run(settings))
    except ConfigError as e:
        logger.error("Invalid configuration: %s", e)
        return 1
    except SyncError as e:
        logger.error("Sync failed, todo file left unchanged: %s", e)
        logger.debug("Cause", exc_info=e.__cause__)
        return 1

    c = result.counts
    logger.info(
        "Done: %d new, %d updated, %d removed (%d todos total)",
        c.new,
        c.updated,
        c.removed,
        len(result.todos),
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
