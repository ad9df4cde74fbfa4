# src/todotxt_sync/config.py

"""Settings loaded from environment variables (+ optional .env).

- One Settings object for the whole run.
- No secrets required at import time: the GitLab token is only checked
  when the feed client is built.
- The token is wrapped in SecretStr so it never ends up in logs or reprs.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path

from dotenv import find_dotenv, load_dotenv

from .errors import ConfigError

ENV_PREFIX = "TODOSYNC"

DEFAULT_TODO_FILE = Path("~/.todo/todo.txt")
DEFAULT_LOG_DIR = Path("~/.local/state/todotxt-sync")
DEFAULT_CONTEXT_TAG = "gitlab"


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default.expanduser()
    return Path(raw).expanduser()


def _env_optional(name: str, default: str | None) -> str | None:
    raw = os.getenv(name)
    if raw is None:
        return default
    raw = raw.strip()
    if raw == "" or raw.lower() in {"none", "null"}:
        return None
    return raw


class SecretStr:
    """A string that only shows its value through get_secret_value()."""

    __slots__ = ("_value",)

    REDACTED = "**REDACTED**"

    def __init__(self, value: str) -> None:
        self._value = value

    def get_secret_value(self) -> str:
        return self._value

    def __str__(self) -> str:
        return self.REDACTED

    def __repr__(self) -> str:
        return f"SecretStr({self.REDACTED})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SecretStr):
            return NotImplemented
        return self._value == other._value

    def __hash__(self) -> int:
        return hash(self._value)

    def __bool__(self) -> bool:
        return bool(self._value)


class DonePolicy(StrEnum):
    """What to do with items that are done upstream."""

    # Mark local todos as done if they were already in the file, never add new done ones.
    MARK = "mark"
    # Always add done todos.
    ADD = "add"
    # Never keep done todos: they are not even fetched, so existing ones get removed.
    IGNORE = "ignore"

    @classmethod
    def from_env(cls, raw: str | None) -> DonePolicy:
        if raw is None or raw.strip() == "":
            return cls.MARK
        try:
            return cls(raw.strip().lower())
        except ValueError:
            allowed = ", ".join(p.value for p in cls)
            raise ConfigError(f"Invalid done policy {raw!r} (expected one of: {allowed})") from None


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- GitLab ----
    gitlab_host: str
    gitlab_token: SecretStr | None
    http_timeout_seconds: float
    # Load the feed from a JSON dump instead of the API (offline runs).
    todos_json_path: Path | None

    # ---- todo.txt ----
    todo_file: Path
    # If set, only todos with this context are synced; the rest are left alone.
    context_tag: str | None
    no_escape_meta: bool
    done_policy: DonePolicy
    dry_run: bool

    # ---- logging ----
    log_level: str
    log_dir: Path

    @staticmethod
    def from_env() -> Settings:
        load_dotenv(find_dotenv(usecwd=True), override=False)

        token_raw = _env(_k("GITLAB_TOKEN")).strip()
        todos_json = _env(_k("TODOS_JSON")).strip()

        return Settings(
            gitlab_host=_env(_k("GITLAB_HOST")).strip(),
            gitlab_token=SecretStr(token_raw) if token_raw else None,
            http_timeout_seconds=_env_float(_k("HTTP_TIMEOUT_SECONDS"), 30.0),
            todos_json_path=Path(todos_json).expanduser() if todos_json else None,
            todo_file=_env_path(_k("TODO_FILE"), DEFAULT_TODO_FILE),
            context_tag=_env_optional(_k("CONTEXT_TAG"), DEFAULT_CONTEXT_TAG),
            no_escape_meta=_env_bool(_k("NO_ESCAPE_META"), False),
            done_policy=DonePolicy.from_env(os.getenv(_k("DONE_POLICY"))),
            dry_run=_env_bool(_k("DRY_RUN"), False),
            log_level=_env(_k("LOG_LEVEL"), "INFO").strip().upper() or "INFO",
            log_dir=_env_path(_k("LOG_DIR"), DEFAULT_LOG_DIR),
        )


_SETTINGS: Settings | None = None


def get_settings() -> Settings:
    global _SETTINGS
    if _SETTINGS is None:
        _SETTINGS = Settings.from_env()
    return _SETTINGS
