# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from todotxt_sync.config import DonePolicy


@pytest.fixture()
def todo_file(tmp_path: Path) -> Path:
    return tmp_path / "todo.txt"


@pytest.fixture()
def settings(todo_file: Path) -> SimpleNamespace:
    """
    Minimal settings object for the pipeline.

    We intentionally use a SimpleNamespace rather than Settings.from_env(),
    to keep unit tests isolated from the environment and any local .env.
    """
    return SimpleNamespace(
        todo_file=todo_file,
        context_tag="gitlab",
        no_escape_meta=False,
        done_policy=DonePolicy.MARK,
        dry_run=False,
    )
