# src/todotxt_sync/todo/codec.py

from __future__ import annotations

import contextlib
import logging
import os
import tempfile
from collections.abc import Iterable
from pathlib import Path
from typing import IO

from ..errors import FormatError
from .grammar import format_todo, parse_todo
from .models import Todo

logger = logging.getLogger(__name__)

LINE_SEPARATOR = "\n"


def read_todos(stream: Iterable[str] | Iterable[bytes] | IO[str] | IO[bytes]) -> list[Todo]:
    """
    Parse every non-blank line of a todo.txt stream, in file order.

    Byte lines are decoded as UTF-8. One bad line fails the whole read:
    silently skipping it would drop the entry on the next write.
    """
    todos: list[Todo] = []
    for lineno, raw in enumerate(stream, start=1):
        line = raw.decode("utf-8") if isinstance(raw, bytes) else raw
        line = line.rstrip("\r\n")
        if not line.strip():
            continue
        try:
            todos.append(parse_todo(line))
        except FormatError as e:
            raise FormatError(f"line {lineno}: {e}") from e
    return todos


def dump_todos(todos: Iterable[Todo], *, line_separator: str = LINE_SEPARATOR) -> str:
    return "".join(format_todo(t) + line_separator for t in todos)


def write_todos(
    stream: IO[str],
    todos: Iterable[Todo],
    *,
    line_separator: str = LINE_SEPARATOR,
) -> None:
    """Serialize all todos into one buffer, then hand it to the stream in a single write."""
    stream.write(dump_todos(todos, line_separator=line_separator))


def load_todo_file(path: str | Path) -> list[Todo]:
    """Read a todo.txt file. A missing file is an empty list (it is created on save)."""
    path = Path(path)
    if not path.exists():
        logger.info("Todo file %s does not exist yet, starting empty", path)
        return []
    with path.open("r", encoding="utf-8", newline="") as f:
        todos = read_todos(f)
    logger.info("Read %d existing todos from %s", len(todos), path)
    return todos


def save_todo_file(
    path: str | Path,
    todos: Iterable[Todo],
    *,
    line_separator: str = LINE_SEPARATOR,
) -> int:
    """
    Rewrite the whole file from `todos` and return the number of bytes written.

    The buffer is built completely before anything touches the disk, then goes
    to a sibling temp file that replaces the target. If anything fails on the
    way the previous file content is left as it was.
    """
    path = Path(path)
    buf = dump_todos(todos, line_separator=line_separator).encode("utf-8")

    path.parent.mkdir(parents=True, exist_ok=True)
    # Unique sibling name: never reuses a file the user keeps next to the list.
    f = tempfile.NamedTemporaryFile(
        dir=path.parent, prefix=f".{path.name}.", suffix=".tmp", delete=False
    )
    tmp = Path(f.name)
    try:
        with f:
            f.write(buf)
            f.flush()
            os.fsync(f.fileno())
        if path.exists():
            with contextlib.suppress(OSError):
                os.chmod(tmp, path.stat().st_mode & 0o777)
        os.replace(tmp, path)
    except BaseException:
        with contextlib.suppress(OSError):
            tmp.unlink()
        raise
    return len(buf)
