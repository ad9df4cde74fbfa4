# src/todotxt_sync/todo/models.py

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import TypeAlias

from ..errors import FormatError

_DATE_RE = re.compile(r"^([0-9]+)-([0-9]+)-([0-9]+)$")


@dataclass(frozen=True, slots=True)
class Date:
    """Calendar date as written in todo.txt. Ranges are checked, the calendar is not."""

    year: int
    month: int
    day: int

    def __post_init__(self) -> None:
        if not 0 <= self.year <= 9999:
            raise FormatError(f"Year out of range: {self.year}")
        if not 1 <= self.month <= 12:
            raise FormatError(f"Month out of range: {self.month}")
        if not 1 <= self.day <= 31:
            raise FormatError(f"Day out of range: {self.day}")

    @classmethod
    def parse(cls, text: str) -> Date:
        m = _DATE_RE.match(text)
        if not m:
            raise FormatError(f"Invalid date format: {text!r}")
        year, month, day = (int(g) for g in m.groups())
        return cls(year, month, day)

    def __str__(self) -> str:
        return f"{self.year:04d}-{self.month:02d}-{self.day:02d}"


@dataclass(frozen=True, slots=True)
class Project:
    name: str


@dataclass(frozen=True, slots=True)
class Context:
    name: str


@dataclass(frozen=True, slots=True)
class Data:
    key: str
    value: str


# Closed set of tags that can be embedded in a description.
MetadataTag: TypeAlias = Project | Context | Data


@dataclass(slots=True)
class Todo:
    """
    One todo.txt line.

    Tags live inside `description` and are found by pattern matching
    (see grammar.find_meta), they are not stored separately.
    """

    done: bool = False
    priority: str | None = None
    created: Date | None = None
    completed: Date | None = None
    description: str = ""

    def __post_init__(self) -> None:
        if self.completed is not None and self.created is None:
            raise FormatError("Can't have a todo with a completion date and no creation date")
        if self.priority is not None and not (len(self.priority) == 1 and "A" <= self.priority <= "Z"):
            raise FormatError(f"Priority must be a single letter A-Z, got {self.priority!r}")
