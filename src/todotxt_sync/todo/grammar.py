# src/todotxt_sync/todo/grammar.py

from __future__ import annotations

"""
todo.txt line grammar.

Line layout (every part optional except the description):

    x (A) 2024-02-01 2024-01-05 Description with +project @context key:value

- "x" marks the item as done,
- "(A)" is the priority,
- two dates mean completion + creation (only allowed on done items),
  a single date is the creation date,
- tags are embedded in the description and found by pattern matching.
"""

import re

from ..errors import FormatError
from .models import Context, Data, Date, MetadataTag, Project, Todo

# Prefix tokens only count when whitespace follows them; a lone "x" is text.
_DONE_RE = re.compile(r"^x\s+")
_PRIORITY_RE = re.compile(r"^\(([A-Z])\)\s+")
_TOKEN_RE = re.compile(r"^(\S+)\s+")

# A tag starts the text or follows whitespace, then a head (@, + or key:) and
# at least one non-space character, ending on a word boundary.
_TAG_RE = re.compile(r"(^|\s)(?P<tag>(?P<head>@|\+|(?P<key>\w+):)\S+)\b")


def _take_token(s: str) -> tuple[str | None, str]:
    m = _TOKEN_RE.match(s)
    if not m:
        return None, s
    return m.group(1), s[m.end():]


def _try_date(token: str | None) -> Date | None:
    if token is None:
        return None
    try:
        return Date.parse(token)
    except FormatError:
        return None


def parse_todo(line: str) -> Todo:
    """Parse one todo.txt line. Raises FormatError if it does not conform."""
    s = line
    done = False
    priority: str | None = None
    created: Date | None = None
    completed: Date | None = None

    m = _DONE_RE.match(s)
    if m:
        done = True
        s = s[m.end():]

    m = _PRIORITY_RE.match(s)
    if m:
        priority = m.group(1)
        s = s[m.end():]

    first, rest = _take_token(s)
    first_date = _try_date(first)
    if first_date is not None:
        second, after_second = _take_token(rest)
        second_date = _try_date(second)
        if second_date is not None:
            if not done:
                raise FormatError(f"Completion date on uncompleted item: {line!r}")
            completed, created = first_date, second_date
            s = after_second
        else:
            created = first_date
            s = rest

    return Todo(
        done=done,
        priority=priority,
        created=created,
        completed=completed,
        description=s.lstrip(),
    )


def format_todo(todo: Todo) -> str:
    """
    Serialize a Todo back to its line form (no line terminator).

    Every present prefix part is followed by a space, even when the
    description is empty, so "x " reads back as a done item.
    """
    out = ""
    if todo.done:
        out += "x "
    if todo.priority is not None:
        out += f"({todo.priority}) "
    if todo.completed is not None:
        out += f"{todo.completed} "
    if todo.created is not None:
        out += f"{todo.created} "
    return out + todo.description


def format_tag(tag: MetadataTag) -> str:
    match tag:
        case Project(name):
            return f"+{name}"
        case Context(name):
            return f"@{name}"
        case Data(key, value):
            return f"{key}:{value}"
    raise TypeError(f"Not a metadata tag: {tag!r}")


def _tag_from_match(m: re.Match[str]) -> MetadataTag:
    text = m.group("tag")
    key = m.group("key")
    if key is not None:
        return Data(key, text[len(key) + 1:])
    if text.startswith("@"):
        return Context(text[1:])
    return Project(text[1:])


def find_meta(description: str) -> list[MetadataTag]:
    """Return the tags embedded in `description`, left to right. Computed fresh on each call."""
    return [_tag_from_match(m) for m in _TAG_RE.finditer(description)]


def has_tag(todo: Todo, tag: MetadataTag) -> bool:
    return tag in find_meta(todo.description)


def has_context(todo: Todo, name: str) -> bool:
    return has_tag(todo, Context(name))


def has_project(todo: Todo, name: str) -> bool:
    return has_tag(todo, Project(name))


def get_data(todo: Todo, key: str) -> str | None:
    """Value of the first `key:value` tag with a matching key, or None."""
    for tag in find_meta(todo.description):
        if isinstance(tag, Data) and tag.key == key:
            return tag.value
    return None


def escape_description(text: str) -> str:
    """
    Neutralize tag-like substrings in text coming from elsewhere.

    A backslash goes right before the last character of each tag head
    ("\\+proj", "\\@ctx", "key\\:value"), so the text stays readable but
    find_meta no longer sees a tag there.
    """

    def _escape(m: re.Match[str]) -> str:
        pos = m.end("head") - 1
        return f"{text[m.start():pos]}\\{text[pos:m.end()]}"

    return _TAG_RE.sub(_escape, text)


def add_tag(todo: Todo, tag: MetadataTag) -> Todo:
    """Append a rendered tag to the description in place and return the same todo."""
    rendered = format_tag(tag)
    if not todo.description:
        todo.description = rendered
    elif todo.description[-1].isspace():
        todo.description += rendered
    else:
        todo.description = f"{todo.description} {rendered}"
    return todo
