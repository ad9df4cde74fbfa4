"""
todo.txt record handling.

- models.py: Date, metadata tags (Project/Context/Data) and the Todo record
- grammar.py: line parser/serializer, tag extraction, escaping, tag append
- codec.py: reading and writing whole todo.txt streams and files
"""

from .grammar import (
    add_tag,
    escape_description,
    find_meta,
    format_tag,
    format_todo,
    get_data,
    has_context,
    has_project,
    has_tag,
    parse_todo,
)
from .models import Context, Data, Date, MetadataTag, Project, Todo

__all__ = [
    "Context",
    "Data",
    "Date",
    "MetadataTag",
    "Project",
    "Todo",
    "add_tag",
    "escape_description",
    "find_meta",
    "format_tag",
    "format_todo",
    "get_data",
    "has_context",
    "has_project",
    "has_tag",
    "parse_todo",
]
