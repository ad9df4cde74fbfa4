# tests/test_grammar.py

from __future__ import annotations

import pytest

from todotxt_sync.errors import FormatError
from todotxt_sync.todo.grammar import (
    add_tag,
    escape_description,
    find_meta,
    format_tag,
    format_todo,
    get_data,
    has_context,
    has_project,
    parse_todo,
)
from todotxt_sync.todo.models import Context, Data, Date, Project, Todo


def test_parse_full_line() -> None:
    t = parse_todo("x (A) 2024-02-01 2024-01-05 Review MR +app @gitlab id:12")
    assert t == Todo(
        done=True,
        priority="A",
        completed=Date(2024, 2, 1),
        created=Date(2024, 1, 5),
        description="Review MR +app @gitlab id:12",
    )


def test_parse_plain_description() -> None:
    t = parse_todo("Call mom")
    assert t == Todo(description="Call mom")


def test_parse_single_date_is_creation_date() -> None:
    t = parse_todo("(B) 2024-01-05 Write report")
    assert t.priority == "B"
    assert t.created == Date(2024, 1, 5)
    assert t.completed is None
    assert t.description == "Write report"


def test_parse_two_dates_on_open_item_fails() -> None:
    with pytest.raises(FormatError, match="Completion date"):
        parse_todo("2024-02-01 2024-01-05 Not done yet")


def test_parse_non_date_token_is_description() -> None:
    t = parse_todo("2024-13-01 is not a date")
    assert t.created is None
    assert t.description == "2024-13-01 is not a date"


def test_parse_x_needs_following_whitespace() -> None:
    t = parse_todo("xylophone lessons")
    assert not t.done
    assert t.description == "xylophone lessons"


def test_parse_lowercase_priority_is_description() -> None:
    t = parse_todo("(a) lowercase")
    assert t.priority is None
    assert t.description == "(a) lowercase"


def test_parse_trims_leading_whitespace_of_description() -> None:
    t = parse_todo("x   (C)   2024-01-05    spaced out")
    assert t == Todo(done=True, priority="C", created=Date(2024, 1, 5), description="spaced out")


def test_format_only_present_parts() -> None:
    assert format_todo(Todo(description="Call mom")) == "Call mom"
    assert format_todo(Todo(priority="A", created=Date(2024, 1, 5), description="Go")) == "(A) 2024-01-05 Go"
    t = Todo(done=True, created=Date(2024, 1, 5), completed=Date(2024, 2, 1), description="Done it")
    assert format_todo(t) == "x 2024-02-01 2024-01-05 Done it"


def test_format_empty_description_keeps_separators() -> None:
    assert format_todo(Todo(done=True)) == "x "
    assert format_todo(Todo(priority="A")) == "(A) "
    assert format_todo(Todo(created=Date(2024, 1, 5))) == "2024-01-05 "
    t = Todo(done=True, created=Date(2024, 1, 5), completed=Date(2024, 1, 6))
    assert format_todo(t) == "x 2024-01-06 2024-01-05 "


def test_parse_lone_prefix_tokens_are_description() -> None:
    assert parse_todo("x") == Todo(description="x")
    assert parse_todo("(A)") == Todo(description="(A)")
    assert parse_todo("2024-01-05") == Todo(description="2024-01-05")
    assert parse_todo("x 2024-01-05") == Todo(done=True, description="2024-01-05")


def test_parse_full_width_digits_are_not_a_date() -> None:
    t = parse_todo("\uff12\uff10\uff12\uff14-01-05 foo")
    assert t.created is None
    assert t.description == "\uff12\uff10\uff12\uff14-01-05 foo"


@pytest.mark.parametrize(
    "todo",
    [
        Todo(description="Plain"),
        Todo(done=True, description="Done without dates"),
        Todo(priority="Z", description="Low prio +proj @ctx id:3"),
        Todo(created=Date(2024, 1, 5), description="Created only"),
        Todo(done=True, priority="A", created=Date(1999, 12, 31), completed=Date(2000, 1, 1), description="All"),
        Todo(done=True, created=Date(2024, 1, 5), completed=Date(2024, 1, 6)),
        Todo(created=Date(2024, 1, 5)),
        Todo(done=True),
        Todo(description="x"),
        Todo(description="(A)"),
        Todo(description="2024-01-05"),
        Todo(done=True, description="2024-01-05"),
        Todo(done=True, description="(A)"),
    ],
)
def test_round_trip(todo: Todo) -> None:
    assert parse_todo(format_todo(todo)) == todo


def test_find_meta_in_order_with_duplicates() -> None:
    desc = "Fix +app bug @work id:12 +app due:2024-03-01"
    assert find_meta(desc) == [
        Project("app"),
        Context("work"),
        Data("id", "12"),
        Project("app"),
        Data("due", "2024-03-01"),
    ]


def test_find_meta_is_restartable() -> None:
    desc = "a +p @c"
    assert find_meta(desc) == find_meta(desc)


def test_find_meta_requires_whitespace_before_tag() -> None:
    assert find_meta("mail me at bob@example.com") == []
    assert find_meta("C++ and a+b") == []


def test_find_meta_stops_at_word_boundary() -> None:
    assert find_meta("see id:42, then +proj.") == [Data("id", "42"), Project("proj")]


def test_find_meta_url_is_data_tag() -> None:
    assert find_meta("link https://example.com/x") == [Data("https", "//example.com/x")]


def test_tag_helpers() -> None:
    t = Todo(description="Review +app @gitlab id:7 id:8")
    assert has_context(t, "gitlab")
    assert not has_context(t, "app")
    assert has_project(t, "app")
    assert get_data(t, "id") == "7"
    assert get_data(t, "missing") is None


def test_format_tag() -> None:
    assert format_tag(Project("p")) == "+p"
    assert format_tag(Context("c")) == "@c"
    assert format_tag(Data("k", "v")) == "k:v"


def test_format_tag_rejects_other_types() -> None:
    with pytest.raises(TypeError):
        format_tag("+p")  # type: ignore[arg-type]


def test_escaped_description_has_no_tags_but_keeps_text() -> None:
    todo = Todo(description="Test")
    add_tag(todo, Project("testprj"))
    add_tag(todo, Context("testctx"))
    add_tag(todo, Data("test", "data"))
    assert len(find_meta(todo.description)) == 3

    escaped = escape_description(todo.description)
    assert find_meta(escaped) == []
    for s in ("testprj", "testctx", "test", "data"):
        assert s in escaped


def test_escape_inserts_backslash_before_head_char() -> None:
    assert escape_description("a +p @c k:v") == "a \\+p \\@c k\\:v"


@pytest.mark.parametrize(
    "desc",
    [
        "",
        "nothing to see",
        "+a +b +c",
        "@@double a:b:c",
        "ticket:123 closes #4",
        "https://gitlab.example.com/x @here",
        "already \\+escaped k\\:v",
        "\t+tab\n@newline",
    ],
)
def test_escape_leaves_nothing_extractable(desc: str) -> None:
    assert find_meta(escape_description(desc)) == []


def test_escape_twice_is_stable() -> None:
    once = escape_description("x +p k:v")
    assert escape_description(once) == once


def test_add_tag_whitespace_rules() -> None:
    assert add_tag(Todo(), Context("c")).description == "@c"
    assert add_tag(Todo(description="ends with space "), Project("p")).description == "ends with space +p"
    assert add_tag(Todo(description="text"), Data("id", "1")).description == "text id:1"


def test_add_tag_never_rewrites_existing_tags() -> None:
    t = Todo(description="x +p")
    add_tag(t, Project("p"))
    assert t.description == "x +p +p"
    assert find_meta(t.description) == [Project("p"), Project("p")]
