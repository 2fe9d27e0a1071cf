"""Turn a locator into the span of source lines the rewrite is limited to."""

from __future__ import annotations

import re

from fieldretype.core.records import RecordEntry, collect_records
from fieldretype.core.syntax import SyntaxTree, named
from fieldretype.errors import (
    ConfigurationError,
    FieldNotFoundError,
    InvalidRangeError,
    LineParseError,
    RecordNotFoundError,
)
from fieldretype.models import Locator, Span

_LINE_NUMBER = re.compile(r"[+-]?[0-9]+")


def _line_number(token: str) -> int:
    if not _LINE_NUMBER.fullmatch(token):
        raise LineParseError(f"invalid line number {token!r}")
    return int(token)


def line_selection(line: str) -> Span:
    parts = line.split(",")
    if len(parts) > 2:
        raise LineParseError(f"invalid line range {line!r}, expected N or N,M")

    start = _line_number(parts[0])
    end = _line_number(parts[1]) if len(parts) == 2 else start

    if start > end:
        raise InvalidRangeError("wrong range. start line cannot be larger than end line")

    return Span(start, end)


def find_record(tree: SyntaxTree, record: str) -> RecordEntry:
    """Return the struct indexed under ``record``.

    Several structs can share a name (shadowing, nested scopes). The last one
    in traversal order is returned.
    """
    found: RecordEntry | None = None
    for entry in collect_records(tree).values():
        if entry.name == record:
            found = entry

    if found is None:
        raise RecordNotFoundError(record)
    return found


def field_selection(tree: SyntaxTree, entry: RecordEntry, field: str) -> Span:
    found = None
    for declaration in named(named(entry.node)[0], "field_declaration"):
        for name in declaration.children_by_field_name("name"):
            if tree.text(name) == field:
                found = declaration

    if found is None:
        raise FieldNotFoundError(entry.name, field)

    return Span(tree.start_line(found), tree.end_line(found))


def record_selection(tree: SyntaxTree, record: str, field: str = "") -> Span:
    entry = find_record(tree, record)
    if field:
        return field_selection(tree, entry, field)
    return Span(tree.start_line(entry.node), tree.end_line(entry.node))


def all_selection(tree: SyntaxTree) -> Span:
    return Span(1, tree.lines.line_count)


def find_selection(tree: SyntaxTree, locator: Locator) -> Span:
    if locator.line:
        return line_selection(locator.line)
    if locator.record:
        return record_selection(tree, locator.record, locator.field)
    if locator.all:
        return all_selection(tree)
    raise ConfigurationError("-line, -struct or -all is not passed")
