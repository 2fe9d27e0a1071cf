"""Parsing Go source into a tree with a fixed line table and pending type replacements."""

from __future__ import annotations

from bisect import bisect_right
from collections.abc import Iterator
from pathlib import Path

from tree_sitter import Node, Tree
from tree_sitter_language_pack import get_parser

from fieldretype.errors import SourceParseError

LANGUAGE = "go"


class LineTable:
    """Byte offsets of every line start, recorded once from the original source."""

    def __init__(self, source: bytes) -> None:
        size = len(source)
        self._starts = [0]
        offset = source.find(b"\n")
        while offset != -1:
            # a trailing newline does not open a new line
            if offset + 1 < size:
                self._starts.append(offset + 1)
            offset = source.find(b"\n", offset + 1)

    @property
    def line_count(self) -> int:
        return len(self._starts)

    def line_of(self, offset: int) -> int:
        return bisect_right(self._starts, offset)


class SyntaxTree:
    """A parsed Go file.

    Positions always refer to the original bytes. Type replacements are only
    recorded here and get applied by the printer, so line lookups stay valid
    for the whole rewrite pass.
    """

    def __init__(self, source: bytes, tree: Tree, path: Path | None = None) -> None:
        self.source = source
        self.tree = tree
        self.path = path
        self.lines = LineTable(source)
        self.replacements: dict[tuple[int, int], str] = {}

    @property
    def root(self) -> Node:
        return self.tree.root_node

    def text(self, node: Node) -> str:
        return self.source[node.start_byte : node.end_byte].decode("utf-8")

    def start_line(self, node: Node) -> int:
        return self.lines.line_of(node.start_byte)

    def end_line(self, node: Node) -> int:
        return self.lines.line_of(node.end_byte)

    def replace(self, node: Node, text: str) -> None:
        self.replacements[(node.start_byte, node.end_byte)] = text

    def is_replaced(self, node: Node) -> bool:
        """Whether a replacement was recorded for exactly the byte range of ``node``."""
        return (node.start_byte, node.end_byte) in self.replacements


def walk(node: Node) -> Iterator[Node]:
    """Yield ``node`` and all its descendants in pre-order."""
    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(current.children))


def named(node: Node, node_type: str | None = None) -> list[Node]:
    """Named children of ``node`` without comments, optionally filtered by type."""
    return [
        child
        for child in node.named_children
        if child.type != "comment" and (node_type is None or child.type == node_type)
    ]


def _first_error(root: Node) -> Node | None:
    for node in walk(root):
        if node.type == "ERROR" or node.is_missing:
            return node
    return None


def _check_encoding(source: bytes, path: Path | None) -> None:
    try:
        source.decode("utf-8")
    except UnicodeDecodeError as exc:
        line = LineTable(source).line_of(exc.start)
        column = exc.start - source.rfind(b"\n", 0, exc.start)
        raise SourceParseError(f"{path or '<source>'}:{line}:{column}: illegal UTF-8 encoding") from None


def parse_source(source: bytes, path: Path | None = None) -> SyntaxTree:
    _check_encoding(source, path)
    parser = get_parser(LANGUAGE)
    tree = parser.parse(source)
    syntax_tree = SyntaxTree(source, tree, path)

    if tree.root_node.has_error:
        error = _first_error(tree.root_node) or tree.root_node
        row, column = error.start_point
        raise SourceParseError(f"{path or '<source>'}:{row + 1}:{column + 1}: syntax error")

    return syntax_tree


def parse_file(path: str | Path) -> SyntaxTree:
    file_path = Path(path)
    try:
        source_bytes = file_path.read_bytes()
    except FileNotFoundError:
        raise FileNotFoundError(f"File not found: {path}") from None

    return parse_source(source_bytes, file_path)
