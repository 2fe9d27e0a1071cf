"""Serialize a rewritten tree back to Go source."""

from __future__ import annotations

import shutil
import subprocess

from tree_sitter_language_pack import get_parser

from fieldretype.core.syntax import LANGUAGE, SyntaxTree
from fieldretype.errors import FormatError


def _check_parses(source: bytes) -> None:
    tree = get_parser(LANGUAGE).parse(source)
    if tree.root_node.has_error:
        raise FormatError("rewritten source is not valid Go, check the --to type")


def render(tree: SyntaxTree) -> str:
    """Apply the recorded replacements to the original bytes.

    Everything outside the replaced type expressions is kept byte for byte.
    """
    output = tree.source
    for (start, end), text in sorted(tree.replacements.items(), reverse=True):
        output = output[:start] + text.encode("utf-8") + output[end:]

    if tree.replacements:
        _check_parses(output)

    return output.decode("utf-8")


def gofmt(source: str, binary: str = "gofmt") -> str:
    """Pipe ``source`` through gofmt, which realigns the rewritten fields."""
    executable = shutil.which(binary)
    if executable is None:
        raise FormatError(f"gofmt executable {binary!r} not found in PATH")

    result = subprocess.run(
        [executable],
        input=source.encode("utf-8"),
        capture_output=True,
    )
    if result.returncode != 0:
        raise FormatError(f"gofmt failed: {result.stderr.decode('utf-8', errors='replace').strip()}")
    return result.stdout.decode("utf-8")
