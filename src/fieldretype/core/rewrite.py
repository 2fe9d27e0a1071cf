from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass, field
from enum import Enum

from tree_sitter import Node

from fieldretype.core.exprs import expr_string
from fieldretype.core.syntax import SyntaxTree, named
from fieldretype.models import RewriteSpec, Span

logger = logging.getLogger(__name__)


class FieldOutcome(Enum):
    REWRITTEN = "rewritten"
    OUT_OF_SPAN = "out of span"
    NO_NAME = "no eligible name"
    UNSUPPORTED_EMBEDDED = "unsupported embedded type"
    TYPE_MISMATCH = "type mismatch"


@dataclass(frozen=True)
class RewrittenField:
    line: int
    name: str
    from_type: str
    to_type: str


@dataclass
class RewriteResult:
    span: Span
    rewritten: list[RewrittenField] = field(default_factory=list)
    skipped: Counter[FieldOutcome] = field(default_factory=Counter)


def is_public_name(name: str) -> bool:
    return bool(name) and name[0].isupper()


def _representative_name(tree: SyntaxTree, declaration: Node, skip_unexported: bool) -> str | None:
    """Name used to decide whether a field is eligible.

    Returns ``None`` for embedded fields whose type is not a plain identifier.
    """
    names = declaration.children_by_field_name("name")
    if names:
        for name in names:
            text = tree.text(name)
            if not skip_unexported or is_public_name(text):
                return text
        return ""

    type_node = declaration.child_by_field_name("type")
    embedded_pointer = any(child.type == "*" for child in declaration.children)
    if type_node is None or type_node.type != "type_identifier" or embedded_pointer:
        return None

    # embedded fields have no name of their own to check for visibility
    return "" if skip_unexported else tree.text(type_node)


def rewrite_field(
    tree: SyntaxTree, declaration: Node, span: Span, spec: RewriteSpec, skip_unexported: bool = False
) -> FieldOutcome:
    if not span.contains(tree.start_line(declaration)):
        return FieldOutcome.OUT_OF_SPAN

    name = _representative_name(tree, declaration, skip_unexported)
    if name is None:
        return FieldOutcome.UNSUPPORTED_EMBEDDED
    if not name:
        return FieldOutcome.NO_NAME

    type_node = declaration.child_by_field_name("type")
    if expr_string(type_node, tree.source) != spec.from_type:
        return FieldOutcome.TYPE_MISMATCH

    tree.replace(type_node, spec.to_type)
    logger.debug(
        "Rewrote field %s on line %d: %s -> %s", name, tree.start_line(declaration), spec.from_type, spec.to_type
    )
    return FieldOutcome.REWRITTEN


def rewrite(tree: SyntaxTree, span: Span, spec: RewriteSpec, skip_unexported: bool = False) -> RewriteResult:
    """Replace the type of every field in ``span`` spelled exactly ``spec.from_type``.

    All struct types are visited, named or not. Subtrees that were already
    replaced are not descended into.
    """
    result = RewriteResult(span=span)

    stack = [tree.root]
    while stack:
        node = stack.pop()
        if tree.is_replaced(node):
            continue

        if node.type == "struct_type":
            for declaration in named(named(node)[0], "field_declaration"):
                outcome = rewrite_field(tree, declaration, span, spec, skip_unexported)
                if outcome is FieldOutcome.REWRITTEN:
                    names = declaration.children_by_field_name("name")
                    result.rewritten.append(
                        RewrittenField(
                            line=tree.start_line(declaration),
                            name=tree.text(names[0]) if names else spec.from_type,
                            from_type=spec.from_type,
                            to_type=spec.to_type,
                        )
                    )
                else:
                    result.skipped[outcome] += 1

        stack.extend(reversed(node.children))

    return result
