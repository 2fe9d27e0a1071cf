"""Index of struct types by the name of the declaration that binds them.

A ``struct_type`` node carries no name of its own. The name is inferred from
the site the struct appears in:

* ``type foo struct{...}`` is indexed as ``foo``;
* ``var foo struct{...}`` and ``var foo []*struct{...}`` as ``foo``;
* ``func f(arg struct{...})`` as ``arg``;
* ``T{...}`` composite literals with an inline struct type get no name.

Struct fields use the same rule as parameters, so a field whose type is an
inline struct is indexed under the field's name.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from tree_sitter import Node

from fieldretype.core.syntax import SyntaxTree, named, walk


class BindingSite(Enum):
    """Declaration contexts a struct type can appear in.

    Each value pairs a label with the child field holding the bound name, or
    ``None`` when the context never names its struct.
    """

    TYPE_DECLARATION = ("type declaration", "name")
    COMPOSITE_LITERAL = ("composite literal", None)
    VARIABLE_DECLARATION = ("variable declaration", "name")
    PARAMETER = ("parameter", "name")

    @property
    def name_field(self) -> str | None:
        return self.value[1]


_SITES: dict[str, BindingSite] = {
    "type_spec": BindingSite.TYPE_DECLARATION,
    "type_alias": BindingSite.TYPE_DECLARATION,
    "composite_literal": BindingSite.COMPOSITE_LITERAL,
    "var_spec": BindingSite.VARIABLE_DECLARATION,
    "const_spec": BindingSite.VARIABLE_DECLARATION,
    "parameter_declaration": BindingSite.PARAMETER,
    "field_declaration": BindingSite.PARAMETER,
}

_DEREF_CHILD: dict[str, str | None] = {
    "pointer_type": None,
    "slice_type": "element",
    "array_type": "element",
    "implicit_length_array_type": "element",
}


@dataclass(frozen=True)
class RecordEntry:
    name: str
    node: Node
    site: BindingSite


def deref(node: Node | None) -> Node | None:
    """Strip leading ``*``, ``[]`` and ``[N]`` from a type expression."""
    while node is not None and node.type in _DEREF_CHILD:
        child_field = _DEREF_CHILD[node.type]
        if child_field is None:
            children = named(node)
            node = children[0] if children else None
        else:
            node = node.child_by_field_name(child_field)
    return node


def _bound_name(tree: SyntaxTree, node: Node, site: BindingSite) -> str:
    if site.name_field is None:
        return ""
    names = node.children_by_field_name(site.name_field)
    return tree.text(names[0]) if names else ""


def collect_records(tree: SyntaxTree) -> dict[int, RecordEntry]:
    """Map the start byte of every bound struct type to its inferred name."""
    records: dict[int, RecordEntry] = {}

    for node in walk(tree.root):
        site = _SITES.get(node.type)
        if site is None:
            continue

        struct = deref(node.child_by_field_name("type"))
        if struct is None or struct.type != "struct_type":
            continue

        records[struct.start_byte] = RecordEntry(_bound_name(tree, node, site), struct, site)

    return records
