"""Canonical spelling of Go type expressions.

The rendering follows ``go/types.ExprString``: tokens are joined without
insignificant whitespace, struct tags and comments are dropped, and field
lists are separated with ``"; "`` (struct, interface) or ``", "`` (parameters).
Array lengths keep a single space around binary operators, as in ``[N + 1]T``.
Two type expressions match when their canonical spellings are equal.
"""

from __future__ import annotations

from tree_sitter import Node

from fieldretype.core.syntax import named


def _text(node: Node, source: bytes) -> str:
    return source[node.start_byte : node.end_byte].decode("utf-8")


def _collapsed(node: Node, source: bytes) -> str:
    return " ".join(_text(node, source).split())


def _field(node: Node, name: str, source: bytes) -> str:
    child = node.child_by_field_name(name)
    return expr_string(child, source) if child is not None else ""


def _names(node: Node, source: bytes) -> str:
    return ", ".join(_text(name, source) for name in node.children_by_field_name("name"))


def _has_token(node: Node, token: str) -> bool:
    return any(child.type == token for child in node.children)


def _parameter(node: Node, source: bytes) -> str:
    names = _names(node, source)
    type_text = _field(node, "type", source)
    if node.type == "variadic_parameter_declaration":
        type_text = "..." + type_text
    return f"{names} {type_text}" if names else type_text


def _parameter_list(node: Node, source: bytes) -> str:
    return ", ".join(_parameter(param, source) for param in named(node))


def _signature(node: Node, source: bytes) -> str:
    params = node.child_by_field_name("parameters")
    signature = "(" + (_parameter_list(params, source) if params is not None else "") + ")"

    result = node.child_by_field_name("result")
    if result is None:
        return signature
    if result.type != "parameter_list":
        return f"{signature} {expr_string(result, source)}"

    results = named(result)
    if not results:
        return signature
    if len(results) == 1 and not results[0].children_by_field_name("name"):
        return f"{signature} {_parameter(results[0], source)}"
    return f"{signature} ({_parameter_list(result, source)})"


def _struct_field(node: Node, source: bytes) -> str:
    names = _names(node, source)
    type_text = _field(node, "type", source)
    if names:
        return f"{names} {type_text}"
    return ("*" if _has_token(node, "*") else "") + type_text


def _interface_element(node: Node, source: bytes) -> str:
    if node.type in ("method_elem", "method_spec"):
        return _text(node.child_by_field_name("name"), source) + _signature(node, source)
    return expr_string(node, source)


def _channel(node: Node, source: bytes) -> str:
    value = _field(node, "value", source)
    if node.children and node.children[0].type == "<-":
        return f"<-chan {value}"
    if _has_token(node, "<-"):
        return f"chan<- {value}"
    return f"chan {value}"


def _value(node: Node, source: bytes) -> str:
    """Render a constant expression, such as an array length, with Go's operator spacing."""
    kind = node.type

    if kind == "binary_expression":
        operator = _text(node.child_by_field_name("operator"), source)
        left = _value(node.child_by_field_name("left"), source)
        return f"{left} {operator} " + _value(node.child_by_field_name("right"), source)
    if kind == "unary_expression":
        operator = _text(node.child_by_field_name("operator"), source)
        return operator + _value(node.child_by_field_name("operand"), source)
    if kind == "parenthesized_expression":
        return "(" + _value(named(node)[0], source) + ")"
    if kind == "selector_expression":
        return _value(node.child_by_field_name("operand"), source) + "." + _field(node, "field", source)
    if kind == "index_expression":
        operand = _value(node.child_by_field_name("operand"), source)
        return operand + "[" + _value(node.child_by_field_name("index"), source) + "]"
    if kind == "call_expression":
        arguments = node.child_by_field_name("arguments")
        rendered = ", ".join(_value(arg, source) for arg in named(arguments))
        return _value(node.child_by_field_name("function"), source) + "(" + rendered + ")"

    return expr_string(node, source)


def expr_string(node: Node, source: bytes) -> str:
    """Render a type expression node in its canonical spelling."""
    kind = node.type

    if kind in ("type_identifier", "identifier", "field_identifier", "package_identifier"):
        return _text(node, source)
    if kind == "qualified_type":
        return _field(node, "package", source) + "." + _field(node, "name", source)
    if kind == "pointer_type":
        return "*" + expr_string(named(node)[0], source)
    if kind == "slice_type":
        return "[]" + _field(node, "element", source)
    if kind == "array_type":
        length = node.child_by_field_name("length")
        return "[" + _value(length, source) + "]" + _field(node, "element", source)
    if kind == "implicit_length_array_type":
        return "[...]" + _field(node, "element", source)
    if kind == "map_type":
        return "map[" + _field(node, "key", source) + "]" + _field(node, "value", source)
    if kind == "channel_type":
        return _channel(node, source)
    if kind == "function_type":
        return "func" + _signature(node, source)
    if kind == "struct_type":
        fields = named(named(node)[0], "field_declaration")
        return "struct{" + "; ".join(_struct_field(field, source) for field in fields) + "}"
    if kind == "interface_type":
        return "interface{" + "; ".join(_interface_element(elem, source) for elem in named(node)) + "}"
    if kind == "generic_type":
        arguments = node.child_by_field_name("type_arguments")
        rendered = ", ".join(expr_string(arg, source) for arg in named(arguments))
        return _field(node, "type", source) + "[" + rendered + "]"
    if kind == "type_elem":
        return " | ".join(expr_string(term, source) for term in named(node))
    if kind == "parenthesized_type":
        return "(" + expr_string(named(node)[0], source) + ")"
    if kind == "negated_type":
        return "~" + expr_string(named(node)[0], source)

    return _collapsed(node, source)
