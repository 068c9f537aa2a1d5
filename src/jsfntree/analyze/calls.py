"""Second pass: attribute every call expression to a caller and a callee.

The caller is the nearest enclosing function-like node, named either by its
own identifier or by the variable it initializes. Anything else (methods,
inline callbacks, top-level code) leaves the call unattributed and it is
dropped. The callee is the bare identifier or the property name of a member
call, so ``obj.render()`` resolves to a catalogued ``render``.
"""

from __future__ import annotations

from collections.abc import Mapping, Set

from tree_sitter import Node

from jsfntree.analyze.catalog import DECLARATION_NODES, FUNCTION_VALUE_NODES, FunctionRecord
from jsfntree.analyze.parsing import ParsedSource, unwrap_parens

CallRelation = dict[str, tuple[str, ...]]

FUNCTION_SCOPE_NODES = DECLARATION_NODES | FUNCTION_VALUE_NODES | {"method_definition"}

# Links of a member/call chain that an optional-chain marker can sit on.
_CHAIN_NODES = {"member_expression", "subscript_expression", "call_expression", "non_null_expression"}


def _has_optional_marker(node: Node) -> bool:
    return any(child.type in {"optional_chain", "?."} for child in node.children)


def _is_optional_call(call: Node) -> bool:
    if _has_optional_marker(call):
        return True
    current = call.child_by_field_name("function")
    while current is not None and current.type in _CHAIN_NODES:
        if _has_optional_marker(current):
            return True
        if current.type == "call_expression":
            current = current.child_by_field_name("function")
        elif current.type == "non_null_expression":
            current = current.named_children[0] if current.named_children else None
        else:
            current = current.child_by_field_name("object")
    return False


def callee_name(parsed: ParsedSource, call: Node) -> str | None:
    args = call.child_by_field_name("arguments")
    if args is not None and args.type == "template_string":
        return None
    if _is_optional_call(call):
        return None
    target = unwrap_parens(call.child_by_field_name("function"))
    if target is None:
        return None
    if target.type == "identifier":
        return parsed.text(target)
    if target.type == "member_expression":
        prop = target.child_by_field_name("property")
        if prop is not None and prop.type == "property_identifier":
            return parsed.text(prop)
    return None


def _scope_name(parsed: ParsedSource, node: Node, binding: str | None) -> str | None:
    if node.type == "method_definition":
        return None
    ident = node.child_by_field_name("name")
    if ident is not None:
        return parsed.text(ident)
    return binding


def _child_binding(parsed: ParsedSource, node: Node, child: Node, binding: str | None) -> str | None:
    """Variable name a child inherits when it is the initializer of a declarator."""
    if node.type == "parenthesized_expression":
        return binding
    if node.type != "variable_declarator":
        return None
    ident = node.child_by_field_name("name")
    value = node.child_by_field_name("value")
    if ident is None or ident.type != "identifier" or value is None:
        return None
    if child.start_byte != value.start_byte or child.end_byte != value.end_byte:
        return None
    return parsed.text(ident)


def resolve_calls(
    parsed: ParsedSource,
    catalog: Mapping[str, FunctionRecord],
    denylist: Set[str],
) -> CallRelation:
    edges: dict[str, list[str]] = {}
    # (node, enclosing caller, variable binding for an anonymous function value)
    stack: list[tuple[Node, str | None, str | None]] = [(parsed.root, None, None)]
    while stack:
        node, caller, binding = stack.pop()
        if node.is_named and node.type in FUNCTION_SCOPE_NODES:
            caller = _scope_name(parsed, node, binding)
        elif node.type == "call_expression" and caller is not None:
            callee = callee_name(parsed, node)
            if (
                callee is not None
                and caller in catalog
                and callee in catalog
                and callee not in denylist
            ):
                callees = edges.setdefault(caller, [])
                if callee not in callees:
                    callees.append(callee)
        for child in reversed(node.children):
            stack.append((child, caller, _child_binding(parsed, node, child, binding)))
    return {caller: tuple(callees) for caller, callees in edges.items()}


__all__ = ["CallRelation", "FUNCTION_SCOPE_NODES", "callee_name", "resolve_calls"]
