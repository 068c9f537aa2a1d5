"""First pass: register every named function-like construct in a source file.

Two shapes are catalogued:

* ``function name() {}`` (and generator declarations): the record spans the
  declaration node.
* ``const name = function () {}`` / ``const name = () => {}``: the record is
  named after the bound variable and spans the initializer.

Anonymous callbacks, class and object methods, and class fields are invisible
to the rest of the pipeline.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any

from tree_sitter import Node

from jsfntree.analyze.lines import count_node_lines
from jsfntree.analyze.parsing import ParsedSource, end_line, iter_nodes, start_line, unwrap_parens

DUPLICATE_POLICIES: tuple[str, ...] = ("last", "error")

DECLARATION_NODES = {"function_declaration", "generator_function_declaration"}

# "function" is the pre-0.21 grammar name for "function_expression".
FUNCTION_VALUE_NODES = {"function", "function_expression", "generator_function", "arrow_function"}


class DuplicateNameError(ValueError):
    def __init__(self, name: str, first_line: int, second_line: int) -> None:
        super().__init__(
            f"Function {name!r} is defined more than once (lines {first_line} and {second_line})"
        )
        self.name = name
        self.first_line = first_line
        self.second_line = second_line


@dataclass(frozen=True)
class FunctionRecord:
    name: str
    lineno: int
    end_lineno: int
    line_count: int
    kind: str
    node: Any = field(default=None, compare=False, repr=False)

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "lineno": self.lineno,
            "end_lineno": self.end_lineno,
            "line_count": self.line_count,
            "kind": self.kind,
        }


def declarator_function(parsed: ParsedSource, declarator: Node) -> tuple[str, Node] | None:
    """Return ``(bound name, function node)`` for ``name = <anonymous function>``."""
    ident = declarator.child_by_field_name("name")
    if ident is None or ident.type != "identifier":
        return None
    value = unwrap_parens(declarator.child_by_field_name("value"))
    if value is None or value.type not in FUNCTION_VALUE_NODES:
        return None
    if value.child_by_field_name("name") is not None:
        return None
    return parsed.text(ident), value


def _declaration_record(parsed: ParsedSource, node: Node) -> FunctionRecord | None:
    ident = node.child_by_field_name("name")
    if ident is None:
        return None
    return FunctionRecord(
        name=parsed.text(ident),
        lineno=start_line(node),
        end_lineno=end_line(node),
        line_count=count_node_lines(parsed, node),
        kind="declaration",
        node=node,
    )


def _variable_record(parsed: ParsedSource, node: Node) -> FunctionRecord | None:
    found = declarator_function(parsed, node)
    if found is None:
        return None
    name, value = found
    return FunctionRecord(
        name=name,
        lineno=start_line(node),
        end_lineno=end_line(value),
        line_count=count_node_lines(parsed, value),
        kind="variable",
        node=value,
    )


def iter_function_records(parsed: ParsedSource) -> Iterator[FunctionRecord]:
    for node in iter_nodes(parsed.root):
        if node.type in DECLARATION_NODES:
            record = _declaration_record(parsed, node)
        elif node.type == "variable_declarator":
            record = _variable_record(parsed, node)
        else:
            continue
        if record is not None:
            yield record


def build_catalog(parsed: ParsedSource, on_duplicate: str = "last") -> dict[str, FunctionRecord]:
    if on_duplicate not in DUPLICATE_POLICIES:
        raise ValueError(
            f"Unknown duplicate policy {on_duplicate!r} (expected one of {', '.join(DUPLICATE_POLICIES)})"
        )
    catalog: dict[str, FunctionRecord] = {}
    for record in iter_function_records(parsed):
        existing = catalog.get(record.name)
        if existing is not None and on_duplicate == "error":
            raise DuplicateNameError(record.name, existing.lineno, record.lineno)
        catalog[record.name] = record
    return catalog


__all__ = [
    "DECLARATION_NODES",
    "DUPLICATE_POLICIES",
    "DuplicateNameError",
    "FUNCTION_VALUE_NODES",
    "FunctionRecord",
    "build_catalog",
    "declarator_function",
]
