from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

from tree_sitter import Node

from jsfntree.analyze.catalog import DECLARATION_NODES, declarator_function
from jsfntree.analyze.parsing import ParsedSource, parse_source

_DECLARATION_STATEMENTS = {"lexical_declaration", "variable_declaration"}


@dataclass(frozen=True)
class RemovalResult:
    code: str
    removed: list[str] = field(default_factory=list)


def modified_path(path: Path) -> Path:
    return path.with_name(f"{path.stem}.modified{path.suffix}")


def _statement_span(node: Node, parents: dict[int, Node]) -> tuple[int, int]:
    parent = parents.get(node.id)
    if parent is not None and parent.type == "export_statement":
        return parent.start_byte, parent.end_byte
    return node.start_byte, node.end_byte


def _bound_function_name(parsed: ParsedSource, declarator: Node) -> str | None:
    match = declarator_function(parsed, declarator)
    return match[0] if match else None


def _declarator_span(
    parsed: ParsedSource, node: Node, parents: dict[int, Node], wanted: set[str]
) -> tuple[int, int]:
    statement = parents.get(node.id)
    if statement is None or statement.type not in _DECLARATION_STATEMENTS:
        return node.start_byte, node.end_byte
    siblings = statement.children
    declarators = [c for c in siblings if c.type == "variable_declarator"]
    if all(_bound_function_name(parsed, d) in wanted for d in declarators):
        return _statement_span(statement, parents)
    idx = next(i for i, c in enumerate(siblings) if c.id == node.id)
    # Take the comma after the declarator, or the one before it when last.
    if idx + 2 < len(siblings) and siblings[idx + 1].type == ",":
        return node.start_byte, siblings[idx + 2].start_byte
    if idx > 0 and siblings[idx - 1].type == ",":
        return siblings[idx - 1].start_byte, node.end_byte
    return node.start_byte, node.end_byte


def _expand_to_lines(src: bytes, start: int, end: int) -> tuple[int, int]:
    """Widen a span to whole lines when nothing else shares those lines."""
    line_start = src.rfind(b"\n", 0, start) + 1
    if src[line_start:start].strip():
        return start, end
    line_end = src.find(b"\n", end)
    if line_end == -1:
        line_end = len(src)
    if src[end:line_end].strip():
        return start, end
    return line_start, min(line_end + 1, len(src))


def _removal_spans(parsed: ParsedSource, wanted: set[str]) -> tuple[list[tuple[int, int]], set[str]]:
    parents: dict[int, Node] = {}
    spans: list[tuple[int, int]] = []
    found: set[str] = set()
    stack = [parsed.root]
    while stack:
        node = stack.pop()
        for child in node.children:
            parents[child.id] = node
        stack.extend(reversed(node.children))
        if node.type in DECLARATION_NODES:
            ident = node.child_by_field_name("name")
            if ident is None or parsed.text(ident) not in wanted:
                continue
            found.add(parsed.text(ident))
            spans.append(_statement_span(node, parents))
        elif node.type == "variable_declarator":
            match = declarator_function(parsed, node)
            if match is None or match[0] not in wanted:
                continue
            found.add(match[0])
            spans.append(_declarator_span(parsed, node, parents, wanted))
    return spans, found


def remove_functions(source: str, names: Iterable[str]) -> RemovalResult:
    """Drop the named catalogued functions from ``source``.

    This runs its own parse; cataloguing never edits the tree.
    """
    requested = [n for n in names if n]
    if not requested:
        return RemovalResult(code=source)
    parsed = parse_source(source)
    spans, found = _removal_spans(parsed, set(requested))
    src = parsed.src_bytes
    merged: list[tuple[int, int]] = []
    for start, end in sorted(_expand_to_lines(src, s, e) for s, e in spans):
        if merged and start < merged[-1][1]:
            merged[-1] = (merged[-1][0], max(merged[-1][1], end))
            continue
        merged.append((start, end))
    out = bytearray(src)
    for start, end in reversed(merged):
        del out[start:end]
    removed = [n for n in dict.fromkeys(requested) if n in found]
    return RemovalResult(code=out.decode("utf-8", errors="replace"), removed=removed)


__all__ = ["RemovalResult", "modified_path", "remove_functions"]
