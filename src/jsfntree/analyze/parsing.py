from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field

import tree_sitter_typescript as tstypescript
from tree_sitter import Language, Node, Parser, Tree

# TSX is the most permissive grammar available: plain JS, JSX, type
# annotations, decorators and optional chaining all parse under it.
_TSX_LANGUAGE = Language(tstypescript.language_tsx())


class ParseError(ValueError):
    """Source text is not valid under the permissive TSX grammar."""

    def __init__(self, message: str, line: int, column: int, text: str = "", node_type: str = "") -> None:
        super().__init__(message)
        self.line = line
        self.column = column
        self.text = text
        self.node_type = node_type


@dataclass(frozen=True)
class ParsedSource:
    source: str
    tree: Tree = field(repr=False)
    src_bytes: bytes = field(repr=False)

    @property
    def root(self) -> Node:
        return self.tree.root_node

    def text(self, node: Node) -> str:
        return node_text(self.src_bytes, node)


def node_text(src: bytes, node: Node) -> str:
    return src[node.start_byte : node.end_byte].decode("utf-8", errors="replace")


def start_line(node: Node) -> int:
    return int(node.start_point[0]) + 1


def end_line(node: Node) -> int:
    return int(node.end_point[0]) + 1


def iter_nodes(root: Node) -> Iterator[Node]:
    """Pre-order walk, children in source order."""
    stack = [root]
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.children))


def unwrap_parens(node: Node | None) -> Node | None:
    while node is not None and node.type == "parenthesized_expression":
        inner = [c for c in node.named_children if c.type != "comment"]
        if len(inner) != 1:
            return node
        node = inner[0]
    return node


def get_parser() -> Parser:
    return Parser(_TSX_LANGUAGE)


def _first_error(root: Node) -> Node | None:
    stack = [root]
    while stack:
        node = stack.pop()
        if node.type == "ERROR" or node.is_missing:
            return node
        stack.extend(reversed([c for c in node.children if c.has_error or c.is_missing]))
    return None


def _raise_for_error(root: Node, src: bytes) -> None:
    bad = _first_error(root)
    if bad is None:
        if root.has_error:
            raise ParseError("Syntax error in source", start_line(root), 1)
        return
    line = start_line(bad)
    column = int(bad.start_point[1]) + 1
    if bad.is_missing:
        raise ParseError(
            f"Missing {bad.type!r} at line {line}, column {column}",
            line,
            column,
            node_type=bad.type,
        )
    snippet = node_text(src, bad).strip().splitlines()
    text = snippet[0][:40] if snippet else ""
    raise ParseError(
        f"Unexpected {text!r} at line {line}, column {column}" if text else f"Syntax error at line {line}, column {column}",
        line,
        column,
        text=text,
        node_type=bad.type,
    )


def parse_source(source: str) -> ParsedSource:
    src_bytes = source.encode("utf-8", errors="replace")
    tree = get_parser().parse(src_bytes)
    _raise_for_error(tree.root_node, src_bytes)
    return ParsedSource(source=source, tree=tree, src_bytes=src_bytes)


__all__ = [
    "ParseError",
    "ParsedSource",
    "end_line",
    "iter_nodes",
    "node_text",
    "parse_source",
    "start_line",
    "unwrap_parens",
]
