from __future__ import annotations

from tree_sitter import Node

from jsfntree.analyze.parsing import ParsedSource, end_line, start_line


def _is_blank(line: str) -> bool:
    return not line.replace("\ufeff", "").strip()


def count_nonblank_lines(source: str, first_line: int, last_line: int) -> int:
    """Count non-blank lines in the inclusive 1-based range [first_line, last_line].

    Comment-only lines are not blank.
    """
    if last_line < first_line:
        return 0
    lines = source.split("\n")[max(first_line, 1) - 1 : last_line]
    return sum(1 for line in lines if not _is_blank(line))


def count_node_lines(parsed: ParsedSource, node: Node) -> int:
    return count_nonblank_lines(parsed.source, start_line(node), end_line(node))
