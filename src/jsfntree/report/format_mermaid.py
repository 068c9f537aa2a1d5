from __future__ import annotations

from pathlib import Path

from .graph_export import GraphExport, GraphNode


def _node(node: GraphNode) -> str:
    return f'{node.id}["{node.label}"]'


def to_mermaid(export: GraphExport) -> str:
    lines = ["graph TD"]
    for edge in export.edges:
        lines.append(f"    {_node(edge.source)} --> {_node(edge.target)}")
    for node in export.standalone:
        lines.append(f"    {_node(node)}")
    return "\n".join(lines) + "\n"


def write_mermaid(export: GraphExport, path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(to_mermaid(export), encoding="utf-8")
