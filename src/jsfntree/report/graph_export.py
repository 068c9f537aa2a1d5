from __future__ import annotations

from dataclasses import dataclass, field

from jsfntree.analyze.pipeline import Analysis


@dataclass(frozen=True)
class GraphNode:
    id: str
    label: str
    line_count: int
    lineno: int


@dataclass(frozen=True)
class GraphEdge:
    source: GraphNode
    target: GraphNode


@dataclass(frozen=True)
class GraphExport:
    nodes: list[GraphNode] = field(default_factory=list)
    edges: list[GraphEdge] = field(default_factory=list)
    standalone: list[GraphNode] = field(default_factory=list)


def node_label(name: str, line_count: int, lineno: int) -> str:
    return f"{name} ({line_count} lines)<br>Line: {lineno}"


def _graph_node(analysis: Analysis, name: str) -> GraphNode:
    record = analysis.catalog[name]
    return GraphNode(
        id=name,
        label=node_label(name, record.line_count, record.lineno),
        line_count=record.line_count,
        lineno=record.lineno,
    )


def build_graph_export(analysis: Analysis) -> GraphExport:
    """Node/edge view of an analysis.

    Only functions that take part in at least one edge are emitted. Roots
    with outgoing calls are also listed in ``standalone``.
    """
    nodes: dict[str, GraphNode] = {}
    edges: list[GraphEdge] = []
    for caller, callees in analysis.relation.items():
        for callee in callees:
            source = nodes.setdefault(caller, _graph_node(analysis, caller))
            target = nodes.setdefault(callee, _graph_node(analysis, callee))
            edges.append(GraphEdge(source=source, target=target))
    standalone = [nodes[name] for name in analysis.roots_with_calls()]
    return GraphExport(nodes=list(nodes.values()), edges=edges, standalone=standalone)
