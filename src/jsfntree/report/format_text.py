from __future__ import annotations

from jsfntree.analyze.pipeline import Analysis


def format_sizes(analysis: Analysis) -> list[str]:
    lines = ["", "Function Sizes (sorted by lines of code):", "=" * 38]
    records = sorted(analysis.catalog.values(), key=lambda r: r.line_count, reverse=True)
    for record in records:
        lines.append(f"{record.name}: {record.line_count} lines (Line {record.lineno})")
    return lines


def format_call_analysis(analysis: Analysis) -> list[str]:
    lines = ["", "Function Call Analysis:", "=" * 20]
    lines.extend(["", "Root Functions (Entry Points):"])
    roots = analysis.roots_with_calls()
    lines.append(", ".join(roots) if roots else "(none)")
    lines.extend(["", "Function Relationships:"])
    for caller, callees in analysis.relation.items():
        lines.append(f"{caller} calls: {', '.join(callees)}")
    if analysis.unreachable:
        lines.extend(["", "Unreachable Cycles:", ", ".join(analysis.unreachable)])
    return lines
