from __future__ import annotations

from jsfntree.analyze.pipeline import analyze
from jsfntree.report.format_text import format_call_analysis, format_sizes

SRC = """function small() { big(); }
function big() {
  const a = 1;
  return a;
}
function medium() {
  return 2;
}
"""


def test_sizes_sorted_by_line_count() -> None:
    lines = format_sizes(analyze(SRC))
    assert lines[1] == "Function Sizes (sorted by lines of code):"
    assert lines[3:] == [
        "big: 4 lines (Line 2)",
        "medium: 3 lines (Line 6)",
        "small: 1 lines (Line 1)",
    ]


def test_call_analysis_lists_roots_with_calls_and_relationships() -> None:
    lines = format_call_analysis(analyze(SRC))
    roots_at = lines.index("Root Functions (Entry Points):")
    assert lines[roots_at + 1] == "small"
    assert "small calls: big" in lines
    assert "Unreachable Cycles:" not in lines


def test_call_analysis_reports_entry_less_cycles() -> None:
    lines = format_call_analysis(analyze("function x(){ y(); }\nfunction y(){ x(); }\n"))
    assert lines[lines.index("Root Functions (Entry Points):") + 1] == "(none)"
    assert lines[-2:] == ["Unreachable Cycles:", "x, y"]
