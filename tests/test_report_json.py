from __future__ import annotations

import json
from pathlib import Path

from jsfntree.analyze.pipeline import analyze
from jsfntree.report.format_json import SCHEMA_VERSION, write_json


def test_write_json(tmp_path: Path) -> None:
    out = tmp_path / "reports" / "analysis.json"
    write_json(analyze("function a(){ b(); }\nfunction b(){}\n"), out, "src/app.js")
    data = json.loads(out.read_text(encoding="utf-8"))
    assert data["schema_version"] == SCHEMA_VERSION
    assert data["file"] == "src/app.js"
    assert [f["name"] for f in data["functions"]] == ["a", "b"]
    assert data["calls"] == {"a": ["b"]}
    assert data["roots"] == ["a"]
    assert data["dead"] == ["a"]
    assert data["unreachable"] == []
