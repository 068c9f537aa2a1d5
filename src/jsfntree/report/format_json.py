from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from jsfntree.analyze.pipeline import Analysis

SCHEMA_VERSION = 1


def to_json_dict(analysis: Analysis, source_path: str = "") -> dict[str, Any]:
    return {"schema_version": SCHEMA_VERSION, "file": source_path, **analysis.to_dict()}


def write_json(analysis: Analysis, path: Path, source_path: str = "") -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(to_json_dict(analysis, source_path), indent=2), encoding="utf-8")
