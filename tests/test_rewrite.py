from __future__ import annotations

from pathlib import Path

import pytest

from jsfntree.analyze.parsing import ParseError
from jsfntree.rewrite.remove import modified_path, remove_functions


def test_removes_function_declaration_lines() -> None:
    src = "function keep() {}\nfunction drop() {\n  return 1;\n}\nkeep();\n"
    result = remove_functions(src, ["drop"])
    assert result.code == "function keep() {}\nkeep();\n"
    assert result.removed == ["drop"]


def test_removes_export_wrapper() -> None:
    src = "export function drop() {}\nexport const keep = 1;\n"
    assert remove_functions(src, ["drop"]).code == "export const keep = 1;\n"


def test_removes_single_declarator_statement() -> None:
    src = "const drop = () => {\n  return 2;\n};\nconst keep = 1;\n"
    assert remove_functions(src, ["drop"]).code == "const keep = 1;\n"


def test_removes_one_of_several_declarators() -> None:
    assert remove_functions("const a = 1, drop = () => 2, b = 3;\n", ["drop"]).code == "const a = 1, b = 3;\n"
    assert remove_functions("const a = 1, drop = () => 2;\n", ["drop"]).code == "const a = 1;\n"


def test_unknown_names_leave_source_unchanged() -> None:
    src = "function keep() {}\n"
    result = remove_functions(src, ["nope"])
    assert result.code == src
    assert result.removed == []


def test_removed_keeps_request_order() -> None:
    src = "function a() {}\nfunction b() {}\nfunction c() {}\n"
    result = remove_functions(src, ["c", "a", "zzz"])
    assert result.removed == ["c", "a"]
    assert result.code == "function b() {}\n"


def test_invalid_source_raises() -> None:
    with pytest.raises(ParseError):
        remove_functions("function (", ["a"])


def test_modified_path() -> None:
    assert modified_path(Path("src/app.js")) == Path("src/app.modified.js")
    assert modified_path(Path("view.tsx")) == Path("view.modified.tsx")
