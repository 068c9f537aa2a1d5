from __future__ import annotations

from jsfntree.analyze.calls import resolve_calls
from jsfntree.analyze.catalog import build_catalog
from jsfntree.analyze.denylist import DEFAULT_DENYLIST
from jsfntree.analyze.parsing import parse_source


def _relation(src: str, denylist: frozenset[str] = DEFAULT_DENYLIST) -> dict[str, tuple[str, ...]]:
    parsed = parse_source(src)
    return resolve_calls(parsed, build_catalog(parsed), denylist)


def test_member_calls_resolve_by_property_name() -> None:
    src = """function a(items) {
  helper.c();
  items.forEach(function () { b(); });
}
function b() {}
function c() {}
"""
    assert _relation(src) == {"a": ("c",)}


def test_top_level_and_method_calls_are_unattributed() -> None:
    src = """function a() {}
a();
class K {
  run() { a(); }
}
const obj = { go() { a(); } };
"""
    assert _relation(src) == {}


def test_denylisted_name_never_becomes_a_callee() -> None:
    src = "function map() {}\nfunction log() {}\nfunction run() { map(); log(); }\n"
    assert _relation(src) == {}


def test_denylist_is_substitutable() -> None:
    src = "function map() {}\nfunction run() { map(); }\n"
    assert _relation(src, denylist=frozenset()) == {"run": ("map",)}


def test_callees_are_distinct_in_first_call_order() -> None:
    src = "function a() { c(); b(); c(); }\nfunction b() {}\nfunction c() {}\n"
    assert _relation(src) == {"a": ("c", "b")}


def test_self_and_mutual_recursion_are_plain_edges() -> None:
    src = """function f(n) { return n ? f(n - 1) : 0; }
function x() { y(); }
function y() { x(); }
"""
    assert _relation(src) == {"f": ("f",), "x": ("y",), "y": ("x",)}


def test_variable_bound_functions_are_callers() -> None:
    src = """const a = () => { b(); };
let c = function () { return a(); };
const d = (() => b());
function b() {}
"""
    assert _relation(src) == {"a": ("b",), "c": ("a",), "d": ("b",)}


def test_nested_declarations_are_their_own_callers() -> None:
    src = """function outer() {
  function inner() { leaf(); }
  inner();
}
function leaf() {}
"""
    assert _relation(src) == {"outer": ("inner",), "inner": ("leaf",)}


def test_uncatalogued_callees_are_dropped() -> None:
    src = 'import { util } from "./util";\nfunction a() { util(); missing(); }\n'
    assert _relation(src) == {}


def test_optional_calls_and_tagged_templates_are_not_call_sites() -> None:
    src = """function a(o) {
  o?.b();
  b?.();
  o?.x.b();
  return b`tagged`;
}
function b() {}
"""
    assert _relation(src) == {}


def test_parenthesized_callee() -> None:
    src = "function a() { (b)(); }\nfunction b() {}\n"
    assert _relation(src) == {"a": ("b",)}


def test_calls_in_default_parameters_belong_to_the_function() -> None:
    src = "function a(x = b()) { return x; }\nfunction b() { return 1; }\n"
    assert _relation(src) == {"a": ("b",)}
