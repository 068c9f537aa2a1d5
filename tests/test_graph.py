from __future__ import annotations

from jsfntree.analyze.graph import called_names, find_dead, find_roots, find_unreachable

NAMES = ["a", "b", "c", "x", "y"]
RELATION = {"a": ("b",), "x": ("y",), "y": ("x",)}


def test_called_names() -> None:
    assert called_names(RELATION) == {"b", "x", "y"}


def test_roots_are_never_called() -> None:
    assert find_roots(NAMES, RELATION) == ("a", "c")


def test_dead_matches_roots() -> None:
    assert find_dead(NAMES, RELATION) == find_roots(NAMES, RELATION)


def test_unreachable_cycles() -> None:
    assert find_unreachable(NAMES, RELATION) == ("x", "y")


def test_empty_graph() -> None:
    assert find_roots([], {}) == ()
    assert find_dead([], {}) == ()
    assert find_unreachable([], {}) == ()
