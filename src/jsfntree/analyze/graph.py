from __future__ import annotations

from collections import deque
from collections.abc import Iterable, Mapping


def called_names(relation: Mapping[str, Iterable[str]]) -> set[str]:
    called: set[str] = set()
    for callees in relation.values():
        called.update(callees)
    return called


def find_roots(names: Iterable[str], relation: Mapping[str, Iterable[str]]) -> tuple[str, ...]:
    """Functions that no catalogued function calls."""
    called = called_names(relation)
    return tuple(name for name in names if name not in called)


def find_dead(names: Iterable[str], relation: Mapping[str, Iterable[str]]) -> tuple[str, ...]:
    """Functions that are never called.

    This is the same predicate as :func:`find_roots`, so the two results are
    always equal. :func:`find_unreachable` gives the reachability-based set.
    """
    called = called_names(relation)
    return tuple(name for name in names if name not in called)


def find_unreachable(names: Iterable[str], relation: Mapping[str, Iterable[str]]) -> tuple[str, ...]:
    """Functions not reachable from any root, i.e. members of entry-less cycles."""
    ordered = list(names)
    seen: set[str] = set(find_roots(ordered, relation))
    queue = deque(seen)
    while queue:
        current = queue.popleft()
        for callee in relation.get(current, ()):
            if callee not in seen:
                seen.add(callee)
                queue.append(callee)
    return tuple(name for name in ordered if name not in seen)


__all__ = ["called_names", "find_dead", "find_roots", "find_unreachable"]
