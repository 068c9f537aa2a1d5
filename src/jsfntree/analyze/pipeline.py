from __future__ import annotations

import logging
from collections.abc import Set
from dataclasses import dataclass, field
from typing import Any

from jsfntree.analyze.calls import CallRelation, resolve_calls
from jsfntree.analyze.catalog import FunctionRecord, build_catalog
from jsfntree.analyze.denylist import DEFAULT_DENYLIST
from jsfntree.analyze.graph import find_dead, find_roots, find_unreachable
from jsfntree.analyze.parsing import parse_source

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class Analysis:
    catalog: dict[str, FunctionRecord] = field(default_factory=dict)
    relation: CallRelation = field(default_factory=dict)
    roots: tuple[str, ...] = ()
    dead: tuple[str, ...] = ()
    unreachable: tuple[str, ...] = ()

    def callees(self, name: str) -> tuple[str, ...]:
        return self.relation.get(name, ())

    def roots_with_calls(self) -> list[str]:
        return [name for name in self.roots if self.relation.get(name)]

    def to_dict(self) -> dict[str, Any]:
        return {
            "functions": [record.to_dict() for record in self.catalog.values()],
            "calls": {caller: list(callees) for caller, callees in self.relation.items()},
            "roots": list(self.roots),
            "dead": list(self.dead),
            "unreachable": list(self.unreachable),
        }


def analyze(
    source: str,
    denylist: Set[str] = DEFAULT_DENYLIST,
    on_duplicate: str = "last",
) -> Analysis:
    """Parse ``source`` and build its function catalog and call graph.

    Raises ``ParseError`` for invalid source and ``DuplicateNameError`` when
    ``on_duplicate="error"`` and a function name is defined twice.
    """
    parsed = parse_source(source)
    catalog = build_catalog(parsed, on_duplicate=on_duplicate)
    relation = resolve_calls(parsed, catalog, denylist)
    names = list(catalog)
    log.debug("Catalogued %d functions, %d callers with edges", len(catalog), len(relation))
    return Analysis(
        catalog=catalog,
        relation=relation,
        roots=find_roots(names, relation),
        dead=find_dead(names, relation),
        unreachable=find_unreachable(names, relation),
    )


__all__ = ["Analysis", "analyze"]
