from __future__ import annotations

from collections.abc import Iterable

# Well-known built-in method and property names. A call whose callee name is
# listed here never becomes an edge, even when a catalogued function shares
# the name.
DEFAULT_DENYLIST: frozenset[str] = frozenset(
    {
        # DOM manipulation
        "getElementById",
        "getElementsByTagName",
        "getElementsByClassName",
        "querySelector",
        "querySelectorAll",
        "createElement",
        "appendChild",
        "removeChild",
        "addEventListener",
        "removeEventListener",
        "click",
        "contains",
        "getAttribute",
        "setAttribute",
        "remove",
        "includes",
        "toString",
        "trim",
        "splice",
        "slice",
        "join",
        "split",
        "replace",
        "indexOf",
        "push",
        "pop",
        "shift",
        "unshift",
        "filter",
        "map",
        "forEach",
        "find",
        "findIndex",
        "some",
        "every",
        "concat",
        # Browser APIs
        "setTimeout",
        "setInterval",
        "clearTimeout",
        "clearInterval",
        "postMessage",
        "focus",
        "blur",
        "open",
        "close",
        "send",
        "onreadystatechange",
        "readyState",
        "status",
        # Standard methods
        "test",
        "exec",
        "match",
        "search",
        "length",
        "substring",
        "toLowerCase",
        "toUpperCase",
        "charAt",
        "charCodeAt",
        # Console methods
        "log",
        "error",
        "warn",
        "info",
        "debug",
        # Array methods
        "sort",
        "reverse",
        "reduce",
        "reduceRight",
        # Object methods
        "hasOwnProperty",
        "valueOf",
        "toLocaleString",
        # JSON methods
        "parse",
        "stringify",
    }
)


def build_denylist(
    base: Iterable[str] | None = None,
    extra: Iterable[str] = (),
    allow: Iterable[str] = (),
) -> frozenset[str]:
    names = set(DEFAULT_DENYLIST if base is None else (str(n) for n in base))
    names.update(str(n) for n in extra)
    names.difference_update(str(n) for n in allow)
    return frozenset(names)
