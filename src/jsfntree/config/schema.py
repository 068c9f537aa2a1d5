from __future__ import annotations

from dataclasses import dataclass, field

from jsfntree.render.mmdc import DEFAULT_INSTALL_COMMAND


@dataclass(frozen=True)
class JsFnTreeConfig:
    output_dir: str = "output"
    denylist: list[str] | None = None
    denylist_extra: list[str] = field(default_factory=list)
    denylist_allow: list[str] = field(default_factory=list)
    on_duplicate: str = "last"
    remove_functions: list[str] = field(default_factory=list)
    render: bool = True
    renderer: str = "mmdc"
    renderer_install: list[str] = field(default_factory=lambda: list(DEFAULT_INSTALL_COMMAND))
    render_timeout_seconds: float = 120.0
    json_path: str | None = None
