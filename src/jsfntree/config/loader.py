from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path
from typing import Any

import yaml

from jsfntree.analyze.catalog import DUPLICATE_POLICIES

from .schema import JsFnTreeConfig

log = logging.getLogger(__name__)

DEFAULT_CONFIG_NAME = ".jsfntree.yml"


def _load_raw_config(path: Path) -> dict[str, Any]:
    try:
        return yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except Exception as e:
        log.warning("Failed to load %s (%s). Skipping.", path, e)
        return {}


def _get_list(raw: dict[str, Any], key: str) -> list[str] | None:
    if key not in raw:
        return None
    v = raw.get(key)
    if isinstance(v, list):
        return [str(x) for x in v]
    if isinstance(v, str):
        return [part.strip() for part in v.split(",") if part.strip()]
    log.warning("Config key %s should be a list; ignoring.", key)
    return None


def _get_optional_str(raw: dict[str, Any], key: str) -> str | None:
    if key not in raw:
        return None
    v = raw.get(key)
    if v is None:
        return None
    return str(v)


def _get_optional_float(raw: dict[str, Any], key: str) -> float | None:
    if key not in raw:
        return None
    v = raw.get(key)
    if v is None:
        return None
    try:
        return float(v)
    except (TypeError, ValueError):
        log.warning("Config key %s should be a number; ignoring.", key)
        return None


def _get_bool(raw: dict[str, Any], key: str, default: bool) -> bool:
    if key not in raw:
        return default
    v = raw.get(key)
    if isinstance(v, bool):
        return v
    if isinstance(v, (int, float)):
        return bool(v)
    if isinstance(v, str):
        if v.strip().lower() in {"true", "yes", "1", "on"}:
            return True
        if v.strip().lower() in {"false", "no", "0", "off"}:
            return False
    return default


def _merge_config(base: JsFnTreeConfig, raw: dict[str, Any]) -> JsFnTreeConfig:
    output_dir = _get_optional_str(raw, "output_dir") or base.output_dir

    denylist = base.denylist
    raw_denylist = _get_list(raw, "denylist")
    if raw_denylist is not None:
        denylist = raw_denylist
    denylist_extra = base.denylist_extra
    raw_extra = _get_list(raw, "denylist_extra")
    if raw_extra is not None:
        denylist_extra = [*denylist_extra, *raw_extra]
    denylist_allow = base.denylist_allow
    raw_allow = _get_list(raw, "denylist_allow")
    if raw_allow is not None:
        denylist_allow = [*denylist_allow, *raw_allow]

    on_duplicate = base.on_duplicate
    raw_on_duplicate = _get_optional_str(raw, "on_duplicate")
    if raw_on_duplicate is not None:
        if raw_on_duplicate.strip().lower() in DUPLICATE_POLICIES:
            on_duplicate = raw_on_duplicate.strip().lower()
        else:
            log.warning("Unknown on_duplicate value %r; keeping %r.", raw_on_duplicate, on_duplicate)

    remove_functions = base.remove_functions
    raw_remove = _get_list(raw, "remove_functions")
    if raw_remove is not None:
        remove_functions = [*remove_functions, *raw_remove]

    render = _get_bool(raw, "render", base.render)
    renderer = _get_optional_str(raw, "renderer") or base.renderer
    renderer_install = base.renderer_install
    raw_install = _get_list(raw, "renderer_install")
    if raw_install is not None:
        renderer_install = raw_install
    render_timeout_seconds = _get_optional_float(raw, "render_timeout_seconds")
    if render_timeout_seconds is None or render_timeout_seconds <= 0:
        render_timeout_seconds = base.render_timeout_seconds
    json_path = _get_optional_str(raw, "json_path")
    if json_path is None:
        json_path = base.json_path

    return JsFnTreeConfig(
        output_dir=output_dir,
        denylist=denylist,
        denylist_extra=denylist_extra,
        denylist_allow=denylist_allow,
        on_duplicate=on_duplicate,
        remove_functions=remove_functions,
        render=render,
        renderer=renderer,
        renderer_install=renderer_install,
        render_timeout_seconds=render_timeout_seconds,
        json_path=json_path,
    )


def _resolve_config_paths(root: Path, config_paths: Iterable[Path] | None) -> list[Path]:
    if config_paths is None:
        return [root / DEFAULT_CONFIG_NAME]
    resolved: list[Path] = []
    for path in config_paths:
        p = Path(path)
        if not p.is_absolute():
            p = root / p
        resolved.append(p)
    return resolved


def load_config(root: Path, config_paths: Iterable[Path] | None = None) -> JsFnTreeConfig:
    paths = _resolve_config_paths(root, config_paths)
    if config_paths is None and not paths[0].exists():
        return JsFnTreeConfig()

    cfg = JsFnTreeConfig()
    for path in paths:
        if not path.exists():
            log.warning("Config %s not found; skipping.", path)
            continue
        raw = _load_raw_config(path)
        if not isinstance(raw, dict):
            log.warning("Config %s is not a mapping; skipping.", path)
            continue
        cfg = _merge_config(cfg, raw)
    return cfg
