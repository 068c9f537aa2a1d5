from __future__ import annotations

import argparse
import dataclasses
import logging
from pathlib import Path

import yaml

from jsfntree import __version__
from jsfntree.analyze.catalog import DUPLICATE_POLICIES, DuplicateNameError
from jsfntree.analyze.denylist import build_denylist
from jsfntree.analyze.parsing import ParseError
from jsfntree.analyze.pipeline import Analysis, analyze
from jsfntree.config.loader import load_config
from jsfntree.config.schema import JsFnTreeConfig
from jsfntree.render.mmdc import RenderSettings, render_diagram
from jsfntree.report.format_json import write_json
from jsfntree.report.format_mermaid import write_mermaid
from jsfntree.report.format_text import format_call_analysis, format_sizes
from jsfntree.report.graph_export import build_graph_export
from jsfntree.rewrite.remove import modified_path, remove_functions
from jsfntree.util.logging import setup_logging

log = logging.getLogger(__name__)

DIAGRAM_NAME = "function-calls"


def _split_names(values: list[str] | None) -> list[str]:
    out: list[str] = []
    for value in values or []:
        for part in value.split(","):
            part = part.strip()
            if part and part not in out:
                out.append(part)
    return out


def _config_for_args(args: argparse.Namespace) -> JsFnTreeConfig:
    root = Path.cwd()
    config_paths = [Path(p) for p in args.config] if args.config else None
    cfg = load_config(root, config_paths)
    changes: dict[str, object] = {}
    if args.output is not None:
        changes["output_dir"] = args.output
    if args.remove:
        changes["remove_functions"] = [*cfg.remove_functions, *_split_names(args.remove)]
    if args.denylist_extra:
        changes["denylist_extra"] = [*cfg.denylist_extra, *_split_names(args.denylist_extra)]
    if args.on_duplicate is not None:
        changes["on_duplicate"] = args.on_duplicate
    if args.no_render:
        changes["render"] = False
    if args.json_path is not None:
        changes["json_path"] = args.json_path
    return dataclasses.replace(cfg, **changes)


def _apply_removals(path: Path, source: str, names: list[str]) -> None:
    try:
        result = remove_functions(source, names)
    except ParseError as e:
        log.error("Could not rewrite %s: %s", path, e)
        return
    out_path = modified_path(path)
    out_path.write_text(result.code, encoding="utf-8")
    print(f"\nModified code saved to: {out_path}")
    print(f"Removed functions: {', '.join(result.removed) if result.removed else '(none)'}")


def _render(analysis: Analysis, cfg: JsFnTreeConfig) -> None:
    output_dir = Path(cfg.output_dir)
    mmd_path = output_dir / f"{DIAGRAM_NAME}.mmd"
    write_mermaid(build_graph_export(analysis), mmd_path)
    log.info("Wrote Mermaid diagram to %s", mmd_path)
    if not cfg.render:
        return
    settings = RenderSettings(
        renderer=cfg.renderer,
        install_command=list(cfg.renderer_install),
        timeout_seconds=cfg.render_timeout_seconds,
    )
    result = render_diagram(mmd_path, output_dir / f"{DIAGRAM_NAME}.svg", settings)
    if result.ok:
        print(f"\nDiagram saved to: {result.output}")
    else:
        log.warning("%s", result.error)


def cmd_analyze(args: argparse.Namespace) -> int:
    cfg = _config_for_args(args)
    path = Path(args.file)
    try:
        source = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        log.error("Cannot read %s (%s)", path, e)
        return 2

    denylist = build_denylist(cfg.denylist, cfg.denylist_extra, cfg.denylist_allow)
    try:
        analysis = analyze(source, denylist=denylist, on_duplicate=cfg.on_duplicate)
    except (ParseError, DuplicateNameError) as e:
        log.error("Error analyzing file: %s", e)
        return 1

    if cfg.remove_functions:
        _apply_removals(path, source, cfg.remove_functions)

    print("\n".join(format_sizes(analysis)))
    _render(analysis, cfg)
    print("\n".join(format_call_analysis(analysis)))

    if cfg.json_path:
        json_path = Path(cfg.json_path)
        write_json(analysis, json_path, str(path))
        log.info("Wrote JSON report to %s", json_path)
    return 0


def cmd_config_show(args: argparse.Namespace) -> int:
    config_paths = [Path(p) for p in args.config] if args.config else None
    cfg = load_config(Path.cwd(), config_paths)
    print(yaml.safe_dump(dataclasses.asdict(cfg), sort_keys=False))
    return 0


def _add_config_arg(a: argparse.ArgumentParser) -> None:
    a.add_argument(
        "--config",
        action="append",
        default=None,
        help="Config file path (repeatable, default: ./.jsfntree.yml)",
    )


def _add_analyze_args(a: argparse.ArgumentParser) -> None:
    a.add_argument("file", help="JavaScript/TypeScript source file to analyze")
    a.add_argument("--output", default=None, help="Output directory for diagrams (default: ./output)")
    a.add_argument(
        "--remove",
        action="append",
        default=None,
        help="Comma-separated function names to remove into <file>.modified.<ext> (repeatable)",
    )
    a.add_argument(
        "--denylist-extra",
        action="append",
        default=None,
        help="Extra callee names to ignore (comma-separated, repeatable)",
    )
    a.add_argument(
        "--on-duplicate",
        default=None,
        choices=list(DUPLICATE_POLICIES),
        help="What to do when a function name is defined twice (default: last)",
    )
    a.add_argument("--json", dest="json_path", default=None, help="Write a JSON report to this path")
    a.add_argument("--no-render", action="store_true", help="Write the Mermaid file but skip mmdc")
    _add_config_arg(a)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="jsfntree", description="Function call tree for JS/TS source files")
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    p.add_argument("-v", "--verbose", action="store_true", help="Enable verbose logging")

    sub = p.add_subparsers(dest="cmd", required=True)

    a = sub.add_parser("analyze", help="Analyze a source file")
    _add_analyze_args(a)
    a.set_defaults(func=cmd_analyze)

    c = sub.add_parser("config", help="Config utilities")
    c_sub = c.add_subparsers(dest="config_cmd", required=True)
    c_show = c_sub.add_parser("show", help="Show merged config")
    _add_config_arg(c_show)
    c_show.set_defaults(func=cmd_config_show)

    return p


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(bool(args.verbose))
    return int(args.func(args))
