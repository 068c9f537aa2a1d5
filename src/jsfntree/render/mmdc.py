"""Turn a Mermaid description into an image with the external ``mmdc`` tool.

Every step is a single bounded attempt: probe the renderer, install it once
if the probe fails, then render once. Failures are reported in the result and
never raised, so the analysis that produced the diagram stays usable.
"""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass, field
from pathlib import Path

log = logging.getLogger(__name__)

DEFAULT_INSTALL_COMMAND = ["npm", "install", "-g", "@mermaid-js/mermaid-cli"]


@dataclass(frozen=True)
class RenderSettings:
    renderer: str = "mmdc"
    install_command: list[str] = field(default_factory=lambda: list(DEFAULT_INSTALL_COMMAND))
    timeout_seconds: float = 120.0


@dataclass(frozen=True)
class RenderResult:
    ok: bool
    output: Path | None = None
    installed: bool = False
    error: str = ""


def _run(cmd: list[str], timeout_seconds: float) -> tuple[bool, str]:
    try:
        p = subprocess.run(
            cmd,
            check=False,
            capture_output=True,
            text=True,
            timeout=timeout_seconds,
        )
    except subprocess.TimeoutExpired:
        return False, f"{cmd[0]} timed out after {timeout_seconds:g}s"
    except OSError as e:
        return False, f"{cmd[0]} could not be started ({e})"
    if p.returncode != 0:
        return False, p.stderr.strip() or f"{cmd[0]} exited with status {p.returncode}"
    return True, p.stdout


def renderer_available(settings: RenderSettings) -> bool:
    ok, _ = _run([settings.renderer, "-v"], settings.timeout_seconds)
    return ok


def install_renderer(settings: RenderSettings) -> tuple[bool, str]:
    if not settings.install_command:
        return False, "no install command configured"
    log.info("Installing %s...", settings.renderer)
    ok, detail = _run(list(settings.install_command), settings.timeout_seconds)
    if ok:
        log.info("%s installed successfully", settings.renderer)
    return ok, "" if ok else detail


def render_diagram(
    mmd_path: Path,
    out_path: Path,
    settings: RenderSettings | None = None,
) -> RenderResult:
    settings = settings or RenderSettings()
    installed = False
    if not renderer_available(settings):
        ok, detail = install_renderer(settings)
        if not ok:
            return RenderResult(ok=False, error=f"Error installing {settings.renderer}: {detail}")
        installed = True
    ok, detail = _run(
        [settings.renderer, "-i", str(mmd_path), "-o", str(out_path)],
        settings.timeout_seconds,
    )
    if not ok:
        return RenderResult(ok=False, installed=installed, error=f"Error generating image: {detail}")
    return RenderResult(ok=True, output=out_path, installed=installed)
