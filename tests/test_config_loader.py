from __future__ import annotations

from pathlib import Path

from jsfntree.config.loader import load_config
from jsfntree.config.schema import JsFnTreeConfig


def test_missing_default_config_gives_defaults(tmp_path: Path) -> None:
    assert load_config(tmp_path) == JsFnTreeConfig()


def test_default_config_file_is_picked_up(tmp_path: Path) -> None:
    (tmp_path / ".jsfntree.yml").write_text("output_dir: diagrams\nrender: false\n", encoding="utf-8")
    cfg = load_config(tmp_path)
    assert cfg.output_dir == "diagrams"
    assert cfg.render is False


def test_load_multiple_configs_merges_lists(tmp_path: Path) -> None:
    cfg1 = tmp_path / "a.yml"
    cfg2 = tmp_path / "b.yml"
    cfg1.write_text("denylist_extra: ['emit']\nremove_functions: ['old']\n", encoding="utf-8")
    cfg2.write_text(
        "denylist_extra: ['dispatch']\non_duplicate: error\nrender_timeout_seconds: 30\n",
        encoding="utf-8",
    )

    cfg = load_config(tmp_path, [cfg1, cfg2])

    assert cfg.denylist_extra == ["emit", "dispatch"]
    assert cfg.remove_functions == ["old"]
    assert cfg.on_duplicate == "error"
    assert cfg.render_timeout_seconds == 30.0


def test_invalid_values_keep_defaults(tmp_path: Path) -> None:
    cfg_path = tmp_path / "bad.yml"
    cfg_path.write_text("on_duplicate: newest\nrender_timeout_seconds: soon\n", encoding="utf-8")
    cfg = load_config(tmp_path, [cfg_path])
    assert cfg.on_duplicate == "last"
    assert cfg.render_timeout_seconds == 120.0


def test_non_mapping_and_missing_files_are_skipped(tmp_path: Path) -> None:
    cfg_path = tmp_path / "list.yml"
    cfg_path.write_text("- a\n- b\n", encoding="utf-8")
    cfg = load_config(tmp_path, [cfg_path, tmp_path / "missing.yml"])
    assert cfg == JsFnTreeConfig()
