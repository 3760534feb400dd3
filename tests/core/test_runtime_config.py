from __future__ import annotations

from pathlib import Path

import pytest

from steepfast.core.runtime_config import runtime_config, set_config_path


def test_discovered_config_overrides_packaged_defaults(tmp_path: Path) -> None:
    cfg = runtime_config()

    assert cfg.config_path == Path.cwd() / ".steepfast" / "config.yaml"
    assert cfg.output_dir == tmp_path / "out"
    assert cfg.font_dirs == (tmp_path / "fonts",)
    # 同梱デフォルトがそのまま残るキー
    assert cfg.pad_px == 18.0
    assert cfg.canvas_size == (1200, 800)
    assert cfg.png_scale == 2.0
    assert cfg.window_size == (960, 640)


def test_explicit_config_wins_over_discovered(tmp_path: Path) -> None:
    explicit = tmp_path / "explicit.yaml"
    explicit.write_text("render:\n  pad_px: 4\n  canvas_size: [640, 360]\n", encoding="utf-8")
    set_config_path(explicit)

    cfg = runtime_config()
    assert cfg.config_path == explicit
    assert cfg.pad_px == 4.0
    assert cfg.canvas_size == (640, 360)
    # discovered config の paths は残る（トップレベルの浅い上書き）
    assert cfg.output_dir == tmp_path / "out"


def test_runtime_config_is_cached_until_path_changes(tmp_path: Path) -> None:
    first = runtime_config()
    assert runtime_config() is first

    explicit = tmp_path / "explicit.yaml"
    explicit.write_text("render:\n  pad_px: 2\n  canvas_size: [10, 10]\n", encoding="utf-8")
    set_config_path(explicit)
    assert runtime_config() is not first
    assert runtime_config().pad_px == 2.0


def test_home_config_is_used_when_cwd_has_none(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    elsewhere = tmp_path / "elsewhere"
    elsewhere.mkdir()
    monkeypatch.chdir(elsewhere)
    home_cfg = tmp_path / "home" / ".config" / "steepfast" / "config.yaml"
    home_cfg.parent.mkdir(parents=True)
    home_cfg.write_text("export:\n  png:\n    scale: 3\n", encoding="utf-8")
    set_config_path(None)

    cfg = runtime_config()
    assert cfg.config_path == home_cfg
    assert cfg.png_scale == 3.0


def test_missing_explicit_config_raises(tmp_path: Path) -> None:
    set_config_path(tmp_path / "missing.yaml")
    with pytest.raises(FileNotFoundError):
        runtime_config()


@pytest.mark.parametrize(
    "text, exc",
    [
        ("- just\n- a list\n", RuntimeError),
        ("version: 2\n", RuntimeError),
        ("render: [1, 2]\n", RuntimeError),
        ("render:\n  pad_px: -1\n  canvas_size: [10, 10]\n", ValueError),
        ("render:\n  pad_px: 1\n  canvas_size: [0, 10]\n", ValueError),
        ("ui:\n  window_size: [10]\n  window_pos: [0, 0]\n", RuntimeError),
        ("export:\n  png:\n    scale: 0\n", ValueError),
        ("render: {pad_px: [unclosed\n", RuntimeError),
    ],
)
def test_invalid_config_values_raise(tmp_path: Path, text: str, exc: type[Exception]) -> None:
    bad = tmp_path / "bad.yaml"
    bad.write_text(text, encoding="utf-8")
    set_config_path(bad)
    with pytest.raises(exc):
        runtime_config()
