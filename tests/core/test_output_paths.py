from __future__ import annotations

from pathlib import Path

import pytest

from steepfast.core.output_paths import default_output_path


def test_default_output_path_embeds_canvas_size(tmp_path: Path) -> None:
    assert default_output_path("svg", canvas_size=(1200, 800)) == (
        tmp_path / "out" / "svg" / "steepfast_1200x800.svg"
    )


def test_default_output_path_formats_fractional_size(tmp_path: Path) -> None:
    out = default_output_path("png", canvas_size=(640.5, 480))
    assert out == tmp_path / "out" / "png" / "steepfast_640.5x480.png"


def test_default_output_path_sanitizes_run_id(tmp_path: Path) -> None:
    out = default_output_path("PNG", canvas_size=(10, 20), run_id="take 1/b")
    assert out == tmp_path / "out" / "png" / "steepfast_10x20_take_1_b.png"
    # 正規化で空になる run_id は付けない
    assert default_output_path("svg", canvas_size=(10, 20), run_id="///").name == "steepfast_10x20.svg"


def test_default_output_path_validation() -> None:
    with pytest.raises(ValueError):
        default_output_path("", canvas_size=(10, 10))
    with pytest.raises(ValueError):
        default_output_path("svg", canvas_size=(0, 10))
