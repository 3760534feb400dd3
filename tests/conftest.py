from __future__ import annotations

from pathlib import Path

import pytest
from fontTools.fontBuilder import FontBuilder
from fontTools.pens.ttGlyphPen import TTGlyphPen

from steepfast.core.font_resolver import clear_font_cache
from steepfast.core.runtime_config import set_config_path

TEST_FONT_NAME = "SteepTest"
TEST_FONT_UPEM = 1000
TEST_FONT_ADVANCE = 600
TEST_FONT_CAP_HEIGHT = 700

# 文字 → glyph 名。"A" だけ穴付き（even-odd 確認用）。
_TEST_CHARS = {
    "A": "A",
    "E": "E",
    "F": "F",
    "P": "P",
    "S": "S",
    "T": "T",
    "&": "ampersand",
    " ": "space",
}


def _box_glyph(*, hole: bool):
    pen = TTGlyphPen(None)
    pen.moveTo((50, 0))
    pen.lineTo((50, TEST_FONT_CAP_HEIGHT))
    pen.lineTo((450, TEST_FONT_CAP_HEIGHT))
    pen.lineTo((450, 0))
    pen.closePath()
    if hole:
        pen.moveTo((150, 200))
        pen.lineTo((350, 200))
        pen.lineTo((350, 500))
        pen.lineTo((150, 500))
        pen.closePath()
    return pen.glyph()


def build_test_font(path: Path) -> Path:
    """矩形グリフだけを持つ最小 TrueType フォントを書き出す。"""
    glyph_order = [".notdef", *_TEST_CHARS.values()]
    glyphs = {name: _box_glyph(hole=(name == "A")) for name in glyph_order}
    glyphs["space"] = TTGlyphPen(None).glyph()

    fb = FontBuilder(TEST_FONT_UPEM, isTTF=True)
    fb.setupGlyphOrder(glyph_order)
    fb.setupCharacterMap({ord(ch): name for ch, name in _TEST_CHARS.items()})
    fb.setupGlyf(glyphs)
    fb.setupHorizontalMetrics({name: (TEST_FONT_ADVANCE, 50) for name in glyph_order})
    fb.setupHorizontalHeader(ascent=800, descent=-200)
    fb.setupNameTable({"familyName": TEST_FONT_NAME, "styleName": "Regular"})
    fb.setupOS2(
        sTypoAscender=800,
        sTypoDescender=-200,
        usWinAscent=800,
        usWinDescent=200,
        sCapHeight=TEST_FONT_CAP_HEIGHT,
    )
    fb.setupPost()

    path.parent.mkdir(parents=True, exist_ok=True)
    fb.save(str(path))
    return path


@pytest.fixture(autouse=True)
def _isolated_runtime_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    """CWD / HOME を tmp に切り替え、探索される config.yaml を tmp 側に固定する。"""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.chdir(tmp_path)

    cfg_dir = tmp_path / ".steepfast"
    cfg_dir.mkdir()
    (cfg_dir / "config.yaml").write_text(
        "\n".join(
            [
                "paths:",
                f"  output_dir: {tmp_path / 'out'}",
                "  font_dirs:",
                f"    - {tmp_path / 'fonts'}",
                "text:",
                f"  font: {TEST_FONT_NAME}",
                "",
            ]
        ),
        encoding="utf-8",
    )

    set_config_path(None)
    clear_font_cache()
    yield
    set_config_path(None)
    clear_font_cache()


@pytest.fixture
def font_path(tmp_path: Path) -> Path:
    """config の font_dirs 上に置いたテスト用フォント。"""
    return build_test_font(tmp_path / "fonts" / f"{TEST_FONT_NAME}.ttf")
