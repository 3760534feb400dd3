"""
どこで: `src/steepfast/core/text.py`。テキストのアウトライン生成。
何を: fontTools でグリフ輪郭を平坦化し、字送り（advance）とトラッキングで 1 行分のリング列を組む。
なぜ: 文字を他の図形と同じ塗りパスとして扱い、canvas の変換（回転/せん断/fit）をそのまま適用するため。
"""

from __future__ import annotations

import logging
from collections import OrderedDict
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import numpy as np
from fontPens.flattenPen import FlattenPen
from fontTools.pens.basePen import MissingComponentError
from fontTools.pens.recordingPen import DecomposingRecordingPen, RecordingPen
from fontTools.ttLib import TTFont

logger = logging.getLogger(__name__)

# cap height が取れないフォントでの既定値（em 比）。
_DEFAULT_CAP_HEIGHT_EM = 0.7
# 空白グリフが無いフォントでの既定 advance（em 比）。
_DEFAULT_SPACE_EM = 0.25
# 曲線平坦化の近似セグメント長（em 比）。
_FLAT_SEG_EM = 0.02


class _LRU:
    """単純な上限付き LRU キャッシュ。"""

    def __init__(self, maxsize: int = 512) -> None:
        self.maxsize = int(maxsize)
        self._od: "OrderedDict[str, Any]" = OrderedDict()

    def get(self, key: str) -> Any | None:
        value = self._od.get(key)
        if value is not None:
            self._od.move_to_end(key)
        return value

    def set(self, key: str, value: Any) -> None:
        self._od[key] = value
        self._od.move_to_end(key)
        if len(self._od) > self.maxsize:
            self._od.popitem(last=False)


class TextEngine:
    """1 つのフォントファイルから字送りとグリフ輪郭を提供する。

    Parameters
    ----------
    font_path : str or Path
        `.ttf` / `.otf` / `.ttc` のパス。
    font_index : int
        `.ttc` のフォント番号。
    """

    def __init__(self, font_path: str | Path, font_index: int = 0) -> None:
        self.font_path = Path(font_path).resolve()
        idx = max(0, int(font_index))
        if self.font_path.suffix.lower() == ".ttc":
            self._font = TTFont(self.font_path, fontNumber=idx)
        else:
            self._font = TTFont(self.font_path)
        self._cmap = self._font.getBestCmap() or {}
        self._glyph_set = self._font.getGlyphSet()
        self._units_per_em = float(self._font["head"].unitsPerEm)
        self._glyph_cache = _LRU()

    @property
    def units_per_em(self) -> float:
        return self._units_per_em

    def _glyph_name(self, char: str) -> str | None:
        name = self._cmap.get(ord(char))
        if name is None and char == " " and "space" in self._glyph_set:
            return "space"
        return name

    def advance(self, char: str, size: float) -> float:
        """1 文字の字送り幅（size は em の大きさ）を返す。"""
        name = self._glyph_name(char)
        if name is None:
            if char == " ":
                return _DEFAULT_SPACE_EM * float(size)
            return 0.0
        advance_units = float(self._font["hmtx"].metrics[name][0])
        return advance_units / self._units_per_em * float(size)

    def cap_height(self, size: float) -> float:
        """大文字高さを返す（OS/2 が無ければ 0.7em）。"""
        cap_units = 0.0
        if "OS/2" in self._font:
            cap_units = float(getattr(self._font["OS/2"], "sCapHeight", 0) or 0)
        if cap_units <= 0.0:
            return _DEFAULT_CAP_HEIGHT_EM * float(size)
        return cap_units / self._units_per_em * float(size)

    def _glyph_rings_em(self, char: str) -> tuple[np.ndarray, ...]:
        cached = self._glyph_cache.get(char)
        if cached is not None:
            return cached

        name = self._glyph_name(char)
        if name is None:
            if not char.isspace():
                logger.warning(
                    "Character '%s' (U+%04X) not found in font '%s'",
                    char,
                    ord(char),
                    str(self.font_path),
                )
            self._glyph_cache.set(char, tuple())
            return tuple()

        rec = DecomposingRecordingPen(self._glyph_set, reverseFlipped=True)
        try:
            self._glyph_set[name].draw(rec)
        except MissingComponentError:
            logger.warning("Glyph '%s' has missing components in font '%s'", name, str(self.font_path))
            self._glyph_cache.set(char, tuple())
            return tuple()

        flat = RecordingPen()
        rec.replay(
            FlattenPen(
                flat,
                approximateSegmentLength=_FLAT_SEG_EM * self._units_per_em,
                segmentLines=False,
            )
        )

        rings = _recording_to_rings(flat.value, units_per_em=self._units_per_em)
        self._glyph_cache.set(char, rings)
        return rings

    def glyph_rings(self, char: str, size: float) -> list[np.ndarray]:
        """グリフの閉輪郭列を返す（y 下向き、ベースライン y=0、原点は字の左端）。"""
        s = float(size)
        return [ring * s for ring in self._glyph_rings_em(char)]


def _recording_to_rings(commands: Sequence[tuple[str, tuple]], *, units_per_em: float) -> tuple[np.ndarray, ...]:
    """RecordingPen.value から「1em=1、y 下向き」の閉リング列へ変換して返す。"""
    scale = 1.0 / float(units_per_em)
    rings: list[np.ndarray] = []
    current: list[tuple[float, float]] = []

    def flush() -> None:
        nonlocal current
        if len(current) >= 3:
            arr = np.asarray(current, dtype=np.float64) * scale
            # フォント座標（Y+上）を描画座標（Y+下）へ反転
            arr[:, 1] *= -1.0
            rings.append(arr)
        current = []

    for cmd_type, cmd_values in commands:
        if cmd_type == "moveTo":
            flush()
            x, y = cmd_values[0]
            current.append((float(x), float(y)))
        elif cmd_type == "lineTo":
            x, y = cmd_values[0]
            current.append((float(x), float(y)))
        elif cmd_type in ("closePath", "endPath"):
            flush()
    flush()
    return tuple(rings)


@dataclass(frozen=True, slots=True)
class TextRun:
    """組み上がった 1 行分のアウトライン。"""

    rings: tuple[np.ndarray, ...]
    width: float
    cap_height: float


def layout_tracked(advances: Sequence[float], tracking: float) -> tuple[list[float], float]:
    """字送り列とトラッキングから各文字のペン位置と行幅を返す。

    最後の文字の後ろにはトラッキングを足さない。
    """
    positions: list[float] = []
    pen = 0.0
    for i, adv in enumerate(advances):
        positions.append(pen)
        pen += float(adv)
        if i < len(advances) - 1:
            pen += float(tracking)
    return positions, pen


def text_run(
    engine: TextEngine,
    text: str,
    *,
    size: float,
    tracking: float = 0.0,
    align: str = "left",
) -> TextRun:
    """文字列を 1 行に組み、リング列と行幅を返す。

    Parameters
    ----------
    engine : TextEngine
        字送りと輪郭の供給元。
    text : str
        組む文字列。
    size : float
        文字サイズ（em の大きさ）。
    tracking : float
        文字間に足す追加幅。
    align : {"left", "center"}
        x=0 を左端にするか中央にするか。
    """
    if float(size) <= 0.0:
        raise ValueError(f"text size は正である必要がある: got={size}")
    if align not in ("left", "center"):
        raise ValueError(f"align は 'left' または 'center': got={align!r}")

    advances = [engine.advance(ch, size) for ch in text]
    positions, width = layout_tracked(advances, tracking)
    shift = -width / 2.0 if align == "center" else 0.0

    rings: list[np.ndarray] = []
    for ch, x in zip(text, positions):
        for ring in engine.glyph_rings(ch, size):
            moved = ring.copy()
            moved[:, 0] += x + shift
            rings.append(moved)
    return TextRun(rings=tuple(rings), width=float(width), cap_height=engine.cap_height(size))


__all__ = [
    "TextEngine",
    "TextRun",
    "layout_tracked",
    "text_run",
]
