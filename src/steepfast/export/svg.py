"""
どこで: `src/steepfast/export/svg.py`。
何を: 描画パスの結果（Frame）を SVG として保存する関数を提供する。
なぜ: SVG を正（ソース）として保存し、PNG やプレビューは SVG から再生成する導線にするため。
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path

import numpy as np

from steepfast.core.canvas import Shape
from steepfast.core.pipeline import Frame
from steepfast.core.theme import rgba01_to_hex

logger = logging.getLogger(__name__)

_SVG_NS = "http://www.w3.org/2000/svg"
_FLOAT_DECIMALS = 3


def _fmt(value: float, *, decimals: int = _FLOAT_DECIMALS) -> str:
    """SVG 出力向けに float を決定的な文字列へ変換して返す。"""
    text = f"{float(value):.{int(decimals)}f}"
    if text.startswith("-0") and float(text) == 0.0:
        return text[1:]
    return text


def _ring_to_d(ring: np.ndarray, *, closed: bool) -> str:
    """リング（shape (N,2)）を SVG path の d 断片へ変換して返す。"""
    parts = [f"M {_fmt(ring[0, 0])} {_fmt(ring[0, 1])}"]
    for xy in ring[1:]:
        parts.append(f"L {_fmt(xy[0])} {_fmt(xy[1])}")
    if closed:
        parts.append("Z")
    return " ".join(parts)


def _paint_attrs(shape: Shape) -> Iterator[str]:
    style = shape.style
    if style.fill is not None and shape.closed:
        yield f'fill="{rgba01_to_hex(style.fill)}"'
        if float(style.fill[3]) < 1.0:
            yield f'fill-opacity="{_fmt(style.fill[3])}"'
        yield 'fill-rule="evenodd"'
    else:
        yield 'fill="none"'
    if style.stroke is not None and style.stroke_weight > 0.0:
        yield f'stroke="{rgba01_to_hex(style.stroke)}"'
        if float(style.stroke[3]) < 1.0:
            yield f'stroke-opacity="{_fmt(style.stroke[3])}"'
        yield f'stroke-width="{_fmt(style.stroke_weight)}"'
        yield 'stroke-linecap="round"'
        yield 'stroke-linejoin="round"'


def svg_text(frame: Frame) -> str:
    """Frame を SVG 文書文字列へ変換して返す。"""
    canvas_w, canvas_h = frame.size
    lines: list[str] = []
    lines.append('<?xml version="1.0" encoding="UTF-8"?>')
    lines.append(
        (
            f'<svg xmlns="{_SVG_NS}" viewBox="0 0 {int(canvas_w)} {int(canvas_h)}" '
            f'width="{int(canvas_w)}" height="{int(canvas_h)}">'
        )
    )
    if frame.background is not None:
        bg = frame.background
        opacity = f' fill-opacity="{_fmt(bg[3])}"' if float(bg[3]) < 1.0 else ""
        lines.append(
            f'  <rect x="0" y="0" width="{int(canvas_w)}" height="{int(canvas_h)}" '
            f'fill="{rgba01_to_hex(bg)}"{opacity} />'
        )

    for shape in frame.shapes:
        d = " ".join(_ring_to_d(r, closed=shape.closed) for r in shape.rings)
        attrs = " ".join(_paint_attrs(shape))
        lines.append(f'  <path d="{d}" {attrs} />')

    lines.append("</svg>")
    return "\n".join(lines) + "\n"


def export_svg(frame: Frame, path: str | Path) -> Path:
    """Frame を SVG として保存する。

    Parameters
    ----------
    frame : Frame
        描画パスの結果。
    path : str or Path
        出力先パス。親ディレクトリは作成する。

    Returns
    -------
    Path
        保存先パス。
    """
    _path = Path(path)
    _path.parent.mkdir(parents=True, exist_ok=True)
    with _path.open("w", encoding="utf-8", newline="\n") as f:
        f.write(svg_text(frame))
    logger.debug("wrote svg %s (%d shapes)", _path, len(frame.shapes))
    return _path


__all__ = ["export_svg", "svg_text"]
