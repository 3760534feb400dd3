"""
どこで: `src/steepfast/core/pipeline.py`。
何を: 1 回の描画パス（fit 計算 → canvas 生成 → renderer）を実行し、出力に使える `Frame` を返す。
なぜ: headless export と interactive プレビューで同じパスを共有し、パス間で状態を持ち越さないため。
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from steepfast.core.canvas import Canvas, Shape
from steepfast.core.fit import FitTransform, compute_fit
from steepfast.core.font_resolver import resolve_font_path
from steepfast.core.layout import LogoLayout, default_layout
from steepfast.core.renderer import render_logo
from steepfast.core.runtime_config import runtime_config
from steepfast.core.text import TextEngine
from steepfast.core.theme import RGBA01, Theme, theme_from_config

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Frame:
    """1 回の描画パスの結果。"""

    size: tuple[int, int]
    fit: FitTransform
    shapes: tuple[Shape, ...]
    background: RGBA01 | None


def load_text_engine(font: str | None = None) -> TextEngine | None:
    """設定されたフォントから TextEngine を作る。フォントが無ければ警告して None を返す。"""
    try:
        path = resolve_font_path(font)
    except FileNotFoundError as exc:
        logger.warning("font not available, rendering without text: %s", exc)
        return None
    logger.debug("using font %s", path)
    return TextEngine(path, runtime_config().font_index)


def render_frame(
    viewport: tuple[int, int],
    *,
    layout: LogoLayout | None = None,
    theme: Theme | None = None,
    text_engine: TextEngine | None = None,
    pad_px: float | None = None,
) -> Frame:
    """ビューポート 1 枚分の描画パスを実行して返す。

    Parameters
    ----------
    viewport : tuple[int, int]
        ビューポートの (width, height) px。
    layout : LogoLayout | None
        構図。None なら `default_layout()`。
    theme : Theme | None
        色。None なら `theme_from_config()`。
    text_engine : TextEngine | None
        文字の供給元。None なら文字を描かない。
    pad_px : float | None
        安全余白。None なら `render.pad_px` 設定。
    """
    layout_ = default_layout() if layout is None else layout
    theme_ = theme_from_config() if theme is None else theme
    pad = runtime_config().pad_px if pad_px is None else float(pad_px)

    size = (int(viewport[0]), int(viewport[1]))
    fit = compute_fit(layout_, size, pad_px=pad)

    canvas = Canvas(size, background=theme_.paper)
    render_logo(canvas, layout_, theme_, fit, text_engine=text_engine)
    logger.debug("render pass %dx%d: %d shapes", size[0], size[1], len(canvas.shapes))

    return Frame(size=size, fit=fit, shapes=tuple(canvas.shapes), background=canvas.background)


__all__ = [
    "Frame",
    "load_text_engine",
    "render_frame",
]
