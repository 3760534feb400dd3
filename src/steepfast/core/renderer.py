"""
どこで: `src/steepfast/core/renderer.py`。
何を: fit 変換を 1 度だけ積み、以降はデザイン空間座標でロゴの描画命令を奥から手前の順に発行する。
なぜ: 個々の図形がビューポートを知らずに済み、重なり順を 1 箇所で固定するため。

描画順（重なり順の契約）
------------------------
1. モチーフ: 山の影 → 山 → 雪冠 → スピード線
2. プラークごと: 影 → 塗り → ストライプ → アクセント輪郭
3. バッジ: 影 → 塗り → 輪郭 → アンパサンド
4. プラークごとの文字: 影 → 塗り → 下線
"""

from __future__ import annotations

import logging

import numpy as np

from steepfast.core.canvas import Canvas, DrawStyle
from steepfast.core.fit import FitTransform
from steepfast.core.geometry import PointLike, plaque_corners
from steepfast.core.layout import LogoLayout, PlaqueSpec
from steepfast.core.motifs import (
    SPEED_LINE_WEIGHT,
    badge_polygon,
    inset_corners,
    mountain_glyph,
    speed_lines,
    stripe_bands,
)
from steepfast.core.text import TextEngine, text_run
from steepfast.core.theme import Theme

logger = logging.getLogger(__name__)

ACCENT_WEIGHT = 4.0
BADGE_OUTLINE_WEIGHT = 5.0
BADGE_GLYPH_RATIO = 1.2


def _rotate_about(canvas: Canvas, ang: float, center: PointLike) -> None:
    cx, cy = float(center[0]), float(center[1])
    canvas.translate(cx, cy)
    canvas.rotate(ang)
    canvas.translate(-cx, -cy)


def _draw_motifs(canvas: Canvas, layout: LogoLayout, theme: Theme) -> None:
    if layout.mountain_anchor is not None:
        anchor = layout.plaque(layout.mountain_anchor)
        ridge, snow = mountain_glyph(anchor.rect)
        dx, dy = layout.shadow_for(anchor)
        with canvas.scoped():
            canvas.translate(dx, dy)
            _rotate_about(canvas, layout.slant, anchor.rect.center)
            canvas.polygon(ridge, style=DrawStyle(fill=theme.shadow))
        with canvas.scoped():
            _rotate_about(canvas, layout.slant, anchor.rect.center)
            canvas.polygon(ridge, style=DrawStyle(fill=theme.ink))
            canvas.polygon(snow, style=DrawStyle(fill=theme.highlight))

    if layout.speed_lines_anchor is not None:
        anchor = layout.plaque(layout.speed_lines_anchor)
        stroke = DrawStyle(stroke=theme.warm, stroke_weight=SPEED_LINE_WEIGHT)
        with canvas.scoped():
            _rotate_about(canvas, layout.slant, anchor.rect.center)
            for seg in speed_lines(anchor.rect, layout.skew_k):
                canvas.line(seg[0], seg[1], style=stroke)


def _draw_plaque(canvas: Canvas, layout: LogoLayout, theme: Theme, plaque: PlaqueSpec) -> None:
    corners = plaque_corners(plaque.rect, layout.slant, layout.skew_k)
    dx, dy = layout.shadow_for(plaque)

    canvas.polygon(corners + np.array([dx, dy]), style=DrawStyle(fill=theme.shadow))
    canvas.polygon(corners, style=DrawStyle(fill=theme.color(plaque.fill)))
    for band in stripe_bands(
        corners,
        count=plaque.stripes,
        width=plaque.stripe_width,
        gap=plaque.stripe_gap,
        margin=plaque.stripe_margin,
    ):
        canvas.polygon(band, style=DrawStyle(fill=theme.warm))
    if plaque.outline:
        canvas.polygon(
            inset_corners(corners),
            style=DrawStyle(stroke=theme.highlight, stroke_weight=ACCENT_WEIGHT),
        )


def _draw_badge(
    canvas: Canvas,
    layout: LogoLayout,
    theme: Theme,
    text_engine: TextEngine | None,
) -> None:
    badge = layout.badge
    if badge is None:
        return
    center = layout.badge_center()
    poly = badge_polygon(center, badge.radius, badge.sides, layout.slant)
    dx, dy = layout.shadow_off

    canvas.polygon(poly + np.array([dx, dy]), style=DrawStyle(fill=theme.shadow))
    canvas.polygon(
        poly,
        style=DrawStyle(fill=theme.warm, stroke=theme.ink, stroke_weight=BADGE_OUTLINE_WEIGHT),
    )

    if text_engine is None or not badge.glyph:
        return
    run = text_run(text_engine, badge.glyph, size=badge.radius * BADGE_GLYPH_RATIO, align="center")
    with canvas.scoped():
        canvas.translate(center[0], center[1])
        canvas.rotate(layout.slant)
        canvas.shear_x(layout.text.shear)
        canvas.translate(0.0, run.cap_height / 2.0)
        canvas.compound(run.rings, style=DrawStyle(fill=theme.ink))


def _draw_label(
    canvas: Canvas,
    layout: LogoLayout,
    theme: Theme,
    plaque: PlaqueSpec,
    text_engine: TextEngine,
) -> None:
    if not plaque.label:
        return
    style = layout.text
    size = plaque.rect.h * style.size_ratio
    run = text_run(
        text_engine,
        plaque.label,
        size=size,
        tracking=size * style.tracking_ratio,
        align="center",
    )
    cx, cy = plaque.rect.center
    baseline = run.cap_height / 2.0

    def _enter(ox: float, oy: float) -> None:
        canvas.translate(cx + ox, cy + oy)
        canvas.rotate(layout.slant)
        canvas.shear_x(style.shear)
        canvas.translate(0.0, baseline)

    with canvas.scoped():
        _enter(style.shadow_off[0], style.shadow_off[1])
        canvas.compound(run.rings, style=DrawStyle(fill=theme.shadow))
    with canvas.scoped():
        _enter(0.0, 0.0)
        canvas.compound(run.rings, style=DrawStyle(fill=theme.paper))
        y = style.underline_gap
        canvas.line(
            (-run.width / 2.0, y),
            (run.width / 2.0, y),
            style=DrawStyle(stroke=theme.warm, stroke_weight=style.underline_weight),
        )


def render_logo(
    canvas: Canvas,
    layout: LogoLayout,
    theme: Theme,
    fit: FitTransform,
    *,
    text_engine: TextEngine | None = None,
) -> None:
    """ロゴ 1 枚分の描画命令を canvas へ発行する。

    Parameters
    ----------
    canvas : Canvas
        描画先。呼び出し前後で変換スタックの深さは変わらない。
    layout : LogoLayout
        構図。
    theme : Theme
        色。
    fit : FitTransform
        デザイン空間 → ビューポートの写像。最初に 1 度だけ積む。
    text_engine : TextEngine | None
        None の場合、文字とバッジのグリフを省略する（警告ログを 1 度出す）。
    """
    with canvas.scoped():
        canvas.concat(fit.matrix())

        _draw_motifs(canvas, layout, theme)
        for plaque in layout.plaques:
            _draw_plaque(canvas, layout, theme, plaque)
        _draw_badge(canvas, layout, theme, text_engine)

        if text_engine is None:
            logger.warning("text engine is not available; skipping plaque labels and badge glyph")
            return
        for plaque in layout.plaques:
            _draw_label(canvas, layout, theme, plaque, text_engine)


__all__ = ["render_logo"]
