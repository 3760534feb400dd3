"""
どこで: `src/steepfast/core/fit.py`。
何を: 構図の真の bbox（回転・スキュー・影・モチーフ余白込み）から、ビューポートへの一様スケール + 平行移動を求める。
なぜ: どのウィンドウサイズ/縦横比でもロゴ全体が安全余白の内側に収まり、中央に置かれることを保証するため。

メインフロー
------------
1. 全プラークの頂点と、影オフセット分ずらした複製頂点を集める。
2. その点集合の AABB を取り、モチーフ余白で膨らませる。
3. 余白 `pad_px` を除いた表示領域に対し、縦横のきつい方の比でスケールを決める。
4. 拡大後の bbox がビューポート中央に来るようオフセットを決める。

毎回ゼロから計算する（プラーク数に比例する軽い処理なのでキャッシュしない）。
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

import numpy as np

from steepfast.core import affine
from steepfast.core.geometry import AABB, aabb_from_points, as_points, plaque_corners
from steepfast.core.layout import LogoLayout

logger = logging.getLogger(__name__)

DEFAULT_PAD_PX = 18.0
# スケールが 0 以下になるときの代替値（0 や負の反転描画を避ける）。
MIN_SCALE = 1e-6


@dataclass(frozen=True, slots=True)
class FitTransform:
    """デザイン空間 → ビューポート空間の写像 `p * scale + offset`。"""

    scale: float
    offset_x: float
    offset_y: float

    def apply(self, points: object) -> np.ndarray:
        """デザイン空間の点列 (N,2) をビューポート座標へ写して返す。"""
        pts = as_points(points)
        out = pts * float(self.scale)
        out[:, 0] += float(self.offset_x)
        out[:, 1] += float(self.offset_y)
        return out

    def matrix(self) -> np.ndarray:
        """canvas に積む 3x3 アフィン行列を返す。"""
        return affine.translation(self.offset_x, self.offset_y) @ affine.scaling(self.scale)


def composition_points(layout: LogoLayout) -> np.ndarray:
    """全プラーク頂点と影付き複製頂点を連結した (N,2) 配列を返す。"""
    chunks: list[np.ndarray] = []
    for plaque in layout.plaques:
        corners = plaque_corners(plaque.rect, layout.slant, layout.skew_k)
        dx, dy = layout.shadow_for(plaque)
        chunks.append(corners)
        # 影は同じ平行四辺形の平行移動として描かれるため、bbox を広げうる。
        chunks.append(corners + np.array([dx, dy], dtype=np.float64))
    return np.concatenate(chunks, axis=0)


def composition_bbox(layout: LogoLayout) -> AABB:
    """プラーク（影込み）の AABB をモチーフ余白で膨らませて返す。"""
    bbox = aabb_from_points(composition_points(layout))
    pads = layout.pads
    return bbox.inflate(left=pads.left, right=pads.right, top=pads.top, bottom=pads.bottom)


def _check_viewport(viewport: tuple[float, float]) -> tuple[float, float]:
    try:
        width, height = float(viewport[0]), float(viewport[1])
    except (TypeError, ValueError, IndexError) as exc:
        raise ValueError(f"viewport は (width, height) である必要がある: got={viewport!r}") from exc
    if not (math.isfinite(width) and math.isfinite(height)) or width <= 0.0 or height <= 0.0:
        raise ValueError(f"viewport は正の有限値である必要がある: got={viewport!r}")
    return width, height


def fit_bbox(bbox: AABB, viewport: tuple[float, float], *, pad_px: float = DEFAULT_PAD_PX) -> FitTransform:
    """任意の bbox をビューポートへ収める FitTransform を返す。

    Parameters
    ----------
    bbox : AABB
        デザイン空間での収めたい範囲。
    viewport : tuple[float, float]
        ビューポートの (width, height)。正の有限値。
    pad_px : float
        四辺に確保する安全余白（px）。0 以上。

    Returns
    -------
    FitTransform
        一様スケールと中央寄せのオフセット。

    Notes
    -----
    表示領域 `dimension - 2*pad_px` が正でない軸がある場合、スケールは `MIN_SCALE` に
    クランプされる（警告ログを出す）。正のスケールは 1e-6 未満でもそのまま使う。
    """
    width, height = _check_viewport(viewport)
    pad = float(pad_px)
    if not math.isfinite(pad) or pad < 0.0:
        raise ValueError(f"pad_px は 0 以上の有限値である必要がある: got={pad_px!r}")
    if bbox.w <= 0.0 and bbox.h <= 0.0:
        raise ValueError(f"bbox が退化している（幅も高さも 0）: {bbox}")

    avail_w = width - 2.0 * pad
    avail_h = height - 2.0 * pad
    ratios: list[float] = []
    if bbox.w > 0.0:
        ratios.append(avail_w / bbox.w)
    if bbox.h > 0.0:
        ratios.append(avail_h / bbox.h)
    scale = min(ratios)

    if not scale > 0.0:
        logger.warning(
            "viewport %.1fx%.1f is too small for pad_px=%.1f; clamping scale %.6g -> %.6g",
            width,
            height,
            pad,
            scale,
            MIN_SCALE,
        )
        scale = MIN_SCALE

    offset_x = (width - bbox.w * scale) / 2.0 - bbox.min_x * scale
    offset_y = (height - bbox.h * scale) / 2.0 - bbox.min_y * scale
    return FitTransform(scale=float(scale), offset_x=float(offset_x), offset_y=float(offset_y))


def compute_fit(
    layout: LogoLayout,
    viewport: tuple[float, float],
    *,
    pad_px: float = DEFAULT_PAD_PX,
) -> FitTransform:
    """構図全体をビューポートへ収める FitTransform を返す。"""
    bbox = composition_bbox(layout)
    fit = fit_bbox(bbox, viewport, pad_px=pad_px)
    logger.debug(
        "fit viewport=%s bbox=(%.2f, %.2f, %.2f, %.2f) -> scale=%.5f offset=(%.2f, %.2f)",
        viewport,
        bbox.min_x,
        bbox.min_y,
        bbox.max_x,
        bbox.max_y,
        fit.scale,
        fit.offset_x,
        fit.offset_y,
    )
    return fit


__all__ = [
    "DEFAULT_PAD_PX",
    "FitTransform",
    "MIN_SCALE",
    "composition_bbox",
    "composition_points",
    "compute_fit",
    "fit_bbox",
]
