"""
どこで: `src/steepfast/core/motifs.py`。
何を: 装飾モチーフ（山の記号・スピード線・ストライプ帯・アクセント輪郭・バッジ）のデザイン空間頂点を生成する。
なぜ: renderer から頂点計算を切り離し、モチーフの実寸と fit 余白の整合をテストで確かめられるようにするため。
"""

from __future__ import annotations

import math

import numpy as np

from steepfast.core.geometry import AABB, PointLike, Rect, aabb_from_points, rotate_points
from steepfast.core.layout import LogoLayout

# 山の記号: アンカー矩形の左上を原点とした頂点（手調整値）。
MOUNTAIN_RIDGE = (
    (-135.0, 30.0),
    (-75.0, -70.0),
    (-50.0, -40.0),
    (5.0, -135.0),
    (80.0, 30.0),
)
MOUNTAIN_SNOW = (
    (5.0, -135.0),
    (-18.0, -95.0),
    (-5.0, -103.0),
    (6.0, -90.0),
    (16.0, -104.0),
    (23.0, -95.0),
)

# スピード線: (高さ比, 長さ)。アンカー左辺から SPEED_LINE_GAP 離して左へ伸ばす。
SPEED_LINES = (
    (0.22, 150.0),
    (0.45, 110.0),
    (0.68, 170.0),
    (0.88, 90.0),
)
SPEED_LINE_GAP = 18.0
SPEED_LINE_WEIGHT = 10.0

ACCENT_INSET = 0.94


def mountain_glyph(anchor: Rect) -> tuple[np.ndarray, np.ndarray]:
    """山の稜線と雪冠の多角形（回転前）を返す。"""
    origin = np.array([anchor.x, anchor.y], dtype=np.float64)
    ridge = np.asarray(MOUNTAIN_RIDGE, dtype=np.float64) + origin
    snow = np.asarray(MOUNTAIN_SNOW, dtype=np.float64) + origin
    return ridge, snow


def speed_lines(anchor: Rect, skew_k: float) -> list[np.ndarray]:
    """アンカーの斜めの左辺に沿って並ぶ水平線分（各 shape (2,2)）を返す。"""
    skew = anchor.h * float(skew_k)
    out: list[np.ndarray] = []
    for frac, length in SPEED_LINES:
        y = anchor.y + anchor.h * frac
        # 左辺は下端で x、上端で x + skew（skewed_corners と同じ定義）。
        x_edge = anchor.x + skew * (1.0 - frac)
        end = x_edge - SPEED_LINE_GAP
        out.append(np.array([[end - length, y], [end, y]], dtype=np.float64))
    return out


def stripe_bands(
    corners: np.ndarray,
    *,
    count: int,
    width: float,
    gap: float,
    margin: float,
) -> list[np.ndarray]:
    """プラーク内の右端寄りに、斜辺と平行なストライプ帯（各 shape (4,2)）を返す。

    Parameters
    ----------
    corners : np.ndarray
        プラーク頂点（TL, TR, BR, BL）。回転済みでもよい。
    count : int
        帯の本数。
    width, gap, margin : float
        帯幅・帯間隔・右端からの余白（上辺に沿った長さ）。
    """
    if count <= 0:
        return []
    tl, tr, br, bl = (np.asarray(c, dtype=np.float64) for c in corners)
    edge_len = float(np.linalg.norm(tr - tl))
    if edge_len <= 0.0:
        return []

    bands: list[np.ndarray] = []
    for i in range(int(count)):
        t1 = 1.0 - (float(margin) + i * (float(width) + float(gap))) / edge_len
        t0 = t1 - float(width) / edge_len
        if t0 <= 0.0:
            break
        top0 = tl + (tr - tl) * t0
        top1 = tl + (tr - tl) * t1
        bot0 = bl + (br - bl) * t0
        bot1 = bl + (br - bl) * t1
        bands.append(np.stack([top0, top1, bot1, bot0]))
    return bands


def inset_corners(corners: np.ndarray, factor: float = ACCENT_INSET) -> np.ndarray:
    """頂点列を重心まわりに factor 倍した輪郭を返す。"""
    pts = np.asarray(corners, dtype=np.float64)
    c = pts.mean(axis=0)
    return (pts - c) * float(factor) + c


def badge_polygon(center: PointLike, radius: float, sides: int, ang: float = 0.0) -> np.ndarray:
    """中心・半径・辺数の正多角形（頂点は上から時計回り）を返す。"""
    n = max(3, int(sides))
    cx, cy = float(center[0]), float(center[1])
    angles = -math.pi / 2.0 + float(ang) + np.arange(n, dtype=np.float64) * (2.0 * math.pi / n)
    return np.stack([cx + radius * np.cos(angles), cy + radius * np.sin(angles)], axis=1)


def motif_extent(layout: LogoLayout) -> AABB | None:
    """描かれるモチーフ（影と線幅を含む）のデザイン空間 AABB を返す。モチーフが無ければ None。"""
    chunks: list[np.ndarray] = []
    if layout.mountain_anchor is not None:
        anchor = layout.plaque(layout.mountain_anchor)
        dx, dy = layout.shadow_for(anchor)
        for poly in mountain_glyph(anchor.rect):
            rotated = rotate_points(poly, layout.slant, anchor.rect.center)
            chunks.append(rotated)
            chunks.append(rotated + np.array([dx, dy]))
    if layout.speed_lines_anchor is not None:
        anchor = layout.plaque(layout.speed_lines_anchor)
        half = SPEED_LINE_WEIGHT / 2.0
        for seg in speed_lines(anchor.rect, layout.skew_k):
            rotated = rotate_points(seg, layout.slant, anchor.rect.center)
            chunks.append(rotated - half)
            chunks.append(rotated + half)
    if not chunks:
        return None
    return aabb_from_points(np.concatenate(chunks, axis=0))


__all__ = [
    "badge_polygon",
    "inset_corners",
    "motif_extent",
    "mountain_glyph",
    "speed_lines",
    "stripe_bands",
]
