"""
どこで: `src/steepfast/core/geometry.py`。
何を: プラーク（スキュー + 回転した矩形）の頂点生成と、点集合の AABB 畳み込みを提供する。
なぜ: auto-fit と描画の両方が同じ頂点定義を共有し、bbox が描画結果と一致することを保証するため。
"""

from __future__ import annotations

import math
from collections.abc import Iterable
from dataclasses import dataclass

import numpy as np

PointLike = tuple[float, float]


@dataclass(frozen=True, slots=True)
class Rect:
    """デザイン空間におけるプラークの位置と寸法。

    Parameters
    ----------
    x, y : float
        左上座標。
    w, h : float
        幅と高さ。どちらも正である必要がある。
    """

    x: float
    y: float
    w: float
    h: float

    def __post_init__(self) -> None:
        values = (self.x, self.y, self.w, self.h)
        if not all(math.isfinite(float(v)) for v in values):
            raise ValueError(f"Rect は有限値である必要がある: {values!r}")
        if float(self.w) <= 0.0 or float(self.h) <= 0.0:
            raise ValueError(f"Rect の w/h は正である必要がある: w={self.w}, h={self.h}")
        object.__setattr__(self, "x", float(self.x))
        object.__setattr__(self, "y", float(self.y))
        object.__setattr__(self, "w", float(self.w))
        object.__setattr__(self, "h", float(self.h))

    @property
    def center(self) -> PointLike:
        return (self.x + self.w / 2.0, self.y + self.h / 2.0)


@dataclass(frozen=True, slots=True)
class AABB:
    """点集合を包む最小の軸平行矩形。"""

    min_x: float
    min_y: float
    max_x: float
    max_y: float

    @property
    def w(self) -> float:
        return self.max_x - self.min_x

    @property
    def h(self) -> float:
        return self.max_y - self.min_y

    @property
    def center(self) -> PointLike:
        return ((self.min_x + self.max_x) / 2.0, (self.min_y + self.max_y) / 2.0)

    def corners(self) -> np.ndarray:
        """4 隅を TL, TR, BR, BL の順で shape (4,2) として返す。"""
        return np.array(
            [
                [self.min_x, self.min_y],
                [self.max_x, self.min_y],
                [self.max_x, self.max_y],
                [self.min_x, self.max_y],
            ],
            dtype=np.float64,
        )

    def inflate(
        self,
        *,
        left: float = 0.0,
        right: float = 0.0,
        top: float = 0.0,
        bottom: float = 0.0,
    ) -> "AABB":
        """方向別の余白を足した新しい AABB を返す。"""
        return AABB(
            min_x=self.min_x - float(left),
            min_y=self.min_y - float(top),
            max_x=self.max_x + float(right),
            max_y=self.max_y + float(bottom),
        )


def as_points(points: object) -> np.ndarray:
    """点列を float64 の shape (N,2) 配列へ正規化して返す。"""
    if isinstance(points, np.ndarray):
        arr = points.astype(np.float64, copy=False)
    else:
        arr = np.asarray(list(points) if isinstance(points, Iterable) else points, dtype=np.float64)
    if arr.size == 0:
        return np.zeros((0, 2), dtype=np.float64)
    if arr.ndim != 2 or arr.shape[1] != 2:
        raise ValueError(f"点列は shape (N,2) である必要がある: shape={arr.shape}")
    return arr


def rotate_points(points: object, ang: float, center: PointLike) -> np.ndarray:
    """点列を center まわりに ang [rad] 回転して返す。"""
    pts = as_points(points)
    a = float(ang)
    if a == 0.0:
        return pts.copy()
    cx, cy = float(center[0]), float(center[1])
    c = math.cos(a)
    s = math.sin(a)
    dx = pts[:, 0] - cx
    dy = pts[:, 1] - cy
    out = np.empty_like(pts)
    out[:, 0] = cx + dx * c - dy * s
    out[:, 1] = cy + dx * s + dy * c
    return out


def skewed_corners(box: Rect, skew_k: float) -> np.ndarray:
    """回転前のスキュー平行四辺形の 4 頂点を返す。

    Parameters
    ----------
    box : Rect
        元の矩形。
    skew_k : float
        高さを水平シフト量へ換算する無次元係数。`skew = box.h * skew_k`。

    Returns
    -------
    np.ndarray
        shape (4,2)。TL, TR, BR, BL の順。

    Notes
    -----
    平行四辺形は矩形に内接する。上辺は `[x + skew, x + w]`、下辺は `[x, x + w - skew]`
    を占め、上辺が下辺に対して `+skew` だけずれる。skew が負なら逆向きに傾き、矩形からはみ出す。
    """
    skew = float(box.h) * float(skew_k)
    x0 = box.x
    x1 = box.x + box.w
    y0 = box.y
    y1 = box.y + box.h
    return np.array(
        [
            [x0 + skew, y0],
            [x1, y0],
            [x1 - skew, y1],
            [x0, y1],
        ],
        dtype=np.float64,
    )


def plaque_corners(box: Rect, ang: float, skew_k: float) -> np.ndarray:
    """プラークの 4 頂点（スキュー後、矩形中心まわりに回転）を返す。

    Parameters
    ----------
    box : Rect
        プラークの矩形。
    ang : float
        回転角 [rad]。構図全体で共有する傾き（slant）。
    skew_k : float
        スキュー係数。`skewed_corners()` を参照。

    Returns
    -------
    np.ndarray
        shape (4,2)。TL, TR, BR, BL の順（塗り/輪郭で巻き方向を揃えるため固定）。
    """
    corners = skewed_corners(box, skew_k)
    return rotate_points(corners, ang, box.center)


def aabb_from_points(points: object) -> AABB:
    """点集合を包む最小の AABB を返す。

    Raises
    ------
    ValueError
        点が 1 つも無い、または非有限値を含む場合。
    """
    pts = as_points(points)
    if pts.shape[0] == 0:
        raise ValueError("aabb_from_points には 1 点以上が必要")
    if not np.all(np.isfinite(pts)):
        raise ValueError("aabb_from_points に非有限の座標が含まれている")

    mins = pts.min(axis=0)
    maxs = pts.max(axis=0)
    return AABB(
        min_x=float(mins[0]),
        min_y=float(mins[1]),
        max_x=float(maxs[0]),
        max_y=float(maxs[1]),
    )


__all__ = [
    "AABB",
    "Rect",
    "aabb_from_points",
    "as_points",
    "plaque_corners",
    "rotate_points",
    "skewed_corners",
]
