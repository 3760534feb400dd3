"""2D アフィン変換（3x3 同次行列）の生成と適用。"""

from __future__ import annotations

import math

import numpy as np

from steepfast.core.geometry import as_points


def identity() -> np.ndarray:
    return np.eye(3, dtype=np.float64)


def translation(dx: float, dy: float) -> np.ndarray:
    m = identity()
    m[0, 2] = float(dx)
    m[1, 2] = float(dy)
    return m


def rotation(ang: float) -> np.ndarray:
    """原点まわりの回転（y 下向き座標では時計回りが正）。"""
    c = math.cos(float(ang))
    s = math.sin(float(ang))
    return np.array([[c, -s, 0.0], [s, c, 0.0], [0.0, 0.0, 1.0]], dtype=np.float64)


def shear_x(k: float) -> np.ndarray:
    """`x' = x + k*y` の水平せん断。"""
    m = identity()
    m[0, 1] = float(k)
    return m


def scaling(sx: float, sy: float | None = None) -> np.ndarray:
    m = identity()
    m[0, 0] = float(sx)
    m[1, 1] = float(sx if sy is None else sy)
    return m


def apply(matrix: np.ndarray, points: object) -> np.ndarray:
    """点列 (N,2) に行列を適用して返す。"""
    pts = as_points(points)
    if pts.shape[0] == 0:
        return pts
    m = np.asarray(matrix, dtype=np.float64)
    return pts @ m[:2, :2].T + m[:2, 2]


def uniform_scale_of(matrix: np.ndarray) -> float:
    """線幅の換算に使う等価スケール `sqrt(|det|)` を返す。"""
    m = np.asarray(matrix, dtype=np.float64)
    det = float(m[0, 0] * m[1, 1] - m[0, 1] * m[1, 0])
    return math.sqrt(abs(det))


__all__ = [
    "apply",
    "identity",
    "rotation",
    "scaling",
    "shear_x",
    "translation",
    "uniform_scale_of",
]
