"""core.geometry のプラーク頂点と AABB 畳み込みをテスト。"""

from __future__ import annotations

import math

import numpy as np
import pytest

from steepfast.core.geometry import (
    AABB,
    Rect,
    aabb_from_points,
    plaque_corners,
    rotate_points,
    skewed_corners,
)


def test_rect_rejects_non_positive_size() -> None:
    with pytest.raises(ValueError):
        Rect(0.0, 0.0, 0.0, 10.0)
    with pytest.raises(ValueError):
        Rect(0.0, 0.0, 10.0, -1.0)
    with pytest.raises(ValueError):
        Rect(0.0, float("nan"), 10.0, 10.0)


def test_skewed_corners_are_inscribed_in_rect() -> None:
    box = Rect(0.0, 0.0, 900.0, 220.0)
    corners = skewed_corners(box, 0.45)
    skew = 220.0 * 0.45

    np.testing.assert_allclose(
        corners,
        [[skew, 0.0], [900.0, 0.0], [900.0 - skew, 220.0], [0.0, 220.0]],
    )


def test_plaque_corners_with_zero_angle_equal_skewed_corners_exactly() -> None:
    box = Rect(240.0, 290.0, 820.0, 220.0)
    assert np.array_equal(plaque_corners(box, 0.0, 0.45), skewed_corners(box, 0.45))


@pytest.mark.parametrize("ang", [-0.06, 0.3, math.pi / 2, 2.5])
@pytest.mark.parametrize("skew_k", [0.0, 0.45, -0.3])
def test_plaque_corners_centroid_is_rect_center(ang: float, skew_k: float) -> None:
    box = Rect(12.0, -40.0, 300.0, 80.0)
    corners = plaque_corners(box, ang, skew_k)

    assert corners.shape == (4, 2)
    np.testing.assert_allclose(corners.mean(axis=0), box.center, atol=1e-9)


def test_plaque_corners_keep_winding_order_after_rotation() -> None:
    box = Rect(0.0, 0.0, 400.0, 100.0)
    corners = plaque_corners(box, -0.06, 0.45)

    # 符号付き面積の符号は回転で変わらない（TL, TR, BR, BL の順が保たれる）。
    x, y = corners[:, 0], corners[:, 1]
    area = 0.5 * float(np.sum(x * np.roll(y, -1) - np.roll(x, -1) * y))
    assert area > 0.0


def test_rotate_points_uses_standard_rotation_about_center() -> None:
    out = rotate_points([(2.0, 1.0)], math.pi / 2, (1.0, 1.0))
    np.testing.assert_allclose(out, [[1.0, 2.0]], atol=1e-12)


def test_aabb_from_points_bounds_are_tight() -> None:
    rng = np.random.default_rng(7)
    pts = rng.uniform(-50.0, 80.0, size=(40, 2))
    bbox = aabb_from_points(pts)

    assert np.all(pts[:, 0] >= bbox.min_x)
    assert np.all(pts[:, 0] <= bbox.max_x)
    assert np.all(pts[:, 1] >= bbox.min_y)
    assert np.all(pts[:, 1] <= bbox.max_y)
    assert np.any(pts[:, 0] == bbox.min_x)
    assert np.any(pts[:, 0] == bbox.max_x)
    assert np.any(pts[:, 1] == bbox.min_y)
    assert np.any(pts[:, 1] == bbox.max_y)


def test_aabb_from_points_rejects_empty_input() -> None:
    with pytest.raises(ValueError):
        aabb_from_points([])
    with pytest.raises(ValueError):
        aabb_from_points(np.zeros((0, 2)))


def test_aabb_from_points_rejects_non_finite_input() -> None:
    with pytest.raises(ValueError):
        aabb_from_points([(0.0, 0.0), (float("inf"), 1.0)])


def test_aabb_inflate_is_directional() -> None:
    bbox = AABB(0.0, 0.0, 10.0, 20.0).inflate(left=1.0, right=2.0, top=3.0, bottom=4.0)
    assert bbox == AABB(-1.0, -3.0, 12.0, 24.0)
    assert bbox.w == 13.0
    assert bbox.h == 27.0
