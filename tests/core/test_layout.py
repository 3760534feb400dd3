"""core.layout の構図定義と core.motifs の頂点生成をテスト。"""

from __future__ import annotations

import numpy as np
import pytest

from steepfast.core.fit import composition_bbox
from steepfast.core.geometry import Rect, aabb_from_points, plaque_corners
from steepfast.core.layout import (
    FAST_RECT,
    STEEP_RECT,
    LogoLayout,
    MotifPads,
    PlaqueSpec,
    default_layout,
)
from steepfast.core.motifs import (
    badge_polygon,
    inset_corners,
    motif_extent,
    speed_lines,
    stripe_bands,
)


def test_default_layout_has_steep_and_fast_plaques() -> None:
    layout = default_layout()
    assert [p.name for p in layout.plaques] == ["steep", "fast"]
    assert layout.plaque("steep").rect == STEEP_RECT
    assert layout.plaque("fast").rect == FAST_RECT
    assert layout.plaque("steep").label == "STEEP"
    assert layout.plaque("fast").label == "FAST"


def test_layout_rejects_empty_and_duplicate_plaques() -> None:
    with pytest.raises(ValueError):
        LogoLayout(plaques=())
    p = PlaqueSpec(name="a", rect=Rect(0.0, 0.0, 10.0, 10.0))
    with pytest.raises(ValueError):
        LogoLayout(plaques=(p, p))


def test_layout_rejects_unknown_motif_anchor() -> None:
    p = PlaqueSpec(name="a", rect=Rect(0.0, 0.0, 10.0, 10.0))
    with pytest.raises(ValueError):
        LogoLayout(plaques=(p,), mountain_anchor="missing")


def test_unknown_plaque_name_raises_key_error() -> None:
    with pytest.raises(KeyError):
        default_layout().plaque("nope")


def test_motif_pads_reject_negative_values() -> None:
    with pytest.raises(ValueError):
        MotifPads(left=-1.0)


def test_per_plaque_shadow_overrides_layout_shadow() -> None:
    p = PlaqueSpec(name="a", rect=Rect(0.0, 0.0, 10.0, 10.0), shadow_off=(1.0, 2.0))
    q = PlaqueSpec(name="b", rect=Rect(0.0, 20.0, 10.0, 10.0))
    layout = LogoLayout(plaques=(p, q), shadow_off=(5.0, 6.0))
    assert layout.shadow_for(p) == (1.0, 2.0)
    assert layout.shadow_for(q) == (5.0, 6.0)


def test_badge_center_is_midpoint_of_first_two_plaques() -> None:
    layout = default_layout()
    (ax, ay), (bx, by) = STEEP_RECT.center, FAST_RECT.center
    assert layout.badge_center() == ((ax + bx) / 2.0, (ay + by) / 2.0)


def test_default_motifs_fit_inside_padded_bbox() -> None:
    layout = default_layout()
    extent = motif_extent(layout)
    bbox = composition_bbox(layout)

    assert extent is not None
    assert extent.min_x >= bbox.min_x
    assert extent.min_y >= bbox.min_y
    assert extent.max_x <= bbox.max_x
    assert extent.max_y <= bbox.max_y


def test_motif_extent_is_none_without_anchors() -> None:
    p = PlaqueSpec(name="a", rect=Rect(0.0, 0.0, 10.0, 10.0))
    assert motif_extent(LogoLayout(plaques=(p,))) is None


def test_speed_lines_end_left_of_slanted_edge() -> None:
    anchor = Rect(100.0, 0.0, 400.0, 200.0)
    segments = speed_lines(anchor, 0.45)
    assert len(segments) == 4
    for seg in segments:
        y = seg[0, 1]
        frac = (y - anchor.y) / anchor.h
        edge_x = anchor.x + anchor.h * 0.45 * (1.0 - frac)
        assert seg[0, 1] == seg[1, 1]
        assert seg[1, 0] < edge_x
        assert seg[0, 0] < seg[1, 0]


def test_stripe_bands_stay_inside_plaque() -> None:
    corners = plaque_corners(Rect(0.0, 0.0, 900.0, 220.0), 0.0, 0.45)
    bands = stripe_bands(corners, count=3, width=16.0, gap=12.0, margin=30.0)

    assert len(bands) == 3
    bbox = aabb_from_points(corners)
    for band in bands:
        assert band.shape == (4, 2)
        assert band[:, 0].min() >= bbox.min_x
        assert band[:, 0].max() <= bbox.max_x
    # 右端から順に並ぶ。
    assert bands[0][1, 0] > bands[1][1, 0] > bands[2][1, 0]


def test_stripe_bands_stop_when_plaque_is_too_narrow() -> None:
    corners = plaque_corners(Rect(0.0, 0.0, 100.0, 20.0), 0.0, 0.0)
    bands = stripe_bands(corners, count=10, width=16.0, gap=12.0, margin=30.0)
    assert 0 < len(bands) < 10
    assert stripe_bands(corners, count=0, width=16.0, gap=12.0, margin=30.0) == []


def test_inset_corners_shrink_about_centroid() -> None:
    corners = np.array([[0.0, 0.0], [10.0, 0.0], [10.0, 10.0], [0.0, 10.0]])
    inset = inset_corners(corners, 0.5)
    np.testing.assert_allclose(inset, [[2.5, 2.5], [7.5, 2.5], [7.5, 7.5], [2.5, 7.5]])


def test_badge_polygon_is_regular() -> None:
    poly = badge_polygon((10.0, 20.0), 5.0, 6)
    assert poly.shape == (6, 2)
    dist = np.hypot(poly[:, 0] - 10.0, poly[:, 1] - 20.0)
    np.testing.assert_allclose(dist, 5.0)
    # 先頭頂点は真上。
    np.testing.assert_allclose(poly[0], (10.0, 15.0), atol=1e-12)
