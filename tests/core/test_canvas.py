"""core.canvas の変換スタックと記録順、core.affine の行列をテスト。"""

from __future__ import annotations

import math

import numpy as np
import pytest

from steepfast.core import affine
from steepfast.core.canvas import Canvas, DrawStyle
from steepfast.core.theme import rgba

RED = rgba(255, 0, 0)
BLUE = rgba(0, 0, 255)


def test_affine_compose_translation_after_scaling() -> None:
    m = affine.translation(10.0, 20.0) @ affine.scaling(2.0)
    np.testing.assert_allclose(affine.apply(m, [(1.0, 1.0)]), [[12.0, 22.0]])


def test_affine_shear_x_and_rotation() -> None:
    np.testing.assert_allclose(affine.apply(affine.shear_x(0.5), [(0.0, 2.0)]), [[1.0, 2.0]])
    np.testing.assert_allclose(
        affine.apply(affine.rotation(math.pi / 2), [(1.0, 0.0)]),
        [[0.0, 1.0]],
        atol=1e-12,
    )
    assert affine.uniform_scale_of(affine.scaling(3.0) @ affine.rotation(0.7)) == pytest.approx(3.0)


def test_push_pop_restores_matrix() -> None:
    canvas = Canvas((100, 100))
    canvas.translate(5.0, 5.0)
    before = canvas.matrix

    canvas.push()
    canvas.scale(3.0)
    canvas.rotate(0.4)
    assert canvas.depth == 2
    canvas.pop()

    assert canvas.depth == 1
    np.testing.assert_array_equal(canvas.matrix, before)


def test_pop_on_base_frame_raises() -> None:
    with pytest.raises(RuntimeError):
        Canvas((10, 10)).pop()


def test_scoped_pops_even_on_error() -> None:
    canvas = Canvas((10, 10))
    with pytest.raises(KeyError):
        with canvas.scoped():
            canvas.translate(1.0, 1.0)
            raise KeyError("boom")
    assert canvas.depth == 1
    np.testing.assert_array_equal(canvas.matrix, np.eye(3))


def test_shapes_are_recorded_in_device_space_in_call_order() -> None:
    canvas = Canvas((200, 200))
    with canvas.scoped():
        canvas.translate(10.0, 0.0)
        canvas.scale(2.0)
        canvas.polygon([(0.0, 0.0), (1.0, 0.0), (1.0, 1.0)], style=DrawStyle(fill=RED))
    canvas.line((0.0, 0.0), (5.0, 0.0), style=DrawStyle(stroke=BLUE, stroke_weight=2.0))

    assert [s.style.fill for s in canvas.shapes] == [RED, None]
    np.testing.assert_allclose(canvas.shapes[0].rings[0], [[10.0, 0.0], [12.0, 0.0], [12.0, 2.0]])
    assert canvas.shapes[0].closed is True
    assert canvas.shapes[1].closed is False
    np.testing.assert_allclose(canvas.shapes[1].rings[0], [[0.0, 0.0], [5.0, 0.0]])


def test_stroke_weight_follows_transform_scale() -> None:
    canvas = Canvas((100, 100))
    canvas.scale(4.0)
    canvas.line((0.0, 0.0), (1.0, 1.0), style=DrawStyle(stroke=BLUE, stroke_weight=1.5))
    assert canvas.shapes[0].style.stroke_weight == pytest.approx(6.0)


def test_empty_style_and_degenerate_rings_are_skipped() -> None:
    canvas = Canvas((100, 100))
    canvas.polygon([(0.0, 0.0), (1.0, 0.0), (1.0, 1.0)], style=DrawStyle())
    canvas.polygon([(0.0, 0.0)], style=DrawStyle(fill=RED))
    canvas.compound([], style=DrawStyle(fill=RED))
    assert canvas.shapes == []


def test_compound_keeps_all_rings() -> None:
    canvas = Canvas((100, 100))
    outer = [(0.0, 0.0), (10.0, 0.0), (10.0, 10.0), (0.0, 10.0)]
    inner = [(2.0, 2.0), (8.0, 2.0), (8.0, 8.0), (2.0, 8.0)]
    canvas.compound([outer, inner], style=DrawStyle(fill=RED))
    assert len(canvas.shapes) == 1
    assert len(canvas.shapes[0].rings) == 2


def test_canvas_rejects_non_positive_size() -> None:
    with pytest.raises(ValueError):
        Canvas((0, 10))
