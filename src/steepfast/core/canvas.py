"""
どこで: `src/steepfast/core/canvas.py`。
何を: 明示的な変換スタックを持つ記録型キャンバス。描画呼び出しをビューポート座標の `Shape` 列として蓄える。
なぜ: 暗黙のグローバル描画状態（現在の塗り/線/変換）を持たず、スタイルを呼び出しごとに渡す形にするため。

Notes
-----
- 変換は `push()` / `pop()`（または `scoped()`）でスコープする。スタイルはスタックに積まない。
- `shapes` は呼び出し順に並び、その順序がそのまま奥 → 手前の重なり順になる。
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
from contextlib import contextmanager
from dataclasses import dataclass

import numpy as np

from steepfast.core import affine
from steepfast.core.geometry import PointLike, as_points
from steepfast.core.theme import RGBA01


@dataclass(frozen=True, slots=True)
class DrawStyle:
    """1 回の描画呼び出しに使う塗り/線の指定。"""

    fill: RGBA01 | None = None
    stroke: RGBA01 | None = None
    stroke_weight: float = 1.0

    def __post_init__(self) -> None:
        if float(self.stroke_weight) < 0.0:
            raise ValueError(f"stroke_weight は 0 以上である必要がある: got={self.stroke_weight}")


@dataclass(frozen=True, slots=True)
class Shape:
    """記録済みの描画 1 件（ビューポート座標）。

    Attributes
    ----------
    rings : tuple[np.ndarray, ...]
        各リングは shape (N,2)。複数リングは even-odd で塗る（グリフの穴など）。
    closed : bool
        閉パスなら True。線分/開ポリラインは False。
    style : DrawStyle
        塗り/線。`stroke_weight` は変換後の px 単位。
    """

    rings: tuple[np.ndarray, ...]
    closed: bool
    style: DrawStyle


class Canvas:
    """変換スタック付きの記録キャンバス。"""

    def __init__(self, size: tuple[int, int], *, background: RGBA01 | None = None) -> None:
        w, h = int(size[0]), int(size[1])
        if w <= 0 or h <= 0:
            raise ValueError(f"canvas size は正である必要がある: got={size!r}")
        self.size = (w, h)
        self.background = background
        self.shapes: list[Shape] = []
        self._stack: list[np.ndarray] = [affine.identity()]

    # --- 変換スタック ---

    @property
    def matrix(self) -> np.ndarray:
        return self._stack[-1].copy()

    @property
    def depth(self) -> int:
        return len(self._stack)

    def push(self) -> None:
        self._stack.append(self._stack[-1].copy())

    def pop(self) -> None:
        if len(self._stack) <= 1:
            raise RuntimeError("Canvas.pop(): push() と対応しない pop")
        self._stack.pop()

    @contextmanager
    def scoped(self) -> Iterator["Canvas"]:
        """`push()` / `pop()` を対にして変換をスコープする。"""
        self.push()
        try:
            yield self
        finally:
            self.pop()

    def concat(self, matrix: np.ndarray) -> None:
        """現在の変換の右側に行列を掛ける（以降の座標はこの行列を先に通る）。"""
        self._stack[-1] = self._stack[-1] @ np.asarray(matrix, dtype=np.float64)

    def translate(self, dx: float, dy: float) -> None:
        self.concat(affine.translation(dx, dy))

    def rotate(self, ang: float) -> None:
        self.concat(affine.rotation(ang))

    def shear_x(self, k: float) -> None:
        self.concat(affine.shear_x(k))

    def scale(self, sx: float, sy: float | None = None) -> None:
        self.concat(affine.scaling(sx, sy))

    # --- 描画 ---

    def _device_style(self, style: DrawStyle) -> DrawStyle:
        if style.stroke is None:
            return style
        k = affine.uniform_scale_of(self._stack[-1])
        return DrawStyle(fill=style.fill, stroke=style.stroke, stroke_weight=float(style.stroke_weight) * k)

    def _record(self, rings: Sequence[np.ndarray], *, closed: bool, style: DrawStyle) -> None:
        if style.fill is None and style.stroke is None:
            return
        m = self._stack[-1]
        device = tuple(affine.apply(m, r) for r in rings if r.shape[0] >= 2)
        if not device:
            return
        self.shapes.append(Shape(rings=device, closed=bool(closed), style=self._device_style(style)))

    def polygon(self, points: object, *, style: DrawStyle) -> None:
        """単一の閉多角形を描く。"""
        self._record([as_points(points)], closed=True, style=style)

    def compound(self, rings: Iterable[object], *, style: DrawStyle) -> None:
        """複数リングを 1 つの閉パス（even-odd）として描く。"""
        self._record([as_points(r) for r in rings], closed=True, style=style)

    def polyline(self, points: object, *, style: DrawStyle) -> None:
        self._record([as_points(points)], closed=False, style=style)

    def line(self, p0: PointLike, p1: PointLike, *, style: DrawStyle) -> None:
        self._record([as_points([p0, p1])], closed=False, style=style)


__all__ = [
    "Canvas",
    "DrawStyle",
    "Shape",
]
