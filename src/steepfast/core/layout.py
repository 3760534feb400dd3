"""
どこで: `src/steepfast/core/layout.py`。
何を: ロゴ構図（プラーク矩形・共有の傾き/スキュー・影・モチーフ余白・バッジ・文字組み）の静的記述。
なぜ: 手調整のリテラル値を名前付き定数として 1 箇所に集め、fit と描画が同じ値を参照するようにするため。
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from steepfast.core.geometry import PointLike, Rect

# --- 手調整の構図定数（生成規則は無い。値の変更は motif 余白と合わせて行う） ---

SLANT = -0.06
SKEW_K = 0.45
SHADOW_OFF = (10.0, 12.0)

STEEP_RECT = Rect(0.0, 0.0, 900.0, 220.0)
FAST_RECT = Rect(240.0, 290.0, 820.0, 220.0)

# mountain はアンカー（STEEP）の左上へ、speed lines は FAST の左へはみ出す。
MOTIF_PAD_LEFT = 165.0
MOTIF_PAD_RIGHT = 24.0
MOTIF_PAD_TOP = 110.0
MOTIF_PAD_BOTTOM = 24.0

BADGE_RADIUS = 64.0
BADGE_SIDES = 6
BADGE_GLYPH = "&"

TEXT_SIZE_RATIO = 0.58
TEXT_TRACKING_RATIO = 0.12
TEXT_SHEAR = -0.22
TEXT_SHADOW_OFF = (4.0, 5.0)
UNDERLINE_GAP = 14.0
UNDERLINE_WEIGHT = 6.0


@dataclass(frozen=True, slots=True)
class MotifPads:
    """プラーク外に描かれるモチーフのための方向別余白（デザイン単位）。"""

    left: float = 0.0
    right: float = 0.0
    top: float = 0.0
    bottom: float = 0.0

    def __post_init__(self) -> None:
        for name in ("left", "right", "top", "bottom"):
            v = float(getattr(self, name))
            if not math.isfinite(v) or v < 0.0:
                raise ValueError(f"MotifPads.{name} は 0 以上の有限値である必要がある: got={v}")
            object.__setattr__(self, name, v)


@dataclass(frozen=True, slots=True)
class PlaqueSpec:
    """1 枚のプラーク。

    Parameters
    ----------
    name : str
        構図内での識別名。
    rect : Rect
        デザイン空間の矩形。
    label : str
        プラーク上に組む文字列。空ならテキストを描かない。
    fill : str
        塗りに使うテーマ色名。
    shadow_off : tuple[float, float] | None
        影のオフセット。None なら構図共通の値を使う。
    stripes : int
        右端に入れるストライプ帯の本数。
    """

    name: str
    rect: Rect
    label: str = ""
    fill: str = "ink"
    shadow_off: PointLike | None = None
    stripes: int = 0
    stripe_width: float = 16.0
    stripe_gap: float = 12.0
    stripe_margin: float = 30.0
    outline: bool = True

    def __post_init__(self) -> None:
        if int(self.stripes) < 0:
            raise ValueError(f"stripes は 0 以上である必要がある: got={self.stripes}")


@dataclass(frozen=True, slots=True)
class BadgeSpec:
    """プラーク同士をつなぐ中央バッジ。"""

    radius: float = BADGE_RADIUS
    sides: int = BADGE_SIDES
    glyph: str = BADGE_GLYPH


@dataclass(frozen=True, slots=True)
class TextStyle:
    """プラーク上の文字組み（サイズはプラーク高さ比、トラッキングは文字サイズ比）。"""

    size_ratio: float = TEXT_SIZE_RATIO
    tracking_ratio: float = TEXT_TRACKING_RATIO
    shear: float = TEXT_SHEAR
    shadow_off: PointLike = TEXT_SHADOW_OFF
    underline_gap: float = UNDERLINE_GAP
    underline_weight: float = UNDERLINE_WEIGHT


@dataclass(frozen=True, slots=True)
class LogoLayout:
    """ロゴ構図全体。fit と描画の唯一の入力。"""

    plaques: tuple[PlaqueSpec, ...]
    slant: float = SLANT
    skew_k: float = SKEW_K
    shadow_off: PointLike = SHADOW_OFF
    pads: MotifPads = MotifPads()
    badge: BadgeSpec | None = BadgeSpec()
    text: TextStyle = TextStyle()
    # モチーフのアンカーとなるプラーク名。None ならそのモチーフを描かない。
    mountain_anchor: str | None = None
    speed_lines_anchor: str | None = None

    def __post_init__(self) -> None:
        if not self.plaques:
            raise ValueError("LogoLayout には 1 枚以上のプラークが必要")
        names = [p.name for p in self.plaques]
        if len(set(names)) != len(names):
            raise ValueError(f"プラーク名が重複している: {names}")
        for anchor in (self.mountain_anchor, self.speed_lines_anchor):
            if anchor is not None and anchor not in names:
                raise ValueError(f"モチーフのアンカーが存在しない: {anchor!r}")
        object.__setattr__(self, "plaques", tuple(self.plaques))

    def plaque(self, name: str) -> PlaqueSpec:
        for p in self.plaques:
            if p.name == name:
                return p
        raise KeyError(f"プラークが見つからない: {name!r}")

    def shadow_for(self, plaque: PlaqueSpec) -> PointLike:
        """プラークの影オフセット（個別指定が無ければ構図共通値）を返す。"""
        off = plaque.shadow_off if plaque.shadow_off is not None else self.shadow_off
        return (float(off[0]), float(off[1]))

    def badge_center(self) -> PointLike:
        """先頭 2 枚のプラーク中心の中点を返す（1 枚なら その中心）。"""
        if len(self.plaques) == 1:
            return self.plaques[0].rect.center
        (ax, ay), (bx, by) = self.plaques[0].rect.center, self.plaques[1].rect.center
        return ((ax + bx) / 2.0, (ay + by) / 2.0)


def default_layout() -> LogoLayout:
    """STEEP & FAST の既定構図を返す。"""
    return LogoLayout(
        plaques=(
            PlaqueSpec(name="steep", rect=STEEP_RECT, label="STEEP", fill="ink", stripes=3),
            PlaqueSpec(name="fast", rect=FAST_RECT, label="FAST", fill="cool", stripes=2),
        ),
        slant=SLANT,
        skew_k=SKEW_K,
        shadow_off=SHADOW_OFF,
        pads=MotifPads(
            left=MOTIF_PAD_LEFT,
            right=MOTIF_PAD_RIGHT,
            top=MOTIF_PAD_TOP,
            bottom=MOTIF_PAD_BOTTOM,
        ),
        badge=BadgeSpec(),
        text=TextStyle(),
        mountain_anchor="steep",
        speed_lines_anchor="fast",
    )


__all__ = [
    "BadgeSpec",
    "LogoLayout",
    "MotifPads",
    "PlaqueSpec",
    "TextStyle",
    "default_layout",
]
