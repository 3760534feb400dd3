"""
どこで: `src/steepfast/core/theme.py`。
何を: 意味名（ink / cool / warm / shadow ...）から RGBA 色への固定対応と色変換ユーティリティを提供する。
なぜ: 描画コードが具体的な色値を持たず、config.yaml の `theme:` から差し替えられるようにするため。
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass, fields, replace
from typing import Any

from steepfast.core.runtime_config import runtime_config

RGBA01 = tuple[float, float, float, float]

_HEX_RE = re.compile(r"^#?([0-9A-Fa-f]{6})([0-9A-Fa-f]{2})?$")


def _clamp01(v: float) -> float:
    fv = float(v)
    return 0.0 if fv < 0.0 else 1.0 if fv > 1.0 else fv


def rgba(r: int | float, g: int | float, b: int | float, a: int | float = 255) -> RGBA01:
    """0..255 の各チャネルから RGBA（0..1）を構築して返す。"""
    return (
        _clamp01(float(r) / 255.0),
        _clamp01(float(g) / 255.0),
        _clamp01(float(b) / 255.0),
        _clamp01(float(a) / 255.0),
    )


def rgb01_to_rgb255(rgb: tuple[float, ...]) -> tuple[int, int, int]:
    """0..1 float の RGB(A) を 0..255 int の RGB に変換して返す（alpha は無視）。"""

    r, g, b = rgb[0], rgb[1], rgb[2]
    out: list[int] = []
    for v in (r, g, b):
        out.append(int(round(_clamp01(v) * 255.0)))
    return int(out[0]), int(out[1]), int(out[2])


def rgba01_to_hex(color: tuple[float, ...]) -> str:
    """RGB(A) 0..1 を #RRGGBB に変換して返す。alpha は別属性で扱う。"""
    r, g, b = rgb01_to_rgb255(color)
    return f"#{r:02X}{g:02X}{b:02X}"


def parse_color(value: Any) -> RGBA01:
    """色指定を RGBA01 へ変換して返す。

    受理する形:
    - `"#RRGGBB"` / `"#RRGGBBAA"`（`#` は省略可）
    - `[r, g, b]` / `[r, g, b, a]`（0..255 の数値）

    Raises
    ------
    ValueError
        解釈できない値の場合。
    """
    if isinstance(value, str):
        m = _HEX_RE.match(value.strip())
        if m is None:
            raise ValueError(f"色は #RRGGBB または #RRGGBBAA である必要がある: got={value!r}")
        rgb_txt, a_txt = m.group(1), m.group(2)
        r = int(rgb_txt[0:2], 16)
        g = int(rgb_txt[2:4], 16)
        b = int(rgb_txt[4:6], 16)
        a = int(a_txt, 16) if a_txt is not None else 255
        return rgba(r, g, b, a)

    try:
        seq = list(value)
    except TypeError as exc:
        raise ValueError(f"色は文字列または数値配列である必要がある: got={value!r}") from exc
    if len(seq) not in (3, 4):
        raise ValueError(f"色配列は 3 または 4 要素である必要がある: got={value!r}")
    try:
        channels = [float(v) for v in seq]
    except (TypeError, ValueError) as exc:
        raise ValueError(f"色配列は数値である必要がある: got={value!r}") from exc
    return rgba(*channels)


@dataclass(frozen=True, slots=True)
class Theme:
    """ロゴで使う意味名付きの色一式。"""

    paper: RGBA01
    ink: RGBA01
    cool: RGBA01
    warm: RGBA01
    shadow: RGBA01
    highlight: RGBA01

    @classmethod
    def names(cls) -> tuple[str, ...]:
        return tuple(f.name for f in fields(cls))

    def color(self, name: str) -> RGBA01:
        """意味名から色を返す。未知の名前は KeyError。"""
        if name not in self.names():
            raise KeyError(f"未知のテーマ色: {name!r}（候補: {', '.join(self.names())}）")
        return getattr(self, name)

    def with_overrides(self, overrides: Mapping[str, Any]) -> "Theme":
        """一部の色を差し替えた Theme を返す。"""
        changes: dict[str, RGBA01] = {}
        for key, value in overrides.items():
            name = str(key)
            if name not in self.names():
                raise KeyError(f"未知のテーマ色: {name!r}（候補: {', '.join(self.names())}）")
            try:
                changes[name] = parse_color(value)
            except ValueError as exc:
                raise ValueError(f"theme.{name} が不正です: {exc}") from exc
        return replace(self, **changes)


DEFAULT_THEME = Theme(
    paper=rgba(244, 240, 230),
    ink=rgba(22, 26, 34),
    cool=rgba(38, 110, 160),
    warm=rgba(232, 96, 44),
    shadow=rgba(0, 0, 0, 70),
    highlight=rgba(255, 255, 255),
)


def theme_from_config() -> Theme:
    """`config.yaml` の `theme:` を既定テーマへ適用して返す。"""
    overrides = runtime_config().theme
    if not overrides:
        return DEFAULT_THEME
    return DEFAULT_THEME.with_overrides(overrides)


__all__ = [
    "DEFAULT_THEME",
    "RGBA01",
    "Theme",
    "parse_color",
    "rgb01_to_rgb255",
    "rgba",
    "rgba01_to_hex",
    "theme_from_config",
]
