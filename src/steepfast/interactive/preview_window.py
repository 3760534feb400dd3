# どこで: `src/steepfast/interactive/preview_window.py`。
# 何を: リサイズ可能な pyglet ウィンドウでロゴをプレビューし、リサイズのたびに描画パスをやり直す。
# なぜ: ビューポートサイズの供給元とリサイズ通知を pyglet に任せ、core/export をヘッドレスに保つため。

from __future__ import annotations

import logging
import tempfile
from pathlib import Path
from typing import Any

import pyglet

from steepfast.core.layout import LogoLayout
from steepfast.core.pipeline import load_text_engine, render_frame
from steepfast.core.runtime_config import runtime_config
from steepfast.core.text import TextEngine
from steepfast.core.theme import Theme, theme_from_config
from steepfast.export.image import rasterize_svg_to_png
from steepfast.export.svg import export_svg

logger = logging.getLogger(__name__)


class PreviewWindow:
    """ロゴの静的プレビュー。描画パスは生成時と `on_resize` のときだけ走る。"""

    def __init__(
        self,
        *,
        size: tuple[int, int] | None = None,
        layout: LogoLayout | None = None,
        theme: Theme | None = None,
        text_engine: TextEngine | None = None,
    ) -> None:
        cfg = runtime_config()
        w, h = cfg.window_size if size is None else size
        self._layout = layout
        # テーマとフォントはプロセス中固定（読み取り専用）。
        self._theme = theme_from_config() if theme is None else theme
        self._text_engine = load_text_engine() if text_engine is None else text_engine
        self._tmp = tempfile.TemporaryDirectory(prefix="steepfast-preview-")
        self._image: Any = None

        self.window = pyglet.window.Window(  # type: ignore[abstract]
            width=int(w),
            height=int(h),
            resizable=True,
            caption="STEEP & FAST",
        )
        self.window.set_location(*cfg.window_pos)
        self.window.push_handlers(on_resize=self._on_resize, on_draw=self._on_draw, on_close=self._on_close)
        self._render()

    def _render(self) -> None:
        fb_w, fb_h = self.window.get_framebuffer_size()
        if fb_w <= 0 or fb_h <= 0:
            # 最小化中などは描画をスキップする。
            self._image = None
            return
        frame = render_frame(
            (fb_w, fb_h),
            layout=self._layout,
            theme=self._theme,
            text_engine=self._text_engine,
        )
        tmp_dir = Path(self._tmp.name)
        svg_path = export_svg(frame, tmp_dir / "preview.svg")
        png_path = rasterize_svg_to_png(
            svg_path,
            tmp_dir / "preview.png",
            output_size=frame.size,
            background=frame.background,
        )
        self._image = pyglet.image.load(str(png_path))
        logger.debug("preview re-rendered at %dx%d (scale=%.4f)", fb_w, fb_h, frame.fit.scale)

    def _on_resize(self, width: int, height: int) -> None:
        self._render()

    def _on_draw(self) -> None:
        self.window.clear()
        if self._image is None:
            return
        self._image.get_texture().blit(0, 0, width=self.window.width, height=self.window.height)

    def _on_close(self) -> None:
        self._tmp.cleanup()

    def run(self) -> None:
        pyglet.app.run()


def show(
    *,
    size: tuple[int, int] | None = None,
    layout: LogoLayout | None = None,
) -> None:
    """プレビューウィンドウを開き、閉じられるまでブロックする。"""
    PreviewWindow(size=size, layout=layout).run()


__all__ = ["PreviewWindow", "show"]
