"""
どこで: `src/steepfast/api/export.py`。
何を: ヘッドレス export の公開導線 `Export` を提供する。
なぜ: 対話ウィンドウを立ち上げずに、任意のキャンバス寸法でロゴ 1 枚を保存できるようにするため。
"""

from __future__ import annotations

from pathlib import Path

from steepfast.core.layout import LogoLayout
from steepfast.core.output_paths import default_output_path
from steepfast.core.pipeline import Frame, load_text_engine, render_frame
from steepfast.core.runtime_config import runtime_config
from steepfast.core.text import TextEngine
from steepfast.core.theme import Theme
from steepfast.export.image import export_image
from steepfast.export.svg import export_svg


class Export:
    """ロゴ 1 枚分をファイルへ書き出す。

    Attributes
    ----------
    frame : Frame
        書き出した描画パスの結果。
    path : Path
        実際の保存先。
    """

    def __init__(
        self,
        fmt: str,
        path: str | Path | None = None,
        *,
        canvas_size: tuple[int, int] | None = None,
        layout: LogoLayout | None = None,
        theme: Theme | None = None,
        text_engine: TextEngine | None = None,
        use_text: bool = True,
        pad_px: float | None = None,
        run_id: str | None = None,
    ) -> None:
        """export を実行する。

        Parameters
        ----------
        fmt : str
            出力フォーマット。`"svg"` または `"png"`。
        path : str or Path or None
            出力先パス。None なら `default_output_path()`。
        canvas_size : tuple[int, int] | None
            キャンバス寸法。None なら `render.canvas_size` 設定。
        text_engine : TextEngine | None
            文字の供給元。None かつ `use_text=True` なら設定フォントから作る。
        use_text : bool
            False なら文字を描かない。
        run_id : str | None
            既定パスに付ける識別子。
        """
        self.fmt = str(fmt).lower().strip()
        if self.fmt not in {"svg", "png"}:
            raise ValueError(f"未対応の export fmt: {fmt!r}")

        size = runtime_config().canvas_size if canvas_size is None else canvas_size
        self.path = (
            default_output_path(self.fmt, canvas_size=size, run_id=run_id)
            if path is None
            else Path(path)
        )

        engine = text_engine
        if engine is None and use_text:
            engine = load_text_engine()

        self.frame: Frame = render_frame(
            size,
            layout=layout,
            theme=theme,
            text_engine=engine,
            pad_px=pad_px,
        )

        if self.fmt == "svg":
            export_svg(self.frame, self.path)
            return
        self.path = export_image(self.frame, self.path.with_suffix(".png"))
