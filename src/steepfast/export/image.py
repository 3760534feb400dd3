"""
どこで: `src/steepfast/export/image.py`。
何を: SVG を外部ラスタライザ（resvg）で PNG に変換して保存する関数を提供する。
なぜ: SVG を正として保存し、PNG は任意の解像度で再生成できるようにするため。
"""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path

from steepfast.core.pipeline import Frame
from steepfast.core.runtime_config import runtime_config
from steepfast.core.theme import RGBA01, rgba01_to_hex
from steepfast.export.svg import export_svg

logger = logging.getLogger(__name__)


def export_image(
    frame: Frame,
    path: str | Path,
    *,
    output_size: tuple[int, int] | None = None,
) -> Path:
    """Frame を画像として保存する。

    Notes
    -----
    - `.svg` はそのまま SVG として保存する。
    - `.png` は同名 `.svg` を書いた上で resvg でラスタライズする。
      `output_size` 未指定時は `png_output_size(frame.size)` を使う。
    """
    _path = Path(path)
    suffix = _path.suffix.lower()

    if suffix == ".svg":
        return export_svg(frame, _path)

    if suffix == ".png":
        svg_path = _path.with_suffix(".svg")
        export_svg(frame, svg_path)
        size = png_output_size(frame.size) if output_size is None else output_size
        return rasterize_svg_to_png(
            svg_path,
            _path,
            output_size=size,
            background=frame.background,
        )

    raise ValueError(f"未対応の画像フォーマット: {suffix!r}")


def png_output_size(canvas_size: tuple[int, int]) -> tuple[int, int]:
    """canvas_size を基準に PNG 出力ピクセルサイズを返す。"""

    canvas_w, canvas_h = canvas_size
    if int(canvas_w) <= 0 or int(canvas_h) <= 0:
        raise ValueError("canvas_size は正の (width, height) である必要がある")
    scale = float(runtime_config().png_scale)
    return int(int(canvas_w) * scale), int(int(canvas_h) * scale)


def _resvg_command(
    *,
    input_svg: Path,
    output_png: Path,
    output_size: tuple[int, int],
    background: RGBA01 | None,
) -> list[str]:
    out_w, out_h = output_size
    if int(out_w) <= 0 or int(out_h) <= 0:
        raise ValueError("output_size は正の (width, height) である必要がある")
    cmd = ["resvg", "--width", str(int(out_w)), "--height", str(int(out_h))]
    if background is not None:
        cmd += ["--background", rgba01_to_hex(background)]
    cmd += [str(input_svg), str(output_png)]
    return cmd


def rasterize_svg_to_png(
    svg_path: str | Path,
    png_path: str | Path,
    *,
    output_size: tuple[int, int],
    background: RGBA01 | None = None,
) -> Path:
    """SVG を PNG として保存する。

    Raises
    ------
    RuntimeError
        resvg が見つからない、またはラスタライズに失敗した場合。
    """

    _svg_path = Path(svg_path)
    _png_path = Path(png_path)
    _png_path.parent.mkdir(parents=True, exist_ok=True)

    cmd = _resvg_command(
        input_svg=_svg_path,
        output_png=_png_path,
        output_size=output_size,
        background=background,
    )
    logger.debug("running %s", " ".join(cmd))
    try:
        proc = subprocess.run(cmd, capture_output=True, text=True, check=False)
    except FileNotFoundError as e:
        raise RuntimeError(
            "resvg が見つかりません（`resvg` をインストールして PATH を通してください）"
        ) from e

    if proc.returncode != 0:
        details = (proc.stderr or proc.stdout or "").strip()
        raise RuntimeError(f"resvg が失敗しました (code={proc.returncode}). {details}".strip())

    return _png_path


__all__ = [
    "export_image",
    "png_output_size",
    "rasterize_svg_to_png",
]
