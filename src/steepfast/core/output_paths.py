# どこで: `src/steepfast/core/output_paths.py`。
# 何を: export の既定保存先 `{output_dir}/{kind}/steepfast_{w}x{h}[_{run_id}].{kind}` を決める。
# なぜ: キャンバス寸法や run_id ごとの出力が上書きし合わないようにするため。

from __future__ import annotations

import re
from pathlib import Path

from steepfast.core.runtime_config import output_root_dir

OUTPUT_STEM = "steepfast"

_UNSAFE_RUN = re.compile(r"[^A-Za-z0-9._-]+")


def _dim_text(value: float | int) -> str:
    """寸法をファイル名向けの短い表記にする（整数ならそのまま、小数は 3 桁まで）。"""

    v = float(value)
    if v <= 0:
        raise ValueError(f"canvas_size は正の値である必要がある: got={value!r}")
    if v.is_integer():
        return str(int(v))
    return f"{v:.3f}".rstrip("0").rstrip(".")


def _name_parts(canvas_size: tuple[float | int, float | int], run_id: str | None) -> list[str]:
    w, h = canvas_size
    parts = [OUTPUT_STEM, f"{_dim_text(w)}x{_dim_text(h)}"]
    if run_id is not None:
        # 記号は `_` に潰し、両端の `_` は落とす。何も残らなければ付けない。
        tag = _UNSAFE_RUN.sub("_", str(run_id).strip()).strip("_")
        if tag:
            parts.append(tag)
    return parts


def default_output_path(
    kind: str,
    *,
    canvas_size: tuple[float | int, float | int],
    run_id: str | None = None,
) -> Path:
    """export の既定保存先パスを返す。

    Parameters
    ----------
    kind : str
        出力種別（`"svg"` / `"png"`）。サブディレクトリ名と拡張子に使う。
    canvas_size : tuple
        キャンバス寸法。ファイル名に埋め込む。
    run_id : str | None
        任意の識別子。ファイル名として安全な形に正規化して末尾に付ける。
    """

    ext = str(kind).strip().lower()
    if not ext:
        raise ValueError("kind は空でない文字列である必要がある")
    name = "_".join(_name_parts(canvas_size, run_id))
    return output_root_dir() / ext / f"{name}.{ext}"


__all__ = ["OUTPUT_STEM", "default_output_path"]
