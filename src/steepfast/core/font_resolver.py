# どこで: `src/steepfast/core/font_resolver.py`。
# 何を: `text.font` 設定からフォントファイルの実体パスを解決する。
# なぜ: フォントを同梱せず、config.yaml の `font_dirs` とシステムフォントから拾えるようにするため。

from __future__ import annotations

from pathlib import Path

from steepfast.core.runtime_config import runtime_config

_FONT_EXTENSIONS = (".ttf", ".otf", ".ttc")

_FONT_FILES_CACHE: dict[tuple[str, ...], tuple[Path, ...]] = {}


def _search_dirs() -> tuple[Path, ...]:
    return tuple(Path(d).expanduser() for d in runtime_config().font_dirs)


def _list_font_files(*, dirs: tuple[Path, ...]) -> tuple[Path, ...]:
    key = tuple(str(d) for d in dirs)
    cached = _FONT_FILES_CACHE.get(key)
    if cached is not None:
        return cached

    seen: list[Path] = []
    for root in dirs:
        if not root.is_dir():
            continue
        for ext in _FONT_EXTENSIONS:
            for fp in root.glob(f"**/*{ext}"):
                if fp.is_file():
                    seen.append(fp.resolve())

    out = tuple(sorted(set(seen)))
    _FONT_FILES_CACHE[key] = out
    return out


def clear_font_cache() -> None:
    """フォント一覧キャッシュを破棄する（`font_dirs` を切り替えた後に使う）。"""
    _FONT_FILES_CACHE.clear()


def resolve_font_path(font: str | None = None) -> Path:
    """フォント指定を実体ファイルへ解決して返す。

    Parameters
    ----------
    font : str | None
        パス / ファイル名 / 部分一致名。None または空なら `text.font` 設定を使う。

    Raises
    ------
    FileNotFoundError
        どの規則でも見つからない場合。
    """

    raw = str(font if font is not None else "").strip() or runtime_config().font
    if not raw:
        raise FileNotFoundError("フォントが指定されていません（config.yaml の text.font を設定してください）")

    # 0) 直接パス（絶対/相対）
    direct_path = Path(raw).expanduser()
    if direct_path.is_file():
        return direct_path.resolve()

    # 1) 探索ディレクトリ直下のファイル名一致
    dirs = _search_dirs()
    for d in dirs:
        fp = d / raw
        if fp.is_file():
            return fp.resolve()

    # 2) 部分一致（安定順: ファイルパスのソート順）
    files = _list_font_files(dirs=dirs)
    key = raw.lower().replace(" ", "")
    for fp in files:
        stem = fp.stem.lower().replace(" ", "")
        if key == stem:
            return fp
    for fp in files:
        name = fp.name.lower().replace(" ", "")
        if key in name:
            return fp

    searched = ", ".join(str(d) for d in dirs) if dirs else "(none)"
    raise FileNotFoundError(
        "フォントが見つかりません。"
        " `text.font` に実在パスを渡すか、config.yaml の `paths.font_dirs` を設定してください"
        f"（font={raw!r}, searched_dirs={searched}, config_path={runtime_config().config_path}）"
    )


__all__ = [
    "clear_font_cache",
    "resolve_font_path",
]
