# どこで: `src/steepfast/core/runtime_config.py`。
# 何を: config.yaml を読み、描画・出力・プレビューの実行時設定 `RuntimeConfig` を組み立てる。
# なぜ: 出力先・フォント・余白・テーマ色をコードに埋め込まず、ユーザーが差し替えられるようにするため。

"""`config.yaml` の探索・マージ・検証とプロセス内キャッシュ。

設定の重ね方
------------
同梱 `steepfast/resource/default_config.yaml` を土台に、探索で見つかった 1 ファイル、
`set_config_path()` の明示ファイルの順でトップレベルのキーを上書きする。
`render:` などのセクションは丸ごと差し替わる（セクション内のキー単位ではマージしない）。
"""

from __future__ import annotations

import os
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from importlib import resources
from pathlib import Path
from typing import Any

import yaml

_PACKAGED_CONFIG = ("resource", "default_config.yaml")
_SUPPORTED_VERSION = 1


@dataclass(frozen=True, slots=True)
class RuntimeConfig:
    """steepfast の実行時設定。

    Attributes
    ----------
    config_path:
        採用したユーザー設定ファイル。同梱デフォルトだけなら None。
    output_dir:
        SVG/PNG の既定出力ルート。
    font_dirs:
        フォントを探すディレクトリ（先頭優先）。
    font, font_index:
        文字に使うフォント指定と `.ttc` 内の番号。
    pad_px:
        auto-fit の安全余白（px）。
    canvas_size:
        headless export の既定キャンバス寸法。
    png_scale:
        PNG をキャンバスの何倍で書き出すか。
    window_size, window_pos:
        プレビューウィンドウの初期サイズと位置。
    theme:
        テーマ色の上書き（未検証の生 mapping。`theme_from_config()` が解釈する）。
    """

    config_path: Path | None
    output_dir: Path
    font_dirs: tuple[Path, ...]
    font: str
    font_index: int
    pad_px: float
    canvas_size: tuple[int, int]
    png_scale: float
    window_size: tuple[int, int]
    window_pos: tuple[int, int]
    theme: dict[str, Any]


_explicit_path: Path | None = None
_cached: RuntimeConfig | None = None


def set_config_path(path: str | Path | None) -> None:
    """明示 config を指定する（None で解除）。キャッシュは常に破棄する。"""

    global _explicit_path, _cached
    _explicit_path = None if path is None else Path(str(path)).expanduser()
    _cached = None


def _search_candidates() -> tuple[Path, ...]:
    # 先に見つかった 1 つだけを使う。
    return (
        Path.cwd() / ".steepfast" / "config.yaml",
        Path.home() / ".config" / "steepfast" / "config.yaml",
    )


def _parse_yaml(text: str, *, source: str) -> dict[str, Any]:
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise RuntimeError(f"config.yaml を解釈できません: source={source}") from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise RuntimeError(f"config.yaml のトップレベルは mapping である必要があります: source={source}")
    return data


def _read_file(path: Path) -> dict[str, Any]:
    return _parse_yaml(path.read_text(encoding="utf-8"), source=str(path))


def _read_packaged() -> dict[str, Any]:
    text = resources.files("steepfast").joinpath(*_PACKAGED_CONFIG).read_text(encoding="utf-8")
    return _parse_yaml(text, source="steepfast/" + "/".join(_PACKAGED_CONFIG))


def _merged_payload() -> tuple[dict[str, Any], Path | None]:
    """同梱 → 探索 → 明示の順に重ねた payload と、採用したユーザー設定パスを返す。"""

    explicit = _explicit_path
    if explicit is not None and not explicit.is_file():
        raise FileNotFoundError(f"config.yaml が見つかりません: {explicit}")

    discovered = next((p for p in _search_candidates() if p.is_file()), None)

    payload = _read_packaged()
    for path in (discovered, explicit):
        if path is not None:
            payload.update(_read_file(path))
    return payload, explicit or discovered


def _expand(text: str) -> Path:
    return Path(os.path.expandvars(os.path.expanduser(text)))


class _Section:
    """config の 1 セクション。値の型変換とキー名付きのエラーを担う。"""

    def __init__(self, data: Any, *, name: str) -> None:
        if data is None:
            data = {}
        if not isinstance(data, Mapping):
            raise RuntimeError(f"{name} は mapping である必要があります: got={data!r}")
        self.name = name
        self.data = dict(data)

    def key(self, key: str) -> str:
        return f"{self.name}.{key}" if self.name else key

    def required(self, key: str) -> Any:
        value = self.data.get(key)
        if value is None:
            raise RuntimeError(f"{self.key(key)} が未設定です（同梱 default_config.yaml を確認してください）")
        return value

    def section(self, key: str) -> "_Section":
        return _Section(self.data.get(key), name=self.key(key))

    def integer(self, key: str, *, default: int | None = None) -> int:
        value = self.data.get(key)
        if value is None and default is not None:
            return default
        try:
            return int(self.required(key))
        except (TypeError, ValueError) as exc:
            raise RuntimeError(f"{self.key(key)} は整数である必要があります: got={value!r}") from exc

    def number(self, key: str) -> float:
        value = self.required(key)
        try:
            return float(value)
        except (TypeError, ValueError) as exc:
            raise RuntimeError(f"{self.key(key)} は数値である必要があります: got={value!r}") from exc

    def int_pair(self, key: str) -> tuple[int, int]:
        value = self.required(key)
        if isinstance(value, (str, bytes)) or not isinstance(value, Iterable):
            raise RuntimeError(f"{self.key(key)} は [x, y] の配列である必要があります: got={value!r}")
        items = list(value)
        if len(items) != 2:
            raise RuntimeError(f"{self.key(key)} は [x, y] の配列である必要があります: got={value!r}")
        try:
            return int(items[0]), int(items[1])
        except (TypeError, ValueError) as exc:
            raise RuntimeError(f"{self.key(key)} は整数の [x, y] である必要があります: got={value!r}") from exc

    def path(self, key: str) -> Path:
        text = str(self.required(key)).strip()
        if not text:
            raise RuntimeError(f"{self.key(key)} が空です")
        return _expand(text)

    def path_list(self, key: str) -> tuple[Path, ...]:
        """パス列。文字列なら `os.pathsep` 区切りとして読み、空要素は捨てる。"""

        value = self.data.get(key)
        if value is None:
            return ()
        if isinstance(value, str):
            items: list[Any] = value.split(os.pathsep)
        elif isinstance(value, Iterable):
            items = list(value)
        else:
            raise RuntimeError(f"{self.key(key)} は配列である必要があります: got={value!r}")
        texts = (str(item).strip() for item in items if item is not None)
        return tuple(_expand(t) for t in texts if t)

    def text(self, key: str) -> str:
        value = self.data.get(key)
        return "" if value is None else str(value).strip()


def _positive(value: Any, *, key: str, allow_zero: bool = False) -> Any:
    values = value if isinstance(value, tuple) else (value,)
    bad = any(v < 0 for v in values) if allow_zero else any(v <= 0 for v in values)
    if bad:
        bound = "0 以上" if allow_zero else "正の値"
        raise ValueError(f"{key} は{bound}である必要があります: got={value}")
    return value


def _build(payload: dict[str, Any], config_path: Path | None) -> RuntimeConfig:
    root = _Section(payload, name="")
    version = root.integer("version")
    if version != _SUPPORTED_VERSION:
        raise RuntimeError(f"未対応の config.yaml version です: got={version}")

    paths = root.section("paths")
    text = root.section("text")
    render = root.section("render")
    png = root.section("export").section("png")
    ui = root.section("ui")

    return RuntimeConfig(
        config_path=config_path,
        output_dir=paths.path("output_dir"),
        font_dirs=paths.path_list("font_dirs"),
        font=text.text("font"),
        font_index=_positive(text.integer("font_index", default=0), key=text.key("font_index"), allow_zero=True),
        pad_px=_positive(render.number("pad_px"), key=render.key("pad_px"), allow_zero=True),
        canvas_size=_positive(render.int_pair("canvas_size"), key=render.key("canvas_size")),
        png_scale=_positive(png.number("scale"), key=png.key("scale")),
        window_size=_positive(ui.int_pair("window_size"), key=ui.key("window_size")),
        window_pos=ui.int_pair("window_pos"),
        theme=root.section("theme").data,
    )


def runtime_config() -> RuntimeConfig:
    """実行時設定を返す。初回だけファイルを読み、以降はキャッシュを返す。"""

    global _cached
    if _cached is None:
        payload, config_path = _merged_payload()
        _cached = _build(payload, config_path)
    return _cached


def output_root_dir() -> Path:
    """export の既定出力ルートを返す。"""

    return runtime_config().output_dir


__all__ = [
    "RuntimeConfig",
    "output_root_dir",
    "runtime_config",
    "set_config_path",
]
