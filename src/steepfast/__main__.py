# どこで: `src/steepfast/__main__.py`。
# 何を: `python -m steepfast ...` の CLI エントリポイントを提供する。
# なぜ: export / fit 確認 / プレビューを短い導線で実行できるようにするため。

from __future__ import annotations

import argparse
import json
import logging
import sys

logger = logging.getLogger("steepfast")


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="python -m steepfast")
    p.add_argument("--config", default=None, help="config.yaml のパス（探索結果より優先）")
    p.add_argument("-v", "--verbose", action="store_true", help="DEBUG ログを出す")
    sub = p.add_subparsers(dest="cmd", required=True)

    ex = sub.add_parser("export", help="ロゴを SVG / PNG として書き出す")
    ex.add_argument("--fmt", choices=("svg", "png"), default="svg")
    ex.add_argument(
        "--canvas",
        nargs=2,
        type=int,
        default=None,
        metavar=("W", "H"),
        help="canvas_size (width height)。既定: config の render.canvas_size",
    )
    ex.add_argument("--out", default=None, help="出力パス（既定: output_dir/{fmt}/...）")
    ex.add_argument("--run-id", default=None, help="既定パスに付ける識別子")
    ex.add_argument("--no-text", action="store_true", help="文字を描かない")

    fit = sub.add_parser("fit", help="bbox と fit 変換を JSON で表示する")
    fit.add_argument("--canvas", nargs=2, type=int, required=True, metavar=("W", "H"))
    fit.add_argument("--pad", type=float, default=None, help="安全余白 px（既定: render.pad_px）")

    show = sub.add_parser("show", help="リサイズ可能なプレビューウィンドウを開く")
    show.add_argument("--size", nargs=2, type=int, default=None, metavar=("W", "H"))
    return p


def _cmd_export(args: argparse.Namespace) -> int:
    from steepfast.api import Export

    canvas = tuple(args.canvas) if args.canvas is not None else None
    result = Export(
        args.fmt,
        args.out,
        canvas_size=canvas,
        use_text=not args.no_text,
        run_id=args.run_id,
    )
    print(str(result.path))
    return 0


def _cmd_fit(args: argparse.Namespace) -> int:
    from steepfast.core.fit import composition_bbox, compute_fit
    from steepfast.core.layout import default_layout
    from steepfast.core.runtime_config import runtime_config

    layout = default_layout()
    pad = runtime_config().pad_px if args.pad is None else float(args.pad)
    viewport = (int(args.canvas[0]), int(args.canvas[1]))
    bbox = composition_bbox(layout)
    fit = compute_fit(layout, viewport, pad_px=pad)
    payload = {
        "viewport": list(viewport),
        "pad_px": pad,
        "bbox": {
            "min_x": bbox.min_x,
            "min_y": bbox.min_y,
            "max_x": bbox.max_x,
            "max_y": bbox.max_y,
            "w": bbox.w,
            "h": bbox.h,
        },
        "fit": {"scale": fit.scale, "offset_x": fit.offset_x, "offset_y": fit.offset_y},
    }
    print(json.dumps(payload, indent=2))
    return 0


def _cmd_show(args: argparse.Namespace) -> int:
    from steepfast.interactive.preview_window import show

    size = tuple(args.size) if args.size is not None else None
    show(size=size)
    return 0


def main(argv: list[str] | None = None) -> int:
    if argv is None:
        argv = sys.argv[1:]

    args = _build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.config is not None:
        from steepfast.core.runtime_config import set_config_path

        set_config_path(args.config)

    handlers = {"export": _cmd_export, "fit": _cmd_fit, "show": _cmd_show}
    try:
        return handlers[args.cmd](args)
    except (ValueError, RuntimeError, FileNotFoundError) as exc:
        logger.debug("command %s failed", args.cmd, exc_info=True)
        print(f"steepfast {args.cmd}: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
