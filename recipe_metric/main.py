from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .config import Config, configure_logging
from .convert import convert_html

VERSION = "0.1.0"


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="recipe-metric")
    p.add_argument("--version", action="store_true", help="Print version and exit")

    sub = p.add_subparsers(dest="cmd", required=False)

    p_serve = sub.add_parser("serve", help="Run the convert-by-URL web service")
    p_serve.add_argument("--host", default=None, help="Bind address (default: RECIPE_METRIC_HOST or 127.0.0.1)")
    p_serve.add_argument("--port", type=int, default=None, help="Port (default: RECIPE_METRIC_PORT or 8787)")

    p_convert = sub.add_parser("convert", help="Convert a local HTML file to metric")
    p_convert.add_argument("path", help="HTML file, or '-' for stdin")
    p_convert.add_argument("--out", default=None, help="Write here instead of stdout")

    return p


def main(argv: list[str] | None = None) -> int:
    p = build_parser()
    args = p.parse_args(argv)

    if args.version:
        print(VERSION)
        return 0

    if args.cmd is None:
        p.print_help()
        return 0

    cfg = Config.load_from_env()
    configure_logging(cfg.log_level)

    if args.cmd == "serve":
        return _run_serve(cfg, host=args.host, port=args.port)

    if args.cmd == "convert":
        return _run_convert(args.path, out=args.out)

    raise RuntimeError("unreachable")


def _run_serve(cfg: Config, *, host: str | None, port: int | None) -> int:
    import uvicorn

    from .app import create_app

    uvicorn.run(
        create_app(cfg),
        host=host or cfg.host,
        port=port or cfg.port,
        log_level=cfg.log_level.lower(),
    )
    return 0


def _run_convert(path: str, *, out: str | None) -> int:
    if path == "-":
        html = sys.stdin.read()
    else:
        src = Path(path)
        if not src.is_file():
            print(f"ERROR: no such file: {path}", file=sys.stderr)
            return 1
        html = src.read_text(encoding="utf-8")

    converted = convert_html(html)

    if out:
        dest = Path(out)
        dest.parent.mkdir(parents=True, exist_ok=True)
        dest.write_text(converted, encoding="utf-8")
        print(f"OK: wrote {dest}")
    else:
        sys.stdout.write(converted)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
