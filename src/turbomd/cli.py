"""
turbomd: command line compiler for ``.tmd`` documents.

Usage:
  turbomd FILE [html|ast] [options]

Modes:
  html   Render FILE to HTML, written next to it as FILE.html (default).
  ast    Print the assembled document tree.
"""

from __future__ import annotations

import argparse
import dataclasses
from collections.abc import Sequence
from pathlib import Path

from rich.console import Console
from rich.markup import escape

from turbomd import __version__, parse_file
from turbomd.config import config_context, get_config
from turbomd.errors import TurboError
from turbomd.renderers.html import HtmlRenderer
from turbomd.serialization import dump
from turbomd.utils.logger import configure_logging, get_logger

logger = get_logger(__name__)

console = Console(highlight=False)
err_console = Console(stderr=True, highlight=False)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="turbomd",
        description="Compile turbomd documents to HTML.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--version", action="version", version=f"turbomd {__version__}")
    parser.add_argument("entry_file", metavar="FILE", help="document to compile (.tmd may be omitted)")
    parser.add_argument(
        "mode",
        nargs="?",
        choices=("html", "ast"),
        default="html",
        help="html: write FILE.html (default); ast: print the document tree",
    )
    parser.add_argument("-o", "--output", type=Path, help="HTML output path")
    parser.add_argument("--title", help="wrap the HTML in a full page with this title")
    parser.add_argument(
        "--no-includes",
        action="store_true",
        help="leave @[...] includes unresolved (only useful with 'ast')",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)

    base = get_config()
    config = dataclasses.replace(
        base,
        html_title=args.title if args.title is not None else base.html_title,
        resolve_includes=base.resolve_includes and not args.no_includes,
    )

    try:
        with config_context(config):
            root = parse_file(args.entry_file)
            if args.mode == "ast":
                console.print(dump(root), markup=False, emoji=False, soft_wrap=True, end="")
                return 0

            html = HtmlRenderer().render(root)
            source = Path(config.with_suffix(args.entry_file))
            output: Path = args.output or source.with_suffix(".html")
            output.write_text(html, encoding="utf-8")
            logger.info("Wrote %s", output)
    except (TurboError, OSError) as exc:
        err_console.print(f"[bold red]error:[/bold red] {escape(str(exc))}", soft_wrap=True)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
