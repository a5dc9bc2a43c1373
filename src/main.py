"""glyphscan command line interface.

Usage:
    glyphscan decode <input.png> [<output.svg>] [--scale N] [--zoom N] [--max-delta N] [--png]
    glyphscan show-all [<folder>] [-o <sheet.svg>] [--scale N] [--max-delta N]

Commands:
    decode      Decode an image, write its overlay SVG and print the token stream
    show-all    Draw a reference sheet for the known symbols, or for every
                code found in the .png files of <folder>
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

import structlog

from .config import ScanSettings
from .pipeline import collect_codes, decode_file, write_symbol_sheet
from .symbols import DEFAULT_SYMBOLS

structlog.configure(
    processors=[
        structlog.processors.add_log_level,
        structlog.dev.ConsoleRenderer(),
    ],
    logger_factory=structlog.PrintLoggerFactory(sys.stderr),
)

logger = structlog.get_logger(__name__)


def settings_from_args(args: argparse.Namespace) -> ScanSettings:
    """Build settings from the options given on the command line.

    Options left unset keep the ScanSettings defaults.
    """
    given = {name: getattr(args, name, None) for name in ("scale", "zoom", "max_delta")}
    return ScanSettings(**{name: value for name, value in given.items() if value is not None})


def cmd_decode(args: argparse.Namespace) -> int:
    """Decode one image."""
    settings = settings_from_args(args)
    report = decode_file(args.input, args.output, settings=settings, png=args.png)
    print(" ".join(str(token) for token in report.tokens))
    return 0


def cmd_show_all(args: argparse.Namespace) -> int:
    """Write a symbol reference sheet."""
    settings = settings_from_args(args)
    if args.folder:
        codes = collect_codes(args.folder, settings=settings)
    else:
        codes = set(DEFAULT_SYMBOLS.codes())
    output = args.output or Path(settings.sheet_name)
    write_symbol_sheet(codes, output, zoom=settings.zoom)
    print(output)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="glyphscan",
        description="Decode glyph-encoded images into token streams",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    decode = subparsers.add_parser("decode", help="Decode an image")
    decode.add_argument("input", help="Input image (.png)")
    decode.add_argument("output", nargs="?", help="Overlay SVG path (default: output/<name>.svg)")
    decode.add_argument("--scale", type=int, help="Source pixels per grid cell")
    decode.add_argument("--zoom", type=int, help="SVG units per grid cell")
    decode.add_argument("--max-delta", type=int, help="Frame growth limit")
    decode.add_argument("--png", action="store_true", help="Also write a PNG overlay")
    decode.set_defaults(func=cmd_decode)

    show_all = subparsers.add_parser("show-all", help="Draw a symbol reference sheet")
    show_all.add_argument("folder", nargs="?", help="Folder of .png images to collect codes from")
    show_all.add_argument("-o", "--output", type=Path, help="Sheet path (default: all_symbols.svg)")
    show_all.add_argument("--scale", type=int, help="Source pixels per grid cell")
    show_all.add_argument("--max-delta", type=int, help="Frame growth limit")
    show_all.set_defaults(func=cmd_show_all)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        return args.func(args)
    except ValueError as e:
        logger.error("command_failed", command=args.command, error=str(e))
        return 1


if __name__ == "__main__":
    sys.exit(main())
