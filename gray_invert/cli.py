"""Invert a grayscale 24-bit BMP file.

Usage:
    gray-invert <input.bmp> <output.bmp>
    python -m gray_invert <input.bmp> <output.bmp>

Exits 0 on success and 1 on any failure. Errors go to stderr; nothing is
printed on stdout.
"""

import argparse
import sys

from .errors import BitmapError
from .invert import convert


class UsageParser(argparse.ArgumentParser):
    """ArgumentParser that reports misuse with the short usage and exit status 1."""

    def error(self, message):
        self.print_usage(sys.stderr)
        self.exit(1)


def build_parser() -> argparse.ArgumentParser:
    parser = UsageParser(
        prog="gray-invert",
        usage="%(prog)s <input.bmp> <output.bmp>",
        add_help=False,
    )
    parser.add_argument("input", help="Grayscale 24-bit BMP to read")
    parser.add_argument("output", help="Path of the inverted BMP to write")
    return parser


def main(argv=None) -> int:
    if argv is None:
        argv = sys.argv[1:]
    # Both arguments are paths, even when they start with a dash.
    args = build_parser().parse_args(["--", *argv])

    try:
        convert(args.input, args.output)
    except BitmapError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
