"""Generate a 24-bit grayscale BMP test pattern.

Usage:
    gray-invert-pattern --width 64 --height 32 --output grad.bmp
    gray-invert-pattern --width 64 --height 32 --pattern checker --output checker.bmp
    gray-invert-pattern --width 8 --height 8 --offset 70 --output gap.bmp
    python -m gray_invert.pattern --width 16 --height 16 --output small.bmp
"""

import argparse
import sys

from .bitmap import (
    BI_RGB,
    BITS_PER_PIXEL,
    HEADER_SIZE,
    INFO_HEADER_SIZE,
    SIGNATURE,
    FileHeader,
    InfoHeader,
    row_stride,
)

PATTERNS = ("gradient", "checker")


def gradient(width, height):
    """Horizontal gradient from 0 to 255."""
    return [[255 * x // max(1, width - 1) for x in range(width)] for _ in range(height)]


def checker(width, height, block_size=8):
    """Black and white checkerboard with square cells of block_size pixels."""
    return [
        [255 if (x // block_size + y // block_size) % 2 == 0 else 0 for x in range(width)]
        for y in range(height)
    ]


def pack_gray_bmp(rows, offset=HEADER_SIZE) -> bytes:
    """Pack rows of gray levels (first stored row first) into a 24-bit BMP.

    offset may exceed 54, in which case the gap before the pixel data is
    filled with 0xFF so it is distinguishable from a zero-filled one.
    """
    height = len(rows)
    width = len(rows[0]) if height else 0
    if offset < HEADER_SIZE:
        raise ValueError(f"pixel offset must be at least {HEADER_SIZE}, got {offset}")

    row_size = row_stride(width)
    image_data_size = row_size * height

    # BMP header (14 bytes)
    bmp_header = FileHeader(
        SIGNATURE,
        offset + image_data_size,  # file size
        0,  # reserved
        0,  # reserved
        offset,  # offset to pixel data
    ).pack()

    # DIB header (40 bytes - BITMAPINFOHEADER)
    dib_header = InfoHeader(
        INFO_HEADER_SIZE,
        width,
        height,
        1,  # color planes
        BITS_PER_PIXEL,
        BI_RGB,
        image_data_size,
        2835,  # X pixels per meter (72 DPI)
        2835,  # Y pixels per meter
        0,  # colors in table
        0,  # important colors
    ).pack()

    gap = b"\xff" * (offset - HEADER_SIZE)

    pixels = bytearray(image_data_size)
    for y, row in enumerate(rows):
        for x, level in enumerate(row):
            i = y * row_size + x * 3
            pixels[i:i + 3] = bytes((level, level, level))

    return bmp_header + dib_header + gap + bytes(pixels)


def create_gray_bmp(width, height, pattern="gradient", offset=HEADER_SIZE) -> bytes:
    if pattern not in PATTERNS:
        raise ValueError(f"unknown pattern {pattern!r}, expected one of {', '.join(PATTERNS)}")
    rows = gradient(width, height) if pattern == "gradient" else checker(width, height)
    return pack_gray_bmp(rows, offset=offset)


def main(argv=None):
    parser = argparse.ArgumentParser(description="Generate a 24-bit grayscale BMP test pattern")
    parser.add_argument("--width", type=int, required=True, help="Image width in pixels")
    parser.add_argument("--height", type=int, required=True, help="Image height in pixels")
    parser.add_argument("--pattern", choices=PATTERNS, default="gradient", help="Pattern (default: gradient)")
    parser.add_argument("--offset", type=int, default=HEADER_SIZE,
                        help=f"Pixel data offset; values above {HEADER_SIZE} add a gap (default: {HEADER_SIZE})")
    parser.add_argument("--output", required=True, help="Output BMP path")
    args = parser.parse_args(argv)

    if args.width <= 0 or args.height <= 0:
        print("Error: width and height must be positive", file=sys.stderr)
        return 1
    if args.offset < HEADER_SIZE:
        print(f"Error: offset must be at least {HEADER_SIZE}", file=sys.stderr)
        return 1

    bmp_data = create_gray_bmp(args.width, args.height, args.pattern, args.offset)
    with open(args.output, "wb") as f:
        f.write(bmp_data)
    print(f"Wrote {args.width}x{args.height} grayscale BMP ({len(bmp_data)} bytes) to {args.output}",
          file=sys.stderr)
    return 0


if __name__ == "__main__":
    sys.exit(main())
