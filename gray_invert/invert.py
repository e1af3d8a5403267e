"""Grayscale check and brightness inversion for 24-bit bitmaps."""

from typing import Optional

from . import bitmap
from .bitmap import BYTES_PER_PIXEL, Bitmap, row_stride
from .errors import ValidationError

INVERT_TABLE = bytes(255 - value for value in range(256))


def find_color_pixel(pixels, width: int, height: int) -> Optional[tuple[int, int]]:
    """Return (row, col) of the first pixel whose B, G, R differ, or None."""
    stride = row_stride(width)
    span = width * BYTES_PER_PIXEL

    for row in range(height):
        start = row * stride
        line = pixels[start:start + span]
        if line[0::3] == line[1::3] == line[2::3]:
            continue
        for col in range(width):
            blue, green, red = line[col * 3:col * 3 + 3]
            if not blue == green == red:
                return row, col
    return None


def is_grayscale(pixels, width: int, height: int) -> bool:
    return find_color_pixel(pixels, width, height) is None


def check_grayscale(image: Bitmap) -> None:
    found = find_color_pixel(image.pixels, image.width, image.height)
    if found is not None:
        row, col = found
        offset = row * image.stride + col * BYTES_PER_PIXEL
        blue, green, red = image.pixels[offset:offset + 3]
        raise ValidationError(
            f"image is not grayscale: pixel at row {row}, column {col} "
            f"has R={red} G={green} B={blue} (R=G=B required)",
            row, col,
        )


def invert_pixels(pixels: bytearray, width: int, height: int) -> None:
    """Set every channel of every pixel to 255 - red, in place.

    The new value is taken from the red channel before it is overwritten.
    Row padding bytes are left as they are.
    """
    stride = row_stride(width)
    span = width * BYTES_PER_PIXEL

    for row in range(height):
        start = row * stride
        end = start + span
        inverted = pixels[start + 2:end:3].translate(INVERT_TABLE)
        pixels[start:end:3] = inverted      # B
        pixels[start + 1:end:3] = inverted  # G
        pixels[start + 2:end:3] = inverted  # R


def convert(input_path, output_path) -> None:
    """Invert a grayscale 24-bit bitmap from input_path into output_path.

    Raises BitmapIOError, FormatError or ValidationError. Nothing is
    written unless the input passes every check.
    """
    image = bitmap.load(input_path)
    check_grayscale(image)
    invert_pixels(image.pixels, image.width, image.height)
    bitmap.write_bitmap(output_path, image.file_header, image.info_header, image.pixels)
