"""Invert the brightness of 24-bit grayscale BMP files."""

from .errors import BitmapError, BitmapIOError, FormatError, ValidationError
from .invert import convert

__all__ = [
    "BitmapError",
    "BitmapIOError",
    "FormatError",
    "ValidationError",
    "convert",
]
