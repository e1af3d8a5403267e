"""Error kinds raised by the bitmap converter."""


class BitmapError(Exception):
    """Base class for every failure the converter reports."""


class BitmapIOError(BitmapError):
    """Open, read, seek or write failure."""


class FormatError(BitmapError):
    """The file is not a 24-bit uncompressed bitmap we can handle."""


class ValidationError(BitmapError):
    """The pixel data is not grayscale."""

    def __init__(self, message: str, row: int, col: int):
        super().__init__(message)
        self.row = row
        self.col = col
