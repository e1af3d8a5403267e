"""Reading and writing 24-bit uncompressed BMP files.

Layout handled here:

    [14-byte file header][40-byte BITMAPINFOHEADER][gap][pixel rows]

All header fields are little-endian and are decoded/encoded field by field
with struct, so packing a parsed header gives back the original bytes.
Pixel rows hold B, G, R triples and are padded to a 4-byte boundary.
"""

import contextlib
import os
import struct
from typing import BinaryIO, NamedTuple

from .errors import BitmapIOError, FormatError

SIGNATURE = b"BM"  # 0x4D42 as a little-endian uint16
FILE_HEADER_FORMAT = "<2sIHHI"
INFO_HEADER_FORMAT = "<IiiHHIIiiII"
FILE_HEADER_SIZE = struct.calcsize(FILE_HEADER_FORMAT)  # 14
INFO_HEADER_SIZE = struct.calcsize(INFO_HEADER_FORMAT)  # 40
HEADER_SIZE = FILE_HEADER_SIZE + INFO_HEADER_SIZE       # 54
BITS_PER_PIXEL = 24
BYTES_PER_PIXEL = 3
BI_RGB = 0  # no compression


class FileHeader(NamedTuple):
    signature: bytes
    file_size: int
    reserved1: int
    reserved2: int
    offset: int

    @classmethod
    def unpack(cls, data: bytes) -> "FileHeader":
        return cls(*struct.unpack(FILE_HEADER_FORMAT, data))

    def pack(self) -> bytes:
        return struct.pack(FILE_HEADER_FORMAT, *self)


class InfoHeader(NamedTuple):
    header_size: int
    width: int
    height: int
    planes: int
    bits_per_pixel: int
    compression: int
    image_size: int
    x_pixels_per_meter: int
    y_pixels_per_meter: int
    colors_used: int
    colors_important: int

    @classmethod
    def unpack(cls, data: bytes) -> "InfoHeader":
        return cls(*struct.unpack(INFO_HEADER_FORMAT, data))

    def pack(self) -> bytes:
        return struct.pack(INFO_HEADER_FORMAT, *self)


def row_stride(width: int) -> int:
    """Bytes per stored row, including padding to a multiple of 4."""
    return (width * BYTES_PER_PIXEL + 3) & ~3


def gap_size(file_header: FileHeader) -> int:
    """Bytes between the end of the info header and the pixel data."""
    return max(0, file_header.offset - HEADER_SIZE)


def _read_exact(stream: BinaryIO, size: int, what: str) -> bytes:
    try:
        data = stream.read(size)
    except OSError as exc:
        raise BitmapIOError(f"error reading {what}: {exc}") from exc
    if len(data) != size:
        raise BitmapIOError(f"error reading {what}: expected {size} bytes, got {len(data)}")
    return data


def check_signature(file_header: FileHeader) -> None:
    if file_header.signature != SIGNATURE:
        raise FormatError(f"not a valid bitmap (signature {file_header.signature!r})")


def read_headers(stream: BinaryIO) -> tuple[FileHeader, InfoHeader]:
    """Read the file header and the info header from the start of stream.

    The signature is checked before the info header is read, so a short
    file with the wrong marker is reported as a format error.
    """
    file_header = FileHeader.unpack(_read_exact(stream, FILE_HEADER_SIZE, "bitmap file header"))
    check_signature(file_header)
    info_header = InfoHeader.unpack(_read_exact(stream, INFO_HEADER_SIZE, "bitmap info header"))
    return file_header, info_header


def validate(info_header: InfoHeader) -> None:
    """Check pixel format and dimensions; the signature is checked by read_headers."""
    if info_header.bits_per_pixel != BITS_PER_PIXEL or info_header.compression != BI_RGB:
        raise FormatError(
            f"unsupported pixel format: {info_header.bits_per_pixel} bpp, "
            f"compression {info_header.compression} "
            f"(only {BITS_PER_PIXEL}-bit uncompressed bitmaps are supported)"
        )

    if info_header.width <= 0 or info_header.height <= 0:
        raise FormatError(f"invalid dimensions {info_header.width}x{info_header.height}")


def read_pixels(stream: BinaryIO, file_header: FileHeader, info_header: InfoHeader) -> bytearray:
    """Load exactly row_stride * height bytes starting at the pixel-data offset."""
    size = row_stride(info_header.width) * info_header.height

    try:
        stream.seek(file_header.offset)
    except (OSError, OverflowError) as exc:
        raise BitmapIOError(f"cannot seek to pixel data at offset {file_header.offset}: {exc}") from exc

    try:
        pixels = bytearray(size)
    except (MemoryError, OverflowError) as exc:
        raise BitmapIOError(f"cannot allocate {size} bytes for pixel data") from exc

    try:
        count = stream.readinto(pixels)
    except OSError as exc:
        raise BitmapIOError(f"error reading pixel data: {exc}") from exc
    if count != size:
        raise BitmapIOError(f"error reading pixel data: expected {size} bytes, got {count or 0}")
    return pixels


class Bitmap:
    """A validated 24-bit bitmap held fully in memory."""

    def __init__(self, file_header: FileHeader, info_header: InfoHeader, pixels: bytearray):
        self.file_header = file_header
        self.info_header = info_header
        self.pixels = pixels

    @property
    def width(self) -> int:
        return self.info_header.width

    @property
    def height(self) -> int:
        return self.info_header.height

    @property
    def stride(self) -> int:
        return row_stride(self.width)

    @property
    def gap_size(self) -> int:
        return gap_size(self.file_header)


def load(path) -> Bitmap:
    try:
        stream = open(path, "rb")
    except OSError as exc:
        raise BitmapIOError(f"cannot open input file {path}: {exc.strerror or exc}") from exc

    with stream:
        file_header, info_header = read_headers(stream)
        validate(info_header)
        pixels = read_pixels(stream, file_header, info_header)

    return Bitmap(file_header, info_header, pixels)


def write_bitmap(path, file_header: FileHeader, info_header: InfoHeader, pixels) -> None:
    """Write headers, a zero-filled gap up to the pixel offset, then the pixels.

    The original gap content (if any) is not carried over; only its length
    is. On a write failure the partially written file is removed.
    """
    gap = gap_size(file_header)

    try:
        stream = open(path, "wb")
    except OSError as exc:
        raise BitmapIOError(f"cannot create output file {path}: {exc.strerror or exc}") from exc

    try:
        with stream:
            stream.write(file_header.pack())
            stream.write(info_header.pack())
            if gap:
                stream.write(bytes(gap))
            stream.write(pixels)
            stream.flush()
            os.fsync(stream.fileno())
    except OSError as exc:
        with contextlib.suppress(OSError):
            os.remove(path)
        raise BitmapIOError(f"error writing output file {path}: {exc.strerror or exc}") from exc
