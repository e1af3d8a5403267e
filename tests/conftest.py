import struct

import pytest


def build_bmp(rows, *, signature=b"BM", width=None, height=None, bpp=24,
              compression=0, offset=54, gap=None, pad_byte=0):
    """Build a BMP from rows of (b, g, r) triples with any header field overridden."""
    if width is None:
        width = len(rows[0]) if rows else 0
    if height is None:
        height = len(rows)
    stride = (len(rows[0]) * 3 + 3) & ~3 if rows else 0

    pixels = bytearray([pad_byte]) * (stride * len(rows))
    for y, row in enumerate(rows):
        for x, bgr in enumerate(row):
            i = y * stride + x * 3
            pixels[i:i + 3] = bytes(bgr)

    if gap is None:
        gap = b"\x00" * (offset - 54)
    file_header = struct.pack("<2sIHHI", signature, offset + len(pixels), 7, 9, offset)
    info_header = struct.pack("<IiiHHIIiiII", 40, width, height, 1, bpp, compression,
                              len(pixels), 2835, 2835, 0, 0)
    return file_header + info_header + gap + bytes(pixels)


def gray_rows(levels):
    return [[(v, v, v) for v in row] for row in levels]


@pytest.fixture
def write_bmp(tmp_path):
    def _write(data, name="input.bmp"):
        path = tmp_path / name
        path.write_bytes(data)
        return path
    return _write
