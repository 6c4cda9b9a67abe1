"""Uncompressed scanline decoding for true-color and indexed bitmaps."""

import logging
import struct

from .palette import lookup
from .utils import ColorUtils, row_size

logger = logging.getLogger(__name__)


def _convert_24bit(row, x):
    b, g, r = row[x * 3:x * 3 + 3]
    return (r, g, b)


def _convert_32bit(row, x):
    b, g, r, a = row[x * 4:x * 4 + 4]
    return (r, g, b, a)


def _convert_16bit(row, x):
    pixel, = struct.unpack_from("<H", row, x * 2)
    return ColorUtils.rgb565_to_rgb(pixel)


_TRUE_COLOR_CONVERTERS = {
    16: _convert_16bit,
    24: _convert_24bit,
    32: _convert_32bit,
}


def decode_true_color(stream, canvas, bits_per_pixel):
    """Decode 16/24/32-bit rows; source row y lands on the canvas at (., y)."""
    convert = _TRUE_COLOR_CONVERTERS[bits_per_pixel]
    width = canvas.image.width
    stride = row_size(width, bits_per_pixel)
    logger.debug("Decoding %d-bit rows, %d bytes per row", bits_per_pixel, stride)

    for y in range(canvas.image.height):
        row = stream.read(stride)
        for x in range(width):
            canvas.put(x, y, convert(row, x))


def unpack_indices(row, width, bits_per_pixel):
    """Yield `width` palette indices from a packed row, most significant bits first."""
    if bits_per_pixel == 8:
        yield from row[:width]
        return

    mask = (1 << bits_per_pixel) - 1
    for x in range(width):
        bit_index = x * bits_per_pixel
        shift = (8 - bits_per_pixel) - (bit_index % 8)
        yield (row[bit_index // 8] >> shift) & mask


def decode_indexed(stream, canvas, bits_per_pixel, palette):
    """Decode 1/4/8-bit rows through the palette."""
    width = canvas.image.width
    stride = row_size(width, bits_per_pixel)
    logger.debug("Decoding %d-bit indexed rows, %d bytes per row", bits_per_pixel, stride)

    for y in range(canvas.image.height):
        row = stream.read(stride)
        for x, index in enumerate(unpack_indices(row, width, bits_per_pixel)):
            canvas.put(x, y, lookup(palette, index))
