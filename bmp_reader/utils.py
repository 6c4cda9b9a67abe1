"""
Utility classes for stream reading and color conversion
"""
import io

from .errors import BMPIOError, BMPOutOfMemoryError


def row_size(width, bits_per_pixel):
    """Bytes per stored scanline; rows are padded to a 4-byte boundary."""
    return ((width * bits_per_pixel + 31) // 32) * 4


class ByteStream:
    """Thin reader over a binary file object that fails loudly on short reads."""

    def __init__(self, fileobj):
        self.fileobj = fileobj
        position = fileobj.tell()
        self.size = fileobj.seek(0, io.SEEK_END)
        fileobj.seek(position)

    def remaining(self):
        return max(self.size - self.tell(), 0)

    def read(self, size):
        """Read exactly `size` bytes or raise BMPIOError."""
        available = self.remaining()
        if size > available:
            raise BMPIOError(
                f"Unexpected end of stream: wanted {size} bytes, {available} left"
            )
        try:
            data = self.fileobj.read(size)
        except (MemoryError, OverflowError) as e:
            raise BMPOutOfMemoryError(f"Cannot allocate {size} byte read buffer") from e
        if len(data) != size:
            raise BMPIOError(
                f"Unexpected end of stream: wanted {size} bytes, got {len(data)}"
            )
        return data

    def read_pair(self):
        a, b = self.read(2)
        return a, b

    def seek(self, offset):
        try:
            self.fileobj.seek(offset)
        except (OSError, ValueError) as e:
            raise BMPIOError(f"Cannot seek to offset {offset}: {e}") from e

    def tell(self):
        return self.fileobj.tell()


class ColorUtils:
    """Color conversion helpers."""

    @staticmethod
    def expand_channel(value, bits):
        # scale an n-bit channel to 0..255 with rounding
        max_value = (1 << bits) - 1
        return (value * 255 + max_value // 2) // max_value

    @staticmethod
    def rgb565_to_rgb(pixel):
        r = ColorUtils.expand_channel((pixel >> 11) & 0x1F, 5)
        g = ColorUtils.expand_channel((pixel >> 5) & 0x3F, 6)
        b = ColorUtils.expand_channel(pixel & 0x1F, 5)
        return (r, g, b)

    @staticmethod
    def rgb_to_hex(rgb):
        r, g, b = rgb
        return "%02X%02X%02X" % (r, g, b)

    @staticmethod
    def rgba_to_hex(rgba):
        r, g, b, a = rgba
        return "%02X%02X%02X%02X" % (r, g, b, a)
