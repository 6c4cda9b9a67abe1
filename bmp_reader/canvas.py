"""
Canonical decoded image and the pixel writer shared by every decode path
"""
from PIL import Image

from .errors import BMPOutOfMemoryError


class CanonicalImage:
    """Decoded pixels: row-major, row 0 is the top of the picture."""

    def __init__(self, width, height, channels, name=None, image_format="BMP"):
        self.width = width
        self.height = height
        self.channels = channels
        self.bitdepth = channels * 8
        self.name = name
        self.format = image_format
        try:
            self.data = bytearray(width * height * channels)
        except (MemoryError, OverflowError) as e:
            raise BMPOutOfMemoryError(
                f"Cannot allocate {width}x{height}x{channels} image buffer"
            ) from e

    @property
    def data_size(self):
        return len(self.data)

    @property
    def mode(self):
        return "RGBA" if self.channels == 4 else "RGB"

    def get_pixel(self, x, y):
        offset = (y * self.width + x) * self.channels
        return tuple(self.data[offset:offset + self.channels])

    def row(self, y):
        stride = self.width * self.channels
        return bytes(self.data[y * stride:(y + 1) * stride])

    def to_pil(self):
        """Build a PIL Image sharing the decoded pixel layout."""
        return Image.frombytes(self.mode, (self.width, self.height), bytes(self.data))

    def release(self):
        # drop the pixel buffer; safe to call more than once
        self.data = bytearray()

    def __repr__(self):
        return (
            f"CanonicalImage({self.width}x{self.height}, channels={self.channels}, "
            f"bitdepth={self.bitdepth}, data_size={self.data_size})"
        )


class PixelCanvas:
    """Write pixels at logical (x, y) stream coordinates into a CanonicalImage.

    Coordinates are in file storage order; the canvas applies the
    bottom-up flip and drops writes that fall outside the image.
    """

    def __init__(self, image, top_down):
        self.image = image
        self.top_down = top_down
        self.stride = image.width * image.channels

    def dest_row(self, y):
        if self.top_down:
            return y
        return self.image.height - 1 - y

    def contains(self, x, y):
        return 0 <= x < self.image.width and 0 <= y < self.image.height

    def put(self, x, y, color):
        """Write one pixel; returns False when (x, y) lies outside the image."""
        if not self.contains(x, y):
            return False
        channels = self.image.channels
        offset = self.dest_row(y) * self.stride + x * channels
        self.image.data[offset:offset + channels] = bytes(color)
        return True

