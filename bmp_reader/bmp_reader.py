"""BMP reader: parse headers, read the palette, decode pixels into a CanonicalImage.

Supports uncompressed 1/4/8/16/24/32-bit images and RLE8 / RLE4
compression. The result is always top-to-bottom RGB (or RGBA for
32-bit sources), independent of how the file stores its rows.
"""

import logging

from .bmp_header import COMPRESSION_NONE, read_headers
from .canvas import CanonicalImage, PixelCanvas
from .errors import BMPError, BMPFileNotFoundError, BMPOutOfMemoryError
from .palette import get_palette_image, read_palette
from .rle import decode_rle
from .scanline import decode_indexed, decode_true_color
from .utils import ByteStream, ColorUtils

logger = logging.getLogger(__name__)


class BMPReader:
    """Load and decode a BMP file.

    Steps:
      - open the file (closed again on every exit path)
      - parse and validate both headers
      - allocate a zero-filled output image
      - read the color table for indexed formats
      - seek to the pixel data and run exactly one decoder
    """

    def __init__(self, filepath, max_image_pixels=None):
        self.filepath = filepath
        self.max_image_pixels = max_image_pixels
        self.file_header = None
        self.info_header = None
        self.palette = []
        self.image = None

        try:
            f = open(filepath, 'rb')
        except OSError as e:
            raise BMPFileNotFoundError(f"Cannot open {filepath}: {e}") from e

        with f:
            image = self._decode(ByteStream(f))

        self.image = image

    def _decode(self, stream):
        self.file_header, info = read_headers(stream)
        self.info_header = info

        pixel_count = info.width * info.height
        if self.max_image_pixels is not None and pixel_count > self.max_image_pixels:
            raise BMPOutOfMemoryError(
                f"Image size ({pixel_count} pixels) exceeds limit of "
                f"{self.max_image_pixels} pixels"
            )

        image = CanonicalImage(info.width, info.height, info.channels, name=str(self.filepath))
        canvas = PixelCanvas(image, info.top_down)

        palette = []
        if info.is_indexed:
            # the color table follows the 40-byte info header directly
            palette = read_palette(stream, info.palette_length)
        self.palette = palette

        stream.seek(self.file_header.pixel_offset)

        if info.compression != COMPRESSION_NONE:
            decode_rle(stream, canvas, palette, info.bit_count)
        elif info.is_indexed:
            decode_indexed(stream, canvas, info.bit_count, palette)
        else:
            decode_true_color(stream, canvas, info.bit_count)

        return image

    def to_pil(self):
        """Return the decoded image as a PIL Image (RGB or RGBA)."""
        return self.image.to_pil()

    def get_palette_image(self, cell_size=16, columns=16):
        """Render the file's color table, or None for true-color images."""
        return get_palette_image(self.palette, cell_size=cell_size, columns=columns)


def load_bmp(filepath, max_image_pixels=None):
    """Decode `filepath` and return a CanonicalImage.

    Raises one of BMPFileNotFoundError, BMPIOError, InvalidFormatError or
    BMPOutOfMemoryError; no partially decoded image is ever returned.
    """
    try:
        reader = BMPReader(filepath, max_image_pixels=max_image_pixels)
    except BMPError as e:
        logger.error("Failed to load BMP %s (%s): %s", filepath, e.kind.value, e)
        raise
    return reader.image


def release_image(image):
    """Free the pixel buffer of an image returned by load_bmp."""
    if image is not None:
        image.release()


def dump_image(image, pixels=False):
    """Return a printable summary of `image`, optionally with every pixel in hex."""
    lines = [
        f"Image Type: {image.format}",
        f"Width: {image.width}",
        f"Height: {image.height}",
        f"Bit Depth: {image.bitdepth}",
        f"Channels: {image.channels}",
        f"Data Size: {image.data_size} bytes",
    ]
    if pixels:
        to_hex = ColorUtils.rgba_to_hex if image.channels == 4 else ColorUtils.rgb_to_hex
        lines.append("")
        for y in range(image.height):
            lines.append(" ".join(to_hex(image.get_pixel(x, y)) for x in range(image.width)))
    return "\n".join(lines)
