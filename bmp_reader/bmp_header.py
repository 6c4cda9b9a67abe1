"""BMP headers: the 14-byte file header and the 40-byte BITMAPINFOHEADER.

Every multi-byte field is unpacked explicitly as little-endian, so the
parser does not depend on host byte order or struct alignment.
"""

import logging
import struct

from .errors import BMPIOError, InvalidFormatError

logger = logging.getLogger(__name__)

FILE_HEADER_SIZE = 14
INFO_HEADER_SIZE = 40
HEADERS_SIZE = FILE_HEADER_SIZE + INFO_HEADER_SIZE

BMP_SIGNATURE = b"BM"

COMPRESSION_NONE = 0
COMPRESSION_RLE8 = 1
COMPRESSION_RLE4 = 2

SUPPORTED_BIT_COUNTS = (1, 4, 8, 16, 24, 32)
INDEXED_BIT_COUNTS = (1, 4, 8)

# compression code -> bit depths it may be paired with
_COMPRESSION_DEPTHS = {
    COMPRESSION_NONE: SUPPORTED_BIT_COUNTS,
    COMPRESSION_RLE8: (8,),
    COMPRESSION_RLE4: (1, 4),
}


class BMPFileHeader:
    """BITMAPFILEHEADER structure (14 bytes)."""

    def __init__(self, data):
        """Parse a 14-byte header buffer into attributes.

        Raises BMPIOError when the buffer is too short.
        """
        if len(data) < FILE_HEADER_SIZE:
            raise BMPIOError("Truncated BMP file header")

        self.signature = bytes(data[0:2])
        (
            self.file_size,
            self.reserved1,
            self.reserved2,
            self.pixel_offset,
        ) = struct.unpack("<IHHI", data[2:14])

    def is_valid(self):
        """Check the 'BM' magic."""
        return self.signature == BMP_SIGNATURE

    def __str__(self):
        return f"""BMP File Header:
    Signature: {self.signature!r}
    File Size: {self.file_size}
    Pixel Data Offset: {self.pixel_offset}"""


class BMPInfoHeader:
    """BITMAPINFOHEADER structure (40 bytes)."""

    def __init__(self, data):
        """Parse a 40-byte header buffer into attributes.

        Raises BMPIOError when the buffer is too short.
        """
        if len(data) < INFO_HEADER_SIZE:
            raise BMPIOError("Truncated BMP info header")

        (
            self.header_size,
            self.width,
            self.raw_height,
            self.planes,
            self.bit_count,
            self.compression,
            self.image_size,
            self.x_pels_per_meter,
            self.y_pels_per_meter,
            self.colors_used,
            self.colors_important,
        ) = struct.unpack("<IiiHHIIiiII", data[:INFO_HEADER_SIZE])

        # a negative height means the rows are stored top to bottom
        self.top_down = self.raw_height < 0
        self.height = abs(self.raw_height)

    @property
    def is_indexed(self):
        return self.bit_count in INDEXED_BIT_COUNTS

    @property
    def palette_length(self):
        """Number of color table entries (0 for true-color images)."""
        if not self.is_indexed:
            return 0
        if self.colors_used:
            return self.colors_used
        return 1 << self.bit_count

    @property
    def channels(self):
        return 4 if self.bit_count == 32 else 3

    @property
    def bitdepth(self):
        return 32 if self.bit_count == 32 else 24

    def validate(self):
        """Raise InvalidFormatError unless the header describes a decodable image."""
        if self.planes != 1:
            raise InvalidFormatError(f"Unsupported plane count: {self.planes}")
        if self.bit_count not in SUPPORTED_BIT_COUNTS:
            raise InvalidFormatError(f"Unsupported bits per pixel: {self.bit_count}")
        depths = _COMPRESSION_DEPTHS.get(self.compression)
        if depths is None:
            raise InvalidFormatError(f"Unsupported compression: {self.compression}")
        if self.bit_count not in depths:
            raise InvalidFormatError(
                f"{self.get_compression_string()} cannot be used with "
                f"{self.bit_count} bits per pixel"
            )
        if self.width <= 0 or self.height == 0:
            raise InvalidFormatError(
                f"Invalid image dimensions: {self.width}x{self.raw_height}"
            )

    def get_compression_string(self):
        names = {
            COMPRESSION_NONE: "None",
            COMPRESSION_RLE8: "RLE8",
            COMPRESSION_RLE4: "RLE4",
        }
        return names.get(self.compression, f"Unknown ({self.compression})")

    def __str__(self):
        """String representation of header info."""
        return f"""BMP Info Header:
    Header Size: {self.header_size}
    Image Dimensions: {self.width} x {self.height}
    Row Order: {"top-down" if self.top_down else "bottom-up"}
    Planes: {self.planes}
    Bits per Pixel: {self.bit_count}
    Compression: {self.get_compression_string()}
    Image Size: {self.image_size}
    Pixels per Meter: {self.x_pels_per_meter} x {self.y_pels_per_meter}
    Colors Used: {self.colors_used}
    Important Colors: {self.colors_important}"""


def read_headers(stream):
    """Read and validate both headers from a ByteStream positioned at 0."""
    file_header = BMPFileHeader(stream.read(FILE_HEADER_SIZE))
    if not file_header.is_valid():
        raise InvalidFormatError(f"Not a BMP file (signature {file_header.signature!r})")

    info_header = BMPInfoHeader(stream.read(INFO_HEADER_SIZE))
    info_header.validate()

    logger.debug(
        "BMP %dx%d bpp=%d compression=%s top_down=%s offset=%d",
        info_header.width,
        info_header.height,
        info_header.bit_count,
        info_header.get_compression_string(),
        info_header.top_down,
        file_header.pixel_offset,
    )
    return file_header, info_header
