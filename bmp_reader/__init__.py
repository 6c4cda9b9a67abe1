"""
BMP Reader - Source Package

Decodes Windows bitmap files into top-to-bottom RGB/RGBA pixel buffers.
"""

__version__ = "1.0.0"

from .bmp_reader import BMPReader, load_bmp, release_image, dump_image
from .bmp_header import BMPFileHeader, BMPInfoHeader
from .canvas import CanonicalImage
from .errors import (
    ImageErrorKind,
    BMPError,
    BMPFileNotFoundError,
    BMPIOError,
    InvalidFormatError,
    BMPOutOfMemoryError,
    strerror,
)
from .image_format import ImageType, detect_type, load_image
from .palette import get_palette_image

__all__ = [
    'BMPReader',
    'load_bmp',
    'release_image',
    'dump_image',
    'BMPFileHeader',
    'BMPInfoHeader',
    'CanonicalImage',
    'ImageErrorKind',
    'BMPError',
    'BMPFileNotFoundError',
    'BMPIOError',
    'InvalidFormatError',
    'BMPOutOfMemoryError',
    'strerror',
    'ImageType',
    'detect_type',
    'load_image',
    'get_palette_image',
]
