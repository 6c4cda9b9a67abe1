"""
Image type detection by file signature, and a loader that dispatches on it
"""
import enum

from .bmp_reader import load_bmp
from .errors import BMPFileNotFoundError, InvalidFormatError


class ImageType(enum.Enum):
    UNKNOWN = "unknown"
    BMP = "BMP"


# (type, leading bytes) pairs checked in order
SIGNATURES = [
    (ImageType.BMP, b"BM"),
]

_LOADERS = {
    ImageType.BMP: load_bmp,
}


def detect_type(path):
    """Identify the image type of `path` from its first bytes."""
    max_length = max(len(signature) for _, signature in SIGNATURES)
    try:
        with open(path, 'rb') as f:
            head = f.read(max_length)
    except OSError as e:
        raise BMPFileNotFoundError(f"Cannot open {path}: {e}") from e

    for image_type, signature in SIGNATURES:
        if head.startswith(signature):
            return image_type
    raise InvalidFormatError(f"Unrecognized image signature in {path}")


def load_image(path, **kwargs):
    """Detect the type of `path` and decode it with the matching loader."""
    image_type = detect_type(path)
    image = _LOADERS[image_type](path, **kwargs)
    image.name = str(path)
    image.format = image_type.value
    return image
