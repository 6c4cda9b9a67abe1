"""
Error kinds raised while loading images
"""
import enum


class ImageErrorKind(enum.Enum):
    """Categories a failed image load falls into."""
    FILE_NOT_FOUND = "file_not_found"
    IO = "io"
    INVALID_FORMAT = "invalid_format"
    OUT_OF_MEMORY = "out_of_memory"


_MESSAGES = {
    ImageErrorKind.FILE_NOT_FOUND: "Image file not found",
    ImageErrorKind.IO: "I/O error when reading the image file",
    ImageErrorKind.INVALID_FORMAT: "Invalid image file format",
    ImageErrorKind.OUT_OF_MEMORY: "Out of memory",
}


def strerror(kind):
    """Return a human-readable message for an ImageErrorKind (or None for success)."""
    if kind is None:
        return "No error"
    return _MESSAGES.get(kind, "Unknown error")


class BMPError(Exception):
    """Base class for every error raised by the decoder."""
    kind = None

    def __init__(self, message=""):
        self.message = message or strerror(self.kind)
        super().__init__(self.message)


class BMPFileNotFoundError(BMPError, FileNotFoundError):
    """The input file could not be opened."""
    kind = ImageErrorKind.FILE_NOT_FOUND


class BMPIOError(BMPError, IOError):
    """Short read or unexpected end of stream."""
    kind = ImageErrorKind.IO


class InvalidFormatError(BMPError, ValueError):
    """Bad signature, unsupported layout, or an out-of-range palette index."""
    kind = ImageErrorKind.INVALID_FORMAT


class BMPOutOfMemoryError(BMPError, MemoryError):
    """The output or scratch buffers could not be allocated."""
    kind = ImageErrorKind.OUT_OF_MEMORY
