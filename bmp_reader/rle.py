"""RLE8 / RLE4 decoding.

The stream is a sequence of two-byte tokens. A non-zero first byte is an
encoded run; a zero first byte is an escape whose second byte selects
end-of-line (0), end-of-bitmap (1), delta (2) or an absolute run of
literal indices (3..255). Absolute runs are padded to an even byte count.
"""

import logging

from .palette import lookup

logger = logging.getLogger(__name__)

ESCAPE_END_OF_LINE = 0
ESCAPE_END_OF_BITMAP = 1
ESCAPE_DELTA = 2


class RLEDecoder:
    """Cursor-driven RLE state machine writing into a PixelCanvas."""

    def __init__(self, stream, canvas, palette, bits_per_pixel):
        self.stream = stream
        self.canvas = canvas
        self.palette = palette
        # RLE8 for 8-bit images, RLE4 (nibble pairs) for 1- and 4-bit
        self.nibbles = bits_per_pixel != 8
        self.x = 0
        self.y = 0

    def emit(self, index):
        # pixels past the right edge are counted but dropped
        if self.canvas.contains(self.x, self.y):
            self.canvas.put(self.x, self.y, lookup(self.palette, index))
        self.x += 1

    def decode(self):
        """Run until the end-of-bitmap escape; BMPIOError if the stream ends first."""
        while True:
            count, value = self.stream.read_pair()
            if count:
                self.encoded_run(count, value)
            elif value == ESCAPE_END_OF_LINE:
                self.x = 0
                self.y += 1
            elif value == ESCAPE_END_OF_BITMAP:
                logger.debug("End of bitmap at (%d, %d)", self.x, self.y)
                return
            elif value == ESCAPE_DELTA:
                dx, dy = self.stream.read_pair()
                self.x += dx
                self.y += dy
            else:
                self.absolute_run(value)

    def encoded_run(self, count, value):
        if not self.nibbles:
            for _ in range(count):
                self.emit(value)
            return

        pair = (value >> 4, value & 0x0F)
        for i in range(count):
            self.emit(pair[i & 1])

    def absolute_run(self, count):
        if self.nibbles:
            data = self.stream.read((count + 1) // 2)
            for i in range(count):
                byte = data[i // 2]
                self.emit(byte >> 4 if i % 2 == 0 else byte & 0x0F)
        else:
            for index in self.stream.read(count):
                self.emit(index)

        if count & 1:
            self.stream.read(1)  # word alignment padding


def decode_rle(stream, canvas, palette, bits_per_pixel):
    """Decode an RLE8 or RLE4 pixel stream into `canvas`."""
    logger.debug("Decoding RLE%d stream", 8 if bits_per_pixel == 8 else 4)
    RLEDecoder(stream, canvas, palette, bits_per_pixel).decode()
