"""Color table reading and preview rendering."""

import logging

from PIL import Image

from .errors import InvalidFormatError

logger = logging.getLogger(__name__)

PALETTE_ENTRY_SIZE = 4


def read_palette(stream, num_colors):
    """Read `num_colors` BGRX entries and return them as (r, g, b) tuples.

    Raises BMPIOError (from the stream) if the table is truncated.
    """
    data = stream.read(num_colors * PALETTE_ENTRY_SIZE)
    palette = []
    for i in range(num_colors):
        b, g, r, _ = data[i * PALETTE_ENTRY_SIZE:(i + 1) * PALETTE_ENTRY_SIZE]
        palette.append((r, g, b))
    logger.debug("Read %d palette entries", num_colors)
    return palette


def lookup(palette, index):
    """Return the palette color for `index`, rejecting out-of-range indices."""
    if index >= len(palette):
        raise InvalidFormatError(
            f"Palette index {index} out of range (palette has {len(palette)} entries)"
        )
    return palette[index]


def get_palette_image(palette, cell_size=16, columns=16):
    """Render the color table as a grid of `cell_size` squares, ordered by index.

    Only the entries the file declares are drawn (colors-used, or the
    bit-depth default); cells past the end of the table are black.
    Returns None for an empty palette.
    """
    if not palette:
        return None

    rows = (len(palette) + columns - 1) // columns
    filler = [(0, 0, 0)] * (rows * columns - len(palette))

    # one pixel per entry, then blow each pixel up into a cell
    grid = Image.new("RGB", (columns, rows))
    grid.putdata(list(palette) + filler)
    return grid.resize((columns * cell_size, rows * cell_size), Image.NEAREST)
