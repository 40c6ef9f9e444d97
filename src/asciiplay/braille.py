from collections.abc import Sequence

import numpy as np

from asciiplay.charsets import BRAILLE_BASE
from asciiplay.engine import Cell, Planes, make_cells
from asciiplay.sampling import DEFAULT_THRESHOLD, lit_mask, luminance

# (row, column) of the sub-pixel driving each dot bit, in bit order:
#   0 3
#   1 4
#   2 5
#   6 7
DOT_POSITIONS = [
    (0, 0),
    (1, 0),
    (2, 0),
    (0, 1),
    (1, 1),
    (2, 1),
    (3, 0),
    (3, 1),
]


def braille_char(dots: Sequence[bool]) -> str:
    """Braille pattern with dot ``i`` raised for every true ``dots[i]``."""
    if len(dots) != 8:
        raise ValueError(f"a braille cell has 8 dots, got {len(dots)}")
    codepoint = BRAILLE_BASE
    for bit, raised in enumerate(dots):
        if raised:
            codepoint |= 1 << bit
    return chr(codepoint)


class BrailleEngine:
    """Packs each 2x4 block of thresholded pixels into one braille character.

    The colour of a cell is the colour of the block's top-left pixel.
    """

    cell_width = 2
    cell_height = 4
    min_width = 4
    min_height = 8

    def __init__(self, threshold: float = DEFAULT_THRESHOLD):
        self.threshold = threshold

    def classify(self, planes: Planes, first_index: int = 0) -> list[Cell]:
        r, g, b, a = planes
        lit = lit_mask(luminance(r, g, b, a), self.threshold)
        rows = lit.shape[0] // self.cell_height
        cols = lit.shape[1] // self.cell_width
        # (rows, 4, cols, 2): block row, dot row, block column, dot column
        blocks = lit.reshape(rows, self.cell_height, cols, self.cell_width)

        codepoints = np.full((rows, cols), BRAILLE_BASE, dtype=np.int64)
        for bit, (dot_row, dot_col) in enumerate(DOT_POSITIONS):
            codepoints |= blocks[:, dot_row, :, dot_col].astype(np.int64) << bit
        glyphs = np.array([chr(c) for c in codepoints.ravel().tolist()]).reshape(rows, cols)

        corner = (slice(None, None, self.cell_height), slice(None, None, self.cell_width))
        return make_cells(glyphs, r[corner], g[corner], b[corner], a[corner])
