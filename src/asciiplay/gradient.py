import numpy as np

from asciiplay.charsets import DEFAULT_GLYPH_RAMP
from asciiplay.engine import Cell, Planes, make_cells
from asciiplay.sampling import luminance, ramp_indices


class GradientEngine:
    """Maps every pixel onto a glyph ramp by its lightness."""

    cell_width = 1
    cell_height = 1
    min_width = 1
    min_height = 1

    def __init__(self, ramp: str = DEFAULT_GLYPH_RAMP):
        if not ramp:
            raise ValueError("glyph ramp must not be empty")
        self.ramp = ramp
        self._glyphs = np.array(list(ramp))

    def classify(self, planes: Planes, first_index: int = 0) -> list[Cell]:
        r, g, b, a = planes
        indices = ramp_indices(luminance(r, g, b, a), len(self.ramp))
        return make_cells(self._glyphs[indices], r, g, b, a)
