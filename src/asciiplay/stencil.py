import numpy as np

from asciiplay.engine import Cell, Planes, make_cells
from asciiplay.sampling import DEFAULT_THRESHOLD, lit_mask, luminance


class StencilEngine:
    """Tiles a text across the lit pixels of the image; dark pixels stay blank.

    The text is laid out in reading order over the whole frame, so a pixel at
    flat position ``i`` always shows ``text[i % len(text)]`` when lit.
    """

    cell_width = 1
    cell_height = 1
    min_width = 1
    min_height = 1

    def __init__(self, text: str, threshold: float = DEFAULT_THRESHOLD):
        if not text:
            raise ValueError("stencil text must not be empty")
        self.text = text
        self.threshold = threshold
        self._glyphs = np.array(list(text))

    def classify(self, planes: Planes, first_index: int = 0) -> list[Cell]:
        r, g, b, a = planes
        lit = lit_mask(luminance(r, g, b, a), self.threshold)
        positions = first_index + np.arange(lit.size).reshape(lit.shape)
        glyphs = np.where(lit, self._glyphs[positions % len(self.text)], " ")
        return make_cells(glyphs, r, g, b, a)
