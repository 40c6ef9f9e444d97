from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import NamedTuple, Protocol

import numpy as np

from asciiplay.errors import SizeError
from asciiplay.formatter import format_frame


class Cell(NamedTuple):
    """One rendered character plus the colour of the pixel it stands for."""

    glyph: str
    r: int
    g: int
    b: int
    a: int = 255


@dataclass
class RenderedFrame:
    cells: list[Cell]  # row-major, width * height entries
    width: int
    height: int
    colored: bool = False

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise SizeError(self.width, self.height)
        if len(self.cells) != self.width * self.height:
            raise ValueError(
                f"expected {self.width * self.height} cells for {self.width}x{self.height}, got {len(self.cells)}"
            )

    def with_colored(self, colored: bool) -> RenderedFrame:
        """Copy of this frame with colour output switched on or off; cells are shared."""
        return dataclasses.replace(self, colored=colored)

    def __str__(self) -> str:
        return format_frame(self)


Planes = tuple[np.ndarray, np.ndarray, np.ndarray, np.ndarray]


class Engine(Protocol):
    # Source pixels covered by one output cell
    cell_width: int
    cell_height: int
    # Smallest source grid the engine accepts
    min_width: int
    min_height: int

    def classify(self, planes: Planes, first_index: int) -> list[Cell]:
        """Convert a band of (r, g, b, a) planes into cells in row-major order.

        The band is already trimmed to whole cells. ``first_index`` is the
        flat position of the band's first cell within the whole frame.
        """
        ...


def make_cells(glyphs: np.ndarray, r: np.ndarray, g: np.ndarray, b: np.ndarray, a: np.ndarray) -> list[Cell]:
    """Zip equally shaped glyph and channel arrays into row-major cells."""
    return list(
        map(
            Cell,
            glyphs.ravel().tolist(),
            r.ravel().tolist(),
            g.ravel().tolist(),
            b.ravel().tolist(),
            a.ravel().tolist(),
        )
    )
