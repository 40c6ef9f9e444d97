from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from asciiplay.engine import Cell, RenderedFrame

ESC = "\033"
RESET = f"{ESC}[0m"


def colorize(glyph: str, r: int, g: int, b: int) -> str:
    """Wrap a glyph in a 24-bit foreground colour escape."""
    return f"{ESC}[38;2;{r};{g};{b}m{glyph}{RESET}"


def _cell_text(cell: Cell, colored: bool) -> str:
    if colored:
        return colorize(cell.glyph, cell.r, cell.g, cell.b)
    return cell.glyph


def format_frame(frame: RenderedFrame) -> str:
    """Join the frame's cells into printable rows separated by newlines (no trailing newline)."""
    texts = [_cell_text(cell, frame.colored) for cell in frame.cells]
    return "\n".join("".join(texts[i : i + frame.width]) for i in range(0, len(texts), frame.width))
