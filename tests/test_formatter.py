import pytest

from asciiplay.engine import Cell, RenderedFrame
from asciiplay.errors import SizeError
from asciiplay.formatter import colorize, format_frame


def make_frame(glyphs="abcd", width=2, height=2, colored=False):
    cells = [Cell(glyph, 10 * i, 20 * i, 30 * i) for i, glyph in enumerate(glyphs)]
    return RenderedFrame(cells, width, height, colored)


def test_plain_rows_joined_without_trailing_newline():
    assert format_frame(make_frame()) == "ab\ncd"


def test_single_row():
    assert format_frame(make_frame("xyz", 3, 1)) == "xyz"


def test_colored_wraps_every_glyph():
    frame = make_frame("ab", 2, 1, colored=True)
    assert format_frame(frame) == "\033[38;2;0;0;0ma\033[0m\033[38;2;10;20;30mb\033[0m"


def test_colorize():
    assert colorize("#", 1, 2, 3) == "\033[38;2;1;2;3m#\033[0m"


def test_colored_rows_still_split_by_width():
    text = format_frame(make_frame(colored=True))
    assert text.count("\n") == 1
    assert text.count("\033[0m") == 4


def test_with_colored_keeps_cells():
    frame = make_frame()
    coloured = frame.with_colored(True)
    assert coloured.colored and not frame.colored
    assert coloured.cells is frame.cells
    assert str(frame) == "ab\ncd"


@pytest.mark.parametrize("width, height", [(0, 2), (2, 0), (0, 0)])
def test_zero_dimension_frame_rejected(width, height):
    with pytest.raises(SizeError):
        RenderedFrame([], width, height)


def test_cell_count_must_match():
    with pytest.raises(ValueError, match="expected 4 cells"):
        make_frame("abc", 2, 2)
