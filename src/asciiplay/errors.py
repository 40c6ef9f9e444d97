class AsciiPlayError(Exception):
    """Base class for every error raised by asciiplay."""


class SizeError(AsciiPlayError, ValueError):
    """The pixel grid is too small for the selected classifier."""

    def __init__(self, width: int, height: int, min_width: int = 1, min_height: int = 1):
        self.width = width
        self.height = height
        self.min_width = min_width
        self.min_height = min_height
        super().__init__(
            f"width and height are too small: got {width}x{height}, need at least {min_width}x{min_height}"
        )


class GlyphRampError(AsciiPlayError, ValueError):
    """Lightness fell outside [0, 1], so no ramp glyph can be picked."""

    def __init__(self, message: str = "lightness is out of glyph ramp"):
        super().__init__(message)


class DecodeError(AsciiPlayError, OSError):
    """An input image could not be opened or decoded."""

    def __init__(self, path, reason: str):
        self.path = path
        super().__init__(f"cannot decode image {str(path)!r}: {reason}")


class PathExpansionError(AsciiPlayError):
    """A glob pattern given on the command line matched nothing."""
