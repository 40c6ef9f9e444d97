# Glyph ramps are ordered darkest to lightest
DEFAULT_GLYPH_RAMP = " .,:;+*?%S#@"

# Solid block used by pixel mode
PIXEL_GLYPH = "█"

# Braille patterns: U+2800 to U+28FF (256 characters, 2x4 dot grid)
BRAILLE_BASE = 0x2800


def is_drawable(text: str) -> bool:
    """True if every character of ``text`` prints as a visible glyph or a space."""
    return all(char.isprintable() for char in text)
