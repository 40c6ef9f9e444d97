import numpy as np

from asciiplay.errors import GlyphRampError

DEFAULT_THRESHOLD = 0.5

# (max + min) / 2 scaled by alpha / 255
_LIGHTNESS_SCALE = 2.0 * 255.0 * 255.0


def luminance(r, g, b, a=255):
    """HSL lightness of a pixel weighted by its alpha, in [0, 1].

    Accepts scalars or equally shaped numpy arrays. Transparent pixels come
    out as 0 regardless of colour.
    """
    r = np.asarray(r, dtype=np.float64)
    g = np.asarray(g, dtype=np.float64)
    b = np.asarray(b, dtype=np.float64)
    a = np.asarray(a, dtype=np.float64)
    highest = np.maximum(np.maximum(r, g), b)
    lowest = np.minimum(np.minimum(r, g), b)
    return (highest + lowest) * a / _LIGHTNESS_SCALE


def ramp_indices(lightness: np.ndarray, ramp_length: int) -> np.ndarray:
    """Map lightness values onto positions of a glyph ramp of ``ramp_length``.

    Raises GlyphRampError if any value lies outside [0, 1] (or is NaN).
    """
    lightness = np.asarray(lightness, dtype=np.float64)
    if ramp_length < 1 or not np.all((lightness >= 0.0) & (lightness <= 1.0)):
        raise GlyphRampError()
    return np.floor((ramp_length - 1) * lightness).astype(np.intp)


def classify_luminance(lightness: float, ramp: str) -> str:
    """Pick the ramp glyph for a single lightness value."""
    return ramp[int(ramp_indices(lightness, len(ramp)))]


def lit_mask(lightness: np.ndarray, threshold: float = DEFAULT_THRESHOLD) -> np.ndarray:
    """Binary threshold used by the Braille and stencil classifiers."""
    return np.asarray(lightness) > threshold
