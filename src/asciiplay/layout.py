from enum import Enum

import numpy as np
from PIL import Image

OPAQUE = 255

# Pillow modes that convert losslessly enough into one of the four layouts
_MODE_FALLBACKS = {
    "1": "L",
    "I": "L",
    "I;16": "L",
    "I;16B": "L",
    "I;16L": "L",
    "I;16N": "L",
    "F": "L",
    "La": "LA",
    "PA": "RGBA",
    "RGBa": "RGBA",
}


class PixelLayout(Enum):
    """Channel layouts the classifiers understand, keyed by Pillow mode."""

    GRAY = "L"
    GRAY_ALPHA = "LA"
    RGB = "RGB"
    RGBA = "RGBA"

    @property
    def channels(self) -> int:
        return len(self.value)

    @classmethod
    def for_image(cls, image: Image.Image) -> "PixelLayout":
        return cls(image.mode)

    @classmethod
    def normalize(cls, image: Image.Image) -> Image.Image:
        """Convert ``image`` to the closest supported layout (no-op if already supported)."""
        if image.mode in {layout.value for layout in cls}:
            return image
        if image.mode == "P":
            target = "RGBA" if "transparency" in image.info else "RGB"
        else:
            target = _MODE_FALLBACKS.get(image.mode, "RGBA" if "A" in image.getbands() else "RGB")
        return image.convert(target)

    def sample(self, pixels: np.ndarray) -> tuple[np.ndarray, np.ndarray, np.ndarray, np.ndarray]:
        """Split a pixel grid into (r, g, b, a) planes of shape (height, width).

        Grey layouts repeat the luma value into r, g and b; layouts without an
        alpha channel report fully opaque pixels.
        """
        if self is PixelLayout.GRAY:
            if pixels.ndim == 3:
                pixels = pixels[:, :, 0]
            return pixels, pixels, pixels, np.full_like(pixels, OPAQUE)
        if self is PixelLayout.GRAY_ALPHA:
            luma = pixels[:, :, 0]
            return luma, luma, luma, pixels[:, :, 1]
        r, g, b = pixels[:, :, 0], pixels[:, :, 1], pixels[:, :, 2]
        if self is PixelLayout.RGB:
            return r, g, b, np.full_like(r, OPAQUE)
        return r, g, b, pixels[:, :, 3]
