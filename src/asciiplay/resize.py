import logging
from dataclasses import dataclass
from enum import Enum

from PIL import Image

logger = logging.getLogger(__name__)

# Width / height of a terminal character cell
DEFAULT_FONT_RATIO = 11 / 24
DEFAULT_BRAILLE_FONT_RATIO = 21 / 24


class ResizeFilter(Enum):
    """Interpolation kernels, mapped onto Pillow's resampling filters."""

    NEAREST = "nearest"
    TRIANGLE = "triangle"
    CATMULL_ROM = "catmull-rom"
    LANCZOS = "lanczos"
    BOX = "box"
    HAMMING = "hamming"

    @property
    def resample(self) -> Image.Resampling:
        return _RESAMPLING[self]


_RESAMPLING = {
    ResizeFilter.NEAREST: Image.Resampling.NEAREST,
    ResizeFilter.TRIANGLE: Image.Resampling.BILINEAR,
    ResizeFilter.CATMULL_ROM: Image.Resampling.BICUBIC,
    ResizeFilter.LANCZOS: Image.Resampling.LANCZOS,
    ResizeFilter.BOX: Image.Resampling.BOX,
    ResizeFilter.HAMMING: Image.Resampling.HAMMING,
}


@dataclass(frozen=True)
class ResizeSpec:
    target_width: int | None = None
    target_height: int | None = None
    font_aspect_ratio: float = DEFAULT_FONT_RATIO
    filter: ResizeFilter = ResizeFilter.TRIANGLE

    def __post_init__(self):
        if not self.font_aspect_ratio > 0:
            raise ValueError(f"font aspect ratio must be positive, got {self.font_aspect_ratio}")
        for name in ("target_width", "target_height"):
            value = getattr(self, name)
            if value is not None and value < 0:
                raise ValueError(f"{name} must not be negative, got {value}")


def compute_dimensions(src_width: int, src_height: int, spec: ResizeSpec) -> tuple[int, int]:
    """Output size in pixels for ``spec``, keeping the aspect ratio on screen.

    When only one side is given the other one is derived from the source
    aspect ratio corrected by the font cell ratio, truncating toward zero.
    """
    width, height = spec.target_width, spec.target_height
    if width is None and height is None:
        return src_width, src_height
    if height is None:
        height = int(width * spec.font_aspect_ratio * src_height / src_width)
    elif width is None:
        width = int(height * src_width / (src_height * spec.font_aspect_ratio))
    return width, height


def resize_image(image: Image.Image, spec: ResizeSpec) -> Image.Image:
    size = compute_dimensions(image.width, image.height, spec)
    if size == image.size:
        return image
    logger.debug("Resizing %dx%d -> %dx%d (%s)", image.width, image.height, *size, spec.filter.value)
    if size[0] == 0 or size[1] == 0:
        # Nothing to resample; the renderer rejects the empty grid
        return Image.new(image.mode, size)
    return image.resize(size, spec.filter.resample)
