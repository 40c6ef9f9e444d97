import logging
import math
import os
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

import numpy as np
from PIL import Image

from asciiplay.braille import BrailleEngine
from asciiplay.charsets import DEFAULT_GLYPH_RAMP, is_drawable
from asciiplay.engine import Cell, Engine, RenderedFrame
from asciiplay.errors import DecodeError, SizeError
from asciiplay.gradient import GradientEngine
from asciiplay.layout import PixelLayout
from asciiplay.resize import ResizeSpec, resize_image
from asciiplay.stencil import StencilEngine
from asciiplay.thresholding import adaptive_threshold

logger = logging.getLogger(__name__)


class RenderMode(Enum):
    ASCII = "ascii"
    BRAILLE = "braille"
    STENCIL = "stencil"


@dataclass(frozen=True)
class ConverterOptions:
    glyph_ramp: str = DEFAULT_GLYPH_RAMP
    colored: bool = False

    def __post_init__(self):
        if not self.glyph_ramp:
            raise ValueError("glyph ramp must not be empty")
        if not is_drawable(self.glyph_ramp):
            raise ValueError(f"glyph ramp contains non-printable characters: {self.glyph_ramp!r}")


@dataclass(frozen=True)
class RenderOptions:
    """Everything needed to turn one decoded image into a frame."""

    converter: ConverterOptions = field(default_factory=ConverterOptions)
    resize: ResizeSpec = field(default_factory=ResizeSpec)
    render_mode: RenderMode = RenderMode.ASCII
    stencil_text: str | None = None
    threshold_radius: int | None = None

    def __post_init__(self):
        if self.render_mode is RenderMode.STENCIL:
            if not self.stencil_text:
                raise ValueError("stencil mode needs a non-empty stencil text")
            if not is_drawable(self.stencil_text):
                raise ValueError(f"stencil text contains non-printable characters: {self.stencil_text!r}")
        if self.threshold_radius is not None and self.threshold_radius < 0:
            raise ValueError(f"threshold radius must not be negative, got {self.threshold_radius}")


def build_engine(options: RenderOptions) -> Engine:
    if options.render_mode is RenderMode.BRAILLE:
        return BrailleEngine()
    if options.render_mode is RenderMode.STENCIL:
        return StencilEngine(options.stencil_text)
    return GradientEngine(options.converter.glyph_ramp)


def load_image(path: str | Path) -> Image.Image:
    """Open and fully decode an image file into one of the supported layouts."""
    try:
        image = Image.open(path)
        image.load()
        image = PixelLayout.normalize(image)
    except (OSError, ValueError, Image.DecompressionBombError) as exc:
        raise DecodeError(path, str(exc)) from exc
    return image


class FrameRenderer:
    """Resizes images and classifies them into RenderedFrames.

    Classification is split into horizontal bands of whole cells that are
    mapped over a thread pool of ``workers`` threads; one worker renders
    sequentially.
    """

    def __init__(self, options: RenderOptions | None = None, workers: int | None = None):
        self.options = options or RenderOptions()
        self.engine = build_engine(self.options)
        self.workers = max(1, workers or os.cpu_count() or 1)

    def prepare(self, image: Image.Image) -> Image.Image:
        """Threshold (if configured) and resize an image, keeping a supported layout."""
        image = PixelLayout.normalize(image)
        if self.options.threshold_radius is not None:
            image = adaptive_threshold(image, self.options.threshold_radius)
        return resize_image(image, self.options.resize)

    def render(self, image: Image.Image | str | Path) -> RenderedFrame:
        if not isinstance(image, Image.Image):
            image = load_image(image)
        image = self.prepare(image)
        return self.classify(np.asarray(image), PixelLayout.for_image(image))

    def classify(self, pixels: np.ndarray, layout: PixelLayout) -> RenderedFrame:
        """Classify a pixel grid of shape (height, width[, channels]) into a frame."""
        engine = self.engine
        height, width = pixels.shape[:2]
        if width == 0 or height == 0:
            raise SizeError(width, height)
        if width < engine.min_width or height < engine.min_height:
            raise SizeError(width, height, engine.min_width, engine.min_height)

        cols = width // engine.cell_width
        rows = height // engine.cell_height
        planes = layout.sample(pixels)
        planes = tuple(plane[: rows * engine.cell_height, : cols * engine.cell_width] for plane in planes)

        band_rows = math.ceil(rows / self.workers)
        bands = []
        for start in range(0, rows, band_rows):
            stop = min(rows, start + band_rows)
            y0, y1 = start * engine.cell_height, stop * engine.cell_height
            bands.append((tuple(plane[y0:y1] for plane in planes), start * cols))

        logger.debug(
            "Classifying %dx%d %s pixels into %dx%d cells in %d band(s)",
            width,
            height,
            layout.value,
            cols,
            rows,
            len(bands),
        )
        with ThreadPoolExecutor(max_workers=self.workers) as pool:
            results = pool.map(lambda band: engine.classify(*band), bands)
            cells: list[Cell] = [cell for band_cells in results for cell in band_cells]

        return RenderedFrame(cells, cols, rows, self.options.converter.colored)


def render_image(
    image: Image.Image | str | Path,
    options: RenderOptions | None = None,
    workers: int | None = None,
) -> RenderedFrame:
    """Render a single image (or image path) into a frame."""
    return FrameRenderer(options, workers).render(image)
