import numpy as np
from PIL import Image


def _block_sums(gray: np.ndarray, radius: int) -> tuple[np.ndarray, np.ndarray]:
    """Sum and pixel count of the (2r+1)x(2r+1) block around every pixel, clamped at the borders."""
    h, w = gray.shape
    integral = np.zeros((h + 1, w + 1), dtype=np.int64)
    integral[1:, 1:] = gray.astype(np.int64).cumsum(axis=0).cumsum(axis=1)

    ys = np.arange(h)
    xs = np.arange(w)
    y0 = np.clip(ys - radius, 0, h)[:, None]
    y1 = np.clip(ys + radius + 1, 0, h)[:, None]
    x0 = np.clip(xs - radius, 0, w)[None, :]
    x1 = np.clip(xs + radius + 1, 0, w)[None, :]

    sums = integral[y1, x1] - integral[y0, x1] - integral[y1, x0] + integral[y0, x0]
    counts = (y1 - y0) * (x1 - x0)
    return sums, counts


def adaptive_threshold(image: Image.Image, radius: int) -> Image.Image:
    """Binarise ``image`` against the local mean brightness.

    A pixel turns white (255) when it is at least as bright as the integer mean of the
    block of radius ``radius`` centred on it, black (0) otherwise. Returns a
    greyscale ("L") image of the same size.
    """
    if radius < 0:
        raise ValueError(f"threshold radius must not be negative, got {radius}")
    gray = np.asarray(image.convert("L"))
    if gray.size == 0:
        return image.convert("L")
    sums, counts = _block_sums(gray, radius)
    # Compare against the floored integer mean of the block
    mask = gray.astype(np.int64) >= sums // counts
    return Image.fromarray(np.where(mask, 255, 0).astype(np.uint8))
