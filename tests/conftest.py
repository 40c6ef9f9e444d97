import pytest
from PIL import Image


@pytest.fixture
def write_images(tmp_path):
    """Save one solid greyscale image per value and return their paths in order."""

    def _write(values, size=(2, 1), mode="L"):
        paths = []
        for i, value in enumerate(values):
            path = tmp_path / f"frame_{i:04d}.png"
            Image.new(mode, size, value).save(path)
            paths.append(path)
        return paths

    return _write
