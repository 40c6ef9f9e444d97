import numpy as np
import pytest
from PIL import Image

from asciiplay.converter import ConverterOptions, FrameRenderer, RenderMode, RenderOptions, load_image, render_image
from asciiplay.errors import DecodeError, GlyphRampError, SizeError
from asciiplay.gradient import GradientEngine
from asciiplay.layout import PixelLayout
from asciiplay.resize import ResizeSpec


def make_options(ramp=" #", colored=False, **kwargs):
    return RenderOptions(converter=ConverterOptions(glyph_ramp=ramp, colored=colored), **kwargs)


def test_solid_white_maps_to_lightest():
    result = render_image(Image.new("L", (3, 2), 255), make_options())
    assert str(result) == "###\n###"


def test_solid_black_maps_to_space():
    result = render_image(Image.new("L", (3, 2), 0), make_options())
    assert str(result) == "   \n   "


def test_gradient_produces_varying_characters():
    img = Image.new("L", (3, 1))
    img.putdata([0, 128, 255])
    result = render_image(img, make_options(ramp=" *#"))
    assert str(result) == " *#"


def test_accepts_file_path(tmp_path):
    path = tmp_path / "test.png"
    Image.new("RGB", (4, 4), (255, 255, 255)).save(path)
    result = render_image(path, make_options())
    assert (result.width, result.height) == (4, 4)
    assert all(cell.glyph == "#" for cell in result.cells)


def test_transparent_pixels_render_blank():
    result = render_image(Image.new("RGBA", (2, 2), (255, 255, 255, 0)), make_options())
    assert str(result) == "  \n  "


def test_width_parameter_resizes_with_font_ratio():
    options = make_options(resize=ResizeSpec(target_width=10, font_aspect_ratio=0.5))
    result = render_image(Image.new("RGB", (100, 200), (128, 128, 128)), options)
    assert (result.width, result.height) == (10, 10)


def test_colored_option_is_carried_to_frame():
    result = render_image(Image.new("RGB", (2, 2), (255, 0, 0)), make_options(ramp=" *#", colored=True))
    assert result.colored
    assert result.cells[0] == ("*", 255, 0, 0, 255)


def test_threshold_radius_binarises_before_classification():
    img = Image.new("L", (3, 3), 60)
    img.putpixel((1, 1), 0)
    result = render_image(img, make_options(threshold_radius=1))
    assert str(result) == "###\n# #\n###"


@pytest.mark.parametrize("mode", list(RenderMode))
@pytest.mark.parametrize("layout", list(PixelLayout))
def test_cell_count_matches_dimensions(mode, layout):
    rng = np.random.default_rng(3)
    shape = (13, 9) if layout is PixelLayout.GRAY else (13, 9, layout.channels)
    pixels = rng.integers(0, 256, size=shape, dtype=np.uint8)
    renderer = FrameRenderer(make_options(render_mode=mode, stencil_text="ab"), workers=3)
    frame = renderer.classify(pixels, layout)
    assert len(frame.cells) == frame.width * frame.height


@pytest.mark.parametrize("mode", list(RenderMode))
def test_zero_width_is_a_size_error(mode):
    renderer = FrameRenderer(make_options(render_mode=mode, stencil_text="ab"))
    with pytest.raises(SizeError):
        renderer.classify(np.zeros((5, 0), dtype=np.uint8), PixelLayout.GRAY)


@pytest.mark.parametrize("mode", list(RenderMode))
def test_resize_to_nothing_is_a_size_error(mode):
    options = make_options(render_mode=mode, stencil_text="ab", resize=ResizeSpec(target_width=0, target_height=4))
    with pytest.raises(SizeError):
        render_image(Image.new("RGB", (16, 16)), options)


def test_parallel_and_sequential_match():
    rng = np.random.default_rng(11)
    pixels = rng.integers(0, 256, size=(37, 23, 4), dtype=np.uint8)
    options = make_options(ramp=" .:-=+*#%@", colored=True)
    sequential = FrameRenderer(options, workers=1).classify(pixels, PixelLayout.RGBA)
    parallel = FrameRenderer(options, workers=8).classify(pixels, PixelLayout.RGBA)
    assert sequential == parallel


def test_lightness_outside_ramp_aborts_conversion(monkeypatch):
    monkeypatch.setattr("asciiplay.gradient.luminance", lambda r, g, b, a: np.full(r.shape, 1.5))
    with pytest.raises(GlyphRampError):
        render_image(Image.new("L", (2, 2)), make_options())


def test_missing_file_is_a_decode_error(tmp_path):
    with pytest.raises(DecodeError) as excinfo:
        load_image(tmp_path / "missing.png")
    assert excinfo.value.path == tmp_path / "missing.png"


def test_corrupt_file_is_a_decode_error(tmp_path):
    path = tmp_path / "broken.png"
    path.write_bytes(b"not an image at all")
    with pytest.raises(DecodeError):
        render_image(path)


def test_ramp_validation():
    with pytest.raises(ValueError):
        ConverterOptions(glyph_ramp="")
    with pytest.raises(ValueError):
        ConverterOptions(glyph_ramp=" \x1b#")
    with pytest.raises(ValueError):
        GradientEngine("")


def test_unconvertible_mode_is_a_decode_error(tmp_path, monkeypatch):
    path = tmp_path / "odd.png"
    Image.new("L", (2, 2)).save(path)

    def refuse(image):
        raise ValueError("conversion from LAB to RGB not supported")

    monkeypatch.setattr(PixelLayout, "normalize", staticmethod(refuse))
    with pytest.raises(DecodeError, match="not supported"):
        load_image(path)
