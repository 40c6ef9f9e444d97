from asciiplay.converter import ConverterOptions, FrameRenderer, RenderMode, RenderOptions, render_image
from asciiplay.engine import Cell, RenderedFrame
from asciiplay.errors import AsciiPlayError, DecodeError, GlyphRampError, PathExpansionError, SizeError
from asciiplay.formatter import format_frame
from asciiplay.player import PlaybackOptions, Player, frame_delay_from_framerate
from asciiplay.resize import ResizeFilter, ResizeSpec, compute_dimensions

__all__ = [
    "AsciiPlayError",
    "Cell",
    "ConverterOptions",
    "DecodeError",
    "FrameRenderer",
    "GlyphRampError",
    "PathExpansionError",
    "PlaybackOptions",
    "Player",
    "RenderMode",
    "RenderOptions",
    "RenderedFrame",
    "ResizeFilter",
    "ResizeSpec",
    "SizeError",
    "compute_dimensions",
    "format_frame",
    "frame_delay_from_framerate",
    "render_image",
]
