import argparse
import glob
import logging
import sys
from pathlib import Path

from asciiplay.charsets import DEFAULT_GLYPH_RAMP, PIXEL_GLYPH
from asciiplay.converter import ConverterOptions, RenderMode, RenderOptions
from asciiplay.errors import AsciiPlayError, PathExpansionError
from asciiplay.player import PlaybackOptions, Player, frame_delay_from_framerate
from asciiplay.resize import DEFAULT_BRAILLE_FONT_RATIO, DEFAULT_FONT_RATIO, ResizeFilter, ResizeSpec
from asciiplay.terminal import RESET

logger = logging.getLogger(__name__)


def expand_paths(patterns: list[str]) -> list[Path]:
    """Expand glob patterns into sorted paths; plain paths pass through untouched."""
    paths = []
    for pattern in patterns:
        if not glob.has_magic(pattern):
            paths.append(Path(pattern))
            continue
        matches = sorted(glob.glob(pattern))
        if not matches:
            raise PathExpansionError(f"no files match {pattern!r}")
        paths.extend(Path(match) for match in matches)
    return paths


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="asciiplay", description="Render images and image sequences as text art")
    parser.add_argument("input", nargs="+", help="Input images or glob patterns, played in order")
    parser.add_argument("-w", "--width", type=int, default=None, help="Output width in pixels before classification")
    parser.add_argument("-H", "--height", type=int, default=None, help="Output height in pixels before classification")
    parser.add_argument("-f", "--framerate", type=float, default=None, help="Frames per second (default: unthrottled)")
    parser.add_argument("-p", "--pre-render", action="store_true", help="Render every frame before showing any")
    parser.add_argument("-l", "--loop", action="store_true", help="Repeat the sequence until interrupted")
    parser.add_argument("-c", "--colored", action="store_true", help="Enable truecolor ANSI output")
    parser.add_argument(
        "-a",
        "--ascii-string",
        default=DEFAULT_GLYPH_RAMP,
        help=f"Glyph ramp, dark to light (default: {DEFAULT_GLYPH_RAMP!r})",
    )
    parser.add_argument("-r", "--reverse", action="store_true", help="Reverse the glyph ramp")
    parser.add_argument("--pixels", action="store_true", help=f"Draw every pixel as a coloured {PIXEL_GLYPH}")
    parser.add_argument(
        "--ratio",
        type=float,
        default=None,
        help="Font cell width / height (default: 11/24, or 21/24 for braille)",
    )
    parser.add_argument("-t", "--threshold", type=int, default=None, help="Apply adaptive threshold with this radius")
    parser.add_argument("-b", "--braille", action="store_true", help="Render with braille patterns")
    parser.add_argument("--background-string", default=None, help="Tile this text over the light pixels")
    parser.add_argument(
        "--filter",
        default=ResizeFilter.TRIANGLE.value,
        choices=[f.value for f in ResizeFilter],
        help="Resize filter (default: triangle)",
    )
    parser.add_argument("-j", "--workers", type=int, default=None, help="Worker threads (default: CPU count)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log debug output to stderr")
    return parser


def options_from_args(args: argparse.Namespace) -> PlaybackOptions:
    if args.pixels:
        ramp, colored = PIXEL_GLYPH, True
    elif args.reverse:
        ramp, colored = args.ascii_string[::-1], args.colored
    else:
        ramp, colored = args.ascii_string, args.colored

    if args.background_string is not None:
        mode = RenderMode.STENCIL
    elif args.braille:
        mode = RenderMode.BRAILLE
    else:
        mode = RenderMode.ASCII

    if args.ratio is not None:
        ratio = args.ratio
    elif args.braille:
        ratio = DEFAULT_BRAILLE_FONT_RATIO
    else:
        ratio = DEFAULT_FONT_RATIO

    render = RenderOptions(
        converter=ConverterOptions(glyph_ramp=ramp, colored=colored),
        resize=ResizeSpec(args.width, args.height, ratio, ResizeFilter(args.filter)),
        render_mode=mode,
        stencil_text=args.background_string,
        threshold_radius=args.threshold,
    )
    return PlaybackOptions(
        render=render,
        frame_delay_ms=frame_delay_from_framerate(args.framerate),
        pre_render=args.pre_render,
        looped=args.loop,
        workers=args.workers,
    )


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(format="%(levelname)s: %(message)s", level=logging.DEBUG if args.verbose else logging.WARNING)

    try:
        options = options_from_args(args)
    except ValueError as exc:
        parser.error(str(exc))

    try:
        paths = expand_paths(args.input)
        Player(options).play(paths)
    except AsciiPlayError as exc:
        logger.debug("Playback failed", exc_info=True)
        parser.exit(1, f"{parser.prog}: error: {exc}\n")
    except KeyboardInterrupt:
        sys.stdout.write(RESET + "\n")
        sys.exit(130)
