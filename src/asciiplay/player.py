"""Terminal playback of image sequences.

Two modes are supported:
- streaming: each path is decoded, rendered and printed in turn
- pre-rendered: every path is rendered up front (in parallel, with a progress
  bar), then the finished frames are printed

Each frame is drawn over the previous one by moving the cursor back up, and
frames are throttled to a fixed delay.

Example:
    from asciiplay.player import Player, PlaybackOptions, frame_delay_from_framerate

    options = PlaybackOptions(frame_delay_ms=frame_delay_from_framerate(24), pre_render=True)
    Player(options).play(["frames/0001.png", "frames/0002.png"])
"""

from __future__ import annotations

import logging
import os
import sys
import time
from collections.abc import Callable, Iterable, Iterator, Sequence
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from pathlib import Path
from typing import TextIO

from tqdm import tqdm

from asciiplay.converter import FrameRenderer, RenderOptions
from asciiplay.engine import RenderedFrame
from asciiplay.terminal import cursor_up

logger = logging.getLogger(__name__)

PathLike = str | Path


def frame_delay_from_framerate(framerate: float | None) -> int:
    """Milliseconds to hold each frame for ``framerate`` frames per second (0 = unthrottled)."""
    if framerate is None:
        return 0
    if framerate <= 0:
        raise ValueError(f"framerate must be positive, got {framerate}")
    return int(1000 / framerate)


@dataclass(frozen=True)
class PlaybackOptions:
    render: RenderOptions = field(default_factory=RenderOptions)
    frame_delay_ms: int = 0
    pre_render: bool = False
    looped: bool = False
    workers: int | None = None
    progress: bool = True

    def __post_init__(self):
        if self.frame_delay_ms < 0:
            raise ValueError(f"frame delay must not be negative, got {self.frame_delay_ms}")


class Player:
    """Plays a sequence of images as text frames on a terminal stream."""

    def __init__(
        self,
        options: PlaybackOptions | None = None,
        stream: TextIO | None = None,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.options = options or PlaybackOptions()
        self.stream = stream if stream is not None else sys.stdout
        self.workers = max(1, self.options.workers or os.cpu_count() or 1)
        self._clock = clock
        self._sleep = sleep
        self._first_frame = True

    def play(self, paths: Sequence[PathLike]) -> int:
        """Play ``paths`` in order; returns the number of frames shown.

        Runs forever when the options ask for looping. Any decode or render
        error stops playback and propagates.
        """
        if not paths:
            logger.warning("Nothing to play")
            return 0
        self._first_frame = True
        if self.options.pre_render:
            return self.play_pre_rendered(paths)
        return self.play_frames(paths)

    def play_frames(self, paths: Sequence[PathLike]) -> int:
        """Decode, render and show each path as it comes."""
        renderer = FrameRenderer(self.options.render, self.workers)
        logger.debug("Streaming %d path(s) with %d worker(s)", len(paths), self.workers)

        def timed() -> Iterator[tuple[float, RenderedFrame]]:
            for path in paths:
                start = self._clock()
                yield start, renderer.render(path)

        return self._loop(timed)

    def pre_render(self, paths: Sequence[PathLike]) -> list[RenderedFrame]:
        """Render every path up front, in parallel, preserving input order.

        The first failure cancels outstanding work and is re-raised.
        """
        renderer = FrameRenderer(self.options.render, workers=1)
        frames: list[RenderedFrame | None] = [None] * len(paths)
        started = time.perf_counter()

        with (
            ThreadPoolExecutor(max_workers=self.workers) as pool,
            tqdm(total=len(paths), desc="Rendering", unit="frame", disable=not self.options.progress) as progress,
        ):
            futures = {pool.submit(renderer.render, path): index for index, path in enumerate(paths)}
            try:
                for future in as_completed(futures):
                    frames[futures[future]] = future.result()
                    progress.update(1)
            except BaseException:
                pool.shutdown(wait=False, cancel_futures=True)
                raise

        logger.debug("Pre-rendered %d frame(s) in %.2fs", len(frames), time.perf_counter() - started)
        return frames

    def play_pre_rendered(self, paths: Sequence[PathLike]) -> int:
        frames = self.pre_render(paths)

        def timed() -> Iterator[tuple[float, RenderedFrame]]:
            for frame in frames:
                yield self._clock(), frame

        return self._loop(timed)

    def _loop(self, frames: Callable[[], Iterable[tuple[float, RenderedFrame]]]) -> int:
        shown = 0
        while True:
            for start, frame in frames():
                self.show(frame)
                shown += 1
                self._wait(start)
            if not self.options.looped:
                return shown

    def show(self, frame: RenderedFrame) -> None:
        """Print ``frame``, moving up by its own height first unless it is the first frame."""
        rewind = "" if self._first_frame else cursor_up(frame.height)
        self.stream.write(rewind + str(frame) + "\n")
        self.stream.flush()
        self._first_frame = False

    def _wait(self, start: float) -> None:
        remaining = self.options.frame_delay_ms / 1000 - (self._clock() - start)
        if remaining > 0:
            self._sleep(remaining)
