"""Transfer progress accounting."""

import sys
from collections.abc import Callable
from fractions import Fraction
from typing import BinaryIO, TextIO

BAR_WIDTH = 50
CHUNK_SIZE = 64 * 1024

# (bytes transferred so far, total size or None when unknown)
ProgressCallback = Callable[[int, int | None], None]


def no_progress(transferred: int, total: int | None) -> None:
    """Progress callback that ignores every update."""


def percent_complete(transferred: int, total: int) -> int:
    """Whole percentage of ``transferred / total``, rounded half to even.

    A zero-length transfer is complete by definition.
    """
    if total <= 0:
        return 100
    value = round(Fraction(transferred * 100, total))
    return max(0, min(100, value))


class ProgressTracker:
    """Renders a fixed-width progress bar, redrawing only on percentage change."""

    def __init__(self, stream: TextIO | None = None, width: int = BAR_WIDTH):
        self.stream = stream if stream is not None else sys.stderr
        self.width = width
        self.last_percent: int | None = None

    @property
    def rendered(self) -> bool:
        return self.last_percent is not None

    def update(self, transferred: int, total: int | None) -> None:
        if total is None:
            return
        percent = percent_complete(transferred, total)
        if self.last_percent is not None and percent <= self.last_percent:
            return
        self._render(percent)

    def finish(self) -> None:
        """Terminate the progress line, if one was drawn."""
        if self.rendered:
            self.stream.write("\n")
            self.stream.flush()

    def __call__(self, transferred: int, total: int | None) -> None:
        self.update(transferred, total)

    def _render(self, percent: int) -> None:
        filled = percent * self.width // 100
        bar = "#" * filled + " " * (self.width - filled)
        prefix = "\r" if self.rendered else ""
        self.stream.write(f"{prefix}[{bar}] {percent}%")
        self.stream.flush()
        self.last_percent = percent


def copy_stream(
    src: BinaryIO,
    dst: BinaryIO,
    total: int | None,
    progress: ProgressCallback = no_progress,
    chunk_size: int = CHUNK_SIZE,
) -> int:
    """Copy ``src`` into ``dst`` chunk by chunk, reporting cumulative bytes."""
    transferred = 0
    if total == 0:
        progress(0, 0)
    for chunk in iter(lambda: src.read(chunk_size), b""):
        dst.write(chunk)
        transferred += len(chunk)
        progress(transferred, total)
    return transferred
