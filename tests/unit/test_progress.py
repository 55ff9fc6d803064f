"""Tests for progress accounting."""

import io
import re

import pytest

from stagecache.core.progress import BAR_WIDTH, ProgressTracker, copy_stream, percent_complete


def rendered_percentages(stream: io.StringIO) -> list[int]:
    return [int(p) for p in re.findall(r"(\d+)%", stream.getvalue())]


@pytest.mark.parametrize(
    ("transferred", "total", "expected"),
    [
        (0, 100, 0),
        (1, 2, 50),
        (1, 8, 12),  # 12.5 rounds to even
        (3, 8, 38),  # 37.5 rounds to even
        (1, 3, 33),
        (2, 3, 67),
        (100, 100, 100),
        (250, 100, 100),
        (0, 0, 100),
    ],
)
def test_percent_complete(transferred: int, total: int, expected: int) -> None:
    assert percent_complete(transferred, total) == expected


def test_renders_only_when_percentage_changes() -> None:
    stream = io.StringIO()
    tracker = ProgressTracker(stream)

    tracker.update(1, 1000)
    tracker.update(2, 1000)
    tracker.update(4, 1000)
    tracker.update(500, 1000)
    tracker.update(501, 1000)

    assert rendered_percentages(stream) == [0, 50]


def test_bar_is_fixed_width() -> None:
    stream = io.StringIO()
    tracker = ProgressTracker(stream)

    tracker.update(50, 100)

    assert stream.getvalue() == "[" + "#" * 25 + " " * 25 + "] 50%"
    assert len(stream.getvalue().split("]")[0]) == BAR_WIDTH + 1


def test_redraws_in_place() -> None:
    stream = io.StringIO()
    tracker = ProgressTracker(stream)

    tracker.update(10, 100)
    tracker.update(100, 100)
    tracker.finish()

    output = stream.getvalue()
    assert output.count("\r") == 1
    assert output.endswith("] 100%\n")


def test_percentages_are_monotonic_and_bounded() -> None:
    stream = io.StringIO()
    tracker = ProgressTracker(stream)
    total = 997

    for transferred in [0, 13, 12, 400, 399, 997, 500, 1200]:
        tracker.update(transferred, total)

    seen = rendered_percentages(stream)
    assert seen == sorted(seen)
    assert all(0 <= p <= 100 for p in seen)
    assert seen[-1] == 100


def test_zero_length_is_complete() -> None:
    stream = io.StringIO()
    tracker = ProgressTracker(stream)

    tracker.update(0, 0)

    assert rendered_percentages(stream) == [100]


def test_unknown_total_renders_nothing() -> None:
    stream = io.StringIO()
    tracker = ProgressTracker(stream)

    tracker.update(1024, None)
    tracker.finish()

    assert stream.getvalue() == ""
    assert not tracker.rendered


def test_copy_stream_reports_cumulative_bytes() -> None:
    src = io.BytesIO(b"0123456789")
    dst = io.BytesIO()
    calls: list[tuple[int, int | None]] = []

    copied = copy_stream(src, dst, 10, lambda done, total: calls.append((done, total)), chunk_size=4)

    assert copied == 10
    assert dst.getvalue() == b"0123456789"
    assert calls == [(4, 10), (8, 10), (10, 10)]


def test_copy_stream_zero_length_reports_completion() -> None:
    calls: list[tuple[int, int | None]] = []

    copied = copy_stream(io.BytesIO(b""), io.BytesIO(), 0, lambda d, t: calls.append((d, t)))

    assert copied == 0
    assert calls == [(0, 0)]
