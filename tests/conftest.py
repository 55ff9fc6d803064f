"""Shared fixtures for stagecache tests."""

import io
from pathlib import Path
from typing import Any

import pytest

from stagecache.adapters import FsCacheAdapter, LocalLinkAdapter, Sha1Adapter, UtcClockAdapter
from stagecache.adapters.metrics import NoopMetricsAdapter
from stagecache.core.models import LogicalPath
from stagecache.core.progress import ProgressTracker
from stagecache.core.service import ProvisioningService


class RecordingLogger:
    """LoggerPort that keeps every record in memory."""

    def __init__(self) -> None:
        self.records: list[tuple[str, str, dict[str, Any]]] = []

    def debug(self, message: str, **kwargs: Any) -> None:
        self.records.append(("debug", message, kwargs))

    def info(self, message: str, **kwargs: Any) -> None:
        self.records.append(("info", message, kwargs))

    def warning(self, message: str, **kwargs: Any) -> None:
        self.records.append(("warning", message, kwargs))

    def error(self, message: str, **kwargs: Any) -> None:
        self.records.append(("error", message, kwargs))

    def log_operation(self, **kwargs: Any) -> None:
        self.records.append(("operation", kwargs["op"], kwargs))

    def messages(self, level: str) -> list[str]:
        return [message for lvl, message, _ in self.records if lvl == level]


class FakeBackend:
    """Fetch/push backend that writes fixed content and records calls."""

    def __init__(self, name: str, content: bytes = b"remote bytes") -> None:
        self.name = name
        self.content = content
        self.fetched: list[tuple[LogicalPath, Path]] = []
        self.pushed: list[tuple[Path, LogicalPath]] = []

    @property
    def calls(self) -> int:
        return len(self.fetched) + len(self.pushed)

    def fetch(self, source: LogicalPath, destination: Path, progress) -> int:
        self.fetched.append((source, destination))
        destination.write_bytes(self.content)
        progress(len(self.content), len(self.content))
        return len(self.content)

    def push(self, source: Path, destination: LogicalPath, progress) -> int:
        self.pushed.append((source, destination))
        size = source.stat().st_size
        progress(size, size)
        return size


class CountingLocalAdapter(LocalLinkAdapter):
    """LocalLinkAdapter that counts fetches."""

    def __init__(self, logger) -> None:
        super().__init__(logger)
        self.calls = 0

    def fetch(self, source, destination, progress) -> int:
        self.calls += 1
        return super().fetch(source, destination, progress)


@pytest.fixture
def logger() -> RecordingLogger:
    return RecordingLogger()


@pytest.fixture
def cache_root(tmp_path: Path) -> Path:
    return tmp_path / "cache"


@pytest.fixture
def cache(cache_root: Path, logger: RecordingLogger) -> FsCacheAdapter:
    return FsCacheAdapter(cache_root, Sha1Adapter(), logger)


@pytest.fixture
def backends(logger: RecordingLogger) -> dict[str, Any]:
    return {
        "local": CountingLocalAdapter(logger),
        "grid": FakeBackend("grid"),
        "synapse": FakeBackend("synapse"),
        "s3": FakeBackend("s3"),
        "remote": FakeBackend("remote"),
    }


@pytest.fixture
def progress_stream() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def service(
    cache: FsCacheAdapter,
    logger: RecordingLogger,
    backends: dict[str, Any],
    progress_stream: io.StringIO,
) -> ProvisioningService:
    return ProvisioningService(
        cache=cache,
        logger=logger,
        metrics=NoopMetricsAdapter(),
        clock=UtcClockAdapter(),
        progress_factory=lambda: ProgressTracker(progress_stream),
        **backends,
    )
