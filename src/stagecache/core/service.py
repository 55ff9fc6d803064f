"""Core ProvisioningService orchestration."""

import concurrent.futures
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from ..ports import (
    CachePort,
    ClockPort,
    FetchPort,
    LoggerPort,
    MetricsPort,
    PushPort,
    TransferPort,
)
from .classifier import classify, is_synapse_id
from .errors import NoBackendError, StageCacheError, TransferError
from .models import (
    S3_PREFIX,
    GridObjectPath,
    LocalPath,
    LogicalPath,
    ProvisionResult,
    TransferDescriptor,
)
from .progress import ProgressTracker


def _is_grid_object(path: LogicalPath) -> bool:
    return isinstance(path, GridObjectPath)


def _is_synapse(path: LogicalPath) -> bool:
    return is_synapse_id(path.raw)


def _is_s3(path: LogicalPath) -> bool:
    return path.raw.startswith(S3_PREFIX)


def _is_local(path: LogicalPath) -> bool:
    return isinstance(path, LocalPath)


def _any_path(path: LogicalPath) -> bool:
    return True


@dataclass(frozen=True, slots=True)
class Route:
    """A backend together with the predicate that selects it."""

    name: str
    matches: Callable[[LogicalPath], bool]
    backend: FetchPort | PushPort


class ProvisioningService:
    """Stages inputs through the hard-link cache and pushes outputs.

    Backends are optional; a path whose only matching backend is missing
    raises :class:`NoBackendError`.
    """

    def __init__(
        self,
        cache: CachePort,
        logger: LoggerPort,
        metrics: MetricsPort,
        clock: ClockPort,
        local: FetchPort | None = None,
        grid: FetchPort | None = None,
        synapse: FetchPort | None = None,
        s3: TransferPort | None = None,
        remote: TransferPort | None = None,
        progress_factory: Callable[[], ProgressTracker] = ProgressTracker,
        max_workers: int = 4,
    ):
        self.cache = cache
        self.logger = logger
        self.metrics = metrics
        self.clock = clock
        self.progress_factory = progress_factory
        self.max_workers = max_workers

        # First match wins.
        input_backends: list[tuple[str, Callable[[LogicalPath], bool], FetchPort | None]] = [
            ("grid", _is_grid_object, grid),
            ("synapse", _is_synapse, synapse),
            ("s3", _is_s3, s3),
            ("local", _is_local, local),
            ("remote", _any_path, remote),
        ]
        output_backends: list[tuple[str, Callable[[LogicalPath], bool], PushPort | None]] = [
            ("s3", _is_s3, s3),
            ("remote", _any_path, remote),
        ]
        self.input_routes = [Route(n, m, b) for n, m, b in input_backends if b is not None]
        self.output_routes = [Route(n, m, b) for n, m, b in output_backends if b is not None]

    def input_backend_for(self, path: LogicalPath) -> Route:
        """Pick the fetch backend for a classified source."""
        return self._select(self.input_routes, path, "input")

    def output_backend_for(self, path: LogicalPath) -> Route:
        """Pick the push backend for a classified destination."""
        return self._select(self.output_routes, path, "output")

    def provision_input(
        self, source: str, destination: Path | str, *, use_cache: bool = True
    ) -> ProvisionResult:
        """Stage ``source`` at ``destination``, through the cache when allowed.

        Args:
            source: Logical source path (local path, icgc: id, syn id or URL).
            destination: Local path the file should appear at.
            use_cache: When False, neither consult nor populate the cache.
        """
        start_time = self.clock.now()
        destination = Path(destination)
        logical = classify(source)

        self.logger.info(
            "Starting input provisioning",
            source=source,
            destination=str(destination),
            kind=type(logical).__name__,
        )

        try:
            destination.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise TransferError(
                f"Could not create directory for {destination}", source=source
            ) from e

        result = ProvisionResult(
            direction="input",
            source=source,
            destination=str(destination),
            backend="cache",
        )

        if use_cache:
            self.cache.ensure_root()
            if self.cache.lookup(source, destination) is not None:
                result.cache_hit = True
                result.bytes_transferred = destination.stat().st_size
                self.metrics.increment("stagecache.cache.hit")
                return self._complete(result, start_time)
            self.metrics.increment("stagecache.cache.miss")

        route = self.input_backend_for(logical)
        result.backend = route.name
        result.bytes_transferred = self._run_with_progress(
            lambda progress: route.backend.fetch(logical, destination, progress)
        )
        self.metrics.increment(f"stagecache.input.{route.name}")

        if use_cache:
            result.cached = self.cache.populate(source, destination)
            if result.cached:
                self.metrics.increment("stagecache.cache.populated")

        return self._complete(result, start_time)

    def provision_output(self, source: Path | str, destination: str) -> ProvisionResult:
        """Push the local file ``source`` to the ``destination`` URL. Never cached."""
        start_time = self.clock.now()
        source = Path(source)
        logical = classify(destination)

        self.logger.info("Starting output provisioning", source=str(source), destination=destination)

        route = self.output_backend_for(logical)
        result = ProvisionResult(
            direction="output",
            source=str(source),
            destination=destination,
            backend=route.name,
        )
        result.bytes_transferred = self._run_with_progress(
            lambda progress: route.backend.push(source, logical, progress)
        )
        self.metrics.increment(f"stagecache.output.{route.name}")

        return self._complete(result, start_time)

    def provision_inputs(
        self,
        descriptors: list[TransferDescriptor],
        max_workers: int | None = None,
        *,
        use_cache: bool = True,
    ) -> list[ProvisionResult]:
        """Stage several inputs in parallel, one independent call per file.

        Results come back in descriptor order. Every call runs to completion;
        the first failure (in descriptor order) is then re-raised.
        """
        if not descriptors:
            return []

        workers = min(max_workers or self.max_workers, len(descriptors))
        with concurrent.futures.ThreadPoolExecutor(max_workers=workers) as executor:
            futures = [
                executor.submit(
                    self.provision_input, d.source, Path(d.destination), use_cache=use_cache
                )
                for d in descriptors
            ]

        results: list[ProvisionResult] = []
        first_error: StageCacheError | None = None
        for descriptor, future in zip(descriptors, futures):
            try:
                results.append(future.result())
            except StageCacheError as e:
                self.logger.error(
                    "Failed to provision input", source=descriptor.source, error=str(e)
                )
                if first_error is None:
                    first_error = e

        if first_error is not None:
            raise first_error
        return results

    def _select(self, routes: list[Route], path: LogicalPath, direction: str) -> Route:
        for route in routes:
            if route.matches(path):
                self.logger.debug(f"Selected {direction} backend", backend=route.name, path=path.raw)
                return route
        raise NoBackendError(f"No {direction} backend available for {path.raw}")

    def _run_with_progress(self, transfer: Callable[[ProgressTracker], int]) -> int:
        tracker = self.progress_factory()
        try:
            return transfer(tracker)
        finally:
            tracker.finish()

    def _complete(self, result: ProvisionResult, start_time: Any) -> ProvisionResult:
        result.duration = (self.clock.now() - start_time).total_seconds()
        self.logger.log_operation(
            op=f"provision_{result.direction}",
            source=result.source,
            destination=result.destination,
            backend=result.backend,
            size=result.bytes_transferred,
            duration=result.duration,
            cache_hit=result.cache_hit,
        )
        self.metrics.timing(f"stagecache.{result.direction}.duration", result.duration)
        return result
