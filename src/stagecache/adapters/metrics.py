"""Metrics adapters."""

import logging


class NoopMetricsAdapter:
    """MetricsPort that drops everything."""

    def increment(self, name: str, value: int = 1, tags: dict[str, str] | None = None) -> None:
        pass

    def gauge(self, name: str, value: float, tags: dict[str, str] | None = None) -> None:
        pass

    def timing(self, name: str, value: float, tags: dict[str, str] | None = None) -> None:
        pass


class LoggingMetricsAdapter:
    """MetricsPort that writes each data point to a debug log line."""

    def __init__(self, name: str = "stagecache.metrics"):
        self.logger = logging.getLogger(name)

    def increment(self, name: str, value: int = 1, tags: dict[str, str] | None = None) -> None:
        self.logger.debug("counter %s +%d %s", name, value, tags or {})

    def gauge(self, name: str, value: float, tags: dict[str, str] | None = None) -> None:
        self.logger.debug("gauge %s=%s %s", name, value, tags or {})

    def timing(self, name: str, value: float, tags: dict[str, str] | None = None) -> None:
        self.logger.debug("timing %s=%.3fs %s", name, value, tags or {})


def create_metrics(metrics_type: str) -> NoopMetricsAdapter | LoggingMetricsAdapter:
    """Pick a metrics adapter by config name."""
    if metrics_type == "noop":
        return NoopMetricsAdapter()
    if metrics_type == "logging":
        return LoggingMetricsAdapter()
    raise ValueError(f"Unknown metrics backend: {metrics_type!r}")
