"""Logger port interface."""

from typing import Any, Protocol


class LoggerPort(Protocol):
    """Port for structured logging."""

    def debug(self, message: str, **kwargs: Any) -> None: ...

    def info(self, message: str, **kwargs: Any) -> None: ...

    def warning(self, message: str, **kwargs: Any) -> None: ...

    def error(self, message: str, **kwargs: Any) -> None: ...

    def log_operation(
        self,
        op: str,
        source: str,
        destination: str,
        backend: str,
        size: int,
        duration: float,
        cache_hit: bool,
    ) -> None:
        """Log a completed provisioning operation."""
        ...
