"""Standard library logging adapter."""

import logging
import sys
from typing import Any


class StdLoggerAdapter:
    """LoggerPort implementation over the ``logging`` module.

    Structured fields are rendered as ``key=value`` pairs after the message.
    """

    def __init__(self, name: str = "stagecache", level: str = "INFO"):
        self.logger = logging.getLogger(name)
        self.logger.setLevel(getattr(logging, level.upper(), logging.INFO))

        if not self.logger.handlers:
            handler = logging.StreamHandler(sys.stderr)
            handler.setFormatter(
                logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
            )
            self.logger.addHandler(handler)

    def debug(self, message: str, **kwargs: Any) -> None:
        self._log(logging.DEBUG, message, kwargs)

    def info(self, message: str, **kwargs: Any) -> None:
        self._log(logging.INFO, message, kwargs)

    def warning(self, message: str, **kwargs: Any) -> None:
        self._log(logging.WARNING, message, kwargs)

    def error(self, message: str, **kwargs: Any) -> None:
        self._log(logging.ERROR, message, kwargs)

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
        self.info(
            f"Operation {op} complete",
            source=source,
            destination=destination,
            backend=backend,
            size=size,
            duration=f"{duration:.3f}s",
            cache_hit=cache_hit,
        )

    def _log(self, level: int, message: str, fields: dict[str, Any]) -> None:
        if not self.logger.isEnabledFor(level):
            return
        if fields:
            rendered = " ".join(f"{key}={value}" for key, value in fields.items())
            message = f"{message} {rendered}"
        self.logger.log(level, message)
