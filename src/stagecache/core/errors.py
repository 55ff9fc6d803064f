"""Core exceptions for stagecache."""


class StageCacheError(Exception):
    """Base exception for stagecache errors."""


class ConfigurationError(StageCacheError):
    """Configuration is unusable (bad file, bad value, uncreatable cache root)."""


class NoBackendError(StageCacheError):
    """No transfer backend accepts the given logical path."""


class TransferError(StageCacheError):
    """A backend failed to fetch or push a single file."""

    def __init__(self, message: str, *, backend: str = "", source: str = ""):
        super().__init__(message)
        self.backend = backend
        self.source = source


class ToolExecutionError(TransferError):
    """The external storage-grid client failed."""

    def __init__(
        self,
        message: str,
        *,
        exit_code: int | None = None,
        backend: str = "",
        source: str = "",
    ):
        super().__init__(message, backend=backend, source=source)
        self.exit_code = exit_code
