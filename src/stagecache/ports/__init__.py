"""Port interfaces for stagecache."""

from .cache import CachePort
from .clock import ClockPort
from .hash import HashPort
from .logger import LoggerPort
from .metrics import MetricsPort
from .tool import ToolRunnerPort
from .transfer import FetchPort, PushPort, TransferPort

__all__ = [
    "CachePort",
    "ClockPort",
    "FetchPort",
    "HashPort",
    "LoggerPort",
    "MetricsPort",
    "PushPort",
    "ToolRunnerPort",
    "TransferPort",
]
