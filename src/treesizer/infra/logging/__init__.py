from __future__ import annotations

from .config import LEVEL_NAMES, LoggingConfig
from .core import (
    configure_logging,
    get_default_log_path,
    get_recent_logs,
    shutdown_logging,
)

__all__ = [
    "LEVEL_NAMES",
    "LoggingConfig",
    "configure_logging",
    "get_recent_logs",
    "get_default_log_path",
    "shutdown_logging",
]
