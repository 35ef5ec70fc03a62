from __future__ import annotations

"""
Logging Configuration Models.

Holds the level vocabulary accepted by the scan settings and the immutable
LoggingConfig consumed by configure_logging.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

# Level names accepted in the log_level setting, case-insensitively
LEVEL_NAMES: Tuple[str, ...] = ("DEBUG", "INFO", "WARNING", "WARN", "ERROR", "CRITICAL")

_LEVEL_MAP: Dict[str, int] = {name: logging.getLevelName(name) for name in LEVEL_NAMES}


@dataclass(frozen=True)
class LoggingConfig:
    """
    Logging settings for a scan session.

    Attributes:
        level: Minimum severity level to capture.
        console: Mirror records to stderr.
        log_file: Optional path of the rotating log file.
        max_bytes: Size at which the log file rotates.
        backup_count: Rotated files kept next to the active one.
        fmt: Record layout shared by the console and the file.
        datefmt: Timestamp layout.
    """
    level: str = "INFO"
    console: bool = True
    log_file: Optional[str] = None

    max_bytes: int = 2 * 1024 * 1024
    backup_count: int = 3

    fmt: str = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
    datefmt: str = "%Y-%m-%d %H:%M:%S"


def parse_level(level: Optional[str]) -> int:
    """Convert a string-based logging level to its numeric constant."""
    if not level:
        return logging.INFO
    return _LEVEL_MAP.get(str(level).strip().upper(), logging.INFO)
