from __future__ import annotations

"""
Domain Constants.

Provides centralized access to the byte units, platform attribute bits
and configuration versioning shared by the scanning domain.
"""

from typing import Tuple

CURRENT_CONFIG_VERSION = "1.0.0"

# -----------------------------------------------------------------------------
# SIZE UNITS
# -----------------------------------------------------------------------------
KIBIBYTE = 1024
MEBIBYTE = 1024 * KIBIBYTE
MAX_BYTES = 2 ** 64 - 1

BINARY_UNITS: Tuple[str, ...] = ("B", "KiB", "MiB", "GiB", "TiB", "PiB")

# -----------------------------------------------------------------------------
# PLATFORM ATTRIBUTES
# -----------------------------------------------------------------------------

# Windows FILE_ATTRIBUTE_HIDDEN, as reported by st_file_attributes
FILE_ATTRIBUTE_HIDDEN = 0x2

HIDDEN_DETECTION_MODES: Tuple[str, ...] = ("attribute", "dotfile", "any")
