from __future__ import annotations

"""
Scan Domain Data Models.

Defines the Data Transfer Objects exchanged across the filesystem port and
the structures used to report recovered failures back to the caller.
"""

from dataclasses import dataclass, field
from typing import List

from treesizer.domain.entry_models import FolderEntry

# -----------------------------------------------------------------------------
# PORT PAYLOADS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class DirectoryChild:
    """
    One immediate child reported by a directory listing.

    Attributes:
        path: Full path of the child.
        is_dir: Whether the child is itself a directory.
    """
    path: str
    is_dir: bool


@dataclass(frozen=True)
class Metadata:
    """
    Size and attribute information for a single path.

    Attributes:
        len: Size in bytes.
        file_attributes: Raw platform attribute bitmask (0 when unsupported).
    """
    len: int
    file_attributes: int = 0

# -----------------------------------------------------------------------------
# ERROR TRACKING MODELS
# -----------------------------------------------------------------------------

# Operation identifiers recorded on diagnostics
OP_LIST_DIRECTORY = "list_directory"
OP_INSPECT_ENTRY = "inspect_entry"
OP_GET_METADATA = "get_metadata"
OP_CANCELLED = "cancelled"


@dataclass(frozen=True)
class ScanDiagnostic:
    """
    Encapsulates a filesystem failure recovered during traversal.

    Attributes:
        path: Path the failing operation targeted.
        operation: One of the OP_* identifiers.
        error: Descriptive exception or error message.
    """
    path: str
    operation: str
    error: str


@dataclass(frozen=True)
class ScanResult:
    """
    Outcome of a complete traversal.

    Attributes:
        root: The root folder of the built tree.
        diagnostics: Recovered failures, in the order they occurred.
        cancelled: Whether the traversal was cut short by a cancel signal.
    """
    root: FolderEntry
    diagnostics: List[ScanDiagnostic] = field(default_factory=list)
    cancelled: bool = False

    @property
    def ok(self) -> bool:
        return not self.diagnostics
