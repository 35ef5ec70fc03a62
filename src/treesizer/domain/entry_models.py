from __future__ import annotations

"""
Directory Tree Entry Models.

Provides the recursive node types produced by the tree builder. A tree is
made of FileEntry leaves and FolderEntry branches; every folder owns its
children exclusively and the whole structure is immutable once built.
"""

import os
from dataclasses import dataclass, replace
from typing import Tuple, Union

from treesizer.domain.constants import BINARY_UNITS, MAX_BYTES

# -----------------------------------------------------------------------------
# SIZE VALUE OBJECT
# -----------------------------------------------------------------------------

@dataclass(frozen=True, order=True)
class Byteable:
    """
    Unsigned 64-bit byte count.

    Attributes:
        value: Number of bytes.
    """
    value: int = 0

    def __post_init__(self) -> None:
        if not isinstance(self.value, int) or isinstance(self.value, bool):
            raise TypeError(f"Byte count must be an int, got {type(self.value).__name__}")
        if self.value < 0 or self.value > MAX_BYTES:
            raise ValueError(f"Byte count out of range: {self.value}")

    def __add__(self, other: Byteable) -> Byteable:
        if not isinstance(other, Byteable):
            return NotImplemented
        total = self.value + other.value
        if total > MAX_BYTES:
            raise OverflowError("Byte count exceeds 64-bit range")
        return Byteable(total)

    def __int__(self) -> int:
        return self.value

    def human(self) -> str:
        """
        Render the count with binary units (B, KiB, MiB, ...).

        Returns:
            str: e.g. "512 B" or "1.00 MiB".
        """
        if self.value < 1024:
            return f"{self.value} B"
        size = float(self.value)
        for unit in BINARY_UNITS:
            if size < 1024.0 or unit == BINARY_UNITS[-1]:
                return f"{size:.2f} {unit}"
            size /= 1024.0
        return f"{size:.2f} {BINARY_UNITS[-1]}"

    def __str__(self) -> str:
        return self.human()

# -----------------------------------------------------------------------------
# STRUCTURAL COMPONENTS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class FileEntry:
    """
    Represents a leaf entry (file) in the directory tree.

    Attributes:
        path: Filesystem path of the file, treated as an opaque identifier.
        len: Byte length reported by metadata when the file was read.
        is_hidden: Result of the hidden predicate for this file.
    """
    path: str
    len: Byteable
    is_hidden: bool = False

    def is_dir(self) -> bool:
        return False

    def name(self) -> str:
        return _base_name(self.path)

    def children(self) -> Tuple[Entry, ...]:
        return ()


@dataclass(frozen=True)
class FolderEntry:
    """
    Represents a directory node and its owned subtree.

    Attributes:
        path: Filesystem path of the directory.
        len: Aggregate byte count of all descendant files.
        entries: Children in discovery order.
        is_root: True only for the node handed back to the original caller.
        is_hidden: Hidden flag of the directory itself, not of its children.
    """
    path: str
    len: Byteable = Byteable(0)
    entries: Tuple[Entry, ...] = ()
    is_root: bool = False
    is_hidden: bool = False

    def __post_init__(self) -> None:
        # Accept any sequence but always store a tuple
        if not isinstance(self.entries, tuple):
            object.__setattr__(self, "entries", tuple(self.entries))

    def is_dir(self) -> bool:
        return True

    def name(self) -> str:
        """Directory name with a trailing separator, e.g. 'test/'."""
        return _base_name(self.path) + os.sep

    def children(self) -> Tuple[Entry, ...]:
        return self.entries

    def rollup(self) -> FolderEntry:
        """
        Re-derive the folder size from its direct children.

        Children folders are expected to be rolled up already, which holds
        for every folder built bottom-up by the tree builder.

        Returns:
            FolderEntry: A copy whose len is the sum of the children's len.
        """
        total = Byteable(0)
        for child in self.entries:
            total = total + child.len
        return replace(self, len=total)


Entry = Union[FileEntry, FolderEntry]

# -----------------------------------------------------------------------------
# HELPERS
# -----------------------------------------------------------------------------

def _base_name(path: str) -> str:
    stripped = path.rstrip("/\\")
    if not stripped:
        return path
    return os.path.basename(stripped) or stripped
