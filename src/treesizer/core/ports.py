from __future__ import annotations

"""
Filesystem Access Port.

Provides the abstract interface through which the tree builder requests
directory listings and metadata. Production code backs it with the local
operating system; tests back it with an in-memory double.
"""

from abc import ABC, abstractmethod
from typing import Iterator, List, Union

from treesizer.domain.scan_models import DirectoryChild, Metadata


class EntryInspectionError(OSError):
    """
    Reports a single listed child whose type cannot be determined.

    Yielded from iter_directory in place of one child; iteration goes on
    with the next child afterwards.
    """

    def __init__(self, path: str, reason: str = "") -> None:
        super().__init__(reason or f"Cannot inspect entry: {path}")
        self.path = path


class FileSystemPort(ABC):
    """
    Abstract capability set required by the traversal.

    Failures are signalled by raising OSError (or a subclass).
    """

    @abstractmethod
    def list_directory(self, path: str) -> List[DirectoryChild]:
        """
        List the immediate children of a directory.

        Args:
            path: Directory to list.

        Returns:
            List[DirectoryChild]: Children in enumeration order.

        Raises:
            OSError: Permission denied, path removed, not a directory.
        """
        pass

    @abstractmethod
    def get_metadata(self, path: str) -> Metadata:
        """
        Fetch size and attribute bits for a file or directory.

        Args:
            path: Target path.

        Returns:
            Metadata: Byte length and raw attribute bitmask.

        Raises:
            OSError: When the path cannot be inspected.
        """
        pass

    def iter_directory(self, path: str) -> Iterator[Union[DirectoryChild, EntryInspectionError]]:
        """
        Lazily enumerate a directory, reporting per-child failures inline.

        Implementations that can fail on a single child should override this
        and yield an EntryInspectionError for that child. Listing failures
        are raised as OSError before the first item is produced.

        Args:
            path: Directory to enumerate.

        Returns:
            Iterator over children or per-child inspection errors.
        """
        return iter(self.list_directory(path))
