from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. An in-memory FileSystemPort double with per-path failure injection.
3. Shared fixtures for configuration dictionaries.
"""

import errno
import os
import sys
from typing import Any, Callable, Dict, List, Set, Tuple, Union

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)

from treesizer.core.ports import EntryInspectionError, FileSystemPort  # noqa: E402
from treesizer.domain.constants import MEBIBYTE  # noqa: E402
from treesizer.domain.scan_models import DirectoryChild, Metadata  # noqa: E402

# Attribute masks reported by the double
ATTR_DIRECTORY = 0x10
ATTR_ARCHIVE = 0x20
ATTR_HIDDEN = 0x2


# -----------------------------------------------------------------------------
# In-Memory Filesystem Double
# -----------------------------------------------------------------------------
class MockFileSystem(FileSystemPort):
    """
    Pre-programmed FileSystemPort.

    Children are reported in the order they were added. Any path can be
    made to fail on listing, on metadata, or on type inspection.
    """

    def __init__(self) -> None:
        self.listings: Dict[str, List[Union[DirectoryChild, EntryInspectionError]]] = {}
        self.metadata: Dict[str, Metadata] = {}
        self.failing_listings: Set[str] = set()
        self.failing_metadata: Set[str] = set()
        self.calls: List[Tuple[str, str]] = []

    # --- Programming API ---
    def add_dir(self, path: str, parent: str = "", attributes: int = ATTR_DIRECTORY) -> str:
        self.listings.setdefault(path, [])
        self.metadata[path] = Metadata(len=0, file_attributes=attributes)
        if parent:
            self.listings.setdefault(parent, []).append(DirectoryChild(path=path, is_dir=True))
        return path

    def add_file(self, path: str, parent: str, size: int = MEBIBYTE, attributes: int = ATTR_ARCHIVE) -> str:
        self.metadata[path] = Metadata(len=size, file_attributes=attributes)
        self.listings.setdefault(parent, []).append(DirectoryChild(path=path, is_dir=False))
        return path

    def add_uninspectable(self, path: str, parent: str) -> None:
        self.listings.setdefault(parent, []).append(EntryInspectionError(path))

    def fail_listing(self, path: str) -> None:
        self.failing_listings.add(path)

    def fail_metadata(self, path: str) -> None:
        self.failing_metadata.add(path)

    # --- FileSystemPort ---
    def list_directory(self, path: str) -> List[DirectoryChild]:
        return [c for c in self.iter_directory(path) if isinstance(c, DirectoryChild)]

    def iter_directory(self, path: str):
        self.calls.append(("list_directory", path))
        if path in self.failing_listings:
            raise PermissionError(errno.EACCES, "Permission denied", path)
        if path not in self.listings:
            raise FileNotFoundError(errno.ENOENT, "No such file or directory", path)
        return iter(list(self.listings[path]))

    def get_metadata(self, path: str) -> Metadata:
        self.calls.append(("get_metadata", path))
        if path in self.failing_metadata or path not in self.metadata:
            raise FileNotFoundError(errno.ENOENT, "No such file or directory", path)
        return self.metadata[path]


def set_expect(n_dirs: int, n_files: int) -> Tuple[str, MockFileSystem]:
    """
    Build a root with n_files 1 MiB files followed by n_dirs empty 'test' dirs.

    Returns:
        Tuple[str, MockFileSystem]: Root path and the programmed double.
    """
    fs = MockFileSystem()
    root = fs.add_dir("root")
    for i in range(n_files):
        fs.add_file(f"root/file{i}.bin", parent=root)
    for _ in range(n_dirs):
        fs.add_dir("root/test", parent=root)
    return root, fs


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def mock_fs() -> MockFileSystem:
    """An empty in-memory filesystem double."""
    return MockFileSystem()


@pytest.fixture
def expect_tree() -> Callable[[int, int], Tuple[str, MockFileSystem]]:
    """Factory fixture exposing set_expect(n_dirs, n_files)."""
    return set_expect


@pytest.fixture
def mock_config_dict() -> Dict[str, Any]:
    """
    Return a valid, complete configuration dictionary for testing.

    Reflects the structure defined in 'treesizer.domain.config'.

    Returns:
        Dict[str, Any]: A sample configuration dictionary.
    """
    return {
        "root_path": "root",
        "hidden_detection": "attribute",
        "max_workers": 1,
        "collect_diagnostics": True,
        "diagnostics_path": "",
        "log_level": "INFO",
        "log_file": "",
    }
