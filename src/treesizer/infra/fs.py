from __future__ import annotations

"""
FileSystem Infrastructure Layer.

Provides the local-disk implementation of the FileSystemPort together with
cross-platform path helpers. Acts as an abstraction over the 'os' module to
ensure uniform behavior across Windows and Unix-like systems.
"""

import os
from typing import Iterator, List, Optional, Tuple, Union

from treesizer.core.ports import EntryInspectionError, FileSystemPort
from treesizer.domain.scan_models import DirectoryChild, Metadata

# -----------------------------------------------------------------------------
# GLOBAL CONSTANTS
# -----------------------------------------------------------------------------

APP_DIR_NAME = "Treesizer"
UNIX_APP_DIR_NAME = ".treesizer"

# -----------------------------------------------------------------------------
# LOCAL FILESYSTEM PORT
# -----------------------------------------------------------------------------

class LocalFileSystem(FileSystemPort):
    """
    FileSystemPort backed by os.scandir and os.stat.

    Symbolic links are never followed: a link is reported as a file and
    measured by its own lstat size, so link cycles cannot occur. Attribute
    bits come from st_file_attributes on Windows and are 0 elsewhere.
    Instances hold no state and are safe to share between threads.
    """

    def list_directory(self, path: str) -> List[DirectoryChild]:
        children: List[DirectoryChild] = []
        for child in self.iter_directory(path):
            if isinstance(child, EntryInspectionError):
                raise child
            children.append(child)
        return children

    def iter_directory(self, path: str) -> Iterator[Union[DirectoryChild, EntryInspectionError]]:
        # scandir errors surface here, before the first child is produced
        with os.scandir(path) as it:
            entries = list(it)
        return self._classify(entries)

    def get_metadata(self, path: str) -> Metadata:
        st = os.stat(path, follow_symlinks=False)
        return Metadata(
            len=int(st.st_size),
            file_attributes=int(getattr(st, "st_file_attributes", 0)),
        )

    @staticmethod
    def _classify(entries: List[os.DirEntry]) -> Iterator[Union[DirectoryChild, EntryInspectionError]]:
        for de in entries:
            try:
                is_dir = de.is_dir(follow_symlinks=False)
            except OSError as e:
                yield EntryInspectionError(de.path, f"Cannot determine type of '{de.path}': {e}")
                continue
            yield DirectoryChild(path=de.path, is_dir=is_dir)

# -----------------------------------------------------------------------------
# PATH RESOLUTION API
# -----------------------------------------------------------------------------

def get_user_data_dir() -> str:
    """
    Resolve the standard OS-specific directory for persistent application data.

    Automatically creates the hierarchy if it does not exist.
    Standards:
    - Windows: %LOCALAPPDATA%/Treesizer
    - Linux/Mac: ~/.treesizer

    Returns:
        str: Absolute path to the application data directory.
    """
    path: str = ""

    # Windows specific resolution
    if os.name == "nt":
        base = os.environ.get("LOCALAPPDATA") or os.environ.get("APPDATA")
        if base:
            path = os.path.join(base, APP_DIR_NAME)

    # Posix fallback (Linux/Mac)
    if not path:
        home = os.path.expanduser("~")
        path = os.path.join(home, UNIX_APP_DIR_NAME)

    # Idempotent directory creation
    try:
        os.makedirs(path, exist_ok=True)
    except OSError:
        pass

    return os.path.abspath(path)


def normalize_path(path: Optional[str], fallback: str) -> str:
    """
    Normalize a directory path string into an absolute filesystem path.

    Handles environment variable expansion ($VAR/%VAR%) and user home
    shortcuts (~/). Reverts to fallback if the input is empty.

    Args:
        path: Raw input path string.
        fallback: Default path to use if the input is blank.

    Returns:
        str: Normalized absolute path.
    """
    p = (path or "").strip()
    if not p:
        p = fallback
    p = os.path.expandvars(os.path.expanduser(p))
    return os.path.abspath(p)


def safe_mkdir(path: str) -> Tuple[bool, Optional[str]]:
    """
    Attempt to recursively create a directory structure safely.

    Args:
        path: Target directory path.

    Returns:
        Tuple[bool, Optional[str]]: (Success flag, Error message if applicable).
    """
    try:
        os.makedirs(path, exist_ok=True)
        return True, None
    except OSError as e:
        return False, str(e)
