from __future__ import annotations

"""
Tree Analysis Helpers.

Read-only queries over a built entry tree: traversal, aggregate counters,
rollup verification and largest-entry lookups.
"""

import heapq
from dataclasses import dataclass
from typing import Iterator, List, Optional

from treesizer.domain.entry_models import Byteable, Entry, FolderEntry


@dataclass(frozen=True)
class TreeStats:
    """
    Aggregate counters for a tree.

    Attributes:
        files: Number of file entries.
        folders: Number of folder entries, root included.
        hidden: Number of entries flagged hidden.
        total: Size of the root folder.
    """
    files: int
    folders: int
    hidden: int
    total: Byteable


def iter_entries(root: Entry) -> Iterator[Entry]:
    """Yield every entry in pre-order, children in stored order."""
    stack: List[Entry] = [root]
    while stack:
        entry = stack.pop()
        yield entry
        stack.extend(reversed(entry.children()))


def collect_stats(root: FolderEntry) -> TreeStats:
    files = folders = hidden = 0
    for entry in iter_entries(root):
        if entry.is_dir():
            folders += 1
        else:
            files += 1
        if entry.is_hidden:
            hidden += 1
    return TreeStats(files=files, folders=folders, hidden=hidden, total=root.len)


def verify_rollup(root: Entry) -> List[str]:
    """
    Find folders whose size differs from the sum of their children.

    Args:
        root: Tree to check.

    Returns:
        List[str]: Paths of inconsistent folders, empty when the tree is sound.
    """
    broken: List[str] = []
    for entry in iter_entries(root):
        if not isinstance(entry, FolderEntry):
            continue
        expected = sum(int(child.len) for child in entry.entries)
        if int(entry.len) != expected:
            broken.append(entry.path)
    return broken


def root_entries(root: Entry) -> List[Entry]:
    """Entries flagged is_root; a tree from the builder has exactly one."""
    return [e for e in iter_entries(root) if isinstance(e, FolderEntry) and e.is_root]


def largest_entries(root: FolderEntry, limit: int = 10, files_only: bool = True) -> List[Entry]:
    """
    Return the biggest entries below root, largest first.

    Ties keep pre-order position. The root itself is never included.

    Args:
        root: Tree to inspect.
        limit: Maximum number of entries to return.
        files_only: Restrict the search to files.

    Returns:
        List[Entry]: Up to limit entries sorted by descending size.
    """
    if limit <= 0:
        return []
    candidates = (
        (int(e.len), -index, e)
        for index, e in enumerate(iter_entries(root))
        if e is not root and (not files_only or not e.is_dir())
    )
    return [item[2] for item in heapq.nlargest(limit, candidates, key=lambda t: (t[0], t[1]))]


def find_entry(root: Entry, path: str) -> Optional[Entry]:
    for entry in iter_entries(root):
        if entry.path == path:
            return entry
    return None
