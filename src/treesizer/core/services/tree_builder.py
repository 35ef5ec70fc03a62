from __future__ import annotations

"""
Directory Tree Builder.

Walks a directory hierarchy through a FileSystemPort and materializes it as
an immutable tree of FileEntry / FolderEntry nodes with sizes rolled up and
hidden flags set. Every filesystem failure is recovered locally; callers
always receive a well-formed tree whose root is a folder.
"""

import logging
import os
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Iterator, List, Optional, Union

from treesizer.core.hidden import HiddenPredicate, attribute_hidden
from treesizer.core.ports import EntryInspectionError, FileSystemPort
from treesizer.domain.entry_models import Byteable, Entry, FileEntry, FolderEntry
from treesizer.domain.scan_models import (
    OP_CANCELLED,
    OP_GET_METADATA,
    OP_INSPECT_ENTRY,
    OP_LIST_DIRECTORY,
    DirectoryChild,
    ScanDiagnostic,
    ScanResult,
)

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def build_tree(
        root_path: Union[str, os.PathLike],
        port: FileSystemPort,
        *,
        is_hidden: Optional[HiddenPredicate] = None,
        cancel: Optional[threading.Event] = None,
        max_workers: int = 1,
) -> FolderEntry:
    """
    Build the size-annotated tree rooted at root_path.

    Never fails on filesystem errors: an unreadable root produces an empty
    root folder with a size of zero.

    Args:
        root_path: Directory to scan.
        port: Filesystem access implementation.
        is_hidden: Hidden predicate; defaults to the attribute-bit test.
        cancel: Optional event that stops descending once set.
        max_workers: Values above 1 scan the root's subdirectories in parallel.

    Returns:
        FolderEntry: The root folder (is_root is True).
    """
    return scan_tree(
        root_path, port, is_hidden=is_hidden, cancel=cancel, max_workers=max_workers
    ).root


def scan_tree(
        root_path: Union[str, os.PathLike],
        port: FileSystemPort,
        *,
        is_hidden: Optional[HiddenPredicate] = None,
        cancel: Optional[threading.Event] = None,
        max_workers: int = 1,
) -> ScanResult:
    """
    Build the tree and collect a diagnostic for every recovered failure.

    The returned tree is identical to the one build_tree produces. With
    max_workers above 1 the port must be safe for concurrent use and the
    diagnostics order follows completion order rather than walk order.

    Args:
        root_path: Directory to scan.
        port: Filesystem access implementation.
        is_hidden: Hidden predicate; defaults to the attribute-bit test.
        cancel: Optional event that stops descending once set.
        max_workers: Values above 1 scan the root's subdirectories in parallel.

    Returns:
        ScanResult: Root folder, diagnostics and cancellation flag.

    Raises:
        TypeError: If port is not a FileSystemPort.
    """
    if not isinstance(port, FileSystemPort):
        raise TypeError(f"Expected a FileSystemPort, got {type(port).__name__}")

    root = os.fspath(root_path)
    ctx = _ScanContext(port, is_hidden or attribute_hidden, cancel)
    logger.info(f"Scanning directory tree: {root}")

    if max_workers > 1:
        with ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="treesizer") as executor:
            tree = _populate_tree(ctx, root, True, executor)
    else:
        tree = _populate_tree(ctx, root, True)

    diagnostics = ctx.snapshot()
    cancelled = any(d.operation == OP_CANCELLED for d in diagnostics)
    logger.info(
        f"Scan finished: {tree.len.human()} in {root} "
        f"({len(diagnostics)} recovered errors{', cancelled' if cancelled else ''})"
    )
    return ScanResult(root=tree, diagnostics=diagnostics, cancelled=cancelled)

# -----------------------------------------------------------------------------
# TRAVERSAL
# -----------------------------------------------------------------------------

class _ScanContext:
    """Per-scan collaborators plus the lock-protected diagnostics list."""

    def __init__(
            self,
            port: FileSystemPort,
            is_hidden: HiddenPredicate,
            cancel: Optional[threading.Event],
    ) -> None:
        self.port = port
        self.is_hidden = is_hidden
        self.cancel = cancel
        self._diagnostics: List[ScanDiagnostic] = []
        self._lock = threading.Lock()

    def cancelled(self) -> bool:
        return self.cancel is not None and self.cancel.is_set()

    def record(self, path: str, operation: str, error: object) -> None:
        logger.debug(f"Recovered {operation} failure at '{path}': {error}")
        with self._lock:
            self._diagnostics.append(ScanDiagnostic(path=path, operation=operation, error=str(error)))

    def snapshot(self) -> List[ScanDiagnostic]:
        with self._lock:
            return list(self._diagnostics)


class _OpenFolder:
    """A directory whose listing has been read but whose children are still pending."""

    __slots__ = ("path", "is_root", "pending", "slots")

    def __init__(
            self,
            path: str,
            is_root: bool,
            listing: List[Union[DirectoryChild, EntryInspectionError]],
    ) -> None:
        self.path = path
        self.is_root = is_root
        self.pending: Iterator[Union[DirectoryChild, EntryInspectionError]] = iter(listing)
        self.slots: List[Union[Entry, Future]] = []


def _populate_tree(
        ctx: _ScanContext,
        current_dir: str,
        is_root: bool,
        executor: Optional[ThreadPoolExecutor] = None,
) -> FolderEntry:
    """
    Depth-first construction of one folder node and its subtree.

    Descent uses an explicit stack so that arbitrarily deep trees never hit
    the interpreter recursion limit. Folders are built post-order, once all
    of their children are resolved.

    The executor, when given, only fans out this folder's direct
    subdirectories; nested levels run sequentially on the worker.
    """
    opened = _open_folder(ctx, current_dir, is_root)
    if isinstance(opened, FolderEntry):
        return opened

    stack: List[_OpenFolder] = [opened]
    while True:
        frame = stack[-1]
        child = next(frame.pending, None)

        if child is None:
            stack.pop()
            folder = _close_folder(ctx, frame)
            if not stack:
                return folder
            stack[-1].slots.append(folder)
            continue

        if isinstance(child, EntryInspectionError):
            ctx.record(child.path, OP_INSPECT_ENTRY, child)
            continue

        if child.is_dir:
            if executor is not None and frame is opened:
                frame.slots.append(executor.submit(_populate_tree, ctx, child.path, False))
                continue
            sub = _open_folder(ctx, child.path, False)
            if isinstance(sub, FolderEntry):
                frame.slots.append(sub)
            else:
                stack.append(sub)
            continue

        # Files whose metadata cannot be read are left out of the tree
        try:
            metadata = ctx.port.get_metadata(child.path)
        except OSError as e:
            ctx.record(child.path, OP_GET_METADATA, e)
            continue

        frame.slots.append(FileEntry(
            path=child.path,
            len=Byteable(metadata.len),
            is_hidden=ctx.is_hidden(child.path, metadata.file_attributes),
        ))


def _open_folder(ctx: _ScanContext, path: str, is_root: bool) -> Union[FolderEntry, _OpenFolder]:
    """Read a directory listing, or return the finished empty folder when that is not possible."""
    if ctx.cancelled():
        ctx.record(path, OP_CANCELLED, "Scan cancelled before directory was read")
        return FolderEntry(path=path, is_root=is_root)

    # Unreadable listing: empty folder, not hidden
    try:
        listing = list(ctx.port.iter_directory(path))
    except OSError as e:
        ctx.record(path, OP_LIST_DIRECTORY, e)
        return FolderEntry(path=path, is_root=is_root, is_hidden=False)

    return _OpenFolder(path, is_root, listing)


def _close_folder(ctx: _ScanContext, frame: _OpenFolder) -> FolderEntry:
    total = Byteable(0)
    entries: List[Entry] = []
    for slot in frame.slots:
        entry = slot.result() if isinstance(slot, Future) else slot
        total = total + entry.len
        entries.append(entry)

    # Own metadata only drives the hidden flag; failure means hidden
    try:
        own = ctx.port.get_metadata(frame.path)
        hidden = ctx.is_hidden(frame.path, own.file_attributes)
    except OSError as e:
        ctx.record(frame.path, OP_GET_METADATA, e)
        hidden = True

    folder = FolderEntry(
        path=frame.path,
        len=total,
        entries=tuple(entries),
        is_root=frame.is_root,
        is_hidden=hidden,
    )
    return folder.rollup()
