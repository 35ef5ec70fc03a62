from __future__ import annotations

"""
Unit tests for the Tree Analysis Helpers.
"""

from treesizer.core.analysis.tree_stats import (
    collect_stats,
    find_entry,
    iter_entries,
    largest_entries,
    root_entries,
    verify_rollup,
)
from treesizer.domain.entry_models import Byteable, FileEntry, FolderEntry


def _sample_tree() -> FolderEntry:
    docs = FolderEntry(
        path="r/docs",
        entries=(
            FileEntry("r/docs/big.pdf", Byteable(500)),
            FileEntry("r/docs/.hidden", Byteable(5), is_hidden=True),
        ),
    ).rollup()
    return FolderEntry(
        path="r",
        entries=(FileEntry("r/a.txt", Byteable(50)), docs, FileEntry("r/b.txt", Byteable(50))),
        is_root=True,
    ).rollup()


def test_iter_entries_is_preorder() -> None:
    paths = [e.path for e in iter_entries(_sample_tree())]
    assert paths == ["r", "r/a.txt", "r/docs", "r/docs/big.pdf", "r/docs/.hidden", "r/b.txt"]


def test_collect_stats() -> None:
    stats = collect_stats(_sample_tree())

    assert stats.files == 4
    assert stats.folders == 2
    assert stats.hidden == 1
    assert int(stats.total) == 605


def test_verify_rollup_flags_inconsistent_folder() -> None:
    tree = _sample_tree()
    assert verify_rollup(tree) == []

    broken = FolderEntry(path="x", len=Byteable(1), entries=(FileEntry("x/f", Byteable(2)),))
    assert verify_rollup(broken) == ["x"]


def test_root_entries() -> None:
    tree = _sample_tree()
    assert root_entries(tree) == [tree]


def test_largest_entries_orders_by_size_then_position() -> None:
    tree = _sample_tree()

    files = largest_entries(tree, limit=3)
    assert [e.path for e in files] == ["r/docs/big.pdf", "r/a.txt", "r/b.txt"]

    mixed = largest_entries(tree, limit=1, files_only=False)
    assert [e.path for e in mixed] == ["r/docs"]

    assert largest_entries(tree, limit=0) == []


def test_find_entry() -> None:
    tree = _sample_tree()
    assert find_entry(tree, "r/docs/big.pdf").len == Byteable(500)
    assert find_entry(tree, "missing") is None
