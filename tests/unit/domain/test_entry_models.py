from __future__ import annotations

"""
Unit tests for the Entry Domain Models.

Verifies:
1. Byteable range checks, arithmetic and human-readable rendering.
2. Immutability of frozen entries.
3. Folder rollup and shared queries across both entry variants.
"""

import dataclasses
import os

import pytest

from treesizer.domain.constants import MAX_BYTES, MEBIBYTE
from treesizer.domain.entry_models import Byteable, FileEntry, FolderEntry


def test_byteable_rejects_out_of_range_values() -> None:
    with pytest.raises(ValueError):
        Byteable(-1)
    with pytest.raises(ValueError):
        Byteable(MAX_BYTES + 1)
    with pytest.raises(TypeError):
        Byteable(1.5)


def test_byteable_addition_and_overflow() -> None:
    assert Byteable(2) + Byteable(3) == Byteable(5)
    with pytest.raises(OverflowError):
        Byteable(MAX_BYTES) + Byteable(1)


@pytest.mark.parametrize(
    "value, expected",
    [
        (0, "0 B"),
        (1023, "1023 B"),
        (1024, "1.00 KiB"),
        (MEBIBYTE, "1.00 MiB"),
        (3 * MEBIBYTE // 2, "1.50 MiB"),
        (5 * 1024 ** 4, "5.00 TiB"),
    ],
)
def test_byteable_human(value: int, expected: str) -> None:
    assert Byteable(value).human() == expected
    assert str(Byteable(value)) == expected


def test_entries_are_frozen() -> None:
    file = FileEntry(path="a/b.txt", len=Byteable(1))
    with pytest.raises(dataclasses.FrozenInstanceError):
        file.len = Byteable(2)  # type: ignore[misc]


def test_folder_stores_entries_as_tuple() -> None:
    folder = FolderEntry(path="a", entries=[FileEntry(path="a/x", len=Byteable(1))])
    assert isinstance(folder.entries, tuple)


def test_rollup_sums_direct_children() -> None:
    inner = FolderEntry(path="r/sub", entries=(FileEntry("r/sub/f", Byteable(7)),)).rollup()
    folder = FolderEntry(
        path="r",
        len=Byteable(999),
        entries=(FileEntry("r/a", Byteable(10)), inner),
        is_root=True,
        is_hidden=True,
    )

    rolled = folder.rollup()

    assert int(rolled.len) == 17
    assert rolled.is_root is True
    assert rolled.is_hidden is True
    assert rolled.entries == folder.entries
    # The original node is untouched
    assert int(folder.len) == 999


def test_shared_queries() -> None:
    file = FileEntry(path=os.path.join("root", "notes.txt"), len=Byteable(3))
    folder = FolderEntry(path=os.path.join("root", "test"), entries=(file,))

    assert file.is_dir() is False
    assert folder.is_dir() is True
    assert file.name() == "notes.txt"
    assert folder.name() == "test" + os.sep
    assert file.children() == ()
    assert folder.children() == (file,)
