from __future__ import annotations

"""
Hidden Entry Detection.

Provides the predicates the tree builder uses to flag hidden files and
directories. The default test inspects the platform attribute bitmask;
alternate conventions plug in without touching the traversal.
"""

import os
from typing import Callable, Dict

from treesizer.domain.constants import FILE_ATTRIBUTE_HIDDEN

# (path, attribute bitmask) -> hidden
HiddenPredicate = Callable[[str, int], bool]


def attribute_hidden(path: str, attributes: int) -> bool:
    """Hidden when the FILE_ATTRIBUTE_HIDDEN bit is set."""
    return (attributes & FILE_ATTRIBUTE_HIDDEN) == FILE_ATTRIBUTE_HIDDEN


def dotfile_hidden(path: str, attributes: int) -> bool:
    """Hidden when the final path component starts with a dot."""
    name = os.path.basename(path.rstrip("/\\"))
    return name.startswith(".") and name not in (".", "..")


def any_hidden(*predicates: HiddenPredicate) -> HiddenPredicate:
    """
    Combine predicates so that an entry is hidden if any of them says so.

    Args:
        *predicates: Predicates to evaluate in order.

    Returns:
        HiddenPredicate: The combined predicate.
    """

    def _combined(path: str, attributes: int) -> bool:
        return any(p(path, attributes) for p in predicates)

    return _combined


_PREDICATES: Dict[str, HiddenPredicate] = {
    "attribute": attribute_hidden,
    "dotfile": dotfile_hidden,
    "any": any_hidden(attribute_hidden, dotfile_hidden),
}


def get_hidden_predicate(name: str) -> HiddenPredicate:
    """
    Resolve a hidden-detection mode name to its predicate.

    Args:
        name: "attribute", "dotfile" or "any" (case-insensitive).

    Returns:
        HiddenPredicate: The matching predicate.

    Raises:
        ValueError: If the mode is unknown.
    """
    key = (name or "").strip().lower()
    try:
        return _PREDICATES[key]
    except KeyError:
        raise ValueError(f"Unknown hidden detection mode: {name!r}") from None
