from __future__ import annotations

from collections.abc import Callable
from typing import Any

from trdup.model import KIB, Item, SizeClass


def sizes_equal(a: int, b: int, tolerance: int = KIB) -> bool:
    """Return True when two byte counts differ by at most *tolerance*."""
    return abs(a - b) <= tolerance


def classify_sizes(group: list[Item], tolerance: int = KIB) -> SizeClass:
    """Decide whether a name group is a collection/episode candidate.

    Every member is compared against the first one, so a group is only
    ALL_EQUAL_SIZE when nobody strays more than *tolerance* from it.
    """
    if len(group) < 2:
        return SizeClass.SINGLETON
    base = group[0].size_bytes or 0
    for item in group[1:]:
        if not sizes_equal(item.size_bytes or 0, base, tolerance):
            return SizeClass.SIZE_VARIES
    return SizeClass.ALL_EQUAL_SIZE


def by_size(item: Item) -> Any:
    return item.size_bytes or 0


def select_collection(
    group: list[Item], key: Callable[[Item], Any] = by_size
) -> tuple[Item, list[Item]]:
    """Split a group into (collection, candidate episodes).

    The group is stable-sorted by *key*, largest first; the head is assumed
    to be the collection. Pass a different *key* to change the heuristic.
    """
    ordered = sorted(group, key=key, reverse=True)
    return ordered[0], ordered[1:]
