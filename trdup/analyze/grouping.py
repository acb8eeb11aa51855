from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable

from trdup.model import Item


def group_by_name(items: Iterable[Item]) -> dict[str, list[Item]]:
    """Group items sharing an identical display name.

    Insertion order is kept both across and within groups. Items without a
    name or size are dropped; repeated ids are kept as-is.
    """
    groups: dict[str, list[Item]] = defaultdict(list)
    for item in items:
        if not item.name or item.size_bytes is None:
            continue
        groups[item.name].append(item)
    return dict(groups)


def filter_by_suffix(items: Iterable[Item], suffixes: Iterable[str]) -> list[Item]:
    """Keep items whose name ends with any of *suffixes*.

    Blank suffixes are ignored; with none left every item is kept.
    """
    wanted = tuple(s.strip() for s in suffixes if s.strip())
    if not wanted:
        return list(items)
    return [item for item in items if item.name and item.name.endswith(wanted)]
