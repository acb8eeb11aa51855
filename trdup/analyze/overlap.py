from __future__ import annotations

import math
import re
from collections.abc import Sequence
from typing import Protocol

from trdup.model import FileEntry, MatchConfig, OverlapResult

_DEFAULT_MARKER = MatchConfig().marker_pattern


class MarkerMatcher(Protocol):
    def extract(self, filename: str) -> str | None: ...


class EpisodeMarkerMatcher:
    """Find season/episode markers such as ``S01E02`` in file names."""

    def __init__(self, pattern: str = _DEFAULT_MARKER) -> None:
        self.regex = re.compile(pattern)

    def extract(self, filename: str) -> str | None:
        m = self.regex.search(filename)
        return m.group(0) if m else None


def basename(path: str) -> str:
    """Return the last ``/``-separated segment of *path*."""
    return path.split("/")[-1]


def _markers(names: list[str], matcher: MarkerMatcher) -> set[str]:
    found = set()
    for name in names:
        marker = matcher.extract(name)
        if marker:
            found.add(marker)
    return found


def _contains_either(a: str, b: str) -> bool:
    return a in b or b in a


def count_matches(episode_names: list[str], collection_names: list[str]) -> int:
    """Count episode names found among collection names.

    A name matches when it equals, contains or is contained by some
    collection name. Each episode name counts at most once.
    """
    count = 0
    for ep_name in episode_names:
        for col_name in collection_names:
            if _contains_either(ep_name, col_name):
                count += 1
                break
    return count


def check_overlap(
    collection_files: Sequence[FileEntry],
    episode_files: Sequence[FileEntry],
    *,
    matcher: MarkerMatcher | None = None,
    match_ratio: float = 0.5,
) -> OverlapResult:
    """Decide whether an episode's files are already part of a collection.

    Rules applied in order:
    - collection with fewer files than the episode -> rejected
    - both sides carry episode markers but none in common -> different
      episodes; matches are still counted for reporting
    - otherwise true overlap when at least ``floor(n * match_ratio)`` of the
      episode's n files are found in the collection
    """
    if len(collection_files) < len(episode_files):
        return OverlapResult(is_true_overlap=False, overlap_count=0)

    matcher = matcher or EpisodeMarkerMatcher()
    col_names = [basename(f.path) for f in collection_files]
    ep_names = [basename(f.path) for f in episode_files]

    col_markers = _markers(col_names, matcher)
    ep_markers = _markers(ep_names, matcher)
    matches = count_matches(ep_names, col_names)

    if col_markers and ep_markers and col_markers.isdisjoint(ep_markers):
        return OverlapResult(is_true_overlap=False, overlap_count=matches, marker_conflict=True)

    threshold = math.floor(len(ep_names) * match_ratio)
    return OverlapResult(is_true_overlap=matches >= threshold, overlap_count=matches)
