"""Duplicate torrent classification."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Sequence
from typing import Any

from trdup.analyze.explain import explain_group
from trdup.analyze.grouping import filter_by_suffix, group_by_name
from trdup.analyze.overlap import EpisodeMarkerMatcher, MarkerMatcher, check_overlap
from trdup.analyze.resolve import resolve_group, same_size_group
from trdup.analyze.sizing import by_size, classify_sizes, select_collection, sizes_equal
from trdup.model import (
    ClassifiedGroup,
    FileEntry,
    Item,
    ManifestUnavailable,
    MatchConfig,
    OverlapResult,
    ScanReport,
    ScanResult,
    SizeClass,
)

log = logging.getLogger(__name__)

__all__ = [
    "filter_by_suffix",
    "group_by_name",
    "sizes_equal",
    "classify_sizes",
    "select_collection",
    "check_overlap",
    "resolve_group",
    "explain_group",
    "classify_group",
    "classify_items",
]

FetchManifest = Callable[[int], Sequence[FileEntry]]


def _manifest(item: Item, fetch_manifest: FetchManifest) -> Sequence[FileEntry]:
    if item.files is not None:
        return item.files
    return fetch_manifest(item.id)


def classify_group(
    name: str,
    group: list[Item],
    fetch_manifest: FetchManifest,
    config: MatchConfig,
    *,
    matcher: MarkerMatcher | None = None,
    collection_key: Callable[[Item], Any] = by_size,
) -> ClassifiedGroup | None:
    """Classify one size-varying name group.

    Returns None when the collection's manifest can't be fetched, since no
    overlap can be established without it.
    """
    matcher = matcher or EpisodeMarkerMatcher(config.marker_pattern)
    collection, candidates = select_collection(group, key=collection_key)
    try:
        collection_files = _manifest(collection, fetch_manifest)
    except ManifestUnavailable:
        log.warning(
            "Skipping %r: collection %d has no file list", name, collection.id, exc_info=True
        )
        return None

    outcomes: list[tuple[Item, OverlapResult]] = []
    skipped: list[Item] = []
    for episode in candidates:
        try:
            episode_files = _manifest(episode, fetch_manifest)
        except ManifestUnavailable:
            log.warning("Ignoring episode %d of %r: no file list", episode.id, name, exc_info=True)
            skipped.append(episode)
            continue
        result = check_overlap(
            collection_files,
            episode_files,
            matcher=matcher,
            match_ratio=config.match_ratio,
        )
        if result.marker_conflict:
            log.info(
                "%r: items %d and %d look like different episodes (%d overlapping files)",
                name,
                collection.id,
                episode.id,
                result.overlap_count,
            )
        outcomes.append((episode, result))

    return resolve_group(
        name,
        group,
        collection,
        outcomes,
        skipped=skipped,
        tolerance=config.size_tolerance_bytes,
    )


def classify_items(
    items: Iterable[Item],
    fetch_manifest: FetchManifest,
    config: MatchConfig | None = None,
    *,
    matcher: MarkerMatcher | None = None,
    collection_key: Callable[[Item], Any] = by_size,
) -> ScanResult:
    """Run the full classification pipeline and return a ScanResult.

    *fetch_manifest* is only called for items whose ``files`` is None, one
    item at a time.
    """
    config = config or MatchConfig()
    matcher = matcher or EpisodeMarkerMatcher(config.marker_pattern)
    report = ScanReport()
    groups: dict[str, ClassifiedGroup] = {}

    for name, group in group_by_name(items).items():
        size_class = classify_sizes(group, config.size_tolerance_bytes)

        if size_class is SizeClass.SINGLETON:
            log.debug("Skipping single item %r", name)
            report.record_singleton()
            continue

        if size_class is SizeClass.ALL_EQUAL_SIZE:
            log.info("Skipping %r: all %d items have the same size", name, len(group))
            classified = same_size_group(name, group)
        else:
            classified = classify_group(
                name,
                group,
                fetch_manifest,
                config,
                matcher=matcher,
                collection_key=collection_key,
            )
            if classified is None:
                report.record_skipped()
                continue

        groups[name] = classified
        report.record(classified)

    log.debug("Classified %d name group(s): %s", report.processed, report)
    return ScanResult(groups=groups, report=report, config=config)
