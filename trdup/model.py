from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

KIB = 1024


def bytes_to_mb(size: int) -> float:
    """Convert a byte count to mebibytes."""
    return size / 1024 / 1024


class SizeClass(str, Enum):
    SINGLETON = "singleton"
    ALL_EQUAL_SIZE = "all_equal_size"
    SIZE_VARIES = "size_varies"


class Verdict(str, Enum):
    ACTIONABLE = "actionable"
    SAME_SIZE_ONLY = "same_size_only"
    NO_OVERLAP = "no_overlap"
    DISTINCT_CONTENT = "distinct_content"


@dataclass(frozen=True, slots=True)
class FileEntry:
    path: str
    size: int = 0


@dataclass(frozen=True, slots=True)
class Item:
    """Snapshot of one torrent as reported by the daemon."""

    id: int
    name: str | None
    size_bytes: int | None
    files: tuple[FileEntry, ...] | None = None  # None until fetched

    @property
    def size_mb(self) -> float:
        return bytes_to_mb(self.size_bytes or 0)


@dataclass(frozen=True, slots=True)
class MatchConfig:
    """Empirical thresholds used by the classifier."""

    size_tolerance_bytes: int = KIB
    match_ratio: float = 0.5
    marker_pattern: str = r"[Ss](\d+)[Ee](\d+)"


@dataclass(frozen=True, slots=True)
class OverlapResult:
    is_true_overlap: bool
    overlap_count: int
    marker_conflict: bool = False


@dataclass(frozen=True, slots=True)
class ClassifiedGroup:
    name: str
    verdict: Verdict
    members: tuple[Item, ...]
    collection: Item | None = None
    duplicate_episodes: tuple[Item, ...] = ()
    ambiguous_episodes: tuple[Item, ...] = ()
    distinct_episodes: tuple[Item, ...] = ()
    skipped_episodes: tuple[Item, ...] = ()  # manifest unavailable
    overlaps: dict[int, OverlapResult] = field(default_factory=dict)
    episode_verdicts: dict[int, Verdict] = field(default_factory=dict)

    @property
    def has_file_overlaps(self) -> bool:
        return bool(self.duplicate_episodes or self.ambiguous_episodes)


@dataclass(slots=True)
class ScanReport:
    """Statistics accumulated while folding over classified groups."""

    processed: int = 0
    singletons: int = 0
    skipped: int = 0
    same_size_groups: int = 0
    distinct_content: int = 0
    no_overlap: int = 0
    same_size_only: int = 0
    actionable: int = 0

    def record(self, group: ClassifiedGroup) -> None:
        self.processed += 1
        self.distinct_content += len(group.distinct_episodes)
        if group.verdict is Verdict.ACTIONABLE:
            self.actionable += 1
        elif group.verdict is Verdict.NO_OVERLAP:
            self.no_overlap += 1
        elif group.collection is None:
            # size-equal name group that never reached overlap analysis
            self.same_size_groups += 1
        else:
            self.same_size_only += 1

    def record_singleton(self) -> None:
        self.processed += 1
        self.singletons += 1

    def record_skipped(self) -> None:
        self.processed += 1
        self.skipped += 1


@dataclass(slots=True)
class ScanResult:
    groups: dict[str, ClassifiedGroup]
    report: ScanReport
    config: MatchConfig = field(default_factory=MatchConfig)

    def by_verdict(self, verdict: Verdict) -> dict[str, ClassifiedGroup]:
        return {name: g for name, g in self.groups.items() if g.verdict is verdict}

    def actionable_ids(self) -> list[int]:
        """Ids of every confirmed duplicate episode across actionable groups."""
        return [
            ep.id
            for group in self.by_verdict(Verdict.ACTIONABLE).values()
            for ep in group.duplicate_episodes
        ]


class SourceError(RuntimeError):
    """The daemon could not be reached or kept failing after retries."""


class ManifestUnavailable(LookupError):
    """The file list of one item could not be retrieved."""

    def __init__(self, item_id: int, reason: str = "") -> None:
        self.item_id = item_id
        self.reason = reason
        msg = f"File list unavailable for item {item_id}"
        super().__init__(f"{msg}: {reason}" if reason else msg)
