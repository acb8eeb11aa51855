"""Shared test-data builders for trdup tests."""

from __future__ import annotations

from trdup.model import FileEntry, Item, ManifestUnavailable

MB = 1024 * 1024


def build_files(*paths: str) -> tuple[FileEntry, ...]:
    """Build a file manifest from relative paths."""
    return tuple(FileEntry(path=p) for p in paths)


def build_item(
    item_id: int,
    name: str | None = "Show.ADWeb",
    size_mb: float | None = 1500,
    *,
    size_bytes: int | None = None,
    files: tuple[FileEntry, ...] | None = None,
) -> Item:
    """Build an Item; *size_bytes* wins over *size_mb* when given."""
    if size_bytes is None and size_mb is not None:
        size_bytes = int(size_mb * MB)
    return Item(id=item_id, name=name, size_bytes=size_bytes, files=files)


class ManifestStore:
    """Fake manifest fetcher recording every id it is asked for."""

    def __init__(self, manifests: dict[int, tuple[FileEntry, ...]] | None = None) -> None:
        self.manifests = manifests or {}
        self.calls: list[int] = []

    def __call__(self, item_id: int) -> tuple[FileEntry, ...]:
        self.calls.append(item_id)
        if item_id not in self.manifests:
            raise ManifestUnavailable(item_id, "not found")
        return self.manifests[item_id]
