"""Text report for terminal display."""

from __future__ import annotations

from collections.abc import Callable, Sequence

from trdup.model import ClassifiedGroup, FileEntry, Item, ScanResult, Verdict

_COLLECTION_FILES_SHOWN = 5
_EPISODE_FILES_SHOWN = 3

FileLister = Callable[[Item], Sequence[FileEntry] | None]


def _file_lines(files: Sequence[FileEntry] | None, limit: int, indent: str) -> list[str]:
    if not files:
        return []
    lines = []
    for i, f in enumerate(files):
        if i >= limit:
            lines.append(f"{indent}- ... and {len(files) - limit} more file(s)")
            break
        lines.append(f"{indent}- {f.path}")
    return lines


def _group_lines(
    group: ClassifiedGroup,
    episodes: Sequence[Item],
    episode_caption: str,
    list_files: FileLister | None,
) -> list[str]:
    lines = [f"  Group: {group.name}"]
    if group.collection is not None:
        col = group.collection
        lines.append(f"    Collection (kept): ID {col.id}, {col.size_mb:.2f} MB")
        if list_files is not None:
            lines.extend(_file_lines(list_files(col), _COLLECTION_FILES_SHOWN, "      "))
    lines.append(f"    {len(episodes)} {episode_caption}:")
    for i, ep in enumerate(episodes, 1):
        lines.append(f"      {i}. ID {ep.id}, {ep.size_mb:.2f} MB")
        if list_files is not None:
            lines.extend(_file_lines(list_files(ep), _EPISODE_FILES_SHOWN, "         "))
    lines.append(f"    File overlap: {group.has_file_overlaps}")
    lines.append("")
    return lines


def text_report(result: ScanResult, list_files: FileLister | None = None) -> str:
    """Generate a plain text summary report.

    When *list_files* is given it is called for collections and duplicate
    episodes to show a short preview of their files.
    """
    lines: list[str] = []

    same_size_only = {
        name: g for name, g in result.by_verdict(Verdict.SAME_SIZE_ONLY).items() if g.collection
    }
    if same_size_only:
        lines.append("-" * 60)
        lines.append(f"Same-size episodes only ({len(same_size_only)} group(s), not paused)")
        lines.append("-" * 60)
        for group in same_size_only.values():
            lines.extend(
                _group_lines(group, group.ambiguous_episodes, "same-size episode(s)", None)
            )

    actionable = result.by_verdict(Verdict.ACTIONABLE)
    lines.append("-" * 60)
    lines.append(f"Duplicate episodes ({len(actionable)} group(s))")
    lines.append("-" * 60)
    if not actionable:
        lines.append("  No collection with duplicate episodes found.")
        lines.append("")
    for group in actionable.values():
        lines.extend(
            _group_lines(group, group.duplicate_episodes, "episode(s) to pause", list_files)
        )

    report = result.report
    lines.append("=" * 60)
    lines.append("Statistics")
    lines.append("=" * 60)
    lines.append(f"  Name groups processed:         {report.processed}")
    lines.append(f"  Single items skipped:          {report.singletons}")
    lines.append(f"  Groups skipped (no file list): {report.skipped}")
    lines.append(f"  Same-size groups skipped:      {report.same_size_groups}")
    lines.append(f"  Distinct episodes skipped:     {report.distinct_content}")
    lines.append(f"  Groups without episodes:       {report.no_overlap}")
    lines.append(f"  Groups with same-size only:    {report.same_size_only}")
    lines.append(f"  Actionable groups:             {report.actionable}")
    lines.append("")

    return "\n".join(lines)
