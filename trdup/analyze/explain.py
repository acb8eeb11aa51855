from __future__ import annotations

from trdup.model import ClassifiedGroup, Item


def _fmt_item(item: Item) -> str:
    return f"ID {item.id} ({item.size_mb:.2f} MB)"


def explain_group(group: ClassifiedGroup) -> str:
    """Generate a multi-line explanation of how one name group was classified."""
    lines: list[str] = []
    lines.append(f"Group: {group.name}")
    lines.append(f"Members: {len(group.members)}")
    lines.append(f"Verdict: {group.verdict.value}")
    lines.append("")

    if group.collection is None:
        lines.append("All members have the same size; file lists were not compared.")
        for item in group.members:
            lines.append(f"  {_fmt_item(item)}")
        lines.append("")
        return "\n".join(lines)

    lines.append(f"Collection: {_fmt_item(group.collection)}")
    lines.append("")

    lines.append("Episodes:")
    for item in group.members:
        if item is group.collection:
            continue
        verdict = group.episode_verdicts.get(item.id)
        overlap = group.overlaps.get(item.id)
        if verdict is None or overlap is None:
            lines.append(f"  {_fmt_item(item)}: skipped (file list unavailable)")
            continue
        detail = f"{overlap.overlap_count} matching file(s)"
        if overlap.marker_conflict:
            detail += ", episode markers differ"
        lines.append(f"  {_fmt_item(item)}: {verdict.value} ({detail})")
    lines.append("")

    return "\n".join(lines)
