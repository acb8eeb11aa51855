"""JSON export for scan results."""

from __future__ import annotations

import json
from dataclasses import asdict
from datetime import datetime, timezone
from pathlib import Path

from trdup.model import ClassifiedGroup, Item, ScanResult


def _item_to_dict(item: Item) -> dict:
    return {"id": item.id, "name": item.name, "size_bytes": item.size_bytes}


def group_to_dict(group: ClassifiedGroup) -> dict:
    """Convert a ClassifiedGroup to a JSON-serializable dict."""
    return {
        "name": group.name,
        "verdict": group.verdict.value,
        "collection": _item_to_dict(group.collection) if group.collection else None,
        "duplicate_episodes": [_item_to_dict(ep) for ep in group.duplicate_episodes],
        "ambiguous_episodes": [_item_to_dict(ep) for ep in group.ambiguous_episodes],
        "distinct_episodes": [_item_to_dict(ep) for ep in group.distinct_episodes],
        "skipped_episodes": [_item_to_dict(ep) for ep in group.skipped_episodes],
        "members": [_item_to_dict(m) for m in group.members],
        "overlaps": {
            str(item_id): {
                "is_true_overlap": o.is_true_overlap,
                "overlap_count": o.overlap_count,
                "marker_conflict": o.marker_conflict,
                "verdict": group.episode_verdicts[item_id].value,
            }
            for item_id, o in group.overlaps.items()
        },
    }


def result_to_dict(result: ScanResult) -> dict:
    """Convert a ScanResult to a JSON-serializable dict."""
    return {
        "schema_version": "trdup.scan.v1",
        "generated_at": datetime.now(timezone.utc).isoformat(),
        "config": asdict(result.config),
        "groups": [group_to_dict(g) for g in result.groups.values()],
        "actionable_ids": result.actionable_ids(),
        "report": asdict(result.report),
    }


def export_json(result: ScanResult, path: str | Path | None = None, pretty: bool = True) -> str:
    """Export a scan result to JSON. If path given, write to file. Always returns JSON string."""
    data = result_to_dict(result)
    indent = 2 if pretty else None
    text = json.dumps(data, indent=indent, default=str)
    if path is not None:
        p = Path(path)
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(text, encoding="utf-8")
    return text
