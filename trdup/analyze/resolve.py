from __future__ import annotations

from trdup.analyze.sizing import sizes_equal
from trdup.model import KIB, ClassifiedGroup, Item, OverlapResult, Verdict


def resolve_group(
    name: str,
    members: list[Item],
    collection: Item,
    outcomes: list[tuple[Item, OverlapResult]],
    skipped: list[Item] | None = None,
    tolerance: int = KIB,
) -> ClassifiedGroup:
    """Fold per-episode overlap results into one ClassifiedGroup.

    True overlaps whose size is within *tolerance* of the collection are
    ambiguous and never actionable. Marker conflicts are kept as distinct
    content for statistics only; they don't decide the group verdict.
    """
    duplicates: list[Item] = []
    ambiguous: list[Item] = []
    distinct: list[Item] = []
    overlaps: dict[int, OverlapResult] = {}
    episode_verdicts: dict[int, Verdict] = {}
    collection_size = collection.size_bytes or 0

    for episode, result in outcomes:
        overlaps[episode.id] = result
        if result.is_true_overlap:
            if sizes_equal(episode.size_bytes or 0, collection_size, tolerance):
                ambiguous.append(episode)
                episode_verdicts[episode.id] = Verdict.SAME_SIZE_ONLY
            else:
                duplicates.append(episode)
                episode_verdicts[episode.id] = Verdict.ACTIONABLE
        elif result.marker_conflict:
            distinct.append(episode)
            episode_verdicts[episode.id] = Verdict.DISTINCT_CONTENT
        else:
            episode_verdicts[episode.id] = Verdict.NO_OVERLAP

    if duplicates:
        verdict = Verdict.ACTIONABLE
    elif ambiguous:
        verdict = Verdict.SAME_SIZE_ONLY
    else:
        verdict = Verdict.NO_OVERLAP

    return ClassifiedGroup(
        name=name,
        verdict=verdict,
        members=tuple(members),
        collection=collection,
        duplicate_episodes=tuple(duplicates),
        ambiguous_episodes=tuple(ambiguous),
        distinct_episodes=tuple(distinct),
        skipped_episodes=tuple(skipped or ()),
        overlaps=overlaps,
        episode_verdicts=episode_verdicts,
    )


def same_size_group(name: str, members: list[Item]) -> ClassifiedGroup:
    """Group whose members are all size-equal; it is never acted upon."""
    return ClassifiedGroup(name=name, verdict=Verdict.SAME_SIZE_ONLY, members=tuple(members))
