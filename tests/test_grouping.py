"""Unit tests for name grouping and suffix filtering."""

from __future__ import annotations

from builders import build_item

from trdup.analyze.grouping import filter_by_suffix, group_by_name


def test_group_by_name_keeps_insertion_order() -> None:
    items = [
        build_item(1, "B"),
        build_item(2, "A"),
        build_item(3, "B"),
    ]
    groups = group_by_name(items)
    assert list(groups) == ["B", "A"]
    assert [i.id for i in groups["B"]] == [1, 3]


def test_group_by_name_members_share_name_and_cover_input() -> None:
    """Every named item lands in exactly one group with its own name."""
    items = [
        build_item(1, "A"),
        build_item(2, None),
        build_item(3, ""),
        build_item(4, "B"),
        build_item(5, "A"),
    ]
    groups = group_by_name(items)
    for name, members in groups.items():
        assert {m.name for m in members} == {name}
    grouped = [m for members in groups.values() for m in members]
    assert sorted(m.id for m in grouped) == [1, 4, 5]


def test_group_by_name_drops_items_without_size() -> None:
    items = [build_item(1, "A", size_mb=None), build_item(2, "A")]
    assert [i.id for i in group_by_name(items)["A"]] == [2]


def test_group_by_name_keeps_repeated_ids() -> None:
    item = build_item(7, "A")
    assert group_by_name([item, item])["A"] == [item, item]


def test_group_by_name_empty_input() -> None:
    assert group_by_name([]) == {}


def test_filter_by_suffix_matches_any_suffix() -> None:
    items = [
        build_item(1, "Show.ADWeb"),
        build_item(2, "Other.HHWEB"),
        build_item(3, "Movie.BluRay"),
        build_item(4, None),
    ]
    kept = filter_by_suffix(items, ["ADWeb", " HHWEB ", ""])
    assert [i.id for i in kept] == [1, 2]


def test_filter_by_suffix_without_suffixes_keeps_everything() -> None:
    items = [build_item(1, "Show.ADWeb"), build_item(2, None)]
    assert filter_by_suffix(items, []) == items
    assert filter_by_suffix(items, ["", "  "]) == items
