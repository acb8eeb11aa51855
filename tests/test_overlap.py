"""Unit tests for the file-overlap analyzer."""

from __future__ import annotations

from builders import build_files

from trdup.analyze.overlap import EpisodeMarkerMatcher, basename, check_overlap, count_matches


def test_basename_strips_directories() -> None:
    assert basename("Show/Season 1/Show.S01E01.mkv") == "Show.S01E01.mkv"
    assert basename("flat.mkv") == "flat.mkv"


def test_marker_matcher_is_case_insensitive_on_letters() -> None:
    matcher = EpisodeMarkerMatcher()
    assert matcher.extract("Show.S01E02.1080p.mkv") == "S01E02"
    assert matcher.extract("show.s1e10.mkv") == "s1e10"
    assert matcher.extract("Show.Extras.mkv") is None


def test_marker_matcher_custom_pattern() -> None:
    matcher = EpisodeMarkerMatcher(r"EP\d+")
    assert matcher.extract("Show.EP07.mkv") == "EP07"


def test_count_matches_uses_containment_both_ways() -> None:
    collection = ["Show.S01E01.mkv", "Show.S01E02.1080p.mkv"]
    assert count_matches(["S01E02"], collection) == 1
    assert count_matches(["Show.S01E01.mkv.extra"], collection) == 1
    assert count_matches(["Unrelated.mkv"], collection) == 0


def test_single_episode_inside_collection() -> None:
    collection = build_files("S01E01.mkv", "S01E02.mkv", "S01E03.mkv")
    episode = build_files("S01E02.mkv")
    result = check_overlap(collection, episode)
    assert result.is_true_overlap
    assert result.overlap_count == 1
    assert not result.marker_conflict


def test_marker_conflict_wins_over_textual_match() -> None:
    """Disjoint markers reject the pairing even when names match."""
    collection = build_files("Show.S01E01.mkv", "Show")
    episode = build_files("Show.S02E01.mkv")
    result = check_overlap(collection, episode)
    assert not result.is_true_overlap
    assert result.marker_conflict
    assert result.overlap_count == 1

    collection = build_files("Show.S01E01.mkv", "Show.S02E01.mkv.part")
    episode = build_files("Show.S02E01.mkv")
    assert check_overlap(collection, episode).is_true_overlap


def test_marker_conflict_still_counts_matches() -> None:
    collection = build_files("Show.S01E01.mkv", "sample.mkv", "Show.nfo")
    episode = build_files("Show.S03E01.mkv", "sample.mkv")
    result = check_overlap(collection, episode)
    assert result.marker_conflict
    assert not result.is_true_overlap
    assert result.overlap_count == 1


def test_markers_on_one_side_only_do_not_conflict() -> None:
    collection = build_files("Show.Complete.mkv", "Show.Extras.mkv")
    episode = build_files("Show.S01E01.mkv", "Show.Extras.mkv")
    result = check_overlap(collection, episode)
    assert not result.marker_conflict
    assert result.is_true_overlap  # 1 >= floor(2 / 2)


def test_smaller_collection_is_rejected() -> None:
    collection = build_files("S01E01.mkv")
    episode = build_files("S01E01.mkv", "S01E01.srt")
    result = check_overlap(collection, episode)
    assert not result.is_true_overlap
    assert result.overlap_count == 0


def test_majority_threshold() -> None:
    collection = build_files("a.mkv", "b.mkv", "c.mkv", "d.mkv", "e.mkv")
    below = build_files("a.mkv", "x.mkv", "y.mkv", "z.mkv")
    at = build_files("a.mkv", "b.mkv", "y.mkv", "z.mkv")
    assert not check_overlap(collection, below).is_true_overlap
    assert check_overlap(collection, at).is_true_overlap


def test_custom_match_ratio() -> None:
    collection = build_files("a.mkv", "b.mkv", "c.mkv", "d.mkv")
    episode = build_files("a.mkv", "b.mkv", "x.mkv", "y.mkv")
    assert check_overlap(collection, episode, match_ratio=0.5).is_true_overlap
    assert not check_overlap(collection, episode, match_ratio=1.0).is_true_overlap


def test_repeated_analysis_is_stable() -> None:
    collection = build_files("Show.S01E01.mkv", "Show.S01E02.mkv")
    episode = build_files("Show.S01E02.mkv")
    assert check_overlap(collection, episode) == check_overlap(collection, episode)
