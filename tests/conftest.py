import pytest
from builders import ManifestStore, build_files, build_item

from trdup.model import Item


@pytest.fixture
def season_files():
    """Manifest of a three-episode season pack."""
    return build_files(
        "Show.ADWeb/Show.S01E01.mkv",
        "Show.ADWeb/Show.S01E02.mkv",
        "Show.ADWeb/Show.S01E03.mkv",
    )


@pytest.fixture
def collection_and_episode(season_files) -> tuple[list[Item], ManifestStore]:
    """A 5000 MB collection and a 1500 MB single episode sharing one name."""
    items = [build_item(1, size_mb=5000), build_item(2, size_mb=1500)]
    store = ManifestStore(
        {
            1: season_files,
            2: build_files("Show.S01E02.mkv"),
        }
    )
    return items, store
