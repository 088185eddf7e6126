import random

from trackstore.config import StorageConfig
from trackstore.core import create_slug
from trackstore.data import GenreCatalog, TrackRepository, initialize_storage, seed_database
from trackstore.data.seed import ARTISTS, TITLES, main


def test_seed_database_creates_tracks_with_catalog_genres(
    storage: StorageConfig, repository: TrackRepository
) -> None:
    initialize_storage(storage)
    catalog = GenreCatalog(storage)

    created = seed_database(repository, catalog, count=12, rng=random.Random(7))

    assert len(created) == 12
    assert repository.list().total == 12
    for track in created:
        assert track.title in TITLES
        assert track.artist in ARTISTS
        assert track.slug == create_slug(track.title)
        assert 1 <= len(track.genres) <= 3
        assert set(track.genres) <= set(catalog.list())
        assert track.cover_image.startswith("https://picsum.photos/seed/")


def test_seed_main_uses_environment_storage(tmp_path, monkeypatch) -> None:
    storage = StorageConfig.under(tmp_path)
    monkeypatch.setattr(
        "trackstore.data.seed.StorageConfig.from_env",
        classmethod(lambda cls: storage),
    )

    assert main(["3"]) == 0
    assert TrackRepository(storage).list().total == 3
