import json
from pathlib import Path
from typing import Any, Callable

import pytest

from trackstore.config import StorageConfig
from trackstore.data import AudioAssetManager, TrackRepository


@pytest.fixture
def storage(tmp_path: Path) -> StorageConfig:
    return StorageConfig.under(tmp_path / "data")


@pytest.fixture
def repository(storage: StorageConfig) -> TrackRepository:
    return TrackRepository(storage)


@pytest.fixture
def audio_manager(
    storage: StorageConfig, repository: TrackRepository
) -> AudioAssetManager:
    return AudioAssetManager(storage, repository)


@pytest.fixture
def write_record(storage: StorageConfig) -> Callable[..., dict]:
    """Write raw track documents straight to disk, bypassing the repository."""

    def _write(**fields: Any) -> dict:
        record = {
            "id": fields.pop("id"),
            "title": "Untitled",
            "artist": "Unknown",
            "genres": [],
            "slug": "untitled",
            "createdAt": "2024-01-01T00:00:00.000Z",
            "updatedAt": "2024-01-01T00:00:00.000Z",
        }
        record.update(fields)
        path = Path(storage.tracks_dir) / f"{record['id']}.json"
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(record), encoding="utf-8")
        return record

    return _write
