"""Public façade for the trackstore.data package.

This module exposes the track repository, the audio asset manager, the genre
catalog and the storage bootstrap. Other packages should import storage
behaviour from this façade instead of the internal submodules.
"""

from .audio import AudioAssetManager, asset_name
from .genres import DEFAULT_GENRES, GenreCatalog
from .records import deserialize_track, serialize_track
from .seed import seed_database
from .storage import initialize_storage
from .tracks import TrackRepository, generate_track_id

__all__ = [
    "TrackRepository",
    "generate_track_id",
    "AudioAssetManager",
    "asset_name",
    "GenreCatalog",
    "DEFAULT_GENRES",
    "initialize_storage",
    "serialize_track",
    "deserialize_track",
    "seed_database",
]
