import os

from trackstore.config import StorageConfig
from trackstore.core import ensure_dir, log_info, log_step, write_json

from .genres import DEFAULT_GENRES


def initialize_storage(storage: StorageConfig) -> None:
    """
    Prepare a storage area: create the tracks and uploads directories and,
    the first time only, write the default genre vocabulary.

    Errors are propagated; a service that cannot create its storage should
    not start.
    """
    log_step("Initializing storage...")
    ensure_dir(storage.tracks_dir)
    ensure_dir(storage.uploads_dir)

    if not os.path.exists(storage.genres_file):
        write_json(storage.genres_file, DEFAULT_GENRES)
        log_info("Wrote %d default genres to %s.", len(DEFAULT_GENRES), storage.genres_file)
