from pathlib import Path
from typing import List

from trackstore.config import StorageConfig
from trackstore.core import log_warning, read_json

DEFAULT_GENRES: List[str] = [
    "Rock",
    "Pop",
    "Hip Hop",
    "Jazz",
    "Classical",
    "Electronic",
    "R&B",
    "Country",
    "Folk",
    "Reggae",
    "Metal",
    "Blues",
    "Indie",
]


class GenreCatalog:
    """Read-only access to the genre vocabulary stored as a JSON array."""

    def __init__(self, storage: StorageConfig) -> None:
        self.genres_file = Path(storage.genres_file)

    def list(self) -> List[str]:
        """
        Return the genre names in file order.

        Any read or parse problem yields an empty list instead of an error.
        """

        def _on_error(e: Exception) -> None:
            log_warning("Genres file is corrupted; serving an empty genre list.")

        try:
            data = read_json(self.genres_file, default=None, on_error=_on_error)
        except OSError as exc:
            log_warning("Failed to read genres: %s", exc)
            return []

        if data is None:
            return []
        if not isinstance(data, list) or not all(isinstance(g, str) for g in data):
            log_warning("Genres file has invalid structure; serving an empty genre list.")
            return []
        return data
