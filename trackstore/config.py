from dataclasses import dataclass
import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

# Base & storage directories
DATA_DIR = os.path.abspath(os.getenv("DATA_DIR", "./data"))
TRACKS_DIR = os.path.abspath(os.getenv("TRACKS_DIR", os.path.join(DATA_DIR, "tracks")))
UPLOADS_DIR = os.path.abspath(
    os.getenv("UPLOADS_DIR", os.path.join(DATA_DIR, "uploads"))
)
GENRES_FILE = os.path.abspath(
    os.getenv("GENRES_FILE", os.path.join(DATA_DIR, "genres.json"))
)

# Uploads (10MB by default)
MAX_FILE_SIZE = int(os.getenv("MAX_FILE_SIZE", str(10 * 1024 * 1024)))
ALLOWED_AUDIO_MIME_TYPES = ["audio/mpeg", "audio/wav", "audio/mp3", "audio/x-wav"]

# Server
HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "8000"))
CORS_ORIGINS = [
    origin.strip() for origin in os.getenv("CORS_ORIGIN", "*").split(",") if origin.strip()
]

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")


@dataclass(frozen=True)
class StorageConfig:
    """
    Locations of the three storage areas.

    Each repository / manager receives one of these explicitly, so several
    independently configured instances can live in the same process.
    """

    tracks_dir: Path
    uploads_dir: Path
    genres_file: Path

    @classmethod
    def from_env(cls) -> "StorageConfig":
        return cls(
            tracks_dir=Path(TRACKS_DIR),
            uploads_dir=Path(UPLOADS_DIR),
            genres_file=Path(GENRES_FILE),
        )

    @classmethod
    def under(cls, data_dir: str | Path) -> "StorageConfig":
        """Lay out all storage areas below a single base directory."""
        base = Path(data_dir)
        return cls(
            tracks_dir=base / "tracks",
            uploads_dir=base / "uploads",
            genres_file=base / "genres.json",
        )
