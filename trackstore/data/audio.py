import logging
import os
from pathlib import Path
from typing import Optional

from trackstore.config import StorageConfig
from trackstore.core import (
    StorageIOError,
    Track,
    log_error,
    log_storage_failure,
    remove_file,
    write_bytes,
)

from .tracks import TrackRepository, is_safe_name

logger = logging.getLogger(__name__)


def asset_name(track_id: str, original_name: str) -> str:
    """`<track_id><extension of original_name>`, e.g. ("42", "song.mp3") -> "42.mp3"."""
    _, extension = os.path.splitext(os.path.basename(original_name or ""))
    return f"{track_id}{extension}"


class AudioAssetManager:
    """
    One audio file per track, stored under the uploads directory.

    The track's `audio_file` reference is maintained through the repository:
    it is set after the file is written and cleared after the file is removed,
    so an interruption between the two steps leaves a reference to a missing
    file rather than an unreferenced file.
    """

    def __init__(self, storage: StorageConfig, repository: TrackRepository) -> None:
        self.uploads_dir = Path(storage.uploads_dir)
        self.repository = repository

    def path_for(self, name: str) -> Optional[Path]:
        """Location of a stored asset, or None if absent or not a plain file name."""
        if not is_safe_name(name):
            return None
        path = self.uploads_dir / name
        return path if path.is_file() else None

    def save(self, track_id: str, original_name: str, data: bytes) -> str:
        """
        Write `data` as the asset of `track_id`, overwriting any previous one.

        Content type and size are not checked here; callers validate uploads
        before handing them over. Raises StorageIOError on write failure.
        """
        name = asset_name(track_id, original_name)
        if not is_safe_name(name):
            raise StorageIOError(f"Invalid asset name {name!r}.")

        path = self.uploads_dir / name
        try:
            write_bytes(path, data)
        except OSError as exc:
            raise StorageIOError(
                f"Failed to save audio file for track {track_id}: {exc}",
                path=str(path),
            ) from exc

        logger.debug("Saved %d bytes of audio for track %s as %s", len(data), track_id, name)
        return name

    def attach(self, track_id: str, original_name: str, data: bytes) -> Optional[Track]:
        """
        Save the asset, then point the track at it.

        Returns None (and writes nothing) when the track does not exist. A
        previous asset under a different name is removed once the record
        points at the new one.
        """
        track = self.repository.get_by_id(track_id)
        if track is None:
            return None
        previous = track.audio_file
        name = self.save(track_id, original_name, data)
        updated = self.repository.update(track_id, {"audio_file": name})
        if updated is not None and previous and previous != name:
            self.repository.remove_asset(track_id, previous)
        return updated

    def delete(self, track_id: str) -> bool:
        """
        Remove the track's asset, then clear its `audio_file` reference.

        Returns False when the track is missing, has no asset, or the file
        cannot be removed (including when it is already gone); the record is
        left untouched in those cases.
        """
        track = self.repository.get_by_id(track_id)
        if track is None or not track.audio_file:
            return False

        if not is_safe_name(track.audio_file):
            log_error("Track %s references an invalid audio file name.", track_id)
            return False

        try:
            if not remove_file(self.uploads_dir / track.audio_file):
                log_error("Audio file %s for track %s is missing.", track.audio_file, track_id)
                return False
        except OSError as exc:
            log_storage_failure("delete audio file of", track_id, exc)
            return False

        self.repository.update(track_id, {"audio_file": None})
        return True
