"""
File-per-record storage for Track documents.

Every track lives in `<tracks_dir>/<id>.json`. There is no index: lookups by
slug and list queries read and parse every record on each call, so their
cost grows linearly with the number of stored tracks.

Error policy:
  - reads (get_by_id, get_by_slug, list) never raise; unreadable storage
    looks like "no such record" / an empty result
  - create raises StorageIOError
  - update / delete absorb StorageIOError and report None / False, so callers
    cannot tell a missing record from a failed write on those paths
"""

from dataclasses import asdict, replace
from functools import cmp_to_key
import logging
import os
from pathlib import Path
import time
import unicodedata
from typing import Any, Iterable, List, Mapping, Optional
from uuid import uuid4

from trackstore.config import StorageConfig
from trackstore.core import (
    BatchDeleteResult,
    SortOrder,
    StorageIOError,
    Track,
    TrackDraft,
    TrackPage,
    TrackQuery,
    iter_json_files,
    log_storage_failure,
    log_warning,
    read_json,
    remove_file,
    write_json,
)

from .records import (
    FIELD_KEYS,
    deserialize_track,
    parse_timestamp,
    serialize_track,
    sort_value,
    utc_now_iso,
)

logger = logging.getLogger(__name__)

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10

_IMMUTABLE_FIELDS = {"id", "created_at", "updated_at"}


def generate_track_id() -> str:
    """
    Time-ordered, collision-resistant id: epoch milliseconds followed by
    eight random hex digits.
    """
    return f"{int(time.time() * 1000)}-{uuid4().hex[:8]}"


def is_safe_name(name: Any) -> bool:
    """True if `name` is a bare file name that cannot leave its directory."""
    if not isinstance(name, str) or not name or name in (".", ".."):
        return False
    return os.path.basename(name) == name and "\\" not in name and "/" not in name


def collation_key(value: str) -> tuple:
    """Locale-style ordering: accents and case are ignored first, then used as a tiebreaker."""
    decomposed = unicodedata.normalize("NFKD", value)
    stripped = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return (stripped.casefold(), value.casefold(), value)


def _compare_text(a: Any, b: Any) -> int:
    if not isinstance(a, str) or not isinstance(b, str):
        return 0
    key_a, key_b = collation_key(a), collation_key(b)
    return (key_a > key_b) - (key_a < key_b)


def _compare_created_desc(a: Track, b: Track) -> int:
    created_a = parse_timestamp(a.created_at)
    created_b = parse_timestamp(b.created_at)
    if created_a is None or created_b is None:
        return 0
    return (created_b > created_a) - (created_b < created_a)


def _contains(value: Any, term: str) -> bool:
    return isinstance(value, str) and term in value.lower()


class TrackRepository:
    """CRUD and query access to the track records of one storage area."""

    def __init__(self, storage: StorageConfig) -> None:
        self.storage = storage
        self.tracks_dir = Path(storage.tracks_dir)
        self.uploads_dir = Path(storage.uploads_dir)

    # ---------- paths & raw records ----------

    def record_path(self, track_id: str) -> Optional[Path]:
        if not is_safe_name(track_id):
            return None
        return self.tracks_dir / f"{track_id}.json"

    def _read_record(self, path: Path) -> Optional[Track]:
        def _on_error(e: Exception) -> None:
            log_warning("Track record %s is corrupted; ignoring it.", path.name)

        try:
            data = read_json(path, default=None, on_error=_on_error)
        except OSError as exc:
            logger.debug("Could not read track record %s: %s", path, exc)
            return None

        if data is None:
            return None

        try:
            track = deserialize_track(data)
        except (KeyError, TypeError, ValueError):
            log_warning("Track record %s has an invalid structure; ignoring it.", path.name)
            return None

        # Records are addressed by file name; an embedded id must agree with it.
        if track.id != path.stem:
            log_warning(
                "Track record %s holds id %r; ignoring it.", path.name, track.id
            )
            return None
        return track

    def _write_record(self, track: Track) -> None:
        path = self.record_path(track.id)
        if path is None:
            raise StorageIOError(f"Invalid track id {track.id!r}.")
        try:
            write_json(path, serialize_track(track))
        except OSError as exc:
            raise StorageIOError(
                f"Failed to write track {track.id}: {exc}", path=str(path)
            ) from exc

    def load_all(self) -> List[Track]:
        """
        Read and parse every stored record, in directory-listing (name) order.

        A missing or unreadable tracks directory yields an empty list.
        """
        try:
            paths = list(iter_json_files(self.tracks_dir))
        except OSError as exc:
            logger.debug("Could not list tracks directory %s: %s", self.tracks_dir, exc)
            return []

        tracks: List[Track] = []
        for path in paths:
            track = self._read_record(path)
            if track is not None:
                tracks.append(track)
        return tracks

    # ---------- lookups ----------

    def get_by_id(self, track_id: str) -> Optional[Track]:
        path = self.record_path(track_id)
        if path is None:
            return None
        return self._read_record(path)

    def get_by_slug(self, slug: str) -> Optional[Track]:
        """Linear scan; the first record (in name order) with this slug wins."""
        for track in self.load_all():
            if track.slug == slug:
                return track
        return None

    def list(self, query: Optional[TrackQuery] = None) -> TrackPage:
        """
        Filter, then sort, then paginate the full record set.

        `total` is the number of records that passed the filters, before
        pagination. Pages past the end are empty.
        """
        query = query or TrackQuery()
        tracks = self.load_all()

        if query.search:
            term = query.search.lower()
            tracks = [
                t
                for t in tracks
                if _contains(t.title, term)
                or _contains(t.artist, term)
                or _contains(t.album, term)
            ]

        if query.genre:
            tracks = [t for t in tracks if query.genre in t.genres]

        if query.artist:
            term = query.artist.lower()
            tracks = [t for t in tracks if _contains(t.artist, term)]

        if query.sort:
            sort_key = getattr(query.sort, "value", query.sort)
            descending = (query.order or SortOrder.ASC) == SortOrder.DESC

            def _compare(a: Track, b: Track) -> int:
                value_a = sort_value(a, sort_key) or ""
                value_b = sort_value(b, sort_key) or ""
                if descending:
                    return _compare_text(value_b, value_a)
                return _compare_text(value_a, value_b)

            tracks = sorted(tracks, key=cmp_to_key(_compare))
        else:
            tracks = sorted(tracks, key=cmp_to_key(_compare_created_desc))

        total = len(tracks)

        page = query.page or DEFAULT_PAGE
        limit = query.limit or DEFAULT_LIMIT
        start = (page - 1) * limit
        if start < 0:
            return TrackPage(tracks=[], total=total)

        return TrackPage(tracks=tracks[start : start + limit], total=total)

    # ---------- mutations ----------

    def create(self, draft: TrackDraft) -> Track:
        """
        Persist a new track with a fresh id and created_at == updated_at.

        Raises StorageIOError if the record cannot be written.
        """
        now = utc_now_iso()
        track = Track(
            id=generate_track_id(),
            created_at=now,
            updated_at=now,
            **asdict(draft),
        )
        self._write_record(track)
        logger.debug("Created track %s (%s)", track.id, track.slug)
        return track

    def update(self, track_id: str, changes: Mapping[str, Any]) -> Optional[Track]:
        """
        Merge `changes` (Track attribute names) over the stored record and
        refresh updated_at.

        Returns None if the record does not exist or could not be written.
        The slug is stored as given; it is never recomputed here.
        """
        unknown = set(changes) - set(FIELD_KEYS)
        if unknown:
            raise ValueError(f"Unknown track fields: {sorted(unknown)}")
        immutable = set(changes) & _IMMUTABLE_FIELDS
        if immutable:
            raise ValueError(f"Track fields cannot be changed: {sorted(immutable)}")

        existing = self.get_by_id(track_id)
        if existing is None:
            return None

        updated = replace(existing, **dict(changes), updated_at=utc_now_iso())
        try:
            self._write_record(updated)
        except StorageIOError as exc:
            log_storage_failure("update", track_id, exc)
            return None
        return updated

    def delete(self, track_id: str) -> bool:
        """
        Remove a record and, best-effort, its audio asset.

        Returns False if the record does not exist or its file cannot be
        removed. A failure to remove the asset is only logged.
        """
        track = self.get_by_id(track_id)
        if track is None:
            return False

        path = self.record_path(track_id)
        try:
            if not remove_file(path):
                return False
        except OSError as exc:
            log_storage_failure("delete", track_id, exc)
            return False

        if track.audio_file:
            self.remove_asset(track.id, track.audio_file)

        return True

    def remove_asset(self, track_id: str, name: str) -> None:
        """Best-effort removal of an asset that no record references any more."""
        if not is_safe_name(name):
            log_warning(
                "Track %s references an invalid audio file name; left in place.", track_id
            )
            return
        try:
            if not remove_file(self.uploads_dir / name):
                logger.debug("Audio file %s was already gone.", name)
        except OSError as exc:
            log_warning("Failed to delete audio file %s of track %s: %s", name, track_id, exc)

    def delete_batch(self, track_ids: Iterable[str]) -> BatchDeleteResult:
        """
        Delete ids one after the other; each follows the single delete
        contract. An id listed twice is attempted twice.
        """
        result = BatchDeleteResult()
        for track_id in track_ids:
            if self.delete(track_id):
                result.succeeded.append(track_id)
            else:
                result.failed.append(track_id)
        return result
