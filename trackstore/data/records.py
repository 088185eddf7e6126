from datetime import datetime, timezone
from typing import Any, Dict, Optional

from trackstore.core import Track

# Track attribute -> on-disk JSON key.
FIELD_KEYS: Dict[str, str] = {
    "id": "id",
    "title": "title",
    "artist": "artist",
    "album": "album",
    "genres": "genres",
    "slug": "slug",
    "cover_image": "coverImage",
    "audio_file": "audioFile",
    "created_at": "createdAt",
    "updated_at": "updatedAt",
}

_OPTIONAL_FIELDS = {"album", "cover_image", "audio_file"}


def utc_now_iso() -> str:
    """Current UTC time as ISO 8601 with millisecond precision and a Z suffix."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def parse_timestamp(value: Any) -> Optional[datetime]:
    """Parse a stored ISO timestamp into a UTC-aware datetime, or None."""
    if not isinstance(value, str) or not value:
        return None
    try:
        dt = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def serialize_track(track: Track) -> Dict[str, Any]:
    """
    Convert a Track into the JSON document stored as `<id>.json`.

    Optional fields that are unset are omitted from the document.
    """
    payload: Dict[str, Any] = {}
    for attr, key in FIELD_KEYS.items():
        value = getattr(track, attr)
        if attr in _OPTIONAL_FIELDS and value is None:
            continue
        if attr == "genres":
            value = list(value or [])
        payload[key] = value
    return payload


def deserialize_track(data: Dict[str, Any]) -> Track:
    """
    Rebuild a Track from a stored JSON document.

    Raises KeyError / ValueError for documents that are not track records;
    scanning callers skip those.
    """
    if not isinstance(data, dict):
        raise ValueError("Track record must be a JSON object.")

    genres = data.get("genres") or []
    if not isinstance(genres, list):
        raise ValueError("Track genres must be a list.")

    return Track(
        id=str(data["id"]),
        title=data["title"],
        artist=data["artist"],
        album=data.get("album"),
        genres=list(genres),
        slug=data.get("slug", ""),
        cover_image=data.get("coverImage"),
        audio_file=data.get("audioFile"),
        created_at=data.get("createdAt", ""),
        updated_at=data.get("updatedAt", ""),
    )


def sort_value(track: Track, key: str) -> Any:
    """Value of a track for a JSON field name (e.g. "createdAt")."""
    for attr, field_key in FIELD_KEYS.items():
        if field_key == key:
            return getattr(track, attr)
    raise KeyError(key)
