from dataclasses import dataclass, field
from enum import Enum
import math
from typing import List, Optional


@dataclass
class Track:
    id: str
    title: str
    artist: str
    slug: str
    created_at: str
    updated_at: str
    album: Optional[str] = None
    genres: List[str] = field(default_factory=list)
    cover_image: Optional[str] = None
    audio_file: Optional[str] = None


@dataclass
class TrackDraft:
    """
    Everything a new track needs except its id and timestamps.

    The slug is computed by the caller (see core.slug.create_slug); the
    repository stores whatever it is given.
    """

    title: str
    artist: str
    slug: str
    album: Optional[str] = None
    genres: List[str] = field(default_factory=list)
    cover_image: Optional[str] = None
    audio_file: Optional[str] = None


class SortField(str, Enum):
    TITLE = "title"
    ARTIST = "artist"
    ALBUM = "album"
    CREATED_AT = "createdAt"


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"


@dataclass
class TrackQuery:
    """
    Filter / sort / pagination parameters for TrackRepository.list.

    - search : case-insensitive substring of title, artist or album
    - genre  : exact member of the track's genres
    - artist : case-insensitive substring of the artist only
    - sort   : None means newest first (createdAt descending)
    """

    search: Optional[str] = None
    genre: Optional[str] = None
    artist: Optional[str] = None
    sort: Optional[SortField] = None
    order: SortOrder = SortOrder.ASC
    page: int = 1
    limit: int = 10


@dataclass
class TrackPage:
    tracks: List[Track]
    total: int

    def total_pages(self, limit: int) -> int:
        return math.ceil(self.total / limit) if limit > 0 else 0


@dataclass
class BatchDeleteResult:
    succeeded: List[str] = field(default_factory=list)
    failed: List[str] = field(default_factory=list)
