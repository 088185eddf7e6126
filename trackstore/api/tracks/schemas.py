from typing import List, Optional

from pydantic import BaseModel

from trackstore.core import Track
from trackstore.data import serialize_track


class TrackResponse(BaseModel):
    id: str
    title: str
    artist: str
    album: Optional[str] = None
    genres: List[str]
    slug: str
    coverImage: Optional[str] = None
    audioFile: Optional[str] = None
    createdAt: str
    updatedAt: str

    @classmethod
    def from_track(cls, track: Track) -> "TrackResponse":
        return cls(**serialize_track(track))


class PaginationMeta(BaseModel):
    total: int
    page: int
    limit: int
    totalPages: int


class TrackListResponse(BaseModel):
    data: List[TrackResponse]
    meta: PaginationMeta


class CreateTrackRequest(BaseModel):
    title: str
    artist: str
    album: Optional[str] = None
    genres: List[str] = []
    coverImage: Optional[str] = None


class UpdateTrackRequest(BaseModel):
    title: Optional[str] = None
    artist: Optional[str] = None
    album: Optional[str] = None
    genres: Optional[List[str]] = None
    coverImage: Optional[str] = None


class BatchDeleteRequest(BaseModel):
    ids: List[str] = []


class BatchDeleteResponse(BaseModel):
    success: List[str]
    failed: List[str]
