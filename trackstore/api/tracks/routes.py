from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, File, HTTPException, Query, Response, UploadFile

from trackstore.api.deps import (
    get_audio_manager,
    get_max_file_size,
    get_track_repository,
)
from trackstore.config import ALLOWED_AUDIO_MIME_TYPES
from trackstore.core import SortField, SortOrder, TrackDraft, TrackQuery, create_slug
from trackstore.data import AudioAssetManager, TrackRepository

from .schemas import (
    BatchDeleteRequest,
    BatchDeleteResponse,
    CreateTrackRequest,
    PaginationMeta,
    TrackListResponse,
    TrackResponse,
    UpdateTrackRequest,
)

router = APIRouter()

# Request body key -> Track attribute
_BODY_FIELDS = {
    "title": "title",
    "artist": "artist",
    "album": "album",
    "genres": "genres",
    "coverImage": "cover_image",
}


def _not_found() -> HTTPException:
    return HTTPException(status_code=404, detail="Track not found")


def _slug_conflict() -> HTTPException:
    return HTTPException(
        status_code=409, detail="A track with this title already exists"
    )


@router.get(
    "/tracks",
    response_model=TrackListResponse,
    response_model_exclude_none=True,
)
def list_tracks(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1),
    sort: Optional[SortField] = None,
    order: SortOrder = SortOrder.ASC,
    search: Optional[str] = None,
    genre: Optional[str] = None,
    artist: Optional[str] = None,
    repository: TrackRepository = Depends(get_track_repository),
) -> TrackListResponse:
    """
    Return one page of tracks with pagination metadata.

    Filters (search, genre, artist) are combined with AND. Without `sort`,
    the newest tracks come first.
    """
    result = repository.list(
        TrackQuery(
            search=search,
            genre=genre,
            artist=artist,
            sort=sort,
            order=order,
            page=page,
            limit=limit,
        )
    )

    return TrackListResponse(
        data=[TrackResponse.from_track(t) for t in result.tracks],
        meta=PaginationMeta(
            total=result.total,
            page=page,
            limit=limit,
            totalPages=result.total_pages(limit),
        ),
    )


@router.get(
    "/tracks/{slug}",
    response_model=TrackResponse,
    response_model_exclude_none=True,
)
def get_track(
    slug: str,
    repository: TrackRepository = Depends(get_track_repository),
) -> TrackResponse:
    track = repository.get_by_slug(slug)
    if track is None:
        raise _not_found()
    return TrackResponse.from_track(track)


@router.post(
    "/tracks",
    status_code=201,
    response_model=TrackResponse,
    response_model_exclude_none=True,
)
def create_track(
    body: CreateTrackRequest,
    repository: TrackRepository = Depends(get_track_repository),
) -> TrackResponse:
    """
    Create a track. The slug is derived from the title and must not be used
    by another track yet.
    """
    if not body.title.strip() or not body.artist.strip():
        raise HTTPException(status_code=400, detail="Title and artist are required")

    slug = create_slug(body.title)
    if repository.get_by_slug(slug) is not None:
        raise _slug_conflict()

    track = repository.create(
        TrackDraft(
            title=body.title,
            artist=body.artist,
            album=body.album,
            genres=list(body.genres),
            cover_image=body.coverImage,
            slug=slug,
        )
    )
    return TrackResponse.from_track(track)


@router.put(
    "/tracks/{track_id}",
    response_model=TrackResponse,
    response_model_exclude_none=True,
)
def update_track(
    track_id: str,
    body: UpdateTrackRequest,
    repository: TrackRepository = Depends(get_track_repository),
) -> TrackResponse:
    """
    Partially update a track. Changing the title also changes the slug,
    which is checked against the other tracks first.
    """
    existing = repository.get_by_id(track_id)
    if existing is None:
        raise _not_found()

    supplied = body.model_dump(exclude_unset=True)
    for required in ("title", "artist"):
        if required in supplied and not (supplied[required] or "").strip():
            raise HTTPException(status_code=400, detail="Title and artist are required")
    if "genres" in supplied and supplied["genres"] is None:
        raise HTTPException(status_code=400, detail="Genres must be an array")

    changes: Dict[str, Any] = {_BODY_FIELDS[key]: value for key, value in supplied.items()}

    title = supplied.get("title")
    if title and title != existing.title:
        new_slug = create_slug(title)
        owner = repository.get_by_slug(new_slug)
        if owner is not None and owner.id != track_id:
            raise _slug_conflict()
        changes["slug"] = new_slug

    updated = repository.update(track_id, changes)
    if updated is None:
        # Also covers a failed write; update() does not tell them apart.
        raise _not_found()
    return TrackResponse.from_track(updated)


@router.delete("/tracks/{track_id}", status_code=204)
def delete_track(
    track_id: str,
    repository: TrackRepository = Depends(get_track_repository),
) -> Response:
    if not repository.delete(track_id):
        raise _not_found()
    return Response(status_code=204)


@router.post("/tracks/delete", response_model=BatchDeleteResponse)
def delete_tracks(
    body: BatchDeleteRequest,
    repository: TrackRepository = Depends(get_track_repository),
) -> BatchDeleteResponse:
    """
    Delete several tracks; each id succeeds or fails on its own.

    Response: { "success": [...ids], "failed": [...ids] }
    """
    if not body.ids:
        raise HTTPException(status_code=400, detail="Track IDs are required")

    result = repository.delete_batch(body.ids)
    return BatchDeleteResponse(success=result.succeeded, failed=result.failed)


@router.post(
    "/tracks/{track_id}/upload",
    response_model=TrackResponse,
    response_model_exclude_none=True,
)
def upload_track_file(
    track_id: str,
    file: Optional[UploadFile] = File(None),
    repository: TrackRepository = Depends(get_track_repository),
    audio_manager: AudioAssetManager = Depends(get_audio_manager),
    max_file_size: int = Depends(get_max_file_size),
) -> TrackResponse:
    """
    Attach an MP3 or WAV file to a track, replacing any previous one.
    """
    if repository.get_by_id(track_id) is None:
        raise _not_found()

    if file is None:
        raise HTTPException(status_code=400, detail="No file uploaded")

    if file.content_type not in ALLOWED_AUDIO_MIME_TYPES:
        raise HTTPException(
            status_code=400,
            detail="Invalid file type. Only MP3 and WAV files are allowed.",
        )

    data = file.file.read(max_file_size + 1)
    if len(data) > max_file_size:
        raise HTTPException(
            status_code=400,
            detail=f"File is too large. Maximum size is {max_file_size} bytes.",
        )

    updated = audio_manager.attach(track_id, file.filename or "", data)
    if updated is None:
        raise _not_found()
    return TrackResponse.from_track(updated)


@router.delete(
    "/tracks/{track_id}/file",
    response_model=TrackResponse,
    response_model_exclude_none=True,
)
def delete_track_file(
    track_id: str,
    repository: TrackRepository = Depends(get_track_repository),
    audio_manager: AudioAssetManager = Depends(get_audio_manager),
) -> TrackResponse:
    existing = repository.get_by_id(track_id)
    if existing is None:
        raise _not_found()

    if not existing.audio_file:
        raise HTTPException(status_code=404, detail="Track has no audio file")

    if not audio_manager.delete(track_id):
        raise HTTPException(status_code=500, detail="Failed to delete audio file")

    track = repository.get_by_id(track_id)
    if track is None:
        raise _not_found()
    return TrackResponse.from_track(track)
