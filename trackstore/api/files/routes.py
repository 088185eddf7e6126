from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import FileResponse

from trackstore.api.deps import get_audio_manager
from trackstore.data import AudioAssetManager

router = APIRouter()


@router.get("/files/{name}")
def get_file(
    name: str,
    audio_manager: AudioAssetManager = Depends(get_audio_manager),
) -> FileResponse:
    """Serve a stored audio asset by its file name."""
    path = audio_manager.path_for(name)
    if path is None:
        raise HTTPException(status_code=404, detail="File not found")
    return FileResponse(path)
