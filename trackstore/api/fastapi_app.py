from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from trackstore.api.error_handlers import register_error_handlers
from trackstore.api.files.routes import router as files_router
from trackstore.api.genres.routes import router as genres_router
from trackstore.api.health import router as health_router
from trackstore.api.tracks.routes import router as tracks_router
from trackstore.config import CORS_ORIGINS, LOG_LEVEL, MAX_FILE_SIZE, StorageConfig
from trackstore.core import configure_logging, log_info
from trackstore.data import (
    AudioAssetManager,
    GenreCatalog,
    TrackRepository,
    initialize_storage,
)


def create_app(
    storage: Optional[StorageConfig] = None,
    max_file_size: int = MAX_FILE_SIZE,
) -> FastAPI:
    """
    Build the API over one storage area.

    Storage directories and the default genre file are created when the
    application starts, not when it is built.
    """
    storage = storage or StorageConfig.from_env()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        initialize_storage(storage)
        log_info("Serving tracks from %s", storage.tracks_dir)
        yield

    app = FastAPI(
        title="Music Tracks API",
        version="1.0.0",
        description="API for managing music tracks and their audio files.",
        lifespan=lifespan,
    )

    track_repository = TrackRepository(storage)
    app.state.track_repository = track_repository
    app.state.audio_manager = AudioAssetManager(storage, track_repository)
    app.state.genre_catalog = GenreCatalog(storage)
    app.state.max_file_size = max_file_size

    app.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ORIGINS,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )

    register_error_handlers(app)

    app.include_router(health_router, tags=["health"])
    app.include_router(genres_router, prefix="/api", tags=["genres"])
    app.include_router(tracks_router, prefix="/api", tags=["tracks"])
    app.include_router(files_router, prefix="/api", tags=["files"])

    return app


configure_logging(LOG_LEVEL)

app = create_app()
