from fastapi import Request

from trackstore.data import AudioAssetManager, GenreCatalog, TrackRepository


def get_track_repository(request: Request) -> TrackRepository:
    return request.app.state.track_repository


def get_audio_manager(request: Request) -> AudioAssetManager:
    return request.app.state.audio_manager


def get_genre_catalog(request: Request) -> GenreCatalog:
    return request.app.state.genre_catalog


def get_max_file_size(request: Request) -> int:
    return request.app.state.max_file_size
