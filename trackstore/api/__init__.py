"""HTTP layer: FastAPI routers over the track store."""

from .fastapi_app import create_app

__all__ = ["create_app"]
