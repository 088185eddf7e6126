import logging

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from trackstore.core import StorageIOError

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """
    Render every error as `{"error": message}`.

    - HTTPException       -> its status code and detail
    - validation errors   -> 400 with field-level details
    - StorageIOError      -> 500, internal details are only logged
    """

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.detail},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        logger.warning("Validation error on %s: %s", request.url.path, exc.errors())
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={
                "error": "Invalid request data",
                "details": jsonable_encoder(
                    [
                        {
                            "field": ".".join(str(loc) for loc in e["loc"]),
                            "message": e["msg"],
                        }
                        for e in exc.errors()
                    ]
                ),
            },
        )

    @app.exception_handler(StorageIOError)
    async def storage_error_handler(request: Request, exc: StorageIOError):
        logger.error("Storage failure on %s: %s", request.url.path, exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Internal Server Error"},
        )
