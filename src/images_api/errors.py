"""Exceptions raised by the Images API and the handlers that render them."""
import logging

from fastapi import Request, status
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)

INTERNAL_SERVER_ERROR_MESSAGE = "Internal server error"


class ImagesApiError(Exception):
    """Base error carrying the status code and client-facing message."""
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    message: str = INTERNAL_SERVER_ERROR_MESSAGE

    def __init__(self, message: str | None = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class FileMissingError(ImagesApiError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "File upload error"


class NotAnImageError(ImagesApiError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Not an image! Please upload an image"


class FileTooLargeError(ImagesApiError):
    status_code = status.HTTP_413_REQUEST_ENTITY_TOO_LARGE
    message = "File too large"


class StorageError(ImagesApiError):
    """The storage provider could not be reached or refused the request."""


class PersistenceError(ImagesApiError):
    """The record store could not be read or written."""


async def handle_images_api_errors(request: Request, exc: ImagesApiError) -> JSONResponse:
    """Render an ``ImagesApiError`` as ``{"message": ...}``."""
    if exc.status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
        logger.error(f"{request.method} {request.url.path} failed: {exc.__cause__ or exc!r}")
    return JSONResponse(status_code=exc.status_code, content={"message": exc.message})


async def handle_http_exceptions(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Render framework errors, such as an unparseable form body, as ``{"message": ...}``."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def handle_broad_exceptions(request: Request, call_next):
    """Handle any exception that goes unhandled by a more specific exception handler."""
    try:
        return await call_next(request)
    except Exception:  # pylint: disable=broad-except
        logger.exception(f"Unhandled error on {request.method} {request.url.path}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"message": INTERNAL_SERVER_ERROR_MESSAGE},
        )
