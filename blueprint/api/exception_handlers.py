"""FastAPI exception handlers for floorplan errors."""

from __future__ import annotations

from fastapi import Request, status
from fastapi.responses import JSONResponse
from loguru import logger

from blueprint.core.exceptions import (
    EntityNotFoundError,
    FloorplanError,
    GraphCorruptionError,
    InvalidOperationError,
)


async def floorplan_exception_handler(request: Request, exc: FloorplanError) -> JSONResponse:
    """Map floorplan exceptions to HTTP responses."""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    if isinstance(exc, EntityNotFoundError):
        status_code = status.HTTP_404_NOT_FOUND
    elif isinstance(exc, InvalidOperationError):
        status_code = status.HTTP_400_BAD_REQUEST
    elif isinstance(exc, GraphCorruptionError):
        status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    if status_code >= 500:
        logger.error(
            "Floorplan exception on {path}: {type} - {message}",
            path=request.url.path,
            type=type(exc).__name__,
            message=exc.message,
            details=exc.details,
        )
    else:
        logger.info(
            "Rejected request on {path}: {type} - {message}",
            path=request.url.path,
            type=type(exc).__name__,
            message=exc.message,
        )

    return JSONResponse(
        status_code=status_code,
        content={
            "error": type(exc).__name__,
            "message": exc.message,
            "details": exc.details,
        },
    )
