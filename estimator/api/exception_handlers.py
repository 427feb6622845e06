"""FastAPI exception handlers for estimator exceptions."""

from __future__ import annotations

from fastapi import Request, status
from fastapi.responses import JSONResponse
from loguru import logger

from estimator.exceptions import (
    CatalogError,
    EstimatorError,
    OptionNotFoundError,
    PersistenceError,
    ValidationError,
    WallNotFoundError,
)


def status_for(exc: EstimatorError) -> int:
    """Map an exception type to an HTTP status code."""
    if isinstance(exc, (WallNotFoundError, OptionNotFoundError)):
        return status.HTTP_404_NOT_FOUND
    if isinstance(exc, ValidationError):
        return status.HTTP_400_BAD_REQUEST
    if isinstance(exc, (PersistenceError, CatalogError)):
        return status.HTTP_503_SERVICE_UNAVAILABLE
    return status.HTTP_500_INTERNAL_SERVER_ERROR


async def estimator_exception_handler(request: Request, exc: EstimatorError) -> JSONResponse:
    """Handle estimator-specific exceptions."""
    status_code = status_for(exc)
    log = logger.warning if status_code < 500 else logger.error
    log(
        "{type} on {method} {path}: {message}",
        type=type(exc).__name__,
        method=request.method,
        path=request.url.path,
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
