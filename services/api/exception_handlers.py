"""FastAPI exception handlers for custom exceptions."""

from __future__ import annotations

from fastapi import Request, status
from fastapi.responses import PlainTextResponse
from loguru import logger

from core.exceptions import SbomStorageError


async def storage_exception_handler(request: Request, exc: SbomStorageError) -> PlainTextResponse:
    """Answer with the error's status code and its message as the body."""
    logger.opt(exception=exc).error(
        "Storage operation failed: {type} - {message}",
        type=type(exc).__name__,
        message=exc.message,
        details=exc.details,
    )
    return PlainTextResponse(exc.message, status_code=exc.http_status)


async def unhandled_exception_handler(request: Request, exc: Exception) -> PlainTextResponse:
    logger.opt(exception=exc).error("Unhandled exception in REST endpoint: {}", exc)
    return PlainTextResponse(str(exc), status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)


__all__ = ["storage_exception_handler", "unhandled_exception_handler"]
