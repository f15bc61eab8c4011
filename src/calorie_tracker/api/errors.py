"""Shared error responses for API routers."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import status
from fastapi.responses import JSONResponse

if TYPE_CHECKING:
    from calorie_tracker.containers import AppContainer


def bad_request(container: AppContainer, exc: Exception, message: str) -> JSONResponse:
    """Return a 400 body; the error detail is only spelled out locally."""
    if container.settings.environment == "local":
        error = f"{type(exc).__name__}: {exc}".strip()
    else:
        error = type(exc).__name__
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"message": message, "error": error},
    )


def not_found(message: str) -> JSONResponse:
    """Return a 404 body with a message."""
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND, content={"message": message}
    )
