"""Bearer JWT authentication for API routes."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING
from uuid import UUID

import jwt
from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

if TYPE_CHECKING:
    from calorie_tracker.containers import AppContainer

_logger = logging.getLogger(__name__)

JWT_ALGORITHMS = ["HS256"]

bearer_scheme = HTTPBearer(auto_error=False)


def _get_jwt_secret(request: Request) -> str:
    container: AppContainer = request.app.state.container
    return container.settings.supabase_jwt_secret


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def decode_user_id(token: str, secret: str) -> UUID:
    """Validate signature and expiry of a token and return its subject.

    Issuer and audience are not checked.
    """
    try:
        claims = jwt.decode(
            token,
            secret,
            algorithms=JWT_ALGORITHMS,
            options={"verify_aud": False, "require": ["exp", "sub"]},
        )
    except jwt.ExpiredSignatureError as exc:
        raise _unauthorized("Token has expired") from exc
    except jwt.InvalidTokenError as exc:
        _logger.warning("Authentication failed: %s", exc)
        raise _unauthorized("Token is invalid") from exc
    try:
        return UUID(str(claims["sub"]))
    except ValueError as exc:
        raise _unauthorized("User ID not found in token") from exc


async def require_user_id(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    jwt_secret: str = Depends(_get_jwt_secret),
) -> UUID:
    """Return the authenticated user's id or reject with 401."""
    if credentials is None:
        raise _unauthorized("Not authenticated")
    return decode_user_id(credentials.credentials, jwt_secret)
