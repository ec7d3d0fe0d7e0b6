"""
FastAPI dependencies for authentication.

Provides ``db_session`` and ``get_current_user_id`` dependencies that
are used across all protected routes.
"""

from __future__ import annotations

import logging
from typing import AsyncGenerator, Optional

from fastapi import Depends, Header, Request
from sqlalchemy.ext.asyncio import AsyncSession

from api.errors import AuthError, InternalError, MissingTokenError
from auth.jwt import InvalidTokenError, verify_token
from database.session import get_db_session

logger = logging.getLogger(__name__)

_BEARER_SCHEME = "bearer"


async def db_session(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[AsyncSession, None]:
    """Yield a DB session for route handlers."""
    yield session


def _extract_token(authorization: Optional[str]) -> Optional[str]:
    """Accept either the raw token or ``Bearer <token>``."""
    if authorization is None:
        return None
    value = authorization.strip()
    scheme, _, rest = value.partition(" ")
    if scheme.lower() == _BEARER_SCHEME:
        value = rest.strip()
    return value or None


async def get_current_user_id(
    request: Request,
    authorization: Optional[str] = Header(None, alias="Authorization"),
) -> str:
    """
    Extract and verify the token from the ``Authorization`` header,
    returning the authenticated ``user_id`` (UUID string).

    The identity is also stored on ``request.state.user_id`` for the
    rest of this request only.
    """
    token = _extract_token(authorization)
    if token is None:
        logger.warning("Rejected %s %s: no token", request.method, request.url.path)
        raise MissingTokenError("No token provided")

    try:
        user_id = verify_token(token)
    except InvalidTokenError as exc:
        logger.warning("Rejected %s %s: %s", request.method, request.url.path, exc)
        raise AuthError("Failed to authenticate token") from exc
    except Exception as exc:
        logger.exception("Token verification failed unexpectedly")
        raise InternalError("Failed to authenticate token") from exc

    request.state.user_id = user_id
    return user_id
