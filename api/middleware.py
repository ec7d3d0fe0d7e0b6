"""
Global middleware.
"""

from __future__ import annotations

import logging
import time

from fastapi import FastAPI, Request

logger = logging.getLogger(__name__)


def _level_for(status_code: int) -> int:
    if status_code >= 500:
        return logging.ERROR
    if status_code >= 400:
        return logging.WARNING
    return logging.INFO


def register_middleware(app: FastAPI) -> None:
    """Attach any app-level middleware."""

    @app.middleware("http")
    async def access_log(request: Request, call_next):
        """
        One line per request: who asked, what they asked for, how it ended.

        ``user_id`` is only present once ``get_current_user_id`` has
        accepted the caller's token; everything else is logged as anonymous.
        """
        start = time.perf_counter()
        response = await call_next(request)
        elapsed = time.perf_counter() - start
        user_id = getattr(request.state, "user_id", None) or "anonymous"
        logger.log(
            _level_for(response.status_code),
            "%s %s user=%s status=%d %.1fms",
            request.method, request.url.path, user_id, response.status_code, elapsed * 1000,
        )
        return response
