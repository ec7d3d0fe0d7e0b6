"""
JWT-style token creation and verification.

Tokens are urlsafe-base64-encoded JSON payloads signed with HMAC-SHA256.
Secret key is loaded from ``config.jwt_secret`` (env var: ``JWT_SECRET``).
"""

from __future__ import annotations

import binascii
import hashlib
import hmac
import json
import time
from base64 import urlsafe_b64decode, urlsafe_b64encode
from typing import Optional

from config.settings import config

_TOKEN_SECRET = config.jwt_secret
_TOKEN_EXPIRY_SECONDS = config.jwt_expiry_seconds


class InvalidTokenError(ValueError):
    """Raised when a token is malformed, forged, or expired."""


def _sign(raw: bytes) -> str:
    return hmac.new(_TOKEN_SECRET.encode(), raw, hashlib.sha256).hexdigest()


def create_token(user_id: str, now: Optional[float] = None) -> str:
    """Create a signed token containing ``user_id``, issue time and expiry."""
    issued_at = int(time.time() if now is None else now)
    payload = {
        "user_id": user_id,
        "iat": issued_at,
        "exp": issued_at + _TOKEN_EXPIRY_SECONDS,
    }
    raw = json.dumps(payload, separators=(",", ":")).encode()
    return urlsafe_b64encode(raw).decode() + "." + _sign(raw)


def verify_token(token: str, now: Optional[float] = None) -> str:
    """
    Verify token and return ``user_id``.

    Raises ``InvalidTokenError`` on malformed, tampered or expired tokens.
    """
    parts = token.split(".", 1)
    if len(parts) != 2:
        raise InvalidTokenError("bad format")
    try:
        raw = urlsafe_b64decode(parts[0].encode())
    except (binascii.Error, ValueError) as exc:
        raise InvalidTokenError("bad encoding") from exc
    if not hmac.compare_digest(parts[1].encode(), _sign(raw).encode()):
        raise InvalidTokenError("bad signature")
    try:
        payload = json.loads(raw)
    except ValueError as exc:
        raise InvalidTokenError("bad payload") from exc
    if not isinstance(payload, dict):
        raise InvalidTokenError("bad payload")

    exp = payload.get("exp")
    if not isinstance(exp, (int, float)):
        raise InvalidTokenError("missing expiry")
    current = time.time() if now is None else now
    if current >= exp:
        raise InvalidTokenError("token expired")

    user_id = payload.get("user_id")
    if not isinstance(user_id, str) or not user_id:
        raise InvalidTokenError("missing identity")
    return user_id
