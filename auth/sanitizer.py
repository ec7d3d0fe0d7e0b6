"""
Public-safe projection of user records.
"""

from __future__ import annotations

from typing import Any, Dict, Mapping, Union

from sqlalchemy import inspect

from database.models import User

# Never leaves the server.
CREDENTIAL_FIELDS = frozenset({"password_hash", "password"})


def _as_mapping(user: Union[User, Mapping[str, Any]]) -> Dict[str, Any]:
    if isinstance(user, Mapping):
        return dict(user)
    mapper = inspect(user).mapper
    return {attr.key: getattr(user, attr.key) for attr in mapper.column_attrs}


def sanitize_user(user: Union[User, Mapping[str, Any]]) -> Dict[str, Any]:
    """Return a new dict of the user's fields without any credential material."""
    return {
        key: value
        for key, value in _as_mapping(user).items()
        if key not in CREDENTIAL_FIELDS
    }
