"""
Pydantic schemas for the to-do API.

JSON bodies use camelCase (``fullName``, ``createdBy``); Python code uses
snake_case.  Both spellings are accepted on input.
"""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import Annotated, Optional

from pydantic import BaseModel, ConfigDict, Field, StringConstraints
from pydantic.alias_generators import to_camel


# Surrounding whitespace is dropped before the emptiness check.
NonBlankStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


class _CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


# ═══════════════════════════════════════════════════════════════════════════════
# Auth
# ═══════════════════════════════════════════════════════════════════════════════


class SignupRequest(_CamelModel):
    full_name: str
    email: NonBlankStr
    password: str = Field(..., min_length=1)


class LoginRequest(_CamelModel):
    email: NonBlankStr
    password: str


class MessageResponse(BaseModel):
    message: str


class PublicUser(_CamelModel):
    """Sanitized user view — built only from ``sanitize_user`` output."""

    id: uuid.UUID = Field(..., validation_alias="user_id")
    full_name: str
    email: str
    created_at: Optional[datetime] = None


class LoginResponse(_CamelModel):
    token: str
    sanitized_user: PublicUser


# ═══════════════════════════════════════════════════════════════════════════════
# Todos
# ═══════════════════════════════════════════════════════════════════════════════


class TodoCreate(_CamelModel):
    title: str = Field(..., min_length=1)
    description: str = ""


class TodoUpdate(_CamelModel):
    """
    Partial update.  ``None`` (or an empty title/description) keeps the
    stored value.
    """

    title: Optional[str] = None
    description: Optional[str] = None
    completed: Optional[bool] = None


class TodoOut(_CamelModel):
    id: uuid.UUID = Field(..., validation_alias="todo_id")
    title: str
    description: str
    completed: bool
    created_by: uuid.UUID
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

