"""
Database helper functions — the credential store and the owner-scoped
to-do repository.

Every to-do query filters on both ``todo_id`` and ``created_by`` so that a
record owned by someone else looks exactly like one that does not exist.
"""

from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from sqlalchemy import delete, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from api.errors import ValidationError
from database.models import Todo, User

logger = logging.getLogger(__name__)


def _to_uuid(value: str | uuid.UUID) -> uuid.UUID:
    return uuid.UUID(value) if isinstance(value, str) else value


def _parse_todo_id(value: str | uuid.UUID) -> Optional[uuid.UUID]:
    """Return ``None`` for ids that cannot name any record."""
    try:
        return _to_uuid(value)
    except (ValueError, AttributeError, TypeError):
        return None


def normalize_email(email: str) -> str:
    """Emails are compared case-insensitively."""
    return email.strip().lower()


# ── Users ───────────────────────────────────────────────────────────


async def get_user_by_email(session: AsyncSession, email: str) -> Optional[User]:
    result = await session.execute(
        select(User).where(User.email == normalize_email(email))
    )
    return result.scalar_one_or_none()


async def create_user(
    session: AsyncSession,
    full_name: str,
    email: str,
    password_hash: str,
) -> User:
    """
    Insert a new ``User``.

    The caller checks for an existing account first; the unique index on
    ``email`` catches the signups that race past that check.
    """
    user = User(
        user_id=uuid.uuid4(),
        full_name=full_name,
        email=normalize_email(email),
        password_hash=password_hash,
    )
    session.add(user)
    try:
        await session.flush()
    except IntegrityError as exc:
        await session.rollback()
        logger.warning("Duplicate email rejected by unique constraint")
        raise ValidationError("Email already in use") from exc
    return user


# ── Todos ───────────────────────────────────────────────────────────


async def list_todos(session: AsyncSession, owner_id: str) -> List[Todo]:
    result = await session.execute(
        select(Todo)
        .where(Todo.created_by == _to_uuid(owner_id))
        .order_by(Todo.created_at.asc())
    )
    return list(result.scalars().all())


async def create_todo(
    session: AsyncSession,
    owner_id: str,
    title: str,
    description: str = "",
) -> Todo:
    todo = Todo(
        todo_id=uuid.uuid4(),
        title=title,
        description=description,
        completed=False,
        created_by=_to_uuid(owner_id),
    )
    session.add(todo)
    await session.flush()
    await session.refresh(todo)
    return todo


async def get_todo(session: AsyncSession, todo_id: str, owner_id: str) -> Optional[Todo]:
    tid = _parse_todo_id(todo_id)
    if tid is None:
        return None
    result = await session.execute(
        select(Todo).where(Todo.todo_id == tid, Todo.created_by == _to_uuid(owner_id))
    )
    return result.scalar_one_or_none()


async def update_todo(
    session: AsyncSession,
    todo_id: str,
    owner_id: str,
    title: Optional[str] = None,
    description: Optional[str] = None,
    completed: Optional[bool] = None,
) -> Optional[Todo]:
    """
    Apply the supplied changes in one ``UPDATE ... RETURNING`` statement.

    A missing or empty ``title``/``description`` and a missing ``completed``
    leave the stored value untouched.  Returns ``None`` when no record
    matches both id and owner.
    """
    tid = _parse_todo_id(todo_id)
    if tid is None:
        return None

    values: Dict[str, Any] = {}
    if title:
        values["title"] = title
    if description:
        values["description"] = description
    if completed is not None:
        values["completed"] = completed
    if not values:
        return await get_todo(session, todo_id, owner_id)

    values["updated_at"] = datetime.now(timezone.utc)
    result = await session.execute(
        update(Todo)
        .where(Todo.todo_id == tid, Todo.created_by == _to_uuid(owner_id))
        .values(**values)
        .returning(Todo)
    )
    todo = result.scalar_one_or_none()
    if todo is not None:
        # The identity map may hold a stale copy from earlier in this session.
        await session.refresh(todo)
    return todo


async def delete_todo(session: AsyncSession, todo_id: str, owner_id: str) -> bool:
    """Delete in one statement; ``False`` when nothing matched id and owner."""
    tid = _parse_todo_id(todo_id)
    if tid is None:
        return False
    result = await session.execute(
        delete(Todo)
        .where(Todo.todo_id == tid, Todo.created_by == _to_uuid(owner_id))
        .returning(Todo.todo_id)
    )
    return result.scalar_one_or_none() is not None
