"""
REST API routes for to-do items.

Every route depends on ``get_current_user_id``; the owner of a record is
always the verified caller, never a field from the request body.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List

from fastapi import APIRouter, Depends, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from api.errors import InternalError, NotFoundError
from auth.dependencies import db_session, get_current_user_id
from database.helpers import create_todo, delete_todo, list_todos, update_todo
from database.models import Todo
from utils.schemas import MessageResponse, TodoCreate, TodoOut, TodoUpdate

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/todos", tags=["todos"])

_NOT_FOUND = "Todo not found"


@router.get("", response_model=List[TodoOut])
async def get_todos(
    session: AsyncSession = Depends(db_session),
    user_id: str = Depends(get_current_user_id),
) -> List[Todo]:
    """List the caller's to-dos."""
    try:
        return await list_todos(session, user_id)
    except SQLAlchemyError as exc:
        logger.exception("Listing todos failed for user %s", user_id)
        raise InternalError(str(exc)) from exc


@router.post("", response_model=TodoOut, status_code=status.HTTP_201_CREATED)
async def post_todo(
    req: TodoCreate,
    session: AsyncSession = Depends(db_session),
    user_id: str = Depends(get_current_user_id),
) -> Todo:
    try:
        todo = await create_todo(session, user_id, req.title, req.description)
    except SQLAlchemyError as exc:
        logger.exception("Creating todo failed for user %s", user_id)
        raise InternalError(str(exc)) from exc
    logger.info("User %s created todo %s", user_id, todo.todo_id)
    return todo


@router.put("/{todo_id}", response_model=TodoOut)
async def put_todo(
    todo_id: str,
    req: TodoUpdate,
    session: AsyncSession = Depends(db_session),
    user_id: str = Depends(get_current_user_id),
) -> Todo:
    """Partial update; omitted fields keep their stored values."""
    try:
        todo = await update_todo(
            session,
            todo_id,
            user_id,
            title=req.title,
            description=req.description,
            completed=req.completed,
        )
    except SQLAlchemyError as exc:
        logger.exception("Updating todo %s failed", todo_id)
        raise InternalError(str(exc)) from exc
    if todo is None:
        raise NotFoundError(_NOT_FOUND)
    logger.info("User %s updated todo %s", user_id, todo.todo_id)
    return todo


@router.delete("/{todo_id}", response_model=MessageResponse)
async def remove_todo(
    todo_id: str,
    session: AsyncSession = Depends(db_session),
    user_id: str = Depends(get_current_user_id),
) -> Dict[str, Any]:
    try:
        deleted = await delete_todo(session, todo_id, user_id)
    except SQLAlchemyError as exc:
        logger.exception("Deleting todo %s failed", todo_id)
        raise InternalError(str(exc)) from exc
    if not deleted:
        raise NotFoundError(_NOT_FOUND)
    logger.info("User %s deleted todo %s", user_id, todo_id)
    return {"message": "Todo deleted successfully"}
