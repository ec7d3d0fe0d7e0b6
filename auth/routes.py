"""
Auth API routes — signup, login.

Route prefix: /api
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from api.errors import AppError, InternalError, NotFoundError, ValidationError
from auth.dependencies import db_session
from auth.jwt import create_token
from auth.password import hash_password, verify_password
from auth.sanitizer import sanitize_user
from database.helpers import create_user, get_user_by_email
from utils.schemas import (
    LoginRequest,
    LoginResponse,
    MessageResponse,
    SignupRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])


@router.post("/signup", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
async def signup(
    req: SignupRequest,
    session: AsyncSession = Depends(db_session),
) -> Dict[str, Any]:
    """Register a new user. No token is issued here; the client logs in next."""
    try:
        if await get_user_by_email(session, req.email) is not None:
            raise ValidationError("Email already in use")

        try:
            password_hash = await asyncio.to_thread(hash_password, req.password)
        except ValueError as exc:
            raise ValidationError(str(exc)) from exc

        user = await create_user(session, req.full_name, req.email, password_hash)
    except AppError:
        raise
    except SQLAlchemyError as exc:
        logger.exception("Signup failed")
        raise InternalError(str(exc)) from exc

    logger.info("Registered user %s", user.user_id)
    return {"message": "success"}


@router.post("/login", response_model=LoginResponse)
async def login(
    req: LoginRequest,
    session: AsyncSession = Depends(db_session),
) -> Dict[str, Any]:
    """Login with email + password."""
    try:
        user = await get_user_by_email(session, req.email)
        if user is None:
            raise NotFoundError("User not found")

        if not await asyncio.to_thread(verify_password, req.password, user.password_hash):
            logger.warning("Login failed for user %s: bad password", user.user_id)
            raise ValidationError("Invalid credentials")

        token = create_token(str(user.user_id))
    except AppError:
        raise
    except SQLAlchemyError as exc:
        logger.exception("Login failed")
        raise InternalError(str(exc)) from exc

    logger.info("Login: %s", user.user_id)
    return {
        "token": token,
        "sanitized_user": sanitize_user(user),
    }
