"""
Auth API routes — register, login, current user.

Route prefix: /api
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from api.errors import ValidationError
from auth.dependencies import db_session, require_auth
from auth.jwt import create_token
from auth.password import hash_password, verify_password
from database.helpers import create_user, find_user_by_email
from utils.schemas import (
    AuthenticatedUser,
    LoginRequest,
    LoginResponse,
    RegisterRequest,
    RegisterResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])


@router.post(
    "/register",
    response_model=RegisterResponse,
    status_code=status.HTTP_201_CREATED,
)
async def register(
    req: RegisterRequest,
    session: AsyncSession = Depends(db_session),
) -> Dict[str, Any]:
    """Register a new user."""
    if not req.username or not req.email or not req.password:
        raise ValidationError("Please add all fields")

    if await find_user_by_email(session, req.email) is not None:
        raise ValidationError("User already exists")

    # Hashing runs in a worker thread.
    password_hash = await asyncio.to_thread(hash_password, req.password)
    try:
        user = await create_user(
            session,
            username=req.username,
            email=req.email,
            password_hash=password_hash,
        )
        await session.commit()
    except IntegrityError as exc:
        # Lost a race with a concurrent registration for the same email.
        await session.rollback()
        raise ValidationError("User already exists") from exc

    logger.info("User created: %s (%s)", user.id, user.username)
    return {"id": str(user.id), "email": user.email}


@router.post("/login", response_model=LoginResponse)
async def login(
    req: LoginRequest,
    session: AsyncSession = Depends(db_session),
) -> Dict[str, Any]:
    """Login with email + password."""
    if not req.email or not req.password:
        raise ValidationError("Please add all fields")

    user = await find_user_by_email(session, req.email)

    # Unknown email and wrong password share one response.
    if user is None or not await asyncio.to_thread(
        verify_password, req.password, user.password_hash
    ):
        raise ValidationError("Invalid credentials")

    token = create_token(
        {"username": user.username, "email": user.email, "id": str(user.id)}
    )
    logger.info("Login: %s (%s)", user.username, user.id)
    return {"accessToken": token}


@router.get("/current", response_model=AuthenticatedUser)
async def current_user(
    user: AuthenticatedUser = Depends(require_auth),
) -> AuthenticatedUser:
    """Return the identity carried by the caller's access token."""
    return user
