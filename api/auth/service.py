"""
Auth business logic.
"""

from __future__ import annotations

import logging

from fastapi import HTTPException, status

from core.db import DatabaseError, UniqueViolationError, row_id

from . import schemas, security
from .repository import UserRepository

logger = logging.getLogger(__name__)


def _to_user_response(user_row: dict) -> schemas.UserResponse:
    created_at = user_row.get("created_at")
    return schemas.UserResponse(
        id=int(user_row["id"]),
        username=str(user_row["username"]),
        email=str(user_row["email"]),
        created_at=str(created_at) if created_at is not None else None,
    )


def _auth_response(user_row: dict) -> schemas.AuthResponse:
    access_token = security.build_access_token(
        user_id=int(user_row["id"]),
        username=str(user_row["username"]),
    )
    return schemas.AuthResponse(user=_to_user_response(user_row), access_token=access_token)


async def register(repository: UserRepository, payload: schemas.RegisterRequest) -> schemas.AuthResponse:
    if await repository.username_or_email_taken(username=payload.username, email=payload.email):
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Username or email is already registered.",
        )

    password_hash = security.hash_password(payload.password)
    try:
        user_row = await repository.create_user(
            username=payload.username,
            email=payload.email,
            password_hash=password_hash,
        )
    except UniqueViolationError as exc:
        # Lost a race with a concurrent registration.
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Username or email is already registered.",
        ) from exc
    except DatabaseError as exc:
        logger.exception("register_failed username=%s", payload.username)
        raise HTTPException(status_code=500, detail="Internal server error") from exc

    logger.info("user_registered user_id=%s", user_row["id"])
    return _auth_response(user_row)


async def login(repository: UserRepository, payload: schemas.LoginRequest) -> schemas.AuthResponse:
    user_row = await repository.get_user_by_identifier(payload.identifier)
    if user_row is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid identifier or password.",
        )

    if not security.verify_password(payload.password, str(user_row.get("password") or "")):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid identifier or password.",
        )

    return _auth_response(user_row)


async def get_user_from_access_token(repository: UserRepository, access_token: str) -> dict:
    try:
        payload = security.decode_access_token(access_token)
    except security.AuthSecurityError as exc:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(exc),
        ) from exc

    subject = str(payload.get("sub") or "").strip()
    user_id = row_id(subject)
    if user_id is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid access token subject.",
        )

    user_row = await repository.get_user_by_id(user_id)
    if user_row is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found.",
        )
    return user_row


def me(user_row: dict) -> schemas.UserResponse:
    return _to_user_response(user_row)
