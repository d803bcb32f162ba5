"""
Auth API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, status

from . import dependencies, schemas, service
from .repository import UserRepository

router = APIRouter(prefix="/api/auth")


@router.post("/register", status_code=status.HTTP_201_CREATED)
async def register(
    payload: schemas.RegisterRequest,
    repository: UserRepository = Depends(dependencies.get_user_repository),
) -> schemas.AuthResponse:
    return await service.register(repository, payload)


@router.post("/login")
async def login(
    payload: schemas.LoginRequest,
    repository: UserRepository = Depends(dependencies.get_user_repository),
) -> schemas.AuthResponse:
    return await service.login(repository, payload)


@router.get("/me")
async def me(
    current_user: dict = Depends(dependencies.get_current_user),
) -> schemas.UserResponse:
    return service.me(current_user)
