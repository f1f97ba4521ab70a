"""
Admin registration / login endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, status

from . import dependencies, schemas, service
from .repository import AdminUserRepository

router = APIRouter()


@router.post("/api/register", status_code=status.HTTP_201_CREATED, response_model=schemas.AuthResponse)
async def register(
    payload: schemas.RegisterRequest,
    repository: AdminUserRepository = Depends(dependencies.get_repository),
) -> schemas.AuthResponse:
    return await service.register(repository, payload)


@router.post("/api/login", response_model=schemas.AuthResponse)
async def login(
    payload: schemas.LoginRequest,
    repository: AdminUserRepository = Depends(dependencies.get_repository),
) -> schemas.AuthResponse:
    return await service.login(repository, payload)


@router.get("/api/me", response_model=schemas.AdminUserResponse)
async def me(
    current_admin: dict = Depends(dependencies.get_current_admin),
) -> schemas.AdminUserResponse:
    return service.me(current_admin)
