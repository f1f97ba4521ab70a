"""
Auth business logic.
"""

from __future__ import annotations

from uuid import UUID

from fastapi import HTTPException, status

from core.errors import DuplicateError

from . import schemas, security
from .repository import AdminUserRepository


def _to_user_response(user_row: dict) -> schemas.AdminUserResponse:
    return schemas.AdminUserResponse(
        id=user_row["id"],
        name=str(user_row["name"]),
        email=str(user_row["email"]),
    )


def _issue_auth_response(user_row: dict) -> schemas.AuthResponse:
    token = security.issue_admin_token(
        admin_id=str(user_row["id"]),
        email=str(user_row["email"]),
    )
    return schemas.AuthResponse(token=token, user=_to_user_response(user_row))


def _invalid_credentials() -> HTTPException:
    # Same answer for unknown email and wrong password.
    return HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST,
        detail="Invalid credentials",
    )


async def register(
    repository: AdminUserRepository,
    payload: schemas.RegisterRequest,
) -> schemas.AuthResponse:
    if not security.password_fits_bcrypt(payload.password):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Password must be at most {security.BCRYPT_MAX_PASSWORD_BYTES} bytes.",
        )

    existing = await repository.get_admin_by_email(payload.email)
    if existing is not None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="User already exists",
        )

    password_hash = security.hash_password(payload.password)
    try:
        user_row = await repository.create_admin(
            name=payload.name.strip(),
            email=payload.email,
            password_hash=password_hash,
        )
    except DuplicateError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="User already exists",
        ) from exc

    return _issue_auth_response(user_row)


async def login(
    repository: AdminUserRepository,
    payload: schemas.LoginRequest,
) -> schemas.AuthResponse:
    user_row = await repository.get_admin_by_email(payload.email)
    if user_row is None:
        raise _invalid_credentials()

    is_valid = security.verify_password(payload.password, str(user_row.get("password_hash") or ""))
    if not is_valid:
        raise _invalid_credentials()

    return _issue_auth_response(user_row)


async def get_admin_from_access_token(repository: AdminUserRepository, access_token: str) -> dict:
    try:
        claims = security.read_admin_token(access_token)
    except security.AuthSecurityError as exc:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(exc),
        ) from exc

    try:
        admin_id = UUID(str(claims.get("id") or "").strip())
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid access token id.",
        ) from exc

    user_row = await repository.get_admin_by_id(admin_id)
    if user_row is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found.",
        )
    return user_row


def me(user_row: dict) -> schemas.AdminUserResponse:
    return _to_user_response(user_row)
