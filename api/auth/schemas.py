"""
Auth API schemas (request/response models).
"""

from __future__ import annotations

from uuid import UUID

from pydantic import BaseModel, Field


class RegisterRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    email: str = Field(..., min_length=3, max_length=320)
    password: str = Field(..., min_length=8, max_length=128)


class LoginRequest(BaseModel):
    email: str = Field(..., min_length=3, max_length=320)
    password: str = Field(..., min_length=1, max_length=128)


class AdminUserResponse(BaseModel):
    id: UUID
    name: str
    email: str


class AuthResponse(BaseModel):
    token: str
    user: AdminUserResponse
