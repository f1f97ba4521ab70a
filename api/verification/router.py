"""
Phone verification and verified-customer endpoints.
"""

from __future__ import annotations

import httpx
from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from core import twilio_verify
from core.db import Database, get_db

from . import schemas, service
from .repository import UserRepository

router = APIRouter()


def get_repository(db: Database = Depends(get_db)) -> UserRepository:
    return UserRepository(db)


def get_verify_credentials() -> twilio_verify.VerifyCredentials:
    return service.verify_credentials()


def get_verify_transport() -> httpx.AsyncBaseTransport | None:
    # None means httpx's default network transport.
    return None


@router.get("/api/verify/{phone}")
async def check_phone(
    phone: str,
    repository: UserRepository = Depends(get_repository),
) -> dict:
    return {"user": await service.is_known_phone(repository, phone)}


@router.post("/api/users", status_code=status.HTTP_201_CREATED)
async def save_user(
    payload: schemas.UserRequest,
    repository: UserRepository = Depends(get_repository),
) -> dict:
    await service.save_user(repository, payload)
    return {"message": "User saved successfully"}


@router.post("/api/send-otp", response_model=schemas.OtpResponse)
async def send_otp(
    payload: schemas.SendOtpRequest,
    creds: twilio_verify.VerifyCredentials = Depends(get_verify_credentials),
    transport: httpx.AsyncBaseTransport | None = Depends(get_verify_transport),
) -> schemas.OtpResponse:
    return await service.send_otp(creds, payload.phone_number, transport=transport)


@router.post("/api/verify-otp", response_model=schemas.OtpResponse)
async def verify_otp(
    payload: schemas.VerifyOtpRequest,
    creds: twilio_verify.VerifyCredentials = Depends(get_verify_credentials),
    transport: httpx.AsyncBaseTransport | None = Depends(get_verify_transport),
):
    result = await service.verify_otp(creds, payload.phone_number, payload.otp, transport=transport)
    if not result.success:
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=result.model_dump())
    return result
