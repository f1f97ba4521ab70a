"""
Phone verification business logic.

OTP codes are generated, delivered and checked by Twilio Verify; this service
only relays the phone number / code and maps provider outcomes to API results.
"""

from __future__ import annotations

import logging
import os

import httpx
from fastapi import HTTPException, status

from core import twilio_verify
from core.errors import DuplicateError

from . import schemas
from .repository import UserRepository

logger = logging.getLogger(__name__)


def verify_credentials() -> twilio_verify.VerifyCredentials:
    return twilio_verify.VerifyCredentials(
        account_sid=os.environ.get("TWILIO_ACCOUNT_SID", "").strip(),
        auth_token=os.environ.get("TWILIO_AUTH_TOKEN", "").strip(),
        service_sid=os.environ.get("TWILIO_VERIFY_SERVICE_SID", "").strip(),
        base_url=os.environ.get("TWILIO_VERIFY_BASE_URL", "").strip() or twilio_verify.DEFAULT_BASE_URL,
    )


async def is_known_phone(repository: UserRepository, phone: str) -> bool:
    return await repository.get_user_by_phone(phone.strip()) is not None


async def save_user(repository: UserRepository, payload: schemas.UserRequest) -> None:
    try:
        await repository.create_user(
            first_name=payload.first_name.strip(),
            last_initial=payload.last_initial.strip().upper(),
            phone=payload.phone.strip(),
            sms_updates=bool(payload.sms_updates),
        )
    except DuplicateError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(exc),
        ) from exc


async def send_otp(
    creds: twilio_verify.VerifyCredentials,
    phone_number: str,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> schemas.OtpResponse:
    try:
        verification_status = await twilio_verify.start_verification(
            creds,
            to=phone_number.strip(),
            channel="sms",
            transport=transport,
        )
    except twilio_verify.TwilioVerifyError as exc:
        logger.exception("otp_send_failed")
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Failed to send OTP",
        ) from exc

    logger.info("otp_sent status=%s", verification_status)
    return schemas.OtpResponse(success=True, message="OTP Sent")


async def verify_otp(
    creds: twilio_verify.VerifyCredentials,
    phone_number: str,
    code: str,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> schemas.OtpResponse:
    try:
        approved = await twilio_verify.check_verification(
            creds,
            to=phone_number.strip(),
            code=code.strip(),
            transport=transport,
        )
    except twilio_verify.TwilioVerifyError as exc:
        logger.exception("otp_verify_failed")
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="OTP verification failed",
        ) from exc

    if not approved:
        return schemas.OtpResponse(success=False, message="Invalid OTP")
    return schemas.OtpResponse(success=True, message="OTP Verified")
