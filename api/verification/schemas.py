"""
Phone verification schemas.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from core.schemas import CamelModel


class UserRequest(CamelModel):
    first_name: str = Field(..., min_length=1, max_length=100)
    last_initial: str = Field(..., min_length=1, max_length=5)
    phone: str = Field(..., min_length=3, max_length=32)
    sms_updates: bool | None = None


class SendOtpRequest(CamelModel):
    phone_number: str = Field(..., min_length=3, max_length=32)


class VerifyOtpRequest(CamelModel):
    phone_number: str = Field(..., min_length=3, max_length=32)
    otp: str = Field(..., min_length=4, max_length=10)


class OtpResponse(BaseModel):
    success: bool
    message: str
