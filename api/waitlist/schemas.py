"""
Waitlist API schemas (request/response models).
"""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import Field

from core.schemas import CamelModel


class WaitlistEntryRequest(CamelModel):
    first_name: str = Field(..., min_length=1, max_length=100)
    last_initial: str = Field(..., min_length=1, max_length=5)
    phone: str = Field(..., min_length=3, max_length=32)
    game_type: str = Field(..., min_length=1, max_length=100)
    # Missing means "no SMS updates".
    sms_updates: bool | None = None


class WaitlistEntryResponse(CamelModel):
    id: UUID
    first_name: str
    last_initial: str
    phone: str
    game_type: str
    sms_updates: bool
    checked_in: bool
    created_at: datetime
