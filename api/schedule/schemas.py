"""
Schedule API schemas (request/response models).
"""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import Field

from core.schemas import CamelModel


class ScheduleGameRequest(CamelModel):
    type: str = Field(..., min_length=1, max_length=100)
    limit: str | None = Field(default=None, max_length=100)


class ScheduleRequest(CamelModel):
    day: str = Field(..., min_length=1, max_length=50)
    time: str = Field(..., min_length=1, max_length=50)
    description: str | None = Field(default=None, max_length=2000)
    games: list[ScheduleGameRequest] = Field(default_factory=list)


class ScheduleGameResponse(CamelModel):
    id: UUID
    schedule_id: UUID
    type: str
    limit: str | None = None


class ScheduleResponse(CamelModel):
    id: UUID
    day: str
    time: str
    description: str | None = None
    created_at: datetime
    games: list[ScheduleGameResponse] = Field(default_factory=list)
