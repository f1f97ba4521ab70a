"""
Review schemas.
"""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import Field

from core.schemas import CamelModel


class ReviewRequest(CamelModel):
    name: str = Field(..., min_length=1, max_length=100)
    review: str = Field(..., min_length=1, max_length=5000)
    rating: int = Field(..., ge=1, le=5)


class ReviewResponse(CamelModel):
    id: UUID
    name: str
    review: str
    rating: int
    created_at: datetime
