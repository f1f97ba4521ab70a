"""
Gallery response schema. Requests are multipart forms, see `router.py`.
"""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from core.schemas import CamelModel


class GalleryItemResponse(CamelModel):
    id: UUID
    title: str
    description: str | None = None
    image: str
    created_at: datetime
