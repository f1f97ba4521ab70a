"""
Game catalog schemas.
"""

from __future__ import annotations

from uuid import UUID

from pydantic import Field

from core.schemas import CamelModel


class GameRequest(CamelModel):
    type: str = Field(..., min_length=1, max_length=100)
    # Table limit as displayed, e.g. "1/2" or "$5 max".
    limit: str = Field(..., min_length=1, max_length=100)


class GameResponse(CamelModel):
    id: UUID
    type: str
    limit: str
