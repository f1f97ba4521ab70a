"""
Waitlist API endpoints.
"""

from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, Response, status

from core.db import Database, get_db

from . import schemas, service
from .repository import WaitlistRepository

router = APIRouter()


def get_repository(db: Database = Depends(get_db)) -> WaitlistRepository:
    return WaitlistRepository(db)


@router.get("/api/waitlist", response_model=list[schemas.WaitlistEntryResponse])
async def list_waitlist(
    repository: WaitlistRepository = Depends(get_repository),
) -> list[schemas.WaitlistEntryResponse]:
    return await service.list_entries(repository)


@router.post(
    "/api/waitlist",
    status_code=status.HTTP_201_CREATED,
    response_model=schemas.WaitlistEntryResponse,
)
async def join_waitlist(
    payload: schemas.WaitlistEntryRequest,
    repository: WaitlistRepository = Depends(get_repository),
) -> schemas.WaitlistEntryResponse:
    return await service.enqueue(repository, payload)


@router.put("/api/waitlist/checkin/{entry_id}", response_model=schemas.WaitlistEntryResponse)
async def check_in(
    entry_id: UUID,
    repository: WaitlistRepository = Depends(get_repository),
) -> schemas.WaitlistEntryResponse:
    return await service.check_in(repository, entry_id)


@router.put("/api/waitlist/reset/{entry_id}", response_model=schemas.WaitlistEntryResponse)
async def reset_flags(
    entry_id: UUID,
    repository: WaitlistRepository = Depends(get_repository),
) -> schemas.WaitlistEntryResponse:
    return await service.reset_flags(repository, entry_id)


@router.put(
    "/api/waitlist/{entry_id}",
    status_code=status.HTTP_201_CREATED,
    response_model=schemas.WaitlistEntryResponse,
)
async def update_entry(
    entry_id: UUID,
    payload: schemas.WaitlistEntryRequest,
    repository: WaitlistRepository = Depends(get_repository),
) -> schemas.WaitlistEntryResponse:
    return await service.update(repository, entry_id, payload)


@router.delete("/api/waitlist/{entry_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
async def remove_entry(
    entry_id: UUID,
    repository: WaitlistRepository = Depends(get_repository),
) -> Response:
    await service.remove(repository, entry_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
