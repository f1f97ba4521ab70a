"""
Schedule API endpoints.
"""

from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Response, status

from core.db import Database, get_db

from . import schemas
from .repository import ScheduleRepository

router = APIRouter()


def get_repository(db: Database = Depends(get_db)) -> ScheduleRepository:
    return ScheduleRepository(db)


def _not_found() -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Schedule not found")


def _games_payload(payload: schemas.ScheduleRequest) -> list[dict]:
    return [{"type": game.type.strip(), "limit": game.limit} for game in payload.games]


@router.get("/api/schedule", response_model=list[schemas.ScheduleResponse])
async def list_schedules(
    repository: ScheduleRepository = Depends(get_repository),
) -> list[dict]:
    return await repository.list_schedules()


# Declared before /api/schedule/{schedule_id} so "games" is not parsed as an id.
@router.get("/api/schedule/games", response_model=list[schemas.ScheduleGameResponse])
async def list_schedule_games(
    repository: ScheduleRepository = Depends(get_repository),
) -> list[dict]:
    return await repository.list_games()


@router.get("/api/schedule/{schedule_id}", response_model=schemas.ScheduleResponse)
async def get_schedule(
    schedule_id: UUID,
    repository: ScheduleRepository = Depends(get_repository),
) -> dict:
    row = await repository.get_schedule(schedule_id)
    if row is None:
        raise _not_found()
    return row


@router.post(
    "/api/schedule",
    status_code=status.HTTP_201_CREATED,
    response_model=schemas.ScheduleResponse,
)
async def add_schedule(
    payload: schemas.ScheduleRequest,
    repository: ScheduleRepository = Depends(get_repository),
) -> dict:
    return await repository.create_schedule(
        day=payload.day.strip(),
        time=payload.time.strip(),
        description=payload.description,
        games=_games_payload(payload),
    )


@router.put("/api/schedule/{schedule_id}", response_model=schemas.ScheduleResponse)
async def update_schedule(
    schedule_id: UUID,
    payload: schemas.ScheduleRequest,
    repository: ScheduleRepository = Depends(get_repository),
) -> dict:
    row = await repository.replace_schedule(
        schedule_id,
        day=payload.day.strip(),
        time=payload.time.strip(),
        description=payload.description,
        games=_games_payload(payload),
    )
    if row is None:
        raise _not_found()
    return row


@router.delete("/api/schedule/{schedule_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
async def delete_schedule(
    schedule_id: UUID,
    repository: ScheduleRepository = Depends(get_repository),
) -> Response:
    if not await repository.delete_schedule(schedule_id):
        raise _not_found()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
