"""
Game catalog endpoints.
"""

from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Response, status

from core.db import Database, get_db

from . import schemas
from .repository import GameRepository

router = APIRouter()


def get_repository(db: Database = Depends(get_db)) -> GameRepository:
    return GameRepository(db)


@router.get("/api/game", response_model=list[schemas.GameResponse])
async def list_games(
    repository: GameRepository = Depends(get_repository),
) -> list[dict]:
    return await repository.list_games()


@router.post("/api/game", status_code=status.HTTP_201_CREATED, response_model=schemas.GameResponse)
async def add_game(
    payload: schemas.GameRequest,
    repository: GameRepository = Depends(get_repository),
) -> dict:
    return await repository.create_game(type=payload.type.strip(), limit=payload.limit.strip())


@router.put("/api/game/{game_id}", response_model=schemas.GameResponse)
async def update_game(
    game_id: UUID,
    payload: schemas.GameRequest,
    repository: GameRepository = Depends(get_repository),
) -> dict:
    row = await repository.update_game(game_id, type=payload.type.strip(), limit=payload.limit.strip())
    if row is None:
        raise HTTPException(status_code=404, detail="Game not found.")
    return row


@router.delete("/api/game/{game_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
async def delete_game(
    game_id: UUID,
    repository: GameRepository = Depends(get_repository),
) -> Response:
    if not await repository.delete_game(game_id):
        raise HTTPException(status_code=404, detail="Game not found.")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
