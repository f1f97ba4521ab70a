"""
Game catalog persistence (raw SQL).
"""

from __future__ import annotations

from uuid import UUID

from core.db import Database

_COLUMNS = 'id, type, "limit"'


class GameRepository:
    def __init__(self, db: Database) -> None:
        self.db = db

    async def list_games(self) -> list[dict]:
        return await self.db.fetch_all(f"SELECT {_COLUMNS} FROM games ORDER BY type")

    async def create_game(self, *, type: str, limit: str) -> dict:
        row = await self.db.fetch_one(
            f"""
            INSERT INTO games (type, "limit")
            VALUES ($1, $2)
            RETURNING {_COLUMNS}
            """,
            type,
            limit,
        )
        if row is None:
            raise RuntimeError("Failed to create game.")
        return row

    async def update_game(self, game_id: UUID, *, type: str, limit: str) -> dict | None:
        return await self.db.fetch_one(
            f"""
            UPDATE games
            SET type = $2,
                "limit" = $3
            WHERE id = $1
            RETURNING {_COLUMNS}
            """,
            game_id,
            type,
            limit,
        )

    async def delete_game(self, game_id: UUID) -> bool:
        row = await self.db.fetch_one(
            """
            DELETE FROM games
            WHERE id = $1
            RETURNING id
            """,
            game_id,
        )
        return row is not None
