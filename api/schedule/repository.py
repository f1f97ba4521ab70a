"""
Schedule persistence (raw SQL).

A schedule and its games are written in one transaction, so a failed insert
of a game never leaves a half-replaced schedule behind.
"""

from __future__ import annotations

from uuid import UUID

import asyncpg

from core.db import Database

_SCHEDULE_COLUMNS = "id, day, time, description, created_at"
_GAME_COLUMNS = 'id, schedule_id, type, "limit"'


async def _insert_games(conn: asyncpg.Connection, schedule_id: UUID, games: list[dict]) -> list[dict]:
    rows: list[dict] = []
    for game in games:
        row = await conn.fetchrow(
            f"""
            INSERT INTO schedule_games (schedule_id, type, "limit")
            VALUES ($1, $2, $3)
            RETURNING {_GAME_COLUMNS}
            """,
            schedule_id,
            game["type"],
            game.get("limit"),
        )
        rows.append(dict(row))
    return rows


class ScheduleRepository:
    def __init__(self, db: Database) -> None:
        self.db = db

    async def _attach_games(self, schedules: list[dict]) -> list[dict]:
        if not schedules:
            return schedules
        ids = [row["id"] for row in schedules]
        games = await self.db.fetch_all(
            f"""
            SELECT {_GAME_COLUMNS}
            FROM schedule_games
            WHERE schedule_id = ANY($1::uuid[])
            """,
            ids,
        )
        by_schedule: dict[UUID, list[dict]] = {schedule_id: [] for schedule_id in ids}
        for game in games:
            by_schedule[game["schedule_id"]].append(game)
        for row in schedules:
            row["games"] = by_schedule[row["id"]]
        return schedules

    async def list_schedules(self) -> list[dict]:
        rows = await self.db.fetch_all(f"SELECT {_SCHEDULE_COLUMNS} FROM schedules ORDER BY created_at")
        return await self._attach_games(rows)

    async def get_schedule(self, schedule_id: UUID) -> dict | None:
        row = await self.db.fetch_one(
            f"SELECT {_SCHEDULE_COLUMNS} FROM schedules WHERE id = $1",
            schedule_id,
        )
        if row is None:
            return None
        return (await self._attach_games([row]))[0]

    async def list_games(self) -> list[dict]:
        return await self.db.fetch_all(f"SELECT {_GAME_COLUMNS} FROM schedule_games")

    async def create_schedule(
        self,
        *,
        day: str,
        time: str,
        description: str | None,
        games: list[dict],
    ) -> dict:
        async with self.db.transaction() as conn:
            row = await conn.fetchrow(
                f"""
                INSERT INTO schedules (day, time, description)
                VALUES ($1, $2, $3)
                RETURNING {_SCHEDULE_COLUMNS}
                """,
                day,
                time,
                description,
            )
            if row is None:
                raise RuntimeError("Failed to create schedule.")
            schedule = dict(row)
            schedule["games"] = await _insert_games(conn, schedule["id"], games)
        return schedule

    async def replace_schedule(
        self,
        schedule_id: UUID,
        *,
        day: str,
        time: str,
        description: str | None,
        games: list[dict],
    ) -> dict | None:
        """
        Update the schedule fields and replace all of its games.
        """
        async with self.db.transaction() as conn:
            row = await conn.fetchrow(
                f"""
                UPDATE schedules
                SET day = $2,
                    time = $3,
                    description = $4
                WHERE id = $1
                RETURNING {_SCHEDULE_COLUMNS}
                """,
                schedule_id,
                day,
                time,
                description,
            )
            if row is None:
                return None
            await conn.execute("DELETE FROM schedule_games WHERE schedule_id = $1", schedule_id)
            schedule = dict(row)
            schedule["games"] = await _insert_games(conn, schedule_id, games)
        return schedule

    async def delete_schedule(self, schedule_id: UUID) -> bool:
        # schedule_games rows go with it (ON DELETE CASCADE).
        row = await self.db.fetch_one(
            """
            DELETE FROM schedules
            WHERE id = $1
            RETURNING id
            """,
            schedule_id,
        )
        return row is not None
