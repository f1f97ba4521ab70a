"""
Verified customer persistence (raw SQL).
"""

from __future__ import annotations

import asyncpg

from core.db import Database
from core.errors import DuplicateError


class UserRepository:
    def __init__(self, db: Database) -> None:
        self.db = db

    async def get_user_by_phone(self, phone: str) -> dict | None:
        return await self.db.fetch_one(
            """
            SELECT id, first_name, last_initial, phone, sms_updates, created_at
            FROM users
            WHERE phone = $1
            """,
            phone,
        )

    async def create_user(
        self,
        *,
        first_name: str,
        last_initial: str,
        phone: str,
        sms_updates: bool,
    ) -> dict:
        try:
            row = await self.db.fetch_one(
                """
                INSERT INTO users (first_name, last_initial, phone, sms_updates)
                VALUES ($1, $2, $3, $4)
                RETURNING id, first_name, last_initial, phone, sms_updates, created_at
                """,
                first_name,
                last_initial,
                phone,
                sms_updates,
            )
        except asyncpg.UniqueViolationError as exc:
            raise DuplicateError("User already exists") from exc
        if row is None:
            raise RuntimeError("Failed to create user.")
        return row
