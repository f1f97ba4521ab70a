"""
Admin user persistence helpers.
"""

from __future__ import annotations

from uuid import UUID

import asyncpg

from core.db import Database
from core.errors import DuplicateError


def normalize_email(email: str) -> str:
    return (email or "").strip().lower()


class AdminUserRepository:
    def __init__(self, db: Database) -> None:
        self.db = db

    async def create_admin(self, *, name: str, email: str, password_hash: str) -> dict:
        try:
            row = await self.db.fetch_one(
                """
                INSERT INTO admin_users (name, email, password_hash)
                VALUES ($1, $2, $3)
                RETURNING id, name, email, created_at
                """,
                name,
                normalize_email(email),
                password_hash,
            )
        except asyncpg.UniqueViolationError as exc:
            raise DuplicateError("User already exists") from exc
        if row is None:
            raise RuntimeError("Failed to create admin user.")
        return row

    async def get_admin_by_email(self, email: str) -> dict | None:
        return await self.db.fetch_one(
            """
            SELECT id, name, email, password_hash, created_at
            FROM admin_users
            WHERE lower(email) = lower($1)
            """,
            normalize_email(email),
        )

    async def get_admin_by_id(self, admin_id: UUID) -> dict | None:
        return await self.db.fetch_one(
            """
            SELECT id, name, email, password_hash, created_at
            FROM admin_users
            WHERE id = $1
            """,
            admin_id,
        )
