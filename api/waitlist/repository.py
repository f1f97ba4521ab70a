"""
Waitlist persistence (raw SQL).

Phone uniqueness is enforced by the `waitlist_phone_key` constraint; a
violation is raised as `DuplicateError` so callers never need a separate
existence check before inserting.
"""

from __future__ import annotations

from datetime import datetime, timezone
from uuid import UUID

import asyncpg

from core.db import Database, affected_rows
from core.errors import DuplicateError

_COLUMNS = "id, first_name, last_initial, phone, game_type, sms_updates, checked_in, created_at"


class WaitlistRepository:
    def __init__(self, db: Database) -> None:
        self.db = db

    async def list_entries(self) -> list[dict]:
        return await self.db.fetch_all(f"SELECT {_COLUMNS} FROM waitlist")

    async def get_entry(self, entry_id: UUID) -> dict | None:
        return await self.db.fetch_one(
            f"SELECT {_COLUMNS} FROM waitlist WHERE id = $1",
            entry_id,
        )

    async def create_entry(
        self,
        *,
        first_name: str,
        last_initial: str,
        phone: str,
        game_type: str,
        sms_updates: bool,
    ) -> dict:
        try:
            row = await self.db.fetch_one(
                f"""
                INSERT INTO waitlist (first_name, last_initial, phone, game_type, sms_updates, checked_in)
                VALUES ($1, $2, $3, $4, $5, false)
                RETURNING {_COLUMNS}
                """,
                first_name,
                last_initial,
                phone,
                game_type,
                sms_updates,
            )
        except asyncpg.UniqueViolationError as exc:
            raise DuplicateError("Phone number already exists in the waitlist.") from exc
        if row is None:
            raise RuntimeError("Failed to create waitlist entry.")
        return row

    async def update_entry(
        self,
        entry_id: UUID,
        *,
        first_name: str,
        last_initial: str,
        phone: str,
        game_type: str,
    ) -> dict | None:
        # Replacing the fields also clears both flags.
        try:
            return await self.db.fetch_one(
                f"""
                UPDATE waitlist
                SET first_name = $2,
                    last_initial = $3,
                    phone = $4,
                    game_type = $5,
                    sms_updates = false,
                    checked_in = false
                WHERE id = $1
                RETURNING {_COLUMNS}
                """,
                entry_id,
                first_name,
                last_initial,
                phone,
                game_type,
            )
        except asyncpg.UniqueViolationError as exc:
            raise DuplicateError("Phone number already exists in the waitlist.") from exc

    async def set_checked_in(self, entry_id: UUID) -> dict | None:
        return await self.db.fetch_one(
            f"""
            UPDATE waitlist
            SET checked_in = true
            WHERE id = $1
            RETURNING {_COLUMNS}
            """,
            entry_id,
        )

    async def reset_flags(self, entry_id: UUID) -> dict | None:
        return await self.db.fetch_one(
            f"""
            UPDATE waitlist
            SET sms_updates = false,
                checked_in = false
            WHERE id = $1
            RETURNING {_COLUMNS}
            """,
            entry_id,
        )

    async def delete_entry(self, entry_id: UUID) -> bool:
        row = await self.db.fetch_one(
            """
            DELETE FROM waitlist
            WHERE id = $1
            RETURNING id
            """,
            entry_id,
        )
        return row is not None

    async def delete_stale(self, *, cutoff: datetime) -> int:
        """
        Delete unchecked entries created at or before `cutoff`. Returns the row count.
        """
        if cutoff.tzinfo is None:
            cutoff = cutoff.replace(tzinfo=timezone.utc)

        status = await self.db.execute(
            """
            DELETE FROM waitlist
            WHERE created_at <= $1
              AND checked_in = false
            """,
            cutoff,
        )
        return affected_rows(status)
