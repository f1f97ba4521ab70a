"""
Gallery persistence (raw SQL).
"""

from __future__ import annotations

from uuid import UUID

from core.db import Database

_COLUMNS = "id, title, description, image, created_at"


class GalleryRepository:
    def __init__(self, db: Database) -> None:
        self.db = db

    async def list_items(self) -> list[dict]:
        return await self.db.fetch_all(f"SELECT {_COLUMNS} FROM gallery_items ORDER BY created_at DESC")

    async def get_item(self, item_id: UUID) -> dict | None:
        return await self.db.fetch_one(f"SELECT {_COLUMNS} FROM gallery_items WHERE id = $1", item_id)

    async def create_item(self, *, title: str, description: str | None, image: str) -> dict:
        row = await self.db.fetch_one(
            f"""
            INSERT INTO gallery_items (title, description, image)
            VALUES ($1, $2, $3)
            RETURNING {_COLUMNS}
            """,
            title,
            description,
            image,
        )
        if row is None:
            raise RuntimeError("Failed to create gallery item.")
        return row

    async def update_item(
        self,
        item_id: UUID,
        *,
        title: str,
        description: str | None,
        image: str,
    ) -> dict | None:
        return await self.db.fetch_one(
            f"""
            UPDATE gallery_items
            SET title = $2,
                description = $3,
                image = $4
            WHERE id = $1
            RETURNING {_COLUMNS}
            """,
            item_id,
            title,
            description,
            image,
        )

    async def delete_item(self, item_id: UUID) -> bool:
        row = await self.db.fetch_one(
            """
            DELETE FROM gallery_items
            WHERE id = $1
            RETURNING id
            """,
            item_id,
        )
        return row is not None
