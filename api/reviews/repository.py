"""
Review persistence (raw SQL).
"""

from __future__ import annotations

from uuid import UUID

from core.db import Database

_COLUMNS = "id, name, review, rating, created_at"


class ReviewRepository:
    def __init__(self, db: Database) -> None:
        self.db = db

    async def list_reviews(self) -> list[dict]:
        return await self.db.fetch_all(f"SELECT {_COLUMNS} FROM reviews ORDER BY created_at DESC")

    async def create_review(self, *, name: str, review: str, rating: int) -> dict:
        row = await self.db.fetch_one(
            f"""
            INSERT INTO reviews (name, review, rating)
            VALUES ($1, $2, $3)
            RETURNING {_COLUMNS}
            """,
            name,
            review,
            rating,
        )
        if row is None:
            raise RuntimeError("Failed to create review.")
        return row

    async def update_review(self, review_id: UUID, *, name: str, review: str, rating: int) -> dict | None:
        return await self.db.fetch_one(
            f"""
            UPDATE reviews
            SET name = $2,
                review = $3,
                rating = $4
            WHERE id = $1
            RETURNING {_COLUMNS}
            """,
            review_id,
            name,
            review,
            rating,
        )

    async def delete_review(self, review_id: UUID) -> bool:
        row = await self.db.fetch_one(
            """
            DELETE FROM reviews
            WHERE id = $1
            RETURNING id
            """,
            review_id,
        )
        return row is not None
