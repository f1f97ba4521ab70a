"""
Review endpoints.
"""

from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Response, status

from core.db import Database, get_db

from . import schemas
from .repository import ReviewRepository

router = APIRouter()


def get_repository(db: Database = Depends(get_db)) -> ReviewRepository:
    return ReviewRepository(db)


@router.get("/api/reviews", response_model=list[schemas.ReviewResponse])
async def list_reviews(
    repository: ReviewRepository = Depends(get_repository),
) -> list[dict]:
    return await repository.list_reviews()


@router.post("/api/reviews", status_code=status.HTTP_201_CREATED, response_model=schemas.ReviewResponse)
async def add_review(
    payload: schemas.ReviewRequest,
    repository: ReviewRepository = Depends(get_repository),
) -> dict:
    return await repository.create_review(
        name=payload.name.strip(),
        review=payload.review.strip(),
        rating=payload.rating,
    )


@router.put("/api/reviews/{review_id}", response_model=schemas.ReviewResponse)
async def update_review(
    review_id: UUID,
    payload: schemas.ReviewRequest,
    repository: ReviewRepository = Depends(get_repository),
) -> dict:
    row = await repository.update_review(
        review_id,
        name=payload.name.strip(),
        review=payload.review.strip(),
        rating=payload.rating,
    )
    if row is None:
        raise HTTPException(status_code=404, detail="Review not found.")
    return row


@router.delete("/api/reviews/{review_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
async def delete_review(
    review_id: UUID,
    repository: ReviewRepository = Depends(get_repository),
) -> Response:
    if not await repository.delete_review(review_id):
        raise HTTPException(status_code=404, detail="Review not found.")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
