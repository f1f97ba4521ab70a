"""
FastAPI router for gallery endpoints.
"""

from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, File, Form, Request, Response, UploadFile, status
from starlette.datastructures import UploadFile as StarletteUploadFile

from core.db import Database, get_db

from . import schemas, service
from .repository import GalleryRepository

router = APIRouter()


def get_repository(db: Database = Depends(get_db)) -> GalleryRepository:
    return GalleryRepository(db)


@router.get("/api/gallery", response_model=list[schemas.GalleryItemResponse])
async def list_gallery(
    repository: GalleryRepository = Depends(get_repository),
) -> list[schemas.GalleryItemResponse]:
    return await service.list_items(repository)


@router.post(
    "/api/gallery",
    status_code=status.HTTP_201_CREATED,
    response_model=schemas.GalleryItemResponse,
)
async def add_gallery_item(
    title: str = Form(..., min_length=1, max_length=200),
    description: str | None = Form(default=None, max_length=2000),
    image: UploadFile | None = File(default=None),
    repository: GalleryRepository = Depends(get_repository),
) -> schemas.GalleryItemResponse:
    return await service.create_item(
        repository,
        title=title,
        description=description,
        image=image,
    )


@router.put("/api/gallery/{item_id}", response_model=schemas.GalleryItemResponse)
async def update_gallery_item(
    item_id: UUID,
    request: Request,
    title: str = Form(..., min_length=1, max_length=200),
    description: str | None = Form(default=None, max_length=2000),
    repository: GalleryRepository = Depends(get_repository),
) -> schemas.GalleryItemResponse:
    """
    `image` may be a new file upload or the URL of the current image.
    """
    # The form is already parsed (and cached) for title/description.
    form = await request.form()
    raw_image = form.get("image")
    image_file = raw_image if isinstance(raw_image, StarletteUploadFile) else None
    image_url = raw_image if isinstance(raw_image, str) else None

    return await service.update_item(
        repository,
        item_id,
        title=title,
        description=description,
        image_file=image_file,
        image_url=image_url,
    )


@router.delete("/api/gallery/{item_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
async def delete_gallery_item(
    item_id: UUID,
    repository: GalleryRepository = Depends(get_repository),
) -> Response:
    await service.delete_item(repository, item_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
