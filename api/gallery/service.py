"""
Gallery "service layer".

This file contains logic that is independent of FastAPI's routing layer:
- Validate image uploads
- Read file bytes with a size limit
- Store the file under UPLOADS_DIR and build its public URL
"""

from __future__ import annotations

import asyncio
import logging
import os
import secrets
import time
from dataclasses import dataclass
from pathlib import Path
from uuid import UUID

from fastapi import HTTPException, UploadFile

from . import schemas
from .repository import GalleryRepository

logger = logging.getLogger(__name__)

ALLOWED_EXTENSIONS = {".jpg", ".jpeg", ".png", ".gif", ".webp"}

DEFAULT_MAX_UPLOAD_BYTES = 10 * 1024 * 1024  # 10 MiB


@dataclass(frozen=True)
class StoredImage:
    filename: str
    path: Path
    url: str
    size_bytes: int


def uploads_dir() -> Path:
    return Path(os.environ.get("UPLOADS_DIR", "").strip() or "uploads")


def public_base_url() -> str:
    return (os.environ.get("PUBLIC_BASE_URL", "").strip() or "http://localhost:8000").rstrip("/")


def max_upload_bytes_from_env() -> int:
    raw = os.environ.get("MAX_UPLOAD_BYTES", "").strip()
    if not raw:
        return DEFAULT_MAX_UPLOAD_BYTES
    try:
        value = int(raw)
    except ValueError:
        return DEFAULT_MAX_UPLOAD_BYTES
    return value if value > 0 else DEFAULT_MAX_UPLOAD_BYTES


def _file_ext(filename: str) -> str:
    return Path(filename).suffix.lower()


def validate_image(file: UploadFile) -> str:
    """
    Return the normalized file extension if this upload is an acceptable image.
    """
    if not file.filename:
        raise HTTPException(status_code=400, detail="Missing filename.")

    ext = _file_ext(file.filename)
    if ext not in ALLOWED_EXTENSIONS:
        raise HTTPException(
            status_code=400,
            detail=f"Unsupported file type '{ext}'. Allowed: {sorted(ALLOWED_EXTENSIONS)}",
        )
    return ext


async def read_upload_bytes(file: UploadFile, max_bytes: int) -> bytes:
    chunk_size = 1024 * 1024  # 1 MiB
    buf = bytearray()

    while True:
        chunk = await file.read(chunk_size)
        if not chunk:
            break
        buf.extend(chunk)
        if len(buf) > max_bytes:
            raise HTTPException(
                status_code=413,
                detail=f"File too large. Max is {max_bytes} bytes.",
            )

    return bytes(buf)


def generate_filename(ext: str, *, field_name: str = "image") -> str:
    """
    `<field>-<epoch ms>-<9 random digits><ext>`, e.g. `image-1718000000000-123456789.png`.
    """
    suffix = f"{int(time.time() * 1000)}-{secrets.randbelow(10**9):09d}"
    return f"{field_name}-{suffix}{ext}"


def public_url(filename: str) -> str:
    return f"{public_base_url()}/uploads/{filename}"


async def store_upload(file: UploadFile) -> StoredImage:
    ext = validate_image(file)
    data = await read_upload_bytes(file, max_bytes=max_upload_bytes_from_env())
    if not data:
        raise HTTPException(status_code=400, detail="Uploaded image is empty.")

    directory = uploads_dir()
    directory.mkdir(parents=True, exist_ok=True)
    filename = generate_filename(ext)
    path = directory / filename
    await asyncio.to_thread(path.write_bytes, data)

    logger.info("gallery_upload_stored filename=%s size_bytes=%s", filename, len(data))
    return StoredImage(filename=filename, path=path, url=public_url(filename), size_bytes=len(data))


def discard_upload(stored: StoredImage) -> None:
    stored.path.unlink(missing_ok=True)
    logger.info("gallery_upload_discarded filename=%s", stored.filename)


def _to_response(row: dict) -> schemas.GalleryItemResponse:
    return schemas.GalleryItemResponse.model_validate(row)


def _not_found() -> HTTPException:
    return HTTPException(status_code=404, detail="Gallery item not found.")


async def list_items(repository: GalleryRepository) -> list[schemas.GalleryItemResponse]:
    return [_to_response(row) for row in await repository.list_items()]


async def create_item(
    repository: GalleryRepository,
    *,
    title: str,
    description: str | None,
    image: UploadFile | None,
) -> schemas.GalleryItemResponse:
    if image is None:
        raise HTTPException(status_code=400, detail="No image uploaded")

    stored = await store_upload(image)
    try:
        row = await repository.create_item(title=title, description=description, image=stored.url)
    except BaseException:
        discard_upload(stored)
        raise
    return _to_response(row)


async def update_item(
    repository: GalleryRepository,
    item_id: UUID,
    *,
    title: str,
    description: str | None,
    image_file: UploadFile | None,
    image_url: str | None,
) -> schemas.GalleryItemResponse:
    """
    A new upload wins over an image URL; one of the two is required.
    """
    if image_file is None:
        image = (image_url or "").strip()
        if not image:
            raise HTTPException(status_code=400, detail="No image provided")
        row = await repository.update_item(item_id, title=title, description=description, image=image)
        if row is None:
            raise _not_found()
        return _to_response(row)

    # Nothing is written to disk for an item that does not exist.
    if await repository.get_item(item_id) is None:
        raise _not_found()

    stored = await store_upload(image_file)
    try:
        row = await repository.update_item(item_id, title=title, description=description, image=stored.url)
        if row is None:
            raise _not_found()
    except BaseException:
        discard_upload(stored)
        raise
    return _to_response(row)


async def delete_item(repository: GalleryRepository, item_id: UUID) -> None:
    if not await repository.delete_item(item_id):
        raise _not_found()
