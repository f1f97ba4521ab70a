"""
Waitlist business logic.

Entry lifecycle:
- enqueue -> active (checked_in=false)
- check_in -> active (checked_in=true), no longer eligible for the sweep
- remove / sweep -> deleted
"""

from __future__ import annotations

from uuid import UUID

from fastapi import HTTPException, status

from core.errors import DuplicateError

from . import schemas
from .repository import WaitlistRepository


def normalize_first_name(first_name: str) -> str:
    return (first_name or "").strip()


def normalize_last_initial(last_initial: str) -> str:
    return (last_initial or "").strip().upper()


def _to_response(row: dict) -> schemas.WaitlistEntryResponse:
    return schemas.WaitlistEntryResponse.model_validate(row)


def _normalized_fields(payload: schemas.WaitlistEntryRequest) -> dict[str, str]:
    first_name = normalize_first_name(payload.first_name)
    last_initial = normalize_last_initial(payload.last_initial)
    phone = (payload.phone or "").strip()
    game_type = (payload.game_type or "").strip()
    if not first_name or not last_initial or not phone or not game_type:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="firstName, lastInitial, phone and gameType are required.",
        )
    return {
        "first_name": first_name,
        "last_initial": last_initial,
        "phone": phone,
        "game_type": game_type,
    }


def _not_found() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail="Waitlist entry not found.",
    )


async def list_entries(repository: WaitlistRepository) -> list[schemas.WaitlistEntryResponse]:
    rows = await repository.list_entries()
    return [_to_response(row) for row in rows]


async def enqueue(
    repository: WaitlistRepository,
    payload: schemas.WaitlistEntryRequest,
) -> schemas.WaitlistEntryResponse:
    fields = _normalized_fields(payload)
    try:
        row = await repository.create_entry(
            **fields,
            sms_updates=bool(payload.sms_updates),
        )
    except DuplicateError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(exc),
        ) from exc
    return _to_response(row)


async def check_in(repository: WaitlistRepository, entry_id: UUID) -> schemas.WaitlistEntryResponse:
    row = await repository.set_checked_in(entry_id)
    if row is None:
        raise _not_found()
    return _to_response(row)


async def update(
    repository: WaitlistRepository,
    entry_id: UUID,
    payload: schemas.WaitlistEntryRequest,
) -> schemas.WaitlistEntryResponse:
    """
    Replace the entry's fields. Always clears sms_updates and checked_in,
    whatever the payload says; `reset_flags` does only the clearing.
    """
    fields = _normalized_fields(payload)
    try:
        row = await repository.update_entry(entry_id, **fields)
    except DuplicateError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(exc),
        ) from exc
    if row is None:
        raise _not_found()
    return _to_response(row)


async def reset_flags(repository: WaitlistRepository, entry_id: UUID) -> schemas.WaitlistEntryResponse:
    row = await repository.reset_flags(entry_id)
    if row is None:
        raise _not_found()
    return _to_response(row)


async def remove(repository: WaitlistRepository, entry_id: UUID) -> None:
    deleted = await repository.delete_entry(entry_id)
    if not deleted:
        raise _not_found()
