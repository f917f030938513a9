"""
Event-user business logic.
"""

from __future__ import annotations

import logging

from fastapi import HTTPException, status

from events import repository as event_repository

from . import repository, schemas

logger = logging.getLogger(__name__)


def normalize_plate(car_plate: str | None) -> str | None:
    plate = " ".join((car_plate or "").split()).upper()
    return plate or None


def _not_found() -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Event user not found.")


async def create_event_user(payload: schemas.CreateEventUserRequest) -> dict:
    email = repository.normalize_email(payload.email)
    if "@" not in email:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="A valid email is required.")

    event = await event_repository.get_event(payload.event_id)
    if event is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Event not found.")

    user = await repository.upsert_user(
        email=email,
        first_name=payload.first_name.strip(),
        last_name=payload.last_name.strip(),
        car_plate=normalize_plate(payload.car_plate),
        phone=(payload.phone or "").strip() or None,
    )
    link, created = await repository.get_or_create_link(
        user_id=str(user["id"]),
        event_id=str(event["id"]),
        special_needs=(payload.special_needs or "").strip() or None,
    )
    if created:
        logger.info("event_user_created event_user_id=%s event_id=%s", link["id"], event["id"])

    bundle = await repository.get_event_user(str(link["id"]))
    if bundle is None:
        raise RuntimeError("Event user vanished after creation.")
    return bundle


async def get_event_user(event_user_id: str) -> dict:
    bundle = await repository.get_event_user(event_user_id)
    if bundle is None:
        raise _not_found()
    return bundle


async def list_for_event(event_id: str) -> dict:
    event = await event_repository.get_event(event_id)
    if event is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Event not found.")
    rows = await repository.list_event_users_for_event(event_id)
    return {"event_id": event_id, "event_users": rows, "count": len(rows)}


async def update_event_user(event_user_id: str, payload: schemas.UpdateEventUserRequest) -> dict:
    special_needs = payload.special_needs
    clear = special_needs is not None and not special_needs.strip()
    row = await repository.update_link(
        event_user_id,
        special_needs=None if clear or special_needs is None else special_needs.strip(),
        clear_special_needs=clear,
        status=payload.status,
    )
    if row is None:
        raise _not_found()
    return await get_event_user(event_user_id)


async def delete_event_user(event_user_id: str) -> dict:
    deleted = await repository.delete_link(event_user_id)
    if not deleted:
        raise _not_found()
    logger.info("event_user_deleted event_user_id=%s", event_user_id)
    return {"ok": True, "event_user_id": event_user_id}


async def register_plate(event_user_id: str, car_plate: str) -> dict:
    """
    Store the attendee's plate and return the refreshed event user.
    """
    plate = normalize_plate(car_plate)
    if plate is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="car_plate is required.")

    link = await repository.get_link(event_user_id)
    if link is None:
        raise _not_found()

    updated = await repository.update_user_car_plate(str(link["user_id"]), plate)
    if updated is None:
        raise _not_found()
    logger.info("car_plate_registered event_user_id=%s", event_user_id)
    return await get_event_user(event_user_id)
