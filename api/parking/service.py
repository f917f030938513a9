"""
Parking business logic.

Scope:
- parking lots per event
- lot recommendation for an attendee
- one reserved space per event user
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import HTTPException, status

from event_users import repository as event_user_repository
from events import repository as event_repository

from . import repository, schemas

logger = logging.getLogger(__name__)


def _available(lot: dict[str, Any]) -> int:
    if lot.get("available") is not None:
        return int(lot["available"])
    return max(int(lot.get("capacity") or 0) - int(lot.get("reserved") or 0), 0)


def wants_accessible_parking(event_user: dict[str, Any]) -> bool:
    return bool(str(event_user.get("special_needs") or "").strip())


def recommend_lot(lots: list[dict[str, Any]], *, needs_accessibility: bool = False) -> dict[str, Any] | None:
    """
    Pick the closest lot with free space.

    Attendees with special needs get a lot with accessible spaces when one
    has room; otherwise any lot with room.
    """
    open_lots = [lot for lot in lots if _available(lot) > 0]
    if needs_accessibility:
        accessible = [lot for lot in open_lots if int(lot.get("accessible_spaces") or 0) > 0]
        if accessible:
            open_lots = accessible
    if not open_lots:
        return None
    return min(
        open_lots,
        key=lambda lot: (int(lot.get("walking_minutes") or 0), -_available(lot), str(lot.get("name") or "")),
    )


async def _require_event_user(event_user_id: str) -> dict:
    event_user = await event_user_repository.get_event_user(event_user_id)
    if event_user is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Event user not found.")
    return event_user


async def create_lot(payload: schemas.CreateLotRequest) -> dict:
    event = await event_repository.get_event(payload.event_id)
    if event is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Event not found.")

    row = await repository.create_lot(
        event_id=payload.event_id,
        name=payload.name.strip(),
        address=payload.address.strip(),
        capacity=payload.capacity,
        accessible_spaces=payload.accessible_spaces,
        walking_minutes=payload.walking_minutes,
        map_url=(payload.map_url or "").strip() or None,
    )
    logger.info("parking_lot_created lot_id=%s event_id=%s capacity=%s", row["id"], payload.event_id, payload.capacity)
    return row


async def list_lots(event_id: str) -> dict:
    rows = await repository.list_lots_for_event(event_id)
    return {"event_id": event_id, "lots": rows, "count": len(rows)}


async def recommendation(event_user_id: str) -> dict:
    event_user = await _require_event_user(event_user_id)
    lots = await repository.list_lots_for_event(str(event_user["event_id"]))
    lot = recommend_lot(lots, needs_accessibility=wants_accessible_parking(event_user))
    if lot is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No parking lot has space left.")
    return {"event_user_id": event_user_id, "lot": lot}


async def _assignment_with_lot(assignment: dict) -> dict:
    lot = await repository.get_lot(str(assignment["lot_id"]))
    return {**assignment, "lot": lot}


async def get_assignment(event_user_id: str) -> dict:
    assignment = await repository.get_assignment(event_user_id)
    if assignment is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No parking assignment.")
    return await _assignment_with_lot(assignment)


async def assign(payload: schemas.AssignRequest) -> dict:
    event_user = await _require_event_user(payload.event_user_id)

    existing = await repository.get_assignment(payload.event_user_id)
    if existing is not None:
        return await _assignment_with_lot(existing)

    if payload.lot_id is None:
        lots = await repository.list_lots_for_event(str(event_user["event_id"]))
        lot = recommend_lot(lots, needs_accessibility=wants_accessible_parking(event_user))
        if lot is None:
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="No parking lot has space left.")
    else:
        lot = await repository.get_lot(payload.lot_id)
        if lot is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Parking lot not found.")
        if str(lot["event_id"]) != str(event_user["event_id"]):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Parking lot belongs to a different event.",
            )

    assignment = await repository.reserve_space(event_user_id=payload.event_user_id, lot_id=str(lot["id"]))
    if assignment is None:
        # Either a racing request assigned this event user first, or the lot filled up.
        existing = await repository.get_assignment(payload.event_user_id)
        if existing is not None:
            return await _assignment_with_lot(existing)
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Parking lot is full.")

    logger.info("parking_assigned event_user_id=%s lot_id=%s", payload.event_user_id, lot["id"])
    return await _assignment_with_lot(assignment)
