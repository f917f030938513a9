"""
Event business logic.
"""

from __future__ import annotations

import logging

from fastapi import HTTPException, status

from . import repository, schemas

logger = logging.getLogger(__name__)


async def create_event(payload: schemas.CreateEventRequest) -> dict:
    row = await repository.create_event(
        name=payload.name.strip(),
        venue=payload.venue.strip(),
        address=payload.address.strip(),
        starts_at=payload.starts_at,
        ends_at=payload.ends_at,
        organizer_name=(payload.organizer_name or "").strip() or None,
        organizer_email=(payload.organizer_email or "").strip().lower() or None,
    )
    logger.info("event_created event_id=%s", row["id"])
    return row


async def get_event(event_id: str) -> dict:
    row = await repository.get_event(event_id)
    if row is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Event not found.")
    return row


async def list_events(*, limit: int = 50, offset: int = 0) -> dict:
    rows = await repository.list_events(limit=max(1, min(limit, 200)), offset=max(0, offset))
    return {"events": rows, "limit": limit, "offset": offset, "count": len(rows)}
