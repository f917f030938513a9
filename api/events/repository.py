"""
Event persistence helpers.
"""

from __future__ import annotations

from datetime import datetime
from uuid import uuid4

from core import db

EVENT_COLUMNS = """
    id, name, venue, address, starts_at, ends_at,
    organizer_name, organizer_email, created_at
"""


async def create_event(
    *,
    name: str,
    venue: str,
    address: str,
    starts_at: datetime,
    ends_at: datetime | None = None,
    organizer_name: str | None = None,
    organizer_email: str | None = None,
) -> dict:
    row = await db.fetch_one(
        f"""
        INSERT INTO events (id, name, venue, address, starts_at, ends_at, organizer_name, organizer_email)
        VALUES ($1, $2, $3, $4, $5, $6, $7, $8)
        RETURNING {EVENT_COLUMNS}
        """,
        str(uuid4()),
        name,
        venue,
        address,
        starts_at,
        ends_at,
        organizer_name,
        organizer_email,
    )
    if row is None:
        raise RuntimeError("Failed to create event.")
    return row


async def get_event(event_id: str) -> dict | None:
    return await db.fetch_one(
        f"""
        SELECT {EVENT_COLUMNS}
        FROM events
        WHERE id = $1
        """,
        event_id,
    )


async def list_events(*, limit: int = 50, offset: int = 0) -> list[dict]:
    """
    Upcoming events first (soonest start), then past events (most recent first).
    """
    return await db.fetch_all(
        f"""
        SELECT {EVENT_COLUMNS}
        FROM events
        ORDER BY
          (starts_at < now()) ASC,
          CASE WHEN starts_at >= now() THEN starts_at END ASC,
          starts_at DESC,
          id ASC
        LIMIT $1
        OFFSET $2
        """,
        limit,
        offset,
    )
