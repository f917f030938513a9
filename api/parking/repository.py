"""
Parking lot and assignment persistence helpers.
"""

from __future__ import annotations

from uuid import uuid4

import asyncpg

from core import db

_LOT_COLUMNS = """
    id, event_id, name, address, capacity, reserved,
    GREATEST(capacity - reserved, 0) AS available,
    accessible_spaces, walking_minutes, map_url, created_at
"""


async def create_lot(
    *,
    event_id: str,
    name: str,
    address: str,
    capacity: int,
    accessible_spaces: int,
    walking_minutes: int,
    map_url: str | None,
) -> dict:
    row = await db.fetch_one(
        f"""
        INSERT INTO parking_lots (id, event_id, name, address, capacity, accessible_spaces, walking_minutes, map_url)
        VALUES ($1, $2, $3, $4, $5, $6, $7, $8)
        RETURNING {_LOT_COLUMNS}
        """,
        str(uuid4()),
        event_id,
        name,
        address,
        capacity,
        accessible_spaces,
        walking_minutes,
        map_url,
    )
    if row is None:
        raise RuntimeError("Failed to create parking lot.")
    return row


async def get_lot(lot_id: str) -> dict | None:
    return await db.fetch_one(
        f"""
        SELECT {_LOT_COLUMNS}
        FROM parking_lots
        WHERE id = $1
        """,
        lot_id,
    )


async def list_lots_for_event(event_id: str) -> list[dict]:
    return await db.fetch_all(
        f"""
        SELECT {_LOT_COLUMNS}
        FROM parking_lots
        WHERE event_id = $1
        ORDER BY walking_minutes ASC, name ASC, id ASC
        """,
        event_id,
    )


async def get_assignment(event_user_id: str) -> dict | None:
    return await db.fetch_one(
        """
        SELECT id, event_user_id, lot_id, created_at
        FROM parking_assignments
        WHERE event_user_id = $1
        """,
        event_user_id,
    )


async def reserve_space(*, event_user_id: str, lot_id: str) -> dict | None:
    """
    Take one space in the lot and record the assignment in one statement.

    Returns None when the lot is full or the event user already holds a space.
    Two requests racing for the same event user can both pass the NOT EXISTS
    check; the loser trips the unique constraint and its statement rolls back whole.
    """
    try:
        return await db.fetch_one(
            """
            WITH taken AS (
              UPDATE parking_lots
              SET reserved = reserved + 1
              WHERE id = $2
                AND reserved < capacity
                AND NOT EXISTS (
                  SELECT 1 FROM parking_assignments WHERE event_user_id = $1
                )
              RETURNING id
            )
            INSERT INTO parking_assignments (event_user_id, lot_id)
            SELECT $1, taken.id
            FROM taken
            RETURNING id, event_user_id, lot_id, created_at
            """,
            event_user_id,
            lot_id,
        )
    except asyncpg.UniqueViolationError:
        return None
