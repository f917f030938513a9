"""
Event-user persistence helpers.

An event user links one attendee (`users`) to one event (`events`). Reads
return the link with the attendee and event nested under `user` / `event`.
"""

from __future__ import annotations

from uuid import uuid4

from core import db

_BUNDLE_SELECT = """
    SELECT
      eu.id, eu.user_id, eu.event_id, eu.status, eu.special_needs,
      eu.activated_at, eu.created_at,
      u.email AS user_email, u.first_name AS user_first_name,
      u.last_name AS user_last_name, u.car_plate AS user_car_plate,
      u.phone AS user_phone, u.created_at AS user_created_at,
      u.updated_at AS user_updated_at,
      e.name AS event_name, e.venue AS event_venue, e.address AS event_address,
      e.starts_at AS event_starts_at, e.ends_at AS event_ends_at,
      e.organizer_name AS event_organizer_name,
      e.organizer_email AS event_organizer_email,
      e.created_at AS event_created_at
    FROM event_users eu
    JOIN users u ON u.id = eu.user_id
    JOIN events e ON e.id = eu.event_id
"""

_LINK_COLUMNS = "id, user_id, event_id, status, special_needs, activated_at, created_at"


def normalize_email(email: str) -> str:
    return (email or "").strip().lower()


def _nest(row: dict) -> dict:
    """
    Split a flat join row into the event-user link with nested user/event.
    """
    link: dict = {}
    user: dict = {"id": row.get("user_id")}
    event: dict = {"id": row.get("event_id")}
    for key, value in row.items():
        if key.startswith("user_") and key != "user_id":
            user[key[len("user_"):]] = value
        elif key.startswith("event_") and key != "event_id":
            event[key[len("event_"):]] = value
        else:
            link[key] = value
    link["user"] = user
    link["event"] = event
    return link


async def upsert_user(
    *,
    email: str,
    first_name: str,
    last_name: str,
    car_plate: str | None = None,
    phone: str | None = None,
) -> dict:
    row = await db.fetch_one(
        """
        INSERT INTO users (id, email, first_name, last_name, car_plate, phone)
        VALUES ($1, $2, $3, $4, $5, $6)
        ON CONFLICT (email) DO UPDATE
        SET first_name = EXCLUDED.first_name,
            last_name = EXCLUDED.last_name,
            car_plate = COALESCE(EXCLUDED.car_plate, users.car_plate),
            phone = COALESCE(EXCLUDED.phone, users.phone),
            updated_at = now()
        RETURNING id, email, first_name, last_name, car_plate, phone, created_at, updated_at
        """,
        str(uuid4()),
        normalize_email(email),
        first_name,
        last_name,
        car_plate,
        phone,
    )
    if row is None:
        raise RuntimeError("Failed to upsert user.")
    return row


async def update_user_car_plate(user_id: str, car_plate: str) -> dict | None:
    return await db.fetch_one(
        """
        UPDATE users
        SET car_plate = $2,
            updated_at = now()
        WHERE id = $1
        RETURNING id, email, first_name, last_name, car_plate, phone, created_at, updated_at
        """,
        user_id,
        car_plate,
    )


async def get_or_create_link(
    *,
    user_id: str,
    event_id: str,
    special_needs: str | None = None,
) -> tuple[dict, bool]:
    """
    Return (link, created). An existing link is returned unchanged.
    """
    row = await db.fetch_one(
        f"""
        INSERT INTO event_users (id, user_id, event_id, special_needs)
        VALUES ($1, $2, $3, $4)
        ON CONFLICT (user_id, event_id) DO NOTHING
        RETURNING {_LINK_COLUMNS}
        """,
        str(uuid4()),
        user_id,
        event_id,
        special_needs,
    )
    if row is not None:
        return row, True

    existing = await db.fetch_one(
        f"""
        SELECT {_LINK_COLUMNS}
        FROM event_users
        WHERE user_id = $1
          AND event_id = $2
        """,
        user_id,
        event_id,
    )
    if existing is None:
        raise RuntimeError("Failed to create event user.")
    return existing, False


async def get_link(event_user_id: str) -> dict | None:
    return await db.fetch_one(
        f"""
        SELECT {_LINK_COLUMNS}
        FROM event_users
        WHERE id = $1
        """,
        event_user_id,
    )


async def get_event_user(event_user_id: str) -> dict | None:
    row = await db.fetch_one(
        _BUNDLE_SELECT
        + """
        WHERE eu.id = $1
        """,
        event_user_id,
    )
    return _nest(row) if row is not None else None


async def list_event_users_for_event(event_id: str) -> list[dict]:
    rows = await db.fetch_all(
        _BUNDLE_SELECT
        + """
        WHERE eu.event_id = $1
        ORDER BY u.last_name ASC, u.first_name ASC, eu.id ASC
        """,
        event_id,
    )
    return [_nest(row) for row in rows]


async def update_link(
    event_user_id: str,
    *,
    special_needs: str | None,
    clear_special_needs: bool,
    status: str | None,
) -> dict | None:
    return await db.fetch_one(
        f"""
        UPDATE event_users
        SET special_needs = CASE WHEN $3 THEN NULL ELSE COALESCE($2, special_needs) END,
            status = COALESCE($4, status),
            activated_at = CASE WHEN $4 = 'active' THEN COALESCE(activated_at, now()) ELSE activated_at END
        WHERE id = $1
        RETURNING {_LINK_COLUMNS}
        """,
        event_user_id,
        special_needs,
        clear_special_needs,
        status,
    )


async def activate_link(event_user_id: str) -> dict | None:
    return await db.fetch_one(
        f"""
        UPDATE event_users
        SET status = 'active',
            activated_at = COALESCE(activated_at, now())
        WHERE id = $1
        RETURNING {_LINK_COLUMNS}
        """,
        event_user_id,
    )


async def delete_link(event_user_id: str) -> bool:
    # Conversations cascade with the link; a held parking space is handed back to its lot.
    status = await db.execute(
        """
        WITH released AS (
          DELETE FROM parking_assignments
          WHERE event_user_id = $1
          RETURNING lot_id
        ), freed AS (
          UPDATE parking_lots
          SET reserved = GREATEST(reserved - 1, 0)
          WHERE id IN (SELECT lot_id FROM released)
        )
        DELETE FROM event_users WHERE id = $1
        """,
        event_user_id,
    )
    return db.affected_rows(status) > 0
