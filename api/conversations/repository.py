"""
Conversation persistence helpers (chat history per event user).
"""

from __future__ import annotations

from core import db

_COLUMNS = "id, conversation_id, event_user_id, sender, message, created_at"


async def insert_message(*, event_user_id: str, sender: str, message: str) -> dict:
    # Chats are grouped by event user, so the event user id doubles as conversation id.
    row = await db.fetch_one(
        f"""
        INSERT INTO conversations (conversation_id, event_user_id, sender, message)
        VALUES ($1, $1, $2, $3)
        RETURNING {_COLUMNS}
        """,
        event_user_id,
        sender,
        message,
    )
    if row is None:
        raise RuntimeError("Failed to insert conversation message.")
    return row


async def list_messages(event_user_id: str) -> list[dict]:
    return await db.fetch_all(
        f"""
        SELECT {_COLUMNS}
        FROM conversations
        WHERE event_user_id = $1
        ORDER BY created_at ASC, id ASC
        """,
        event_user_id,
    )


async def list_recent_messages(event_user_id: str, *, limit: int = 10) -> list[dict]:
    """
    Most recent `limit` messages, returned oldest first.
    """
    rows = await db.fetch_all(
        f"""
        SELECT {_COLUMNS}
        FROM conversations
        WHERE event_user_id = $1
        ORDER BY created_at DESC, id DESC
        LIMIT $2
        """,
        event_user_id,
        limit,
    )
    rows.reverse()
    return rows


async def delete_messages(event_user_id: str) -> int:
    status = await db.execute("DELETE FROM conversations WHERE event_user_id = $1", event_user_id)
    return db.affected_rows(status)
