"""
Conversation orchestration.

Smart response flow:
1) Load the event user with attendee + event
2) Load recent chat history
3) Ask the LLM, primed with the parking system prompt
4) Override the reply with a canned template when it matches (see `overrides.py`)
5) Save the bot reply
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import HTTPException, status

from core import llm, settings
from event_users import repository as event_user_repository

from . import overrides, repository, templates

logger = logging.getLogger(__name__)


async def complete(messages: list[dict[str, str]]) -> str:
    return await llm.chat_completion(
        base_url=settings.llm_base_url(),
        api_key=settings.llm_api_key(),
        model=settings.llm_model(),
        messages=messages,
        temperature=settings.llm_temperature(),
        max_tokens=settings.llm_max_tokens(),
        timeout_s=settings.llm_timeout_s(),
    )


def _build_history_messages(history_rows: list[dict[str, Any]]) -> list[dict[str, str]]:
    messages: list[dict[str, str]] = []
    for row in history_rows:
        content = str(row.get("message") or "").strip()
        if not content:
            continue
        role = "user" if row.get("sender") == "user" else "assistant"
        messages.append({"role": role, "content": content})
    return messages


def _drop_echoed_message(history_rows: list[dict[str, Any]], message: str) -> list[dict[str, Any]]:
    # The frontend usually stores the user's message before asking for a reply.
    if history_rows:
        last = history_rows[-1]
        if last.get("sender") == "user" and str(last.get("message") or "").strip() == message:
            return history_rows[:-1]
    return history_rows


async def create_message(*, event_user_id: str, sender: str, message: str) -> dict:
    message = (message or "").strip()
    if not message:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Message is empty.")

    link = await event_user_repository.get_link(event_user_id)
    if link is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Event user not found.")

    return await repository.insert_message(event_user_id=event_user_id, sender=sender, message=message)


async def list_messages(event_user_id: str) -> dict[str, Any]:
    rows = await repository.list_messages(event_user_id)
    return {"event_user_id": event_user_id, "messages": rows, "count": len(rows)}


async def clear_messages(event_user_id: str) -> dict[str, Any]:
    deleted = await repository.delete_messages(event_user_id)
    logger.info("conversation_cleared event_user_id=%s deleted=%s", event_user_id, deleted)
    return {"event_user_id": event_user_id, "deleted": deleted}


async def smart_response(event_user_id: str, message: str) -> dict[str, Any]:
    message = (message or "").strip()
    if not message:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Message is empty.")

    event_user = await event_user_repository.get_event_user(event_user_id)
    if event_user is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Event user data not found.")
    user = event_user["user"]
    event = event_user["event"]

    history_rows = await repository.list_recent_messages(
        event_user_id,
        limit=settings.chat_history_messages(),
    )
    history_rows = _drop_echoed_message(history_rows, message)

    llm_messages: list[dict[str, str]] = [templates.initial_greeting(user, event)]
    llm_messages.extend(_build_history_messages(history_rows))
    llm_messages.append({"role": "user", "content": message})

    try:
        ai_message = await complete(llm_messages)
    except llm.LLMError as exc:
        logger.error(
            "smart_response_failed event_user_id=%s status=%s error=%s",
            event_user_id,
            exc.status_code,
            exc,
        )
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail={"error": "Failed to get AI response", "details": exc.body or str(exc)},
        ) from exc

    final_message, template_name = overrides.select_reply(ai_message, user, event)
    logger.debug("smart_response_ai_reply event_user_id=%s reply=%r", event_user_id, ai_message)
    logger.debug("smart_response_final_reply event_user_id=%s reply=%r", event_user_id, final_message)
    logger.info(
        "smart_response event_user_id=%s history=%s template=%s",
        event_user_id,
        len(history_rows),
        template_name or "none",
    )

    await repository.insert_message(event_user_id=event_user_id, sender="bot", message=final_message)
    return {"message": final_message}


async def quick_chat(message: str, *, user: dict[str, Any], event: dict[str, Any]) -> dict[str, str]:
    """
    Stateless chat turn for records held by the frontend. Nothing is stored.

    A plain "no" (the attendee rejecting the meeting details) goes straight to
    the organizer-contact message.
    """
    text = (message or "").strip()
    if text.lower() == "no":
        logger.info("quick_chat template=%s", overrides.CONTACT_ADMIN)
        return templates.contact_admin(user, event)

    ai_message = await complete(
        [
            templates.initial_greeting(user, event),
            {"role": "user", "content": text},
        ]
    )
    final_message, template_name = overrides.select_reply(ai_message, user, event)
    logger.info("quick_chat template=%s", template_name or "none")
    return {"role": "assistant", "content": final_message}
