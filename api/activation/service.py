"""
Activation business logic: turning an invitation link into a session.
"""

from __future__ import annotations

import logging

from fastapi import HTTPException, status

from event_users import repository as event_user_repository

from . import security

logger = logging.getLogger(__name__)


async def activate(event_user_id: str) -> dict:
    link = await event_user_repository.activate_link(event_user_id)
    if link is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Event user not found.")

    bundle = await event_user_repository.get_event_user(event_user_id)
    if bundle is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Event user not found.")

    token = security.build_session_token(event_user_id=event_user_id)
    logger.info("event_user_activated event_user_id=%s", event_user_id)
    return {"event_user": bundle, "token": token}


async def get_event_user_from_token(token: str) -> dict:
    try:
        payload = security.decode_session_token(token)
    except security.SessionTokenError as exc:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(exc)) from exc

    bundle = await event_user_repository.get_event_user(str(payload["sub"]))
    if bundle is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Session event user not found.")
    if bundle.get("status") != "active":
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Event user is not active.")
    return bundle
