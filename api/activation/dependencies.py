"""
Session dependencies for routes that need the activated event user.
"""

from __future__ import annotations

from fastapi import Depends, Header, HTTPException, Request, status

from core import settings

from . import service


def _extract_bearer_token(authorization: str | None) -> str | None:
    raw = (authorization or "").strip()
    if not raw:
        return None

    parts = raw.split(" ", 1)
    if len(parts) != 2 or parts[0].strip().lower() != "bearer" or not parts[1].strip():
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authorization must be: Bearer <token>.",
        )
    return parts[1].strip()


async def get_session_token(
    request: Request,
    authorization: str | None = Header(default=None),
) -> str:
    # The browser sends the cookie; API clients may use a bearer header instead.
    token = _extract_bearer_token(authorization) or request.cookies.get(settings.session_cookie_name())
    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing session.",
        )
    return token


async def get_current_event_user(token: str = Depends(get_session_token)) -> dict:
    return await service.get_event_user_from_token(token)
