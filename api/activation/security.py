"""
Session token helpers for activated event users.
"""

from __future__ import annotations

import time
from typing import Any

import jwt

from core import settings

SESSION_ALGORITHM = "HS256"


class SessionTokenError(RuntimeError):
    pass


def now_epoch_s() -> int:
    return int(time.time())


def build_session_token(*, event_user_id: str) -> str:
    issued_at = now_epoch_s()
    expires_at = issued_at + settings.session_ttl_hours() * 3600

    payload = {
        "sub": str(event_user_id),
        "type": "session",
        "iat": issued_at,
        "exp": expires_at,
    }
    return jwt.encode(payload, settings.session_secret(), algorithm=SESSION_ALGORITHM)


def decode_session_token(token: str) -> dict[str, Any]:
    raw = (token or "").strip()
    if not raw:
        raise SessionTokenError("Session token is empty.")

    try:
        payload = jwt.decode(raw, settings.session_secret(), algorithms=[SESSION_ALGORITHM])
    except jwt.ExpiredSignatureError as exc:
        raise SessionTokenError("Session token is expired.") from exc
    except jwt.InvalidTokenError as exc:
        raise SessionTokenError("Invalid session token.") from exc

    if str(payload.get("type") or "").strip().lower() != "session":
        raise SessionTokenError("Token is not a session token.")
    if not str(payload.get("sub") or "").strip():
        raise SessionTokenError("Session token has no subject.")
    return payload
