"""
Activation API endpoints (mounted at /api).
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Response

from core import settings

from . import dependencies, service

router = APIRouter()


@router.post("/activate/{event_user_id}")
async def activate(event_user_id: str, response: Response) -> dict:
    result = await service.activate(event_user_id)
    response.set_cookie(
        key=settings.session_cookie_name(),
        value=result["token"],
        max_age=settings.session_ttl_hours() * 3600,
        httponly=True,
        samesite="lax",
    )
    return result


@router.get("/session")
async def session(event_user: dict = Depends(dependencies.get_current_event_user)) -> dict:
    return {"event_user": event_user}


@router.post("/logout")
async def logout(response: Response) -> dict:
    response.delete_cookie(key=settings.session_cookie_name())
    return {"ok": True}
