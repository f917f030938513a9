"""
Event API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Query, status

from . import schemas, service

router = APIRouter()


@router.post("/", status_code=status.HTTP_201_CREATED)
async def create_event(request: schemas.CreateEventRequest) -> dict:
    return await service.create_event(request)


@router.get("/")
async def list_events(
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
) -> dict:
    return await service.list_events(limit=limit, offset=offset)


@router.get("/{event_id}")
async def get_event(event_id: str) -> dict:
    return await service.get_event(event_id)
