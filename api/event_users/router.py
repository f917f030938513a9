"""
Event-user API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, status

from . import schemas, service

router = APIRouter()


@router.post("/", status_code=status.HTTP_201_CREATED)
async def create_event_user(request: schemas.CreateEventUserRequest) -> dict:
    return await service.create_event_user(request)


@router.get("/event/{event_id}")
async def list_event_users(event_id: str) -> dict:
    return await service.list_for_event(event_id)


@router.get("/{event_user_id}")
async def get_event_user(event_user_id: str) -> dict:
    return await service.get_event_user(event_user_id)


@router.put("/{event_user_id}")
async def update_event_user(event_user_id: str, request: schemas.UpdateEventUserRequest) -> dict:
    return await service.update_event_user(event_user_id, request)


@router.delete("/{event_user_id}")
async def delete_event_user(event_user_id: str) -> dict:
    return await service.delete_event_user(event_user_id)
