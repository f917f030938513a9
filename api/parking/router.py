"""
Parking API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, status

from . import schemas, service

router = APIRouter()


@router.post("/lots", status_code=status.HTTP_201_CREATED)
async def create_lot(request: schemas.CreateLotRequest) -> dict:
    return await service.create_lot(request)


@router.get("/events/{event_id}/lots")
async def list_lots(event_id: str) -> dict:
    return await service.list_lots(event_id)


@router.get("/recommendation/{event_user_id}")
async def recommendation(event_user_id: str) -> dict:
    return await service.recommendation(event_user_id)


@router.post("/assignments")
async def assign(request: schemas.AssignRequest) -> dict:
    return await service.assign(request)


@router.get("/assignments/{event_user_id}")
async def get_assignment(event_user_id: str) -> dict:
    return await service.get_assignment(event_user_id)
