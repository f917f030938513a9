"""
Conversation API endpoints.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from core import llm
from event_users import service as event_user_service

from . import schemas, service, templates

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/", status_code=status.HTTP_201_CREATED)
async def create_message(request: schemas.CreateMessageRequest) -> dict:
    return await service.create_message(
        event_user_id=request.event_user_id,
        sender=request.sender,
        message=request.message,
    )


@router.post("/smart-response")
async def smart_response(request: schemas.SmartResponseRequest) -> dict:
    return await service.smart_response(request.event_user_id, request.message)


@router.post("/chat", response_model=None)
async def chat(request: schemas.ChatRequest) -> dict | JSONResponse:
    try:
        return await service.quick_chat(request.message, user=request.user, event=request.event)
    except llm.LLMError as exc:
        logger.error("quick_chat_failed status=%s error=%s", exc.status_code, exc)
        return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=templates.ERROR_RESPONSE)
    except Exception:
        logger.exception("quick_chat_failed")
        return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=templates.ERROR_RESPONSE)


@router.post("/register-plate")
async def register_plate(request: schemas.RegisterPlateRequest) -> dict:
    return await event_user_service.register_plate(request.event_user_id, request.car_plate)


@router.get("/{event_user_id}")
async def list_messages(event_user_id: str) -> dict:
    return await service.list_messages(event_user_id)


@router.delete("/{event_user_id}")
async def clear_messages(event_user_id: str) -> dict:
    return await service.clear_messages(event_user_id)
