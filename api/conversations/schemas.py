"""
Conversation API schemas (request models).
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field


class CreateMessageRequest(BaseModel):
    event_user_id: str = Field(..., min_length=1)
    sender: Literal["user", "bot"]
    message: str = Field(..., min_length=1, max_length=4000)


class SmartResponseRequest(BaseModel):
    event_user_id: str = Field(..., min_length=1)
    message: str = Field(..., min_length=1, max_length=4000)


class ChatRequest(BaseModel):
    message: str = Field(..., min_length=1, max_length=4000)
    # Inline attendee/event records, as held by the frontend.
    user: dict[str, Any] = Field(default_factory=dict)
    event: dict[str, Any] = Field(default_factory=dict)


class RegisterPlateRequest(BaseModel):
    event_user_id: str = Field(..., min_length=1)
    car_plate: str = Field(..., min_length=1, max_length=20)
