"""
Event-user API schemas (request models).
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field


class CreateEventUserRequest(BaseModel):
    email: str = Field(..., min_length=3, max_length=320)
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(default="", max_length=100)
    event_id: str = Field(..., min_length=1)
    car_plate: str | None = Field(default=None, max_length=20)
    phone: str | None = Field(default=None, max_length=40)
    special_needs: str | None = Field(default=None, max_length=500)


class UpdateEventUserRequest(BaseModel):
    # An empty string clears the stored special needs.
    special_needs: str | None = Field(default=None, max_length=500)
    status: Literal["invited", "active"] | None = None
