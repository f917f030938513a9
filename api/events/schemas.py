"""
Event API schemas.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field, model_validator


class CreateEventRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    venue: str = Field(default="", max_length=200)
    address: str = Field(default="", max_length=500)
    starts_at: datetime
    ends_at: datetime | None = None
    organizer_name: str | None = Field(default=None, max_length=200)
    organizer_email: str | None = Field(default=None, min_length=3, max_length=320)

    @model_validator(mode="after")
    def _check_window(self) -> "CreateEventRequest":
        if self.ends_at is not None and self.ends_at <= self.starts_at:
            raise ValueError("ends_at must be after starts_at")
        return self
