"""
Parking API schemas.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, model_validator


class CreateLotRequest(BaseModel):
    event_id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1, max_length=200)
    address: str = Field(default="", max_length=500)
    capacity: int = Field(..., ge=0)
    accessible_spaces: int = Field(default=0, ge=0)
    walking_minutes: int = Field(default=0, ge=0, le=240)
    map_url: str | None = Field(default=None, max_length=2000)

    @model_validator(mode="after")
    def _check_accessible(self) -> "CreateLotRequest":
        if self.accessible_spaces > self.capacity:
            raise ValueError("accessible_spaces cannot exceed capacity")
        return self


class AssignRequest(BaseModel):
    event_user_id: str = Field(..., min_length=1)
    lot_id: str | None = Field(default=None, min_length=1)
