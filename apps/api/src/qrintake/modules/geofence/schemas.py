"""
Geofence Schemas
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator


class LocationWrite(BaseModel):
    """Request body for creating or updating a location."""

    place_name: str = Field(..., min_length=1, max_length=200)
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)
    radius_meters: float = Field(..., ge=0)

    @field_validator("place_name")
    @classmethod
    def strip_place_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("place_name must not be blank")
        return value


class LocationResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    place_name: str
    latitude: float
    longitude: float
    radius_meters: float
    created_at: datetime
    updated_at: datetime


class LocationListResponse(BaseModel):
    message: str = "Locations fetched successfully"
    result: list[LocationResponse]


class LocationMessageResponse(BaseModel):
    message: str


class PositionCheckRequest(BaseModel):
    """The owner's current position, for POST /locations/validate."""

    latitude: float
    longitude: float
