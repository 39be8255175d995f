"""
QR Code Schemas

Pydantic schemas for request validation and response serialization.
"""

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class QrCodeCreate(BaseModel):
    """Request body for POST /qrcodes.

    Presence of `code`, `url` and `user_id` is checked by the service so
    that a missing field is reported as a 400 with a readable message.
    """

    model_config = ConfigDict(populate_by_name=True)

    code: str | None = Field(None, max_length=255)
    url: str | None = Field(None, max_length=2048)
    user_id: UUID | None = Field(None, alias="userId")
    image: str | None = None
    notify_email: EmailStr | None = None


class QrCodeResponse(BaseModel):
    """A QR code as returned to its owner and to public lookups."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    code: str
    owner_id: UUID
    url: str
    image: str | None = None
    created_at: datetime


class QrCodeEnvelope(BaseModel):
    message: str
    data: QrCodeResponse


class QrCodeListResponse(BaseModel):
    message: str = "QR codes fetched successfully"
    data: list[QrCodeResponse]


class OwnerCodeResponse(BaseModel):
    """Response for GET /qrcodes/user."""

    message: str = "QR code fetched successfully"
    code: str


class DeleteResponse(BaseModel):
    message: str = "Successfully deleted"


class ValidateLocationRequest(BaseModel):
    """Request body for POST /qrcodes/validate/{code}.

    Values are accepted as-is and checked by the admission decision, so a
    malformed coordinate still yields a body with `withinRange: false`
    rather than a framework validation error.
    """

    latitude: Any = None
    longitude: Any = None


class ValidateLocationResponse(BaseModel):
    """Admission result for the public validate endpoint."""

    model_config = ConfigDict(populate_by_name=True)

    message: str
    within_range: bool = Field(..., serialization_alias="withinRange")
    reason: str | None = None
