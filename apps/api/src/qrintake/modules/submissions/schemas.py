"""
Form Submission Schemas

Pydantic schemas for request validation and response serialization.
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field, ValidationInfo, field_validator

from qrintake.modules.submissions.models import SubmissionStatus


class SubmissionCreate(BaseModel):
    """Fields of POST /form/{code}/submit (sent as multipart form data)."""

    name: str = Field(..., min_length=1, max_length=200)
    email: EmailStr
    reason: str | None = Field(None, max_length=1000)
    application_type: str = Field(..., min_length=1, max_length=100)

    @field_validator("name", "application_type")
    @classmethod
    def strip_required(cls, value: str, info: ValidationInfo) -> str:
        value = value.strip()
        if not value:
            raise ValueError(f"{info.field_name} must not be blank")
        return value

    @field_validator("reason")
    @classmethod
    def empty_reason_is_none(cls, value: str | None) -> str | None:
        if value is None:
            return None
        return value.strip() or None


class Coordinates(BaseModel):
    """A visitor's reported position, passed along with a submission."""

    latitude: float
    longitude: float


class SubmissionResponse(BaseModel):
    """Response after a successful submission."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    qr_code_id: UUID
    owner_id: UUID
    name: str
    email: str
    reason: str | None = None
    application_type: str
    status: SubmissionStatus
    reviewed: bool
    created_at: datetime


class SubmitEnvelope(BaseModel):
    message: str = "Form submitted successfully"
    data: SubmissionResponse


# ============================================
# Owner Dashboard Schemas
# ============================================


class SubmissionListItem(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    qr_code_id: UUID
    name: str
    email: str
    reason: str | None = None
    application_type: str
    status: SubmissionStatus
    reviewed: bool
    designation: str | None = None
    department: str | None = None
    has_resume: bool = False
    created_at: datetime


class SubmissionListResponse(BaseModel):
    submissions: list[SubmissionListItem]
    total: int = Field(..., ge=0)
    skip: int = Field(..., ge=0)
    limit: int = Field(..., ge=1, le=100)


class ReviewRequest(BaseModel):
    """Owner decision on a submission. Omitted fields are left unchanged."""

    status: SubmissionStatus | None = None
    designation: str | None = Field(None, max_length=100)
    department: str | None = Field(None, max_length=100)

    @field_validator("designation", "department")
    @classmethod
    def blank_is_none(cls, value: str | None) -> str | None:
        if value is None:
            return None
        return value.strip() or None


class SubmissionStats(BaseModel):
    """Counts for the owner dashboard."""

    total: int = Field(..., ge=0)
    unreviewed: int = Field(..., ge=0)
    pending: int = Field(..., ge=0)
    in_review: int = Field(..., ge=0)
    accepted: int = Field(..., ge=0)
    rejected: int = Field(..., ge=0)
