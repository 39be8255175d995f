"""
Catalog Schemas
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from qrintake.modules.catalogs.models import CatalogKind


class CatalogEntryWrite(BaseModel):
    """Request body for adding or renaming a catalog entry."""

    name: str = Field(..., min_length=1, max_length=100)

    @field_validator("name")
    @classmethod
    def strip_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Name is required")
        return value


class CatalogEntryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    kind: CatalogKind
    name: str
    created_at: datetime


class CatalogListResponse(BaseModel):
    message: str = "Successfully fetched"
    result: list[CatalogEntryResponse]
    defaults: list[str] = Field(
        default_factory=list,
        description="Values accepted while the catalog has no entries of its own",
    )


class CatalogMessageResponse(BaseModel):
    message: str
