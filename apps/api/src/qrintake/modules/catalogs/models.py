"""
Catalog Models

Per-owner vocabularies: the application types visitors may pick and the
designations and departments a reviewer may assign.
"""

import enum
import uuid
from datetime import datetime

from sqlalchemy import DateTime, Enum, String, UniqueConstraint, func
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from qrintake.core.database import Base


class CatalogKind(str, enum.Enum):
    APPLICATION_TYPE = "application_type"
    DESIGNATION = "designation"
    DEPARTMENT = "department"


class CatalogEntry(Base):
    """One named value in an owner's catalog. Names are unique per owner and kind."""

    __tablename__ = "catalog_entries"

    id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)

    owner_id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), nullable=False)
    kind: Mapped[CatalogKind] = mapped_column(
        Enum(CatalogKind, name="catalog_kind"), nullable=False
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    __table_args__ = (
        UniqueConstraint("owner_id", "kind", "name", name="uq_catalog_entries_owner_kind_name"),
    )
