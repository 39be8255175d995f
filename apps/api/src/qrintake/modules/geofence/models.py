"""
Geofence Models

The circular area (center point + radius) an owner's QR code may be used in.
"""

import uuid
from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, Float, String, func
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from qrintake.core.database import Base


class GeofenceLocation(Base):
    """
    An owner's configured location.

    At most one per owner. No row means the owner's code is unrestricted.
    """

    __tablename__ = "geofence_locations"

    id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)

    owner_id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), unique=True, nullable=False)
    place_name: Mapped[str] = mapped_column(String(200), nullable=False)

    latitude: Mapped[float] = mapped_column(Float, nullable=False)
    longitude: Mapped[float] = mapped_column(Float, nullable=False)
    radius_meters: Mapped[float] = mapped_column(Float, nullable=False)

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
        CheckConstraint("latitude BETWEEN -90 AND 90", name="ck_geofence_latitude"),
        CheckConstraint("longitude BETWEEN -180 AND 180", name="ck_geofence_longitude"),
        CheckConstraint("radius_meters >= 0", name="ck_geofence_radius"),
    )
