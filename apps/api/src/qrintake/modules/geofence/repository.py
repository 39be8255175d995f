"""
Geofence Repository

Database operations for owner locations.
"""

from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from .models import GeofenceLocation
from .schemas import LocationWrite


class DuplicateLocationError(Exception):
    """Raised when an owner already has a location row."""


async def get_by_owner(db: AsyncSession, owner_id: UUID) -> GeofenceLocation | None:
    """Get the owner's location, if configured."""
    result = await db.execute(
        select(GeofenceLocation).where(GeofenceLocation.owner_id == owner_id)
    )
    return result.scalar_one_or_none()


async def list_by_owner(db: AsyncSession, owner_id: UUID) -> list[GeofenceLocation]:
    result = await db.execute(
        select(GeofenceLocation).where(GeofenceLocation.owner_id == owner_id)
    )
    return list(result.scalars().all())


async def create(db: AsyncSession, owner_id: UUID, data: LocationWrite) -> GeofenceLocation:
    """
    Insert the owner's location.

    Raises:
        DuplicateLocationError: If the owner already has one
    """
    location = GeofenceLocation(
        owner_id=owner_id,
        place_name=data.place_name,
        latitude=data.latitude,
        longitude=data.longitude,
        radius_meters=data.radius_meters,
    )

    db.add(location)
    try:
        await db.commit()
    except IntegrityError as e:
        await db.rollback()
        raise DuplicateLocationError(str(e.orig)) from e
    await db.refresh(location)

    return location


async def get_for_owner(db: AsyncSession, id: UUID, owner_id: UUID) -> GeofenceLocation | None:
    """Get a location by id, only if it belongs to `owner_id`."""
    result = await db.execute(
        select(GeofenceLocation).where(
            GeofenceLocation.id == id,
            GeofenceLocation.owner_id == owner_id,
        )
    )
    return result.scalar_one_or_none()


async def update(
    db: AsyncSession, location: GeofenceLocation, data: LocationWrite
) -> GeofenceLocation:
    location.place_name = data.place_name
    location.latitude = data.latitude
    location.longitude = data.longitude
    location.radius_meters = data.radius_meters

    await db.commit()
    await db.refresh(location)

    return location


async def delete_for_owner(db: AsyncSession, id: UUID, owner_id: UUID) -> bool:
    """Delete a location if it belongs to `owner_id`. Returns True if deleted."""
    result = await db.execute(
        delete(GeofenceLocation).where(
            GeofenceLocation.id == id,
            GeofenceLocation.owner_id == owner_id,
        )
    )
    await db.commit()
    return result.rowcount > 0
