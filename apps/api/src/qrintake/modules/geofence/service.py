"""
Geofence Service Layer

Resolves an owner's geofence for the admission path and implements the
owner-facing location management (one location per owner).
"""

import logging
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from qrintake.core.errors import ConflictError, NotFoundError
from qrintake.modules.geofence import repository
from qrintake.modules.geofence.models import GeofenceLocation
from qrintake.modules.geofence.repository import DuplicateLocationError
from qrintake.modules.geofence.schemas import LocationWrite

logger = logging.getLogger(__name__)


class LocationNotFoundError(NotFoundError):
    def __init__(self):
        super().__init__(message="Location not found or unauthorized", error_code="LOCATION_NOT_FOUND")


class LocationAlreadyExistsError(ConflictError):
    def __init__(self):
        super().__init__(
            message="Only one location allowed per user", error_code="LOCATION_EXISTS"
        )


async def get_location_for_owner(db: AsyncSession, owner_id: UUID) -> GeofenceLocation | None:
    """
    Return the owner's location, or None when unset.

    None is a valid state meaning the owner's code is unrestricted.
    """
    return await repository.get_by_owner(db, owner_id)


async def list_locations(db: AsyncSession, owner_id: UUID) -> list[GeofenceLocation]:
    return await repository.list_by_owner(db, owner_id)


async def create_location(
    db: AsyncSession, owner_id: UUID, data: LocationWrite
) -> GeofenceLocation:
    """
    Create the owner's location.

    Raises:
        LocationAlreadyExistsError: If the owner already has one
    """
    if await repository.get_by_owner(db, owner_id) is not None:
        logger.warning(f"Location create rejected: user {owner_id} already has one")
        raise LocationAlreadyExistsError()

    try:
        location = await repository.create(db, owner_id, data)
    except DuplicateLocationError as e:
        raise LocationAlreadyExistsError() from e

    logger.info(f"Location {location.id} created for user {owner_id}")
    return location


async def update_location(
    db: AsyncSession, id: UUID, owner_id: UUID, data: LocationWrite
) -> GeofenceLocation:
    """
    Update one of the owner's locations.

    Raises:
        LocationNotFoundError: If the id is missing or belongs to another owner
    """
    location = await repository.get_for_owner(db, id, owner_id)
    if location is None:
        raise LocationNotFoundError()

    location = await repository.update(db, location, data)
    logger.info(f"Location {id} updated for user {owner_id}")
    return location


async def delete_location(db: AsyncSession, id: UUID, owner_id: UUID) -> None:
    """
    Raises:
        LocationNotFoundError: If the id is missing or belongs to another owner
    """
    if not await repository.delete_for_owner(db, id, owner_id):
        raise LocationNotFoundError()
    logger.info(f"Location {id} deleted for user {owner_id}")

