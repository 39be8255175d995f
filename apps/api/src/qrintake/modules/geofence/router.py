"""
Geofence Locations Router

Owner-facing management of the location a QR code may be used in.
All endpoints require authentication.

Endpoints:
- GET /locations - List the caller's location
- POST /locations - Create the caller's location (one per account)
- PUT /locations/{id} - Update a location
- DELETE /locations/{id} - Delete a location
- POST /locations/validate - Check the caller's own position
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from qrintake.core.auth import CurrentUser, get_current_user
from qrintake.core.database import get_db
from qrintake.core.errors import IntakeServiceError, http_exception_from
from qrintake.modules.admission import service as admission_service
from qrintake.modules.admission.schemas import AdmissionReason
from qrintake.modules.geofence import service
from qrintake.modules.geofence.schemas import (
    LocationListResponse,
    LocationMessageResponse,
    LocationResponse,
    LocationWrite,
    PositionCheckRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def _internal_error(action: str, e: Exception) -> HTTPException:
    logger.exception(f"Unexpected error {action}: {e}")
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail={"error": "INTERNAL_ERROR", "message": "Internal Server Error"},
    )


@router.get("", response_model=LocationListResponse, summary="List My Locations")
async def list_locations(
    user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> LocationListResponse:
    try:
        locations = await service.list_locations(db, user.id)
        return LocationListResponse(
            result=[LocationResponse.model_validate(loc) for loc in locations]
        )
    except Exception as e:
        raise _internal_error("fetching locations", e) from e


@router.post(
    "",
    response_model=LocationResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create My Location",
    responses={409: {"description": "The account already has a location"}},
)
async def create_location(
    data: LocationWrite,
    user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> LocationResponse:
    try:
        location = await service.create_location(db, user.id, data)
        return LocationResponse.model_validate(location)
    except IntakeServiceError as e:
        raise http_exception_from(e) from e
    except Exception as e:
        raise _internal_error("creating location", e) from e


@router.put("/{id}", response_model=LocationResponse, summary="Update My Location")
async def update_location(
    id: UUID,
    data: LocationWrite,
    user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> LocationResponse:
    try:
        location = await service.update_location(db, id, user.id, data)
        return LocationResponse.model_validate(location)
    except IntakeServiceError as e:
        raise http_exception_from(e) from e
    except Exception as e:
        raise _internal_error("updating location", e) from e


@router.delete("/{id}", response_model=LocationMessageResponse, summary="Delete My Location")
async def delete_location(
    id: UUID,
    user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> LocationMessageResponse:
    try:
        await service.delete_location(db, id, user.id)
        return LocationMessageResponse(message="Location deleted successfully")
    except IntakeServiceError as e:
        raise http_exception_from(e) from e
    except Exception as e:
        raise _internal_error("deleting location", e) from e


@router.post("/validate", summary="Check My Position")
async def validate_my_position(
    data: PositionCheckRequest,
    user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> JSONResponse:
    try:
        result = await admission_service.check_owner_position(
            db, user.id, data.latitude, data.longitude
        )
    except Exception as e:
        logger.exception(f"Location validation error: {e}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"message": "Internal Server Error", "withinRange": False},
        )

    status_code = {
        AdmissionReason.WITHIN_RANGE: status.HTTP_200_OK,
        AdmissionReason.INVALID_COORDINATES: status.HTTP_400_BAD_REQUEST,
        AdmissionReason.NO_LOCATION: status.HTTP_404_NOT_FOUND,
    }.get(result.reason, status.HTTP_403_FORBIDDEN)

    message = "User within range" if result.within_range else result.message
    return JSONResponse(
        status_code=status_code,
        content={"message": message, "withinRange": result.within_range},
    )
