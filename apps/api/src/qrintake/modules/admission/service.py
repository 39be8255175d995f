"""
Admission Decision

Decides whether a visitor's position is close enough to the code owner's
configured location to use the code. The check is read-only and reports
every logical failure as a result, never as an exception; storage faults
propagate to the caller.

Steps:
1. Reject invalid coordinates before touching storage
2. Resolve the code to its owner
3. No configured location means the code is unrestricted
4. Otherwise admit iff the Haversine distance is within the radius

Client-reported "within range" flags are never trusted; every caller that
gates on location re-runs this check on the server.
"""

import logging
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from qrintake.core.geo import distance_meters, is_valid_coordinate
from qrintake.modules.admission.schemas import AdmissionReason, AdmissionResult
from qrintake.modules.geofence import service as geofence_service
from qrintake.modules.geofence.models import GeofenceLocation
from qrintake.modules.qr_codes import repository as qr_repository

logger = logging.getLogger(__name__)


def decide(location: GeofenceLocation | None, latitude: float, longitude: float) -> AdmissionResult:
    """
    Apply a (possibly absent) location to already-validated coordinates.

    Absence of a location is the default-allow policy.
    """
    if location is None:
        return AdmissionResult(within_range=True, reason=AdmissionReason.UNRESTRICTED)

    distance = distance_meters(latitude, longitude, location.latitude, location.longitude)

    if distance <= location.radius_meters:
        return AdmissionResult(
            within_range=True, reason=AdmissionReason.WITHIN_RANGE, distance_meters=distance
        )
    return AdmissionResult(
        within_range=False, reason=AdmissionReason.OUT_OF_RANGE, distance_meters=distance
    )


async def evaluate(
    db: AsyncSession,
    code: str,
    latitude: object,
    longitude: object,
) -> AdmissionResult:
    """
    Evaluate a visitor's position for a public code.

    Args:
        db: Database session
        code: Public QR code string
        latitude: Reported latitude (decimal degrees)
        longitude: Reported longitude (decimal degrees)

    Returns:
        AdmissionResult describing the outcome
    """
    if not is_valid_coordinate(latitude, longitude):
        logger.warning("Admission check rejected: invalid coordinates")
        return AdmissionResult(within_range=False, reason=AdmissionReason.INVALID_COORDINATES)

    qr_code = await qr_repository.get_by_code(db, code)
    if qr_code is None:
        logger.warning("Admission check rejected: QR code not found")
        return AdmissionResult(within_range=False, reason=AdmissionReason.CODE_NOT_FOUND)

    location = await geofence_service.get_location_for_owner(db, qr_code.owner_id)
    result = decide(location, latitude, longitude)  # type: ignore[arg-type]

    if result.within_range:
        logger.info(f"Admission granted for QR code {qr_code.id}: {result.reason.value}")
    else:
        logger.info(
            f"Admission denied for QR code {qr_code.id}: "
            f"distance={result.distance_meters:.1f}m"
        )

    return result


async def check_owner_position(
    db: AsyncSession,
    owner_id: UUID,
    latitude: object,
    longitude: object,
) -> AdmissionResult:
    """
    Check an owner's own position against their configured location.

    Unlike the public check, an owner without a location gets NO_LOCATION
    rather than an unrestricted admit.
    """
    if not is_valid_coordinate(latitude, longitude):
        return AdmissionResult(within_range=False, reason=AdmissionReason.INVALID_COORDINATES)

    location = await geofence_service.get_location_for_owner(db, owner_id)
    if location is None:
        return AdmissionResult(within_range=False, reason=AdmissionReason.NO_LOCATION)

    return decide(location, latitude, longitude)  # type: ignore[arg-type]
