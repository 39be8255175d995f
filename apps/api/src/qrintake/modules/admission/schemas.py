"""
Admission Schemas

The structured outcome of a geofence admission check.
"""

import enum

from pydantic import BaseModel


class AdmissionReason(str, enum.Enum):
    """Why a position was admitted or rejected."""

    WITHIN_RANGE = "within_range"
    UNRESTRICTED = "unrestricted"
    INVALID_COORDINATES = "invalid_coordinates"
    CODE_NOT_FOUND = "code_not_found"
    NO_LOCATION = "no_location"
    OUT_OF_RANGE = "out_of_range"


ADMISSION_MESSAGES: dict[AdmissionReason, str] = {
    AdmissionReason.WITHIN_RANGE: "Valid QR code and within range",
    AdmissionReason.UNRESTRICTED: "Valid QR code, no location restriction",
    AdmissionReason.INVALID_COORDINATES: "Invalid coordinates",
    AdmissionReason.CODE_NOT_FOUND: "QR code not found",
    AdmissionReason.NO_LOCATION: "No location found for user",
    AdmissionReason.OUT_OF_RANGE: "User not within range",
}


class AdmissionResult(BaseModel):
    """
    Result of evaluating a position against a geofence.

    `distance_meters` is set only when a distance was actually computed.
    """

    within_range: bool
    reason: AdmissionReason
    distance_meters: float | None = None

    @property
    def message(self) -> str:
        return ADMISSION_MESSAGES[self.reason]
