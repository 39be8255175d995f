"""
Unit tests for the admission decision.

These tests cover:
- Coordinate validation before any lookup
- Unknown codes
- Default allow when the owner has no location
- Inside / outside / on the boundary of the radius
- The owner self-check variant
"""

from unittest.mock import AsyncMock, patch
from uuid import uuid4

import pytest

from qrintake.modules.admission.schemas import AdmissionReason
from qrintake.modules.admission.service import check_owner_position, decide, evaluate

CENTER_LAT = 37.7793
CENTER_LON = -122.4193
QR_REPO = "qrintake.modules.admission.service.qr_repository"
GEOFENCE = "qrintake.modules.admission.service.geofence_service"


class TestDecide:
    def test_no_location_is_unrestricted(self):
        result = decide(None, 10.0, 10.0)
        assert result.within_range is True
        assert result.reason == AdmissionReason.UNRESTRICTED
        assert result.distance_meters is None

    def test_center_is_within_range(self, location):
        result = decide(location, CENTER_LAT, CENTER_LON)
        assert result.within_range is True
        assert result.reason == AdmissionReason.WITHIN_RANGE
        assert result.distance_meters == 0

    def test_about_190m_is_within_200m(self, location):
        result = decide(location, CENTER_LAT + 0.0017, CENTER_LON)
        assert result.within_range is True

    def test_about_222m_is_outside_200m(self, location):
        result = decide(location, CENTER_LAT + 0.002, CENTER_LON)
        assert result.within_range is False
        assert result.reason == AdmissionReason.OUT_OF_RANGE
        assert result.distance_meters == pytest.approx(222.4, abs=0.5)

    def test_zero_radius_admits_only_the_center(self, location):
        location.radius_meters = 0.0
        assert decide(location, CENTER_LAT, CENTER_LON).within_range is True
        assert decide(location, CENTER_LAT + 0.00001, CENTER_LON).within_range is False


class TestEvaluate:
    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "latitude, longitude",
        [
            (None, None),
            ("37.7", "-122.4"),
            (91, 0),
            (0, -181),
            (float("nan"), 0),
            (10**400, 0),
        ],
    )
    async def test_invalid_coordinates_skip_lookup(self, mock_db, latitude, longitude):
        with patch(QR_REPO) as mock_repo:
            mock_repo.get_by_code = AsyncMock()

            result = await evaluate(mock_db, "abc123", latitude, longitude)

            assert result.within_range is False
            assert result.reason == AdmissionReason.INVALID_COORDINATES
            assert result.message == "Invalid coordinates"
            mock_repo.get_by_code.assert_not_called()

    @pytest.mark.asyncio
    async def test_unknown_code(self, mock_db):
        with patch(QR_REPO) as mock_repo, patch(GEOFENCE) as mock_geofence:
            mock_repo.get_by_code = AsyncMock(return_value=None)
            mock_geofence.get_location_for_owner = AsyncMock()

            result = await evaluate(mock_db, "missing", CENTER_LAT, CENTER_LON)

            assert result.within_range is False
            assert result.reason == AdmissionReason.CODE_NOT_FOUND
            mock_geofence.get_location_for_owner.assert_not_called()

    @pytest.mark.asyncio
    async def test_owner_without_location_is_admitted(self, mock_db, qr_code):
        with patch(QR_REPO) as mock_repo, patch(GEOFENCE) as mock_geofence:
            mock_repo.get_by_code = AsyncMock(return_value=qr_code)
            mock_geofence.get_location_for_owner = AsyncMock(return_value=None)

            result = await evaluate(mock_db, "abc123", -33.8688, 151.2093)

            assert result.within_range is True
            assert result.reason == AdmissionReason.UNRESTRICTED
            mock_geofence.get_location_for_owner.assert_called_once_with(
                mock_db, qr_code.owner_id
            )

    @pytest.mark.asyncio
    async def test_within_range(self, mock_db, qr_code, location):
        with patch(QR_REPO) as mock_repo, patch(GEOFENCE) as mock_geofence:
            mock_repo.get_by_code = AsyncMock(return_value=qr_code)
            mock_geofence.get_location_for_owner = AsyncMock(return_value=location)

            result = await evaluate(mock_db, "abc123", CENTER_LAT + 0.0017, CENTER_LON)

            assert result.within_range is True
            assert result.reason == AdmissionReason.WITHIN_RANGE

    @pytest.mark.asyncio
    async def test_out_of_range(self, mock_db, qr_code, location):
        with patch(QR_REPO) as mock_repo, patch(GEOFENCE) as mock_geofence:
            mock_repo.get_by_code = AsyncMock(return_value=qr_code)
            mock_geofence.get_location_for_owner = AsyncMock(return_value=location)

            result = await evaluate(mock_db, "abc123", CENTER_LAT + 0.002, CENTER_LON)

            assert result.within_range is False
            assert result.reason == AdmissionReason.OUT_OF_RANGE
            assert result.message == "User not within range"

    @pytest.mark.asyncio
    async def test_storage_failure_propagates(self, mock_db):
        with patch(QR_REPO) as mock_repo:
            mock_repo.get_by_code = AsyncMock(side_effect=RuntimeError("db down"))

            with pytest.raises(RuntimeError):
                await evaluate(mock_db, "abc123", CENTER_LAT, CENTER_LON)


class TestCheckOwnerPosition:
    @pytest.mark.asyncio
    async def test_no_location(self, mock_db):
        with patch(GEOFENCE) as mock_geofence:
            mock_geofence.get_location_for_owner = AsyncMock(return_value=None)

            result = await check_owner_position(mock_db, uuid4(), CENTER_LAT, CENTER_LON)

            assert result.within_range is False
            assert result.reason == AdmissionReason.NO_LOCATION

    @pytest.mark.asyncio
    async def test_within_range(self, mock_db, location):
        with patch(GEOFENCE) as mock_geofence:
            mock_geofence.get_location_for_owner = AsyncMock(return_value=location)

            result = await check_owner_position(
                mock_db, location.owner_id, CENTER_LAT, CENTER_LON
            )

            assert result.within_range is True

    @pytest.mark.asyncio
    async def test_invalid_coordinates(self, mock_db):
        with patch(GEOFENCE) as mock_geofence:
            mock_geofence.get_location_for_owner = AsyncMock()

            result = await check_owner_position(mock_db, uuid4(), 100, 0)

            assert result.reason == AdmissionReason.INVALID_COORDINATES
            mock_geofence.get_location_for_owner.assert_not_called()


class TestEvaluateAtOrigin:
    """Owner location at (0, 0) with a 200 m radius."""

    @pytest.fixture
    def origin(self, location):
        location.latitude = 0.0
        location.longitude = 0.0
        location.radius_meters = 200.0
        return location

    @pytest.mark.asyncio
    @pytest.mark.parametrize("longitude, admitted", [(0.0017, True), (0.002, False)])
    async def test_boundary(self, mock_db, qr_code, origin, longitude, admitted):
        with patch(QR_REPO) as mock_repo, patch(GEOFENCE) as mock_geofence:
            mock_repo.get_by_code = AsyncMock(return_value=qr_code)
            mock_geofence.get_location_for_owner = AsyncMock(return_value=origin)

            result = await evaluate(mock_db, "abc123", 0, longitude)

            assert result.within_range is admitted
