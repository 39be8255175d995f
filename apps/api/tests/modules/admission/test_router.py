"""
HTTP tests for the public validate endpoint.

The endpoint must answer every outcome with a `withinRange` flag and the
matching status code.
"""

from unittest.mock import AsyncMock, patch

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from qrintake.core.database import get_db
from qrintake.modules.qr_codes.router import router

CENTER_LAT = 37.7793
CENTER_LON = -122.4193
QR_REPO = "qrintake.modules.admission.service.qr_repository"
GEOFENCE = "qrintake.modules.admission.service.geofence_service"


@pytest.fixture
def client(mock_db):
    app = FastAPI()
    app.include_router(router, prefix="/qrcodes")

    async def override_get_db():
        yield mock_db

    app.dependency_overrides[get_db] = override_get_db

    with patch(
        "qrintake.core.rate_limit.check_rate_limit", AsyncMock(return_value=True)
    ):
        yield TestClient(app)


def _post(client, latitude, longitude):
    return client.post(
        "/qrcodes/validate/abc123", json={"latitude": latitude, "longitude": longitude}
    )


class TestValidateEndpoint:
    def test_within_range(self, client, qr_code, location):
        with patch(QR_REPO) as mock_repo, patch(GEOFENCE) as mock_geofence:
            mock_repo.get_by_code = AsyncMock(return_value=qr_code)
            mock_geofence.get_location_for_owner = AsyncMock(return_value=location)

            response = _post(client, CENTER_LAT, CENTER_LON)

        assert response.status_code == 200
        assert response.json()["withinRange"] is True

    def test_unrestricted(self, client, qr_code):
        with patch(QR_REPO) as mock_repo, patch(GEOFENCE) as mock_geofence:
            mock_repo.get_by_code = AsyncMock(return_value=qr_code)
            mock_geofence.get_location_for_owner = AsyncMock(return_value=None)

            response = _post(client, 0, 0)

        assert response.status_code == 200
        assert response.json()["withinRange"] is True
        assert response.json()["reason"] == "unrestricted"

    def test_out_of_range(self, client, qr_code, location):
        with patch(QR_REPO) as mock_repo, patch(GEOFENCE) as mock_geofence:
            mock_repo.get_by_code = AsyncMock(return_value=qr_code)
            mock_geofence.get_location_for_owner = AsyncMock(return_value=location)

            response = _post(client, CENTER_LAT + 0.01, CENTER_LON)

        assert response.status_code == 403
        assert response.json() == {
            "message": "User not within range",
            "withinRange": False,
            "reason": "out_of_range",
        }

    def test_unknown_code(self, client):
        with patch(QR_REPO) as mock_repo:
            mock_repo.get_by_code = AsyncMock(return_value=None)

            response = _post(client, CENTER_LAT, CENTER_LON)

        assert response.status_code == 404
        assert response.json()["withinRange"] is False

    def test_invalid_coordinates(self, client):
        with patch(QR_REPO) as mock_repo:
            mock_repo.get_by_code = AsyncMock()

            response = _post(client, "north", 0)

            mock_repo.get_by_code.assert_not_called()

        assert response.status_code == 400
        assert response.json()["withinRange"] is False

    def test_missing_body(self, client):
        response = client.post("/qrcodes/validate/abc123")

        assert response.status_code == 400
        assert response.json()["withinRange"] is False

    def test_storage_failure(self, client):
        with patch(QR_REPO) as mock_repo:
            mock_repo.get_by_code = AsyncMock(side_effect=RuntimeError("db down"))

            response = _post(client, CENTER_LAT, CENTER_LON)

        assert response.status_code == 500
        assert response.json() == {"message": "Internal Server Error", "withinRange": False}
