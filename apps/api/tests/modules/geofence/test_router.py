"""
HTTP tests for the owner location endpoints.

POST /locations/validate answers every outcome with a `withinRange` flag.
"""

from datetime import UTC, datetime
from unittest.mock import AsyncMock, MagicMock, patch
from uuid import uuid4

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from qrintake.core.auth import get_current_user
from qrintake.core.database import get_db
from qrintake.modules.geofence.models import GeofenceLocation
from qrintake.modules.geofence.router import router
from qrintake.modules.geofence.service import LocationAlreadyExistsError

CENTER_LAT = 5.6037
CENTER_LON = -0.187
GEOFENCE = "qrintake.modules.admission.service.geofence_service"
SERVICE = "qrintake.modules.geofence.service"


@pytest.fixture
def location(owner):
    """A 100 m geofence around Accra city centre."""
    location = MagicMock(spec=GeofenceLocation)
    location.id = uuid4()
    location.owner_id = owner.id
    location.place_name = "Accra"
    location.latitude = CENTER_LAT
    location.longitude = CENTER_LON
    location.radius_meters = 100.0
    location.created_at = datetime.now(UTC)
    location.updated_at = datetime.now(UTC)
    return location


@pytest.fixture
def client(mock_db, owner):
    app = FastAPI()
    app.include_router(router, prefix="/locations")

    async def override_get_db():
        yield mock_db

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_current_user] = lambda: owner

    return TestClient(app)


def _check(client, latitude, longitude):
    return client.post(
        "/locations/validate", json={"latitude": latitude, "longitude": longitude}
    )


class TestValidateMyPosition:
    def test_within_range(self, client, location):
        with patch(GEOFENCE) as mock_geofence:
            mock_geofence.get_location_for_owner = AsyncMock(return_value=location)

            response = _check(client, CENTER_LAT, CENTER_LON)

        assert response.status_code == 200
        assert response.json() == {"message": "User within range", "withinRange": True}

    def test_out_of_range(self, client, location):
        with patch(GEOFENCE) as mock_geofence:
            mock_geofence.get_location_for_owner = AsyncMock(return_value=location)

            response = _check(client, CENTER_LAT + 0.01, CENTER_LON)

        assert response.status_code == 403
        assert response.json()["withinRange"] is False

    def test_no_location_configured(self, client, owner):
        with patch(GEOFENCE) as mock_geofence:
            mock_geofence.get_location_for_owner = AsyncMock(return_value=None)

            response = _check(client, CENTER_LAT, CENTER_LON)

            mock_geofence.get_location_for_owner.assert_called_once()
            assert mock_geofence.get_location_for_owner.call_args.args[1] == owner.id

        assert response.status_code == 404
        assert response.json()["withinRange"] is False

    def test_out_of_bounds_coordinates(self, client):
        with patch(GEOFENCE) as mock_geofence:
            mock_geofence.get_location_for_owner = AsyncMock()

            response = _check(client, 91, CENTER_LON)

            mock_geofence.get_location_for_owner.assert_not_called()

        assert response.status_code == 400
        assert response.json()["withinRange"] is False

    def test_storage_failure(self, client):
        with patch(GEOFENCE) as mock_geofence:
            mock_geofence.get_location_for_owner = AsyncMock(side_effect=RuntimeError("db down"))

            response = _check(client, CENTER_LAT, CENTER_LON)

        assert response.status_code == 500
        assert response.json() == {"message": "Internal Server Error", "withinRange": False}


class TestLocationCrud:
    def test_list(self, client, location):
        with patch(f"{SERVICE}.list_locations", AsyncMock(return_value=[location])):
            response = client.get("/locations")

        assert response.status_code == 200
        assert response.json()["result"][0]["place_name"] == "Accra"

    def test_create_second_location(self, client):
        with patch(
            f"{SERVICE}.create_location", AsyncMock(side_effect=LocationAlreadyExistsError())
        ):
            response = client.post(
                "/locations",
                json={
                    "place_name": "Kumasi",
                    "latitude": 6.6885,
                    "longitude": -1.6244,
                    "radius_meters": 50,
                },
            )

        assert response.status_code == 409
        assert response.json()["detail"]["error"] == "LOCATION_EXISTS"

    def test_create_rejects_out_of_bounds(self, client):
        response = client.post(
            "/locations",
            json={"place_name": "Nowhere", "latitude": 95, "longitude": 0, "radius_meters": 50},
        )

        assert response.status_code == 422
