"""
Fixtures for admission tests.
"""

from unittest.mock import MagicMock
from uuid import uuid4

import pytest

from qrintake.modules.geofence.models import GeofenceLocation
from qrintake.modules.qr_codes.models import QrCode

# San Francisco City Hall
CENTER_LAT = 37.7793
CENTER_LON = -122.4193


@pytest.fixture
def qr_code():
    qr_code = MagicMock(spec=QrCode)
    qr_code.id = uuid4()
    qr_code.code = "abc123"
    qr_code.owner_id = uuid4()
    return qr_code


@pytest.fixture
def location(qr_code):
    """A 200 m geofence around the center point."""
    location = MagicMock(spec=GeofenceLocation)
    location.id = uuid4()
    location.owner_id = qr_code.owner_id
    location.place_name = "City Hall"
    location.latitude = CENTER_LAT
    location.longitude = CENTER_LON
    location.radius_meters = 200.0
    return location
