"""
Fixtures for form submission tests.
"""

from datetime import UTC, datetime
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import pytest

from qrintake.modules.geofence.models import GeofenceLocation
from qrintake.modules.qr_codes.models import QrCode
from qrintake.modules.submissions.models import FormSubmission, SubmissionStatus


@pytest.fixture
def sample_qr_code():
    qr_code = MagicMock(spec=QrCode)
    qr_code.id = uuid4()
    qr_code.code = "abc123"
    qr_code.owner_id = uuid4()
    qr_code.notify_email = "owner@test.com"
    return qr_code


@pytest.fixture
def sample_location(sample_qr_code):
    """A 100 m geofence around Accra city centre."""
    location = MagicMock(spec=GeofenceLocation)
    location.owner_id = sample_qr_code.owner_id
    location.latitude = 5.6037
    location.longitude = -0.187
    location.radius_meters = 100.0
    return location


@pytest.fixture
def valid_fields():
    return {
        "name": "Ada Lovelace",
        "email": "ada@test.com",
        "reason": "Would like to interview for the analyst role",
        "application_type": "interview",
    }


@pytest.fixture
def sample_submission(sample_qr_code):
    submission = MagicMock(spec=FormSubmission)
    submission.id = uuid4()
    submission.qr_code_id = sample_qr_code.id
    submission.owner_id = sample_qr_code.owner_id
    submission.name = "Ada Lovelace"
    submission.email = "ada@test.com"
    submission.reason = "Would like to interview for the analyst role"
    submission.application_type = "interview"
    submission.resume_path = None
    submission.status = SubmissionStatus.PENDING
    submission.reviewed = False
    submission.designation = None
    submission.department = None
    submission.created_at = datetime.now(UTC)
    submission.updated_at = datetime.now(UTC)
    return submission


@pytest.fixture
def notifier():
    """A notification sink that records calls."""
    sink = MagicMock()
    sink.enqueue = AsyncMock()
    return sink
