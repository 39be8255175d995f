"""
Fixtures for QR code tests.
"""

from datetime import UTC, datetime
from unittest.mock import MagicMock
from uuid import uuid4

import pytest

from qrintake.modules.qr_codes.models import QrCode


@pytest.fixture
def sample_qr_code(owner):
    """A QR code belonging to the `owner` fixture."""
    qr_code = MagicMock(spec=QrCode)
    qr_code.id = uuid4()
    qr_code.code = "abc123"
    qr_code.owner_id = owner.id
    qr_code.url = "https://forms.test/abc123"
    qr_code.image = "data:image/png;base64,AAAA"
    qr_code.notify_email = owner.email
    qr_code.created_at = datetime.now(UTC)
    return qr_code
