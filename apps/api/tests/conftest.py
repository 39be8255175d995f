"""
Shared fixtures.
"""

from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import pytest

from qrintake.core.auth import CurrentUser


@pytest.fixture
def mock_db():
    """Create a mock database session."""
    db = AsyncMock()
    db.commit = AsyncMock()
    db.rollback = AsyncMock()
    db.refresh = AsyncMock()
    db.get = AsyncMock()
    db.execute = AsyncMock()
    db.add = MagicMock()
    return db


@pytest.fixture
def owner():
    """The authenticated code owner."""
    return CurrentUser(id=uuid4(), email="owner@test.com", role="owner", name="Test Owner")
