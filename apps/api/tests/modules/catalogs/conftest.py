"""
Fixtures for catalog tests.
"""

from datetime import UTC, datetime
from unittest.mock import MagicMock
from uuid import uuid4

import pytest

from qrintake.modules.catalogs.models import CatalogEntry, CatalogKind


@pytest.fixture
def designation(owner):
    entry = MagicMock(spec=CatalogEntry)
    entry.id = uuid4()
    entry.owner_id = owner.id
    entry.kind = CatalogKind.DESIGNATION
    entry.name = "Analyst"
    entry.created_at = datetime.now(UTC)
    return entry
