"""
Unit tests for the catalog service layer.
"""

from unittest.mock import AsyncMock, patch
from uuid import uuid4

import pytest

from qrintake.modules.catalogs.models import CatalogKind
from qrintake.modules.catalogs.repository import DuplicateCatalogEntryError
from qrintake.modules.catalogs.service import (
    CatalogEntryExistsError,
    CatalogEntryNotFoundError,
    create_entry,
    delete_entry,
    is_known,
    rename_entry,
)

REPO = "qrintake.modules.catalogs.service.repository"


class TestCreateEntry:
    @pytest.mark.asyncio
    async def test_create(self, mock_db, owner, designation):
        with patch(REPO) as mock_repo:
            mock_repo.get_by_name = AsyncMock(return_value=None)
            mock_repo.create = AsyncMock(return_value=designation)

            entry = await create_entry(mock_db, owner.id, CatalogKind.DESIGNATION, "Analyst")

            assert entry is designation
            mock_repo.create.assert_called_once_with(
                mock_db, owner.id, CatalogKind.DESIGNATION, "Analyst"
            )

    @pytest.mark.asyncio
    async def test_duplicate_name(self, mock_db, owner, designation):
        with patch(REPO) as mock_repo:
            mock_repo.get_by_name = AsyncMock(return_value=designation)
            mock_repo.create = AsyncMock()

            with pytest.raises(CatalogEntryExistsError) as exc_info:
                await create_entry(mock_db, owner.id, CatalogKind.DESIGNATION, "Analyst")

            assert exc_info.value.status_code == 409
            assert exc_info.value.message == "Designation already exists"
            mock_repo.create.assert_not_called()

    @pytest.mark.asyncio
    async def test_concurrent_duplicate(self, mock_db, owner):
        with patch(REPO) as mock_repo:
            mock_repo.get_by_name = AsyncMock(return_value=None)
            mock_repo.create = AsyncMock(side_effect=DuplicateCatalogEntryError("uq"))

            with pytest.raises(CatalogEntryExistsError):
                await create_entry(mock_db, owner.id, CatalogKind.DEPARTMENT, "Finance")


class TestRenameAndDelete:
    @pytest.mark.asyncio
    async def test_rename_other_owner(self, mock_db, owner):
        with patch(REPO) as mock_repo:
            mock_repo.get_for_owner = AsyncMock(return_value=None)

            with pytest.raises(CatalogEntryNotFoundError) as exc_info:
                await rename_entry(mock_db, uuid4(), owner.id, CatalogKind.DEPARTMENT, "Ops")

            assert exc_info.value.status_code == 404

    @pytest.mark.asyncio
    async def test_rename_to_taken_name(self, mock_db, owner, designation):
        with patch(REPO) as mock_repo:
            mock_repo.get_for_owner = AsyncMock(return_value=designation)
            mock_repo.rename = AsyncMock(side_effect=DuplicateCatalogEntryError("uq"))

            with pytest.raises(CatalogEntryExistsError):
                await rename_entry(
                    mock_db, designation.id, owner.id, CatalogKind.DESIGNATION, "Manager"
                )

    @pytest.mark.asyncio
    async def test_delete_missing(self, mock_db, owner):
        with patch(REPO) as mock_repo:
            mock_repo.delete_for_owner = AsyncMock(return_value=False)

            with pytest.raises(CatalogEntryNotFoundError):
                await delete_entry(mock_db, uuid4(), owner.id, CatalogKind.APPLICATION_TYPE)


class TestIsKnown:
    @pytest.mark.asyncio
    async def test_defined_entry(self, mock_db, owner, designation):
        with patch(REPO) as mock_repo:
            mock_repo.get_by_name = AsyncMock(return_value=designation)

            assert await is_known(mock_db, owner.id, CatalogKind.DESIGNATION, "Analyst") is True

    @pytest.mark.asyncio
    async def test_designation_has_no_defaults(self, mock_db, owner):
        with patch(REPO) as mock_repo:
            mock_repo.get_by_name = AsyncMock(return_value=None)
            mock_repo.count_by_owner = AsyncMock(return_value=0)

            assert await is_known(mock_db, owner.id, CatalogKind.DESIGNATION, "interview") is False

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "name, expected", [("interview", True), ("reason", True), ("vacation", False)]
    )
    async def test_default_application_types_with_empty_catalog(
        self, mock_db, owner, name, expected
    ):
        with patch(REPO) as mock_repo:
            mock_repo.get_by_name = AsyncMock(return_value=None)
            mock_repo.count_by_owner = AsyncMock(return_value=0)

            assert await is_known(mock_db, owner.id, CatalogKind.APPLICATION_TYPE, name) is expected

    @pytest.mark.asyncio
    async def test_defaults_replaced_by_own_catalog(self, mock_db, owner):
        with patch(REPO) as mock_repo:
            mock_repo.get_by_name = AsyncMock(return_value=None)
            mock_repo.count_by_owner = AsyncMock(return_value=2)

            assert (
                await is_known(mock_db, owner.id, CatalogKind.APPLICATION_TYPE, "interview")
                is False
            )
