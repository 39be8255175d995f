"""
Catalog Service Layer

Owner-managed vocabularies and the lookups the intake and review flows use
to check submitted values against them.

Application types fall back to DEFAULT_APPLICATION_TYPES while the owner
has not defined any of their own. Designations and departments have no
defaults: a reviewer can only assign values the owner has added.
"""

import logging
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from qrintake.core.errors import ConflictError, NotFoundError
from qrintake.modules.catalogs import repository
from qrintake.modules.catalogs.models import CatalogEntry, CatalogKind
from qrintake.modules.catalogs.repository import DuplicateCatalogEntryError

logger = logging.getLogger(__name__)

DEFAULT_APPLICATION_TYPES = ("interview", "reason")

_LABELS = {
    CatalogKind.APPLICATION_TYPE: "Application type",
    CatalogKind.DESIGNATION: "Designation",
    CatalogKind.DEPARTMENT: "Department",
}


class CatalogEntryNotFoundError(NotFoundError):
    def __init__(self, kind: CatalogKind):
        super().__init__(
            message=f"{_LABELS[kind]} not found or unauthorized",
            error_code="CATALOG_ENTRY_NOT_FOUND",
        )


class CatalogEntryExistsError(ConflictError):
    def __init__(self, kind: CatalogKind):
        super().__init__(
            message=f"{_LABELS[kind]} already exists", error_code="CATALOG_ENTRY_EXISTS"
        )


def defaults_for(kind: CatalogKind) -> list[str]:
    if kind == CatalogKind.APPLICATION_TYPE:
        return list(DEFAULT_APPLICATION_TYPES)
    return []


async def list_entries(db: AsyncSession, owner_id: UUID, kind: CatalogKind) -> list[CatalogEntry]:
    return await repository.list_by_owner(db, owner_id, kind)


async def create_entry(
    db: AsyncSession, owner_id: UUID, kind: CatalogKind, name: str
) -> CatalogEntry:
    """
    Raises:
        CatalogEntryExistsError: If the owner already has this name
    """
    if await repository.get_by_name(db, owner_id, kind, name) is not None:
        raise CatalogEntryExistsError(kind)

    try:
        entry = await repository.create(db, owner_id, kind, name)
    except DuplicateCatalogEntryError as e:
        raise CatalogEntryExistsError(kind) from e

    logger.info(f"{_LABELS[kind]} {entry.id} added for user {owner_id}")
    return entry


async def rename_entry(
    db: AsyncSession, id: UUID, owner_id: UUID, kind: CatalogKind, name: str
) -> CatalogEntry:
    """
    Raises:
        CatalogEntryNotFoundError: If the id is missing or belongs to another owner
        CatalogEntryExistsError: If the new name is taken
    """
    entry = await repository.get_for_owner(db, id, owner_id, kind)
    if entry is None:
        raise CatalogEntryNotFoundError(kind)

    try:
        entry = await repository.rename(db, entry, name)
    except DuplicateCatalogEntryError as e:
        raise CatalogEntryExistsError(kind) from e

    logger.info(f"{_LABELS[kind]} {id} renamed for user {owner_id}")
    return entry


async def delete_entry(db: AsyncSession, id: UUID, owner_id: UUID, kind: CatalogKind) -> None:
    """
    Existing submissions keep the value they were given.

    Raises:
        CatalogEntryNotFoundError: If the id is missing or belongs to another owner
    """
    if not await repository.delete_for_owner(db, id, owner_id, kind):
        raise CatalogEntryNotFoundError(kind)
    logger.info(f"{_LABELS[kind]} {id} deleted for user {owner_id}")


async def is_known(db: AsyncSession, owner_id: UUID, kind: CatalogKind, name: str) -> bool:
    """Whether `name` is an accepted value of the owner's catalog."""
    if await repository.get_by_name(db, owner_id, kind, name) is not None:
        return True

    defaults = defaults_for(kind)
    if not defaults:
        return False
    return name in defaults and await repository.count_by_owner(db, owner_id, kind) == 0
