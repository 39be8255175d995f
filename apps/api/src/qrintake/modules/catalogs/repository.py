"""
Catalog Repository

Database operations for catalog entries, always scoped to one owner and kind.
"""

from uuid import UUID

from sqlalchemy import delete, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from .models import CatalogEntry, CatalogKind


class DuplicateCatalogEntryError(Exception):
    """Raised when the owner already has an entry with this kind and name."""


async def list_by_owner(db: AsyncSession, owner_id: UUID, kind: CatalogKind) -> list[CatalogEntry]:
    result = await db.execute(
        select(CatalogEntry)
        .where(CatalogEntry.owner_id == owner_id, CatalogEntry.kind == kind)
        .order_by(CatalogEntry.name)
    )
    return list(result.scalars().all())


async def count_by_owner(db: AsyncSession, owner_id: UUID, kind: CatalogKind) -> int:
    count = await db.scalar(
        select(func.count())
        .select_from(CatalogEntry)
        .where(CatalogEntry.owner_id == owner_id, CatalogEntry.kind == kind)
    )
    return count or 0


async def get_by_name(
    db: AsyncSession, owner_id: UUID, kind: CatalogKind, name: str
) -> CatalogEntry | None:
    result = await db.execute(
        select(CatalogEntry).where(
            CatalogEntry.owner_id == owner_id,
            CatalogEntry.kind == kind,
            CatalogEntry.name == name,
        )
    )
    return result.scalar_one_or_none()


async def get_for_owner(
    db: AsyncSession, id: UUID, owner_id: UUID, kind: CatalogKind
) -> CatalogEntry | None:
    result = await db.execute(
        select(CatalogEntry).where(
            CatalogEntry.id == id,
            CatalogEntry.owner_id == owner_id,
            CatalogEntry.kind == kind,
        )
    )
    return result.scalar_one_or_none()


async def _commit_unique(db: AsyncSession) -> None:
    try:
        await db.commit()
    except IntegrityError as e:
        await db.rollback()
        raise DuplicateCatalogEntryError(str(e.orig)) from e


async def create(db: AsyncSession, owner_id: UUID, kind: CatalogKind, name: str) -> CatalogEntry:
    """
    Raises:
        DuplicateCatalogEntryError: If the name is taken for this owner and kind
    """
    entry = CatalogEntry(owner_id=owner_id, kind=kind, name=name)

    db.add(entry)
    await _commit_unique(db)
    await db.refresh(entry)

    return entry


async def rename(db: AsyncSession, entry: CatalogEntry, name: str) -> CatalogEntry:
    """
    Raises:
        DuplicateCatalogEntryError: If the new name is taken
    """
    entry.name = name

    await _commit_unique(db)
    await db.refresh(entry)

    return entry


async def delete_for_owner(db: AsyncSession, id: UUID, owner_id: UUID, kind: CatalogKind) -> bool:
    """Returns True if an entry was deleted."""
    result = await db.execute(
        delete(CatalogEntry).where(
            CatalogEntry.id == id,
            CatalogEntry.owner_id == owner_id,
            CatalogEntry.kind == kind,
        )
    )
    await db.commit()
    return result.rowcount > 0
