"""
QR Code Repository

Database operations for QR codes. All queries are parameterized and
async; no business rules live here.
"""

from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from .models import QrCode


class DuplicateQrCodeError(Exception):
    """Raised when an insert violates the code or owner uniqueness constraint."""


async def create(
    db: AsyncSession,
    *,
    code: str,
    owner_id: UUID,
    url: str,
    image: str | None = None,
    notify_email: str | None = None,
) -> QrCode:
    """
    Insert a new QR code.

    Raises:
        DuplicateQrCodeError: If the code or the owner already exists
    """
    qr_code = QrCode(
        code=code,
        owner_id=owner_id,
        url=url,
        image=image,
        notify_email=notify_email,
    )

    db.add(qr_code)
    try:
        await db.commit()
    except IntegrityError as e:
        await db.rollback()
        raise DuplicateQrCodeError(str(e.orig)) from e
    await db.refresh(qr_code)

    return qr_code


async def get_by_code(db: AsyncSession, code: str) -> QrCode | None:
    """Get a QR code by its public code."""
    result = await db.execute(select(QrCode).where(QrCode.code == code))
    return result.scalar_one_or_none()


async def get_by_owner(db: AsyncSession, owner_id: UUID) -> QrCode | None:
    """Get the QR code owned by an account, if any."""
    result = await db.execute(select(QrCode).where(QrCode.owner_id == owner_id))
    return result.scalars().first()


async def list_by_owner(db: AsyncSession, owner_id: UUID) -> list[QrCode]:
    """List an owner's QR codes, newest first."""
    result = await db.execute(
        select(QrCode).where(QrCode.owner_id == owner_id).order_by(QrCode.created_at.desc())
    )
    return list(result.scalars().all())


async def delete_for_owner(db: AsyncSession, id: UUID, owner_id: UUID) -> bool:
    """
    Delete a QR code if it belongs to `owner_id`.

    Returns:
        True if a row was deleted
    """
    result = await db.execute(delete(QrCode).where(QrCode.id == id, QrCode.owner_id == owner_id))
    await db.commit()
    return result.rowcount > 0
