"""
Notification Repository
"""

from uuid import UUID

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from .models import Notification, NotificationStatus, NotificationType


async def create(
    db: AsyncSession,
    owner_id: UUID,
    type: NotificationType,
    message: str,
) -> Notification:
    """Insert an unread notification."""
    notification = Notification(
        owner_id=owner_id,
        type=type,
        message=message,
        status=NotificationStatus.UNREAD,
    )

    db.add(notification)
    await db.commit()
    await db.refresh(notification)

    return notification


async def list_by_owner(
    db: AsyncSession, owner_id: UUID, skip: int = 0, limit: int = 20
) -> tuple[list[Notification], int]:
    """Page through an owner's notifications, newest first. Returns (items, total)."""
    total = await db.scalar(
        select(func.count()).select_from(Notification).where(Notification.owner_id == owner_id)
    )
    result = await db.execute(
        select(Notification)
        .where(Notification.owner_id == owner_id)
        .order_by(Notification.created_at.desc())
        .offset(skip)
        .limit(limit)
    )
    return list(result.scalars().all()), total or 0


async def count_unread(db: AsyncSession, owner_id: UUID) -> int:
    count = await db.scalar(
        select(func.count())
        .select_from(Notification)
        .where(
            Notification.owner_id == owner_id,
            Notification.status == NotificationStatus.UNREAD,
        )
    )
    return count or 0


async def mark_read(db: AsyncSession, id: UUID, owner_id: UUID) -> bool:
    """Mark one of the owner's notifications read. Returns True if it exists."""
    result = await db.execute(
        update(Notification)
        .where(Notification.id == id, Notification.owner_id == owner_id)
        .values(status=NotificationStatus.READ)
    )
    await db.commit()
    return result.rowcount > 0


async def mark_all_read(db: AsyncSession, owner_id: UUID) -> int:
    """Mark every unread notification of the owner read. Returns the count updated."""
    result = await db.execute(
        update(Notification)
        .where(
            Notification.owner_id == owner_id,
            Notification.status == NotificationStatus.UNREAD,
        )
        .values(status=NotificationStatus.READ)
    )
    await db.commit()
    return result.rowcount
