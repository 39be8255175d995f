"""
Notification Service Layer

Owner-facing reads and read-state updates for notifications.
"""

import logging
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from qrintake.core.errors import NotFoundError
from qrintake.modules.notifications import repository
from qrintake.modules.notifications.schemas import (
    NotificationItem,
    NotificationListResponse,
)

logger = logging.getLogger(__name__)


class NotificationNotFoundError(NotFoundError):
    def __init__(self):
        super().__init__(message="Notification not found", error_code="NOTIFICATION_NOT_FOUND")


async def list_notifications(
    db: AsyncSession, owner_id: UUID, page: int = 1, limit: int = 20
) -> NotificationListResponse:
    skip = (page - 1) * limit
    items, total = await repository.list_by_owner(db, owner_id, skip=skip, limit=limit)
    return NotificationListResponse(
        notifications=[NotificationItem.model_validate(item) for item in items],
        total=total,
        page=page,
        limit=limit,
    )


async def get_unread_count(db: AsyncSession, owner_id: UUID) -> int:
    return await repository.count_unread(db, owner_id)


async def mark_read(db: AsyncSession, id: UUID, owner_id: UUID) -> None:
    """
    Raises:
        NotificationNotFoundError: If the id is missing or belongs to another owner
    """
    if not await repository.mark_read(db, id, owner_id):
        raise NotificationNotFoundError()


async def mark_all_read(db: AsyncSession, owner_id: UUID) -> int:
    updated = await repository.mark_all_read(db, owner_id)
    logger.info(f"Marked {updated} notifications read for user {owner_id}")
    return updated
