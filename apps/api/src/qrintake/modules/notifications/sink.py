"""
Notification Sink

The capability the intake flow uses to tell an owner about a new
submission. Emission is fire-and-forget from the caller's point of view:
the intake service logs sink failures and never fails a submission on
them. A retry queue could be slotted in behind this interface.
"""

import logging
from typing import Protocol
from uuid import UUID

from fastapi import Depends
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from qrintake.core.database import get_db
from qrintake.modules.notifications import repository
from qrintake.modules.notifications.models import NotificationType

logger = logging.getLogger(__name__)


class NotificationSink(Protocol):
    async def enqueue(self, owner_id: UUID, type: NotificationType, message: str) -> None: ...


class DatabaseNotificationSink:
    """Appends notifications to the `notifications` table."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def enqueue(self, owner_id: UUID, type: NotificationType, message: str) -> None:
        try:
            notification = await repository.create(self.db, owner_id, type, message)
        except SQLAlchemyError:
            # Leave the shared session usable for the rest of the request
            await self.db.rollback()
            raise

        logger.info(f"Notification {notification.id} queued for user {owner_id}")


def get_notification_sink(db: AsyncSession = Depends(get_db)) -> NotificationSink:
    """FastAPI dependency providing the request-scoped sink."""
    return DatabaseNotificationSink(db)
