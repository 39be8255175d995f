"""
Notification Schemas
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from qrintake.modules.notifications.models import NotificationStatus, NotificationType


class NotificationItem(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    type: NotificationType
    message: str
    status: NotificationStatus
    created_at: datetime


class NotificationListResponse(BaseModel):
    """Paginated notifications for the owner dashboard."""

    notifications: list[NotificationItem]
    total: int = Field(..., ge=0)
    page: int = Field(..., ge=1)
    limit: int = Field(..., ge=1, le=50)


class UnreadCountResponse(BaseModel):
    count: int = Field(..., ge=0)


class MarkReadResponse(BaseModel):
    message: str
    updated: int = Field(..., ge=0)
