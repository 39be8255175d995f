"""
Notifications Router

Endpoints (all require authentication):
- GET /notifications - Paginated notifications, newest first
- GET /notifications/unread-count - Unread counter for the dashboard badge
- POST /notifications/{id}/read - Mark one notification read
- POST /notifications/read-all - Mark all notifications read
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from qrintake.core.auth import CurrentUser, get_current_user
from qrintake.core.database import get_db
from qrintake.core.errors import IntakeServiceError, http_exception_from
from qrintake.modules.notifications import service
from qrintake.modules.notifications.schemas import (
    MarkReadResponse,
    NotificationListResponse,
    UnreadCountResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def _internal_error(action: str, e: Exception) -> HTTPException:
    logger.exception(f"Unexpected error {action}: {e}")
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail={"error": "INTERNAL_ERROR", "message": f"Failed to {action}"},
    )


@router.get("", response_model=NotificationListResponse, summary="List Notifications")
async def list_notifications(
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=50),
    user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> NotificationListResponse:
    try:
        return await service.list_notifications(db, user.id, page=page, limit=limit)
    except Exception as e:
        raise _internal_error("fetch notifications", e) from e


@router.get("/unread-count", response_model=UnreadCountResponse, summary="Unread Count")
async def unread_count(
    user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> UnreadCountResponse:
    try:
        return UnreadCountResponse(count=await service.get_unread_count(db, user.id))
    except Exception as e:
        raise _internal_error("fetch notification count", e) from e


@router.post("/read-all", response_model=MarkReadResponse, summary="Mark All Read")
async def mark_all_read(
    user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> MarkReadResponse:
    try:
        updated = await service.mark_all_read(db, user.id)
        return MarkReadResponse(message="All notifications marked as read", updated=updated)
    except Exception as e:
        raise _internal_error("update notifications", e) from e


@router.post("/{id}/read", response_model=MarkReadResponse, summary="Mark Read")
async def mark_read(
    id: UUID,
    user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> MarkReadResponse:
    try:
        await service.mark_read(db, id, user.id)
        return MarkReadResponse(message="Notification marked as read", updated=1)
    except IntakeServiceError as e:
        raise http_exception_from(e) from e
    except Exception as e:
        raise _internal_error("update notification", e) from e
