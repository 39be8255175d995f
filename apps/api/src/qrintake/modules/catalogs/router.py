"""
Catalogs Router

Owner-managed application types, designations and departments.
All endpoints require authentication.

Endpoints (`kind` is application_type, designation or department):
- GET /catalogs/{kind} - List the caller's entries
- POST /catalogs/{kind} - Add an entry
- PUT /catalogs/{kind}/{id} - Rename an entry
- DELETE /catalogs/{kind}/{id} - Delete an entry
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from qrintake.core.auth import CurrentUser, get_current_user
from qrintake.core.database import get_db
from qrintake.core.errors import IntakeServiceError, http_exception_from
from qrintake.modules.catalogs import service
from qrintake.modules.catalogs.models import CatalogKind
from qrintake.modules.catalogs.schemas import (
    CatalogEntryResponse,
    CatalogEntryWrite,
    CatalogListResponse,
    CatalogMessageResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def _internal_error(action: str, e: Exception) -> HTTPException:
    logger.exception(f"Unexpected error {action}: {e}")
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail={"error": "INTERNAL_ERROR", "message": "Internal server error"},
    )


@router.get("/{kind}", response_model=CatalogListResponse, summary="List Catalog")
async def list_entries(
    kind: CatalogKind,
    user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> CatalogListResponse:
    try:
        entries = await service.list_entries(db, user.id, kind)
        return CatalogListResponse(
            result=[CatalogEntryResponse.model_validate(e) for e in entries],
            defaults=[] if entries else service.defaults_for(kind),
        )
    except Exception as e:
        raise _internal_error(f"fetching {kind.value} catalog", e) from e


@router.post(
    "/{kind}",
    response_model=CatalogEntryResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add Catalog Entry",
    responses={409: {"description": "The name already exists"}},
)
async def create_entry(
    kind: CatalogKind,
    data: CatalogEntryWrite,
    user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> CatalogEntryResponse:
    try:
        entry = await service.create_entry(db, user.id, kind, data.name)
        return CatalogEntryResponse.model_validate(entry)
    except IntakeServiceError as e:
        raise http_exception_from(e) from e
    except Exception as e:
        raise _internal_error(f"adding {kind.value}", e) from e


@router.put("/{kind}/{id}", response_model=CatalogEntryResponse, summary="Rename Catalog Entry")
async def rename_entry(
    kind: CatalogKind,
    id: UUID,
    data: CatalogEntryWrite,
    user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> CatalogEntryResponse:
    try:
        entry = await service.rename_entry(db, id, user.id, kind, data.name)
        return CatalogEntryResponse.model_validate(entry)
    except IntakeServiceError as e:
        raise http_exception_from(e) from e
    except Exception as e:
        raise _internal_error(f"renaming {kind.value}", e) from e


@router.delete(
    "/{kind}/{id}", response_model=CatalogMessageResponse, summary="Delete Catalog Entry"
)
async def delete_entry(
    kind: CatalogKind,
    id: UUID,
    user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> CatalogMessageResponse:
    try:
        await service.delete_entry(db, id, user.id, kind)
        return CatalogMessageResponse(message="Successfully deleted")
    except IntakeServiceError as e:
        raise http_exception_from(e) from e
    except Exception as e:
        raise _internal_error(f"deleting {kind.value}", e) from e
