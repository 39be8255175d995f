"""
QR Codes Router

Endpoints:
- POST /qrcodes - Create the caller's QR code (auth)
- GET /qrcodes - List the caller's QR codes (auth)
- GET /qrcodes/user - Get the caller's code string (auth)
- GET /qrcodes/code/{code} - Public lookup by code
- DELETE /qrcodes/{id} - Delete the caller's QR code (auth)
- POST /qrcodes/validate/{code} - Public geofence admission check

The validate endpoint always answers with an explicit `withinRange` flag,
including on not-found, invalid coordinates and internal errors, so clients
can render one outcome shape regardless of status code.
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from qrintake.core.auth import CurrentUser, get_current_user
from qrintake.core.database import get_db
from qrintake.core.errors import IntakeServiceError, http_exception_from
from qrintake.core.rate_limit import rate_limit
from qrintake.modules.admission import service as admission_service
from qrintake.modules.admission.schemas import AdmissionReason
from qrintake.modules.qr_codes import service
from qrintake.modules.qr_codes.schemas import (
    DeleteResponse,
    OwnerCodeResponse,
    QrCodeCreate,
    QrCodeEnvelope,
    QrCodeListResponse,
    QrCodeResponse,
    ValidateLocationRequest,
    ValidateLocationResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()

ADMISSION_STATUS_CODES: dict[AdmissionReason, int] = {
    AdmissionReason.WITHIN_RANGE: status.HTTP_200_OK,
    AdmissionReason.UNRESTRICTED: status.HTTP_200_OK,
    AdmissionReason.INVALID_COORDINATES: status.HTTP_400_BAD_REQUEST,
    AdmissionReason.CODE_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    AdmissionReason.NO_LOCATION: status.HTTP_404_NOT_FOUND,
    AdmissionReason.OUT_OF_RANGE: status.HTTP_403_FORBIDDEN,
}


def _internal_error(action: str, e: Exception) -> HTTPException:
    logger.exception(f"Unexpected error {action}: {e}")
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail={
            "error": "INTERNAL_ERROR",
            "message": "An unexpected error occurred. Please try again later.",
        },
    )


@router.post(
    "",
    response_model=QrCodeEnvelope,
    status_code=status.HTTP_201_CREATED,
    summary="Create QR Code",
    description="""
Create the caller's QR code. An account holds at most one code; delete the
existing one to create a new one. Codes are globally unique.
""",
    responses={
        400: {"description": "Missing code, url or userId"},
        403: {"description": "userId does not match the authenticated account"},
        409: {"description": "Code taken, or the account already has a code"},
    },
)
async def create_qr_code(
    data: QrCodeCreate,
    user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> QrCodeEnvelope:
    try:
        qr_code = await service.create_qr_code(db, user, data)
        return QrCodeEnvelope(
            message="QR code saved successfully",
            data=QrCodeResponse.model_validate(qr_code),
        )
    except IntakeServiceError as e:
        raise http_exception_from(e) from e
    except Exception as e:
        raise _internal_error("saving QR code", e) from e


@router.get("", response_model=QrCodeListResponse, summary="List My QR Codes")
async def list_qr_codes(
    user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> QrCodeListResponse:
    try:
        qr_codes = await service.list_by_owner(db, user.id)
        return QrCodeListResponse(data=[QrCodeResponse.model_validate(q) for q in qr_codes])
    except Exception as e:
        raise _internal_error("fetching QR codes", e) from e


@router.get("/user", response_model=OwnerCodeResponse, summary="Get My Code")
async def get_my_code(
    user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> OwnerCodeResponse:
    try:
        return OwnerCodeResponse(code=await service.get_owner_code(db, user.id))
    except IntakeServiceError as e:
        raise http_exception_from(e) from e
    except Exception as e:
        raise _internal_error("fetching QR code", e) from e


@router.get(
    "/code/{code}",
    response_model=QrCodeEnvelope,
    summary="Look Up QR Code",
    description="Public lookup used by the submission form. The code is the capability.",
)
@rate_limit()
async def get_qr_code_by_code(
    request: Request,
    code: str,
    db: AsyncSession = Depends(get_db),
) -> QrCodeEnvelope:
    try:
        qr_code = await service.find_by_code(db, code)
        return QrCodeEnvelope(
            message="QR code fetched successfully",
            data=QrCodeResponse.model_validate(qr_code),
        )
    except IntakeServiceError as e:
        raise http_exception_from(e) from e
    except Exception as e:
        raise _internal_error("fetching QR code", e) from e


@router.delete("/{id}", response_model=DeleteResponse, summary="Delete My QR Code")
async def delete_qr_code(
    id: UUID,
    user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> DeleteResponse:
    try:
        await service.delete_by_owner(db, id, user.id)
        return DeleteResponse()
    except IntakeServiceError as e:
        raise http_exception_from(e) from e
    except Exception as e:
        raise _internal_error("deleting QR code", e) from e


@router.post(
    "/validate/{code}",
    summary="Validate Visitor Location",
    description="""
Check whether a visitor's device position is within the code owner's
geofence. Owners without a configured location accept any valid position.

The body always contains `withinRange`:
- 200: admitted
- 400: invalid coordinates
- 403: outside the allowed radius
- 404: unknown code
""",
    response_model=ValidateLocationResponse,
)
@rate_limit()
async def validate_location(
    request: Request,
    code: str,
    data: ValidateLocationRequest | None = None,
    db: AsyncSession = Depends(get_db),
) -> JSONResponse:
    data = data or ValidateLocationRequest()
    try:
        result = await admission_service.evaluate(db, code, data.latitude, data.longitude)
    except Exception as e:
        logger.exception(f"QR code validation error: {e}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"message": "Internal Server Error", "withinRange": False},
        )

    body = ValidateLocationResponse(
        message=result.message,
        within_range=result.within_range,
        reason=result.reason.value,
    )
    return JSONResponse(
        status_code=ADMISSION_STATUS_CODES[result.reason],
        content=body.model_dump(by_alias=True),
    )
