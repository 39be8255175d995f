"""
QR Code Service Layer

Owns the rules around QR codes:
- A code is globally unique
- An owner holds at most one code at a time
- Only the authenticated owner may create or delete their code
- Public lookups by code need no authentication (the code is the capability)

Uniqueness is pre-checked for friendly error messages, but the database
constraints decide races between concurrent creates.
"""

import logging
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from qrintake.core.auth import CurrentUser
from qrintake.core.errors import ConflictError, ForbiddenError, InvalidInputError, NotFoundError
from qrintake.modules.qr_codes import repository
from qrintake.modules.qr_codes.models import QrCode
from qrintake.modules.qr_codes.repository import DuplicateQrCodeError
from qrintake.modules.qr_codes.schemas import QrCodeCreate

logger = logging.getLogger(__name__)


class QrCodeNotFoundError(NotFoundError):
    """Raised when a QR code does not exist or is not visible to the caller."""

    def __init__(self, message: str = "QR code not found"):
        super().__init__(message=message, error_code="QR_CODE_NOT_FOUND")


class DuplicateCodeError(ConflictError):
    """Raised when the requested code value is already taken."""

    def __init__(self):
        super().__init__(message="Code already exists", error_code="DUPLICATE_CODE")


class OwnerAlreadyHasCodeError(ConflictError):
    """Raised when the owner already holds a QR code."""

    def __init__(self):
        super().__init__(
            message="User already has a QR code. Delete the existing one to create a new one.",
            error_code="OWNER_HAS_CODE",
        )


class OwnerMismatchError(ForbiddenError):
    """Raised when the requested owner is not the authenticated caller."""

    def __init__(self):
        super().__init__(message="Unauthorized user ID", error_code="OWNER_MISMATCH")


async def create_qr_code(
    db: AsyncSession,
    user: CurrentUser,
    data: QrCodeCreate,
) -> QrCode:
    """
    Create the caller's QR code.

    Args:
        db: Database session
        user: Authenticated caller
        data: Requested code, target URL, owner id and optional image

    Returns:
        The created QrCode

    Raises:
        InvalidInputError: If code, url or user_id is missing
        OwnerMismatchError: If user_id is not the caller
        DuplicateCodeError: If the code is already taken
        OwnerAlreadyHasCodeError: If the caller already has a code
    """
    code = (data.code or "").strip()
    url = (data.url or "").strip()

    if not code or not url or data.user_id is None:
        logger.warning(f"QR code create missing fields for user {user.id}")
        raise InvalidInputError("Code, URL, and userId are required")

    if data.user_id != user.id:
        logger.warning(f"QR code create owner mismatch: requested={data.user_id}, caller={user.id}")
        raise OwnerMismatchError()

    if await repository.get_by_code(db, code) is not None:
        logger.warning("QR code create rejected: code already exists")
        raise DuplicateCodeError()

    existing = await repository.get_by_owner(db, user.id)
    if existing is not None:
        logger.warning(f"User {user.id} already has QR code {existing.id}")
        raise OwnerAlreadyHasCodeError()

    try:
        qr_code = await repository.create(
            db,
            code=code,
            owner_id=user.id,
            url=url,
            image=data.image,
            notify_email=data.notify_email or user.email or None,
        )
    except DuplicateQrCodeError as e:
        # Lost a race with a concurrent create; tell the two cases apart
        logger.warning(f"QR code create hit uniqueness constraint for user {user.id}")
        if await repository.get_by_owner(db, user.id) is not None:
            raise OwnerAlreadyHasCodeError() from e
        raise DuplicateCodeError() from e

    logger.info(f"QR code saved with ID: {qr_code.id} for user {user.id}")
    return qr_code


async def find_by_code(db: AsyncSession, code: str) -> QrCode:
    """
    Resolve a public code.

    Raises:
        QrCodeNotFoundError: If no QR code has this code
    """
    qr_code = await repository.get_by_code(db, code)
    if qr_code is None:
        logger.warning("QR code lookup miss")
        raise QrCodeNotFoundError()
    return qr_code


async def list_by_owner(db: AsyncSession, owner_id: UUID) -> list[QrCode]:
    """List the owner's QR codes (at most one by business rule)."""
    qr_codes = await repository.list_by_owner(db, owner_id)
    logger.info(f"Fetched {len(qr_codes)} QR codes for user {owner_id}")
    return qr_codes


async def get_owner_code(db: AsyncSession, owner_id: UUID) -> str:
    """
    Return the code string of the owner's QR code.

    Raises:
        QrCodeNotFoundError: If the owner has no QR code
    """
    qr_code = await repository.get_by_owner(db, owner_id)
    if qr_code is None:
        raise QrCodeNotFoundError("No QR code found for user")
    return qr_code.code


async def delete_by_owner(db: AsyncSession, id: UUID, owner_id: UUID) -> None:
    """
    Delete the owner's QR code.

    A missing id and another owner's id are reported identically.

    Raises:
        QrCodeNotFoundError: If nothing was deleted
    """
    deleted = await repository.delete_for_owner(db, id, owner_id)
    if not deleted:
        logger.warning(f"QR code {id} not found or unauthorized for user {owner_id}")
        raise QrCodeNotFoundError("QR code not found or unauthorized")
    logger.info(f"QR code deleted: {id}")
