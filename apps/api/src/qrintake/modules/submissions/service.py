"""
Form Submission Service Layer

Business logic for visitor submissions and the owner review workflow.

Submission flow:
1. Validate the submitted fields (no writes on failure)
2. Resolve the QR code (no writes on failure)
3. Check the application type against the owner's catalog
4. Re-check the geofence on the server when enforcement is on
5. Store the resume through the injected storage capability
6. Insert the submission as pending and unreviewed; a failed insert
   removes the stored resume
7. Notify the owner (best-effort: failures are logged, never raised)

The geofence step never trusts a client's earlier "within range" answer;
it recomputes the decision from the coordinates sent with the submission.
Owners without a configured location are unrestricted.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any
from uuid import UUID

from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from qrintake.core.config import settings
from qrintake.core.email import send_submission_alert
from qrintake.core.errors import (
    ConflictError,
    GeofenceRejectedError,
    InfrastructureError,
    InvalidInputError,
    NotFoundError,
)
from qrintake.core.geo import is_valid_coordinate
from qrintake.modules.admission.schemas import AdmissionReason
from qrintake.modules.admission.service import decide
from qrintake.modules.catalogs import service as catalog_service
from qrintake.modules.catalogs.models import CatalogKind
from qrintake.modules.geofence import service as geofence_service
from qrintake.modules.notifications.models import NotificationType
from qrintake.modules.notifications.sink import NotificationSink
from qrintake.modules.qr_codes import service as qr_service
from qrintake.modules.qr_codes.models import QrCode
from qrintake.modules.submissions import repository
from qrintake.modules.submissions.models import FormSubmission, SubmissionStatus
from qrintake.modules.submissions.repository import InvalidStatusTransitionError
from qrintake.modules.submissions.schemas import (
    Coordinates,
    ReviewRequest,
    SubmissionCreate,
    SubmissionListItem,
    SubmissionListResponse,
    SubmissionResponse,
    SubmissionStats,
)
from qrintake.modules.submissions.storage import ResumeStorage

logger = logging.getLogger(__name__)


@dataclass
class ResumeUpload:
    """A resume that already passed type and size filtering."""

    filename: str
    content_type: str
    content: bytes


ALLOWED_RESUME_EXTENSIONS = {".pdf", ".doc", ".docx"}
ALLOWED_RESUME_CONTENT_TYPES = {
    "application/pdf",
    "application/msword",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
}


class SubmissionValidationError(InvalidInputError):
    """Raised when submitted fields violate a constraint."""

    def __init__(self, message: str, field: str | None = None):
        self.field = field
        super().__init__(message=message, error_code="VALIDATION_ERROR")


class SubmissionNotFoundError(NotFoundError):
    def __init__(self):
        super().__init__(message="Submission not found", error_code="SUBMISSION_NOT_FOUND")


class ResumeNotFoundError(NotFoundError):
    def __init__(self):
        super().__init__(message="Resume not found", error_code="RESUME_NOT_FOUND")


class InvalidReviewError(ConflictError):
    def __init__(self, message: str):
        super().__init__(message=message, error_code="INVALID_STATUS_TRANSITION")


def validate_submission_fields(fields: Mapping[str, Any] | SubmissionCreate) -> SubmissionCreate:
    """
    Validate raw submission fields.

    Raises:
        SubmissionValidationError: Naming the first violated constraint
    """
    if isinstance(fields, SubmissionCreate):
        return fields

    try:
        return SubmissionCreate.model_validate(dict(fields))
    except PydanticValidationError as e:
        first = e.errors()[0]
        field = ".".join(str(part) for part in first["loc"]) or None
        message = f"{field}: {first['msg']}" if field else first["msg"]
        raise SubmissionValidationError(message, field) from e


def filter_resume(
    filename: str | None,
    content_type: str | None,
    content: bytes,
    max_bytes: int | None = None,
) -> ResumeUpload | None:
    """
    Accept only PDF and Word documents up to the configured size.

    Returns None for an empty upload field.

    Raises:
        SubmissionValidationError: If the type or size is not allowed
    """
    if not filename and not content:
        return None

    max_bytes = max_bytes if max_bytes is not None else settings.max_resume_bytes
    extension = Path(filename or "").suffix.lower()

    if extension not in ALLOWED_RESUME_EXTENSIONS or (
        content_type and content_type not in ALLOWED_RESUME_CONTENT_TYPES
    ):
        raise SubmissionValidationError(
            "Only PDF and Word documents are allowed", field="resume"
        )
    if len(content) > max_bytes:
        raise SubmissionValidationError(
            f"Resume exceeds the {max_bytes // (1024 * 1024)}MB limit", field="resume"
        )

    return ResumeUpload(
        filename=filename or f"resume{extension}",
        content_type=content_type or "application/octet-stream",
        content=content,
    )


async def _enforce_geofence(
    db: AsyncSession,
    qr_code: QrCode,
    coordinates: Coordinates | None,
) -> None:
    """
    Re-run the admission decision for a submission.

    Raises:
        GeofenceRejectedError: If the owner has a location and the position
            is missing, invalid, or out of range
    """
    location = await geofence_service.get_location_for_owner(db, qr_code.owner_id)
    if location is None:
        return

    if coordinates is None:
        logger.warning(f"Submission for QR code {qr_code.id} rejected: location required")
        raise GeofenceRejectedError(
            "Your location is required to submit this form.", reason="location_required"
        )

    if not is_valid_coordinate(coordinates.latitude, coordinates.longitude):
        raise GeofenceRejectedError(
            "Invalid coordinates", reason=AdmissionReason.INVALID_COORDINATES.value
        )

    result = decide(location, coordinates.latitude, coordinates.longitude)
    if not result.within_range:
        logger.warning(f"Submission for QR code {qr_code.id} rejected: out of range")
        raise GeofenceRejectedError(result.message, reason=result.reason.value)


async def _notify_owner(
    notifier: NotificationSink,
    qr_code: QrCode,
    data: SubmissionCreate,
) -> None:
    """Best-effort owner notification. Never raises."""
    message = f'New {data.application_type} submission from "{data.name}".'

    try:
        await notifier.enqueue(qr_code.owner_id, NotificationType.FORM_SUBMISSION, message)
    except Exception as e:
        logger.error(f"Failed to enqueue notification for user {qr_code.owner_id}: {e}")

    if qr_code.notify_email:
        try:
            sent = await send_submission_alert(
                to_email=qr_code.notify_email,
                applicant_name=data.name,
                application_type=data.application_type,
            )
            if not sent:
                logger.error(f"Failed to send submission alert for QR code {qr_code.id}")
        except Exception as e:
            logger.error(f"Exception sending submission alert for QR code {qr_code.id}: {e}")


async def _discard_resume(resume_storage: ResumeStorage, ref: str) -> None:
    """Remove a resume whose submission was never recorded."""
    try:
        await resume_storage.delete(ref)
    except OSError as e:
        logger.error(f"Failed to remove orphaned resume {ref}: {e}")


async def submit_form(
    db: AsyncSession,
    code: str,
    fields: Mapping[str, Any] | SubmissionCreate,
    *,
    notifier: NotificationSink,
    resume: ResumeUpload | None = None,
    resume_storage: ResumeStorage | None = None,
    coordinates: Coordinates | None = None,
    enforce_geofence: bool | None = None,
) -> SubmissionResponse:
    """
    Record a visitor's submission against a public QR code.

    Args:
        db: Database session
        code: Public QR code string
        fields: name, email, reason, application_type
        notifier: Sink that receives the owner notification
        resume: Optional pre-filtered resume upload
        resume_storage: Where to store the resume (required if resume is given)
        coordinates: Visitor's position, for the server-side geofence check
        enforce_geofence: Override for settings.geofence_enforce_on_submit

    Returns:
        SubmissionResponse echoing the stored submission

    Raises:
        SubmissionValidationError: If a field is invalid or the application
            type is not in the owner's catalog
        QrCodeNotFoundError: If the code does not exist
        GeofenceRejectedError: If the geofence check fails
        InfrastructureError: If the resume cannot be stored
    """
    data = validate_submission_fields(fields)
    qr_code = await qr_service.find_by_code(db, code)

    if not await catalog_service.is_known(
        db, qr_code.owner_id, CatalogKind.APPLICATION_TYPE, data.application_type
    ):
        raise SubmissionValidationError("Invalid application type", field="application_type")

    if enforce_geofence is None:
        enforce_geofence = settings.geofence_enforce_on_submit
    if enforce_geofence:
        await _enforce_geofence(db, qr_code, coordinates)

    resume_path = None
    if resume is not None:
        if resume_storage is None:
            raise InfrastructureError("Resume storage is not configured.")
        try:
            resume_path = await resume_storage.store(resume.filename, resume.content)
        except OSError as e:
            logger.error(f"Failed to store resume for QR code {qr_code.id}: {e}")
            raise InfrastructureError("Failed to upload resume.") from e

    try:
        submission = await repository.create(
            db,
            qr_code_id=qr_code.id,
            owner_id=qr_code.owner_id,
            data=data,
            resume_path=resume_path,
        )
    except Exception:
        if resume_path is not None:
            await _discard_resume(resume_storage, resume_path)
        raise
    logger.info(f"Created submission {submission.id} for QR code {qr_code.id}")

    await _notify_owner(notifier, qr_code, data)

    return SubmissionResponse.model_validate(submission)


# ============================================
# Owner Review Workflow
# ============================================


def _to_list_item(submission: FormSubmission) -> SubmissionListItem:
    item = SubmissionListItem.model_validate(submission)
    item.has_resume = submission.resume_path is not None
    return item


async def list_submissions(
    db: AsyncSession,
    owner_id: UUID,
    status: SubmissionStatus | None = None,
    skip: int = 0,
    limit: int = 20,
) -> SubmissionListResponse:
    submissions, total = await repository.list_by_owner(
        db, owner_id, status=status, skip=skip, limit=limit
    )
    return SubmissionListResponse(
        submissions=[_to_list_item(s) for s in submissions],
        total=total,
        skip=skip,
        limit=limit,
    )


async def get_submission(db: AsyncSession, id: UUID, owner_id: UUID) -> FormSubmission:
    """
    Raises:
        SubmissionNotFoundError: If the id is missing or belongs to another owner
    """
    submission = await repository.get_for_owner(db, id, owner_id)
    if submission is None:
        raise SubmissionNotFoundError()
    return submission


async def _check_catalog_value(
    db: AsyncSession, owner_id: UUID, kind: CatalogKind, value: str | None
) -> None:
    if value is None:
        return
    if not await catalog_service.is_known(db, owner_id, kind, value):
        label = kind.value.replace("_", " ")
        raise SubmissionValidationError(f"Invalid {label}", field=kind.value)


async def _notify_review(
    notifier: NotificationSink | None, submission: FormSubmission
) -> None:
    """Best-effort "submission updated" notification. Never raises."""
    if notifier is None:
        return

    message = (
        f'Submission {submission.id} updated: status "{submission.status.value}", '
        f'designation "{submission.designation or "None"}", '
        f'department "{submission.department or "None"}".'
    )
    try:
        await notifier.enqueue(submission.owner_id, NotificationType.SUBMISSION_UPDATE, message)
    except Exception as e:
        logger.error(f"Failed to enqueue update notification for submission {submission.id}: {e}")


async def review_submission(
    db: AsyncSession,
    id: UUID,
    owner_id: UUID,
    data: ReviewRequest,
    *,
    notifier: NotificationSink | None = None,
) -> SubmissionListItem:
    """
    Apply an owner's review (status, designation, department).

    Designation and department must name entries of the owner's catalogs.

    Raises:
        SubmissionNotFoundError: If the submission is not the owner's
        SubmissionValidationError: If a designation or department is unknown
        InvalidReviewError: If the status transition is not allowed
    """
    submission = await get_submission(db, id, owner_id)

    await _check_catalog_value(db, owner_id, CatalogKind.DESIGNATION, data.designation)
    await _check_catalog_value(db, owner_id, CatalogKind.DEPARTMENT, data.department)

    try:
        submission = await repository.apply_review(
            db,
            submission,
            status=data.status,
            designation=data.designation,
            department=data.department,
        )
    except InvalidStatusTransitionError as e:
        logger.warning(f"Review rejected for submission {id}: {e}")
        raise InvalidReviewError(str(e)) from e

    logger.info(f"Submission {id} reviewed by user {owner_id}: status={submission.status.value}")

    await _notify_review(notifier, submission)
    return _to_list_item(submission)


async def get_submission_stats(db: AsyncSession, owner_id: UUID) -> SubmissionStats:
    counts = await repository.count_by_status(db, owner_id)
    unreviewed = await repository.count_unreviewed(db, owner_id)
    return SubmissionStats(
        total=sum(counts.values()),
        unreviewed=unreviewed,
        pending=counts.get(SubmissionStatus.PENDING, 0),
        in_review=counts.get(SubmissionStatus.IN_REVIEW, 0),
        accepted=counts.get(SubmissionStatus.ACCEPTED, 0),
        rejected=counts.get(SubmissionStatus.REJECTED, 0),
    )


async def get_resume_file(
    db: AsyncSession,
    id: UUID,
    owner_id: UUID,
    resume_storage: ResumeStorage,
) -> tuple[Path, str]:
    """
    Locate the resume of one of the owner's submissions.

    Returns:
        (file path, download filename)

    Raises:
        SubmissionNotFoundError: If the submission is not the owner's
        ResumeNotFoundError: If it has no resume or the file is gone
    """
    submission = await get_submission(db, id, owner_id)
    if not submission.resume_path:
        raise ResumeNotFoundError()

    try:
        path = await resume_storage.open(submission.resume_path)
    except FileNotFoundError as e:
        logger.error(f"Resume file missing for submission {id}")
        raise ResumeNotFoundError() from e

    return path, f"{submission.name}-resume{path.suffix}"
