"""
Form Submission Routers

Public:
- POST /form/{code}/submit - Submit the form behind a QR code (multipart)

Owner (auth):
- GET /submissions - List submissions, optionally filtered by status
- GET /submissions/stats - Dashboard counters
- GET /submissions/{id} - Submission detail
- PATCH /submissions/{id}/review - Review a submission
- GET /submissions/{id}/resume - Download the attached resume
"""

import logging
from uuid import UUID

from fastapi import (
    APIRouter,
    Depends,
    File,
    Form,
    HTTPException,
    Query,
    Request,
    UploadFile,
    status,
)
from fastapi.responses import FileResponse
from sqlalchemy.ext.asyncio import AsyncSession

from qrintake.core.auth import CurrentUser, get_current_user
from qrintake.core.database import get_db
from qrintake.core.errors import GeofenceRejectedError, IntakeServiceError, http_exception_from
from qrintake.core.rate_limit import rate_limit
from qrintake.modules.notifications.sink import NotificationSink, get_notification_sink
from qrintake.modules.submissions import service
from qrintake.modules.submissions.models import SubmissionStatus
from qrintake.modules.submissions.schemas import (
    Coordinates,
    ReviewRequest,
    SubmissionListItem,
    SubmissionListResponse,
    SubmissionStats,
    SubmitEnvelope,
)
from qrintake.modules.submissions.storage import ResumeStorage, get_resume_storage

logger = logging.getLogger(__name__)

form_router = APIRouter()
router = APIRouter()


def _internal_error(action: str, e: Exception) -> HTTPException:
    logger.exception(f"Unexpected error {action}: {e}")
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail={
            "error": "INTERNAL_ERROR",
            "message": "An unexpected error occurred. Please try again later.",
        },
    )


@form_router.post(
    "/{code}/submit",
    response_model=SubmitEnvelope,
    status_code=status.HTTP_201_CREATED,
    summary="Submit Form",
    description="""
Submit a visitor's application against a public QR code.

Send as multipart form data. `resume` is optional and must be a PDF or Word
document of at most 5MB. When the code's owner has configured a location,
`latitude` and `longitude` are required and must be within range.
""",
    responses={
        400: {"description": "Invalid field or resume"},
        403: {"description": "Position outside the owner's geofence"},
        404: {"description": "Unknown QR code"},
        429: {"description": "Rate limit exceeded"},
    },
)
@rate_limit()
async def submit_form(
    request: Request,
    code: str,
    name: str = Form(""),
    email: str = Form(""),
    application_type: str = Form(""),
    reason: str | None = Form(None),
    latitude: float | None = Form(None),
    longitude: float | None = Form(None),
    resume: UploadFile | None = File(None),
    db: AsyncSession = Depends(get_db),
    notifier: NotificationSink = Depends(get_notification_sink),
    resume_storage: ResumeStorage = Depends(get_resume_storage),
) -> SubmitEnvelope:
    try:
        upload = None
        if resume is not None:
            upload = service.filter_resume(
                resume.filename, resume.content_type, await resume.read()
            )

        coordinates = None
        if latitude is not None and longitude is not None:
            coordinates = Coordinates(latitude=latitude, longitude=longitude)

        submission = await service.submit_form(
            db,
            code,
            {
                "name": name,
                "email": email,
                "reason": reason,
                "application_type": application_type,
            },
            notifier=notifier,
            resume=upload,
            resume_storage=resume_storage,
            coordinates=coordinates,
        )
        return SubmitEnvelope(data=submission)
    except GeofenceRejectedError as e:
        raise HTTPException(
            status_code=e.status_code,
            detail={
                "error": e.error_code,
                "message": e.message,
                "reason": e.reason,
                "withinRange": False,
            },
        ) from e
    except IntakeServiceError as e:
        raise http_exception_from(e) from e
    except Exception as e:
        raise _internal_error("submitting form", e) from e


@router.get("", response_model=SubmissionListResponse, summary="List Submissions")
async def list_submissions(
    status_filter: SubmissionStatus | None = Query(None, alias="status"),
    skip: int = Query(0, ge=0),
    limit: int = Query(20, ge=1, le=100),
    user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> SubmissionListResponse:
    try:
        return await service.list_submissions(
            db, user.id, status=status_filter, skip=skip, limit=limit
        )
    except Exception as e:
        raise _internal_error("fetching submissions", e) from e


@router.get("/stats", response_model=SubmissionStats, summary="Submission Stats")
async def submission_stats(
    user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> SubmissionStats:
    try:
        return await service.get_submission_stats(db, user.id)
    except Exception as e:
        raise _internal_error("fetching submission stats", e) from e


@router.get("/{id}", response_model=SubmissionListItem, summary="Get Submission")
async def get_submission(
    id: UUID,
    user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> SubmissionListItem:
    try:
        submission = await service.get_submission(db, id, user.id)
        item = SubmissionListItem.model_validate(submission)
        item.has_resume = submission.resume_path is not None
        return item
    except IntakeServiceError as e:
        raise http_exception_from(e) from e
    except Exception as e:
        raise _internal_error("fetching submission", e) from e


@router.patch(
    "/{id}/review",
    response_model=SubmissionListItem,
    summary="Review Submission",
    description="""
Mark a submission reviewed and optionally move it through its workflow:
pending -> in_review -> accepted | rejected. Accepted and rejected are final.

`designation` and `department` must name entries of the caller's catalogs.
The owner is notified of the update.
""",
    responses={
        400: {"description": "Unknown designation or department"},
        409: {"description": "Status transition not allowed"},
    },
)
async def review_submission(
    id: UUID,
    data: ReviewRequest,
    user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    notifier: NotificationSink = Depends(get_notification_sink),
) -> SubmissionListItem:
    try:
        return await service.review_submission(db, id, user.id, data, notifier=notifier)
    except IntakeServiceError as e:
        raise http_exception_from(e) from e
    except Exception as e:
        raise _internal_error("reviewing submission", e) from e


@router.get("/{id}/resume", summary="Download Resume")
async def download_resume(
    id: UUID,
    user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    resume_storage: ResumeStorage = Depends(get_resume_storage),
) -> FileResponse:
    try:
        path, filename = await service.get_resume_file(db, id, user.id, resume_storage)
        return FileResponse(path, filename=filename)
    except IntakeServiceError as e:
        raise http_exception_from(e) from e
    except Exception as e:
        raise _internal_error("downloading resume", e) from e
