"""
Form Submission Repository

Database operations for form submissions. All queries are parameterized
and scoped to the owning account where the caller is an owner.
"""

from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from .models import FormSubmission, SubmissionStatus
from .schemas import SubmissionCreate


async def create(
    db: AsyncSession,
    *,
    qr_code_id: UUID,
    owner_id: UUID,
    data: SubmissionCreate,
    resume_path: str | None = None,
) -> FormSubmission:
    """Insert a new pending, unreviewed submission."""
    submission = FormSubmission(
        qr_code_id=qr_code_id,
        owner_id=owner_id,
        name=data.name,
        email=str(data.email),
        reason=data.reason,
        application_type=data.application_type,
        resume_path=resume_path,
        status=SubmissionStatus.PENDING,
        reviewed=False,
    )

    db.add(submission)
    await db.commit()
    await db.refresh(submission)

    return submission


async def get_for_owner(db: AsyncSession, id: UUID, owner_id: UUID) -> FormSubmission | None:
    """Get a submission only if it belongs to `owner_id`."""
    result = await db.execute(
        select(FormSubmission).where(
            FormSubmission.id == id,
            FormSubmission.owner_id == owner_id,
        )
    )
    return result.scalar_one_or_none()


async def list_by_owner(
    db: AsyncSession,
    owner_id: UUID,
    status: SubmissionStatus | None = None,
    skip: int = 0,
    limit: int = 20,
) -> tuple[list[FormSubmission], int]:
    """Page through an owner's submissions, newest first. Returns (items, total)."""
    conditions = [FormSubmission.owner_id == owner_id]
    if status is not None:
        conditions.append(FormSubmission.status == status)

    total = await db.scalar(select(func.count()).select_from(FormSubmission).where(*conditions))
    result = await db.execute(
        select(FormSubmission)
        .where(*conditions)
        .order_by(FormSubmission.created_at.desc())
        .offset(skip)
        .limit(limit)
    )
    return list(result.scalars().all()), total or 0


async def count_by_status(db: AsyncSession, owner_id: UUID) -> dict[SubmissionStatus, int]:
    result = await db.execute(
        select(FormSubmission.status, func.count())
        .where(FormSubmission.owner_id == owner_id)
        .group_by(FormSubmission.status)
    )
    return {status: count for status, count in result.all()}


async def count_unreviewed(db: AsyncSession, owner_id: UUID) -> int:
    count = await db.scalar(
        select(func.count())
        .select_from(FormSubmission)
        .where(FormSubmission.owner_id == owner_id, FormSubmission.reviewed.is_(False))
    )
    return count or 0


# Pending submissions can be decided directly or moved into review first
VALID_STATUS_TRANSITIONS: dict[SubmissionStatus, set[SubmissionStatus]] = {
    SubmissionStatus.PENDING: {
        SubmissionStatus.IN_REVIEW,
        SubmissionStatus.ACCEPTED,
        SubmissionStatus.REJECTED,
    },
    SubmissionStatus.IN_REVIEW: {
        SubmissionStatus.ACCEPTED,
        SubmissionStatus.REJECTED,
    },
    # Terminal states
    SubmissionStatus.ACCEPTED: set(),
    SubmissionStatus.REJECTED: set(),
}


class InvalidStatusTransitionError(ValueError):
    """Raised when an invalid status transition is attempted."""

    def __init__(self, current_status: SubmissionStatus, new_status: SubmissionStatus):
        self.current_status = current_status
        self.new_status = new_status
        valid_transitions = VALID_STATUS_TRANSITIONS.get(current_status, set())
        super().__init__(
            f"Invalid status transition: {current_status.value} -> {new_status.value}. "
            f"Valid transitions: {sorted(s.value for s in valid_transitions)}"
        )


async def apply_review(
    db: AsyncSession,
    submission: FormSubmission,
    *,
    status: SubmissionStatus | None = None,
    designation: str | None = None,
    department: str | None = None,
) -> FormSubmission:
    """
    Record an owner's review on a submission and mark it reviewed.

    Raises:
        InvalidStatusTransitionError: If the status change is not allowed
    """
    if status is not None and status != submission.status:
        if status not in VALID_STATUS_TRANSITIONS.get(submission.status, set()):
            raise InvalidStatusTransitionError(submission.status, status)
        submission.status = status

    if designation is not None:
        submission.designation = designation
    if department is not None:
        submission.department = department
    submission.reviewed = True

    await db.commit()
    await db.refresh(submission)

    return submission
