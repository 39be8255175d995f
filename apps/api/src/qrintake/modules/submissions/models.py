"""
Form Submission Models

Applications submitted by visitors through an owner's QR code.
"""

import enum
import uuid
from datetime import datetime

from sqlalchemy import Boolean, DateTime, Enum, ForeignKey, Index, String, Text, func
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from qrintake.core.database import Base


class SubmissionStatus(str, enum.Enum):
    """Review status of a submission."""

    PENDING = "pending"
    IN_REVIEW = "in_review"
    ACCEPTED = "accepted"
    REJECTED = "rejected"


class FormSubmission(Base):
    """
    A visitor's submission against a QR code.

    `owner_id` is copied from the QR code at submission time so owner
    dashboards don't need to join through `qrcodes`.
    """

    __tablename__ = "form_submissions"

    id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)

    qr_code_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("qrcodes.id", ondelete="CASCADE"),
        nullable=False,
    )
    owner_id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), nullable=False)

    # Applicant
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    reason: Mapped[str | None] = mapped_column(Text, nullable=True)
    # A name from the owner's application type catalog
    application_type: Mapped[str] = mapped_column(String(100), nullable=False)
    resume_path: Mapped[str | None] = mapped_column(String(500), nullable=True)

    # Review
    status: Mapped[SubmissionStatus] = mapped_column(
        Enum(SubmissionStatus, name="submission_status"),
        nullable=False,
        default=SubmissionStatus.PENDING,
    )
    reviewed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    designation: Mapped[str | None] = mapped_column(String(100), nullable=True)
    department: Mapped[str | None] = mapped_column(String(100), nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    __table_args__ = (
        Index("ix_form_submissions_owner_created", "owner_id", "created_at"),
        Index("ix_form_submissions_owner_status", "owner_id", "status"),
        Index("ix_form_submissions_qr_code_id", "qr_code_id"),
    )
