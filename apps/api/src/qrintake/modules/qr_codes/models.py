"""
QR Code Models

The public code token that links a printed QR code to its owner's
submission form.
"""

import uuid
from datetime import datetime

from sqlalchemy import DateTime, Index, String, Text, func
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from qrintake.core.database import Base


class QrCode(Base):
    """
    A QR code owned by one account.

    `code` is globally unique and `owner_id` is unique: an account holds at
    most one code. Both constraints live in the database so concurrent
    creates resolve to exactly one success.
    """

    __tablename__ = "qrcodes"

    id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)

    code: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    owner_id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), unique=True, nullable=False)
    url: Mapped[str] = mapped_column(String(2048), nullable=False)

    # Rendered QR artifact (data URL or storage reference)
    image: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Where submission alerts for this code are emailed
    notify_email: Mapped[str | None] = mapped_column(String(255), nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    __table_args__ = (Index("ix_qrcodes_owner_created", "owner_id", "created_at"),)

    def __repr__(self) -> str:
        return f"<QrCode(id={self.id}, owner_id={self.owner_id})>"
