"""create qrcodes, geofence, submission and notification tables

Revision ID: 0a1b2c3d4e5f
Revises:
Create Date: 2026-10-18 12:00:00.000000

This migration:
1. Creates qrcodes with unique code and unique owner_id
2. Creates geofence_locations with one row per owner and range checks
3. Creates form_submissions referencing qrcodes (cascade on delete)
4. Creates notifications

The unique constraints on qrcodes and geofence_locations are what settle
concurrent creates for the same code or owner.
"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "0a1b2c3d4e5f"
down_revision: str | Sequence[str] | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None

application_type_enum = postgresql.ENUM(
    "INTERVIEW", "REASON", name="application_type", create_type=False
)
submission_status_enum = postgresql.ENUM(
    "PENDING", "IN_REVIEW", "ACCEPTED", "REJECTED", name="submission_status", create_type=False
)
notification_type_enum = postgresql.ENUM(
    "FORM_SUBMISSION", name="notification_type", create_type=False
)
notification_status_enum = postgresql.ENUM(
    "UNREAD", "READ", name="notification_status", create_type=False
)


def _timestamp(name: str) -> sa.Column:
    return sa.Column(
        name,
        sa.DateTime(timezone=True),
        server_default=sa.text("now()"),
        nullable=False,
    )


def upgrade() -> None:
    """Create the intake tables."""
    bind = op.get_bind()
    for enum_type in (
        application_type_enum,
        submission_status_enum,
        notification_type_enum,
        notification_status_enum,
    ):
        enum_type.create(bind, checkfirst=True)

    op.create_table(
        "qrcodes",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("code", sa.String(length=255), nullable=False),
        sa.Column("owner_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("url", sa.String(length=2048), nullable=False),
        sa.Column("image", sa.Text(), nullable=True),
        sa.Column("notify_email", sa.String(length=255), nullable=True),
        _timestamp("created_at"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("code", name="uq_qrcodes_code"),
        sa.UniqueConstraint("owner_id", name="uq_qrcodes_owner_id"),
    )
    op.create_index("ix_qrcodes_owner_created", "qrcodes", ["owner_id", "created_at"])

    op.create_table(
        "geofence_locations",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("owner_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("place_name", sa.String(length=200), nullable=False),
        sa.Column("latitude", sa.Float(), nullable=False),
        sa.Column("longitude", sa.Float(), nullable=False),
        sa.Column("radius_meters", sa.Float(), nullable=False),
        _timestamp("created_at"),
        _timestamp("updated_at"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("owner_id", name="uq_geofence_locations_owner_id"),
        sa.CheckConstraint("latitude BETWEEN -90 AND 90", name="ck_geofence_latitude"),
        sa.CheckConstraint("longitude BETWEEN -180 AND 180", name="ck_geofence_longitude"),
        sa.CheckConstraint("radius_meters >= 0", name="ck_geofence_radius"),
    )

    op.create_table(
        "form_submissions",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("qr_code_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("owner_id", postgresql.UUID(as_uuid=True), nullable=False),
        # Applicant
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("reason", sa.Text(), nullable=True),
        sa.Column("application_type", application_type_enum, nullable=False),
        sa.Column("resume_path", sa.String(length=500), nullable=True),
        # Review
        sa.Column("status", submission_status_enum, nullable=False, server_default="PENDING"),
        sa.Column("reviewed", sa.Boolean(), nullable=False, server_default="false"),
        sa.Column("designation", sa.String(length=100), nullable=True),
        sa.Column("department", sa.String(length=100), nullable=True),
        _timestamp("created_at"),
        _timestamp("updated_at"),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(
            ["qr_code_id"],
            ["qrcodes.id"],
            name="fk_form_submissions_qr_code_id",
            ondelete="CASCADE",
        ),
    )
    op.create_index(
        "ix_form_submissions_owner_created", "form_submissions", ["owner_id", "created_at"]
    )
    op.create_index("ix_form_submissions_owner_status", "form_submissions", ["owner_id", "status"])
    op.create_index("ix_form_submissions_qr_code_id", "form_submissions", ["qr_code_id"])

    op.create_table(
        "notifications",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("owner_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("type", notification_type_enum, nullable=False),
        sa.Column("message", sa.Text(), nullable=False),
        sa.Column("status", notification_status_enum, nullable=False, server_default="UNREAD"),
        _timestamp("created_at"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_notifications_owner_status", "notifications", ["owner_id", "status"])
    op.create_index("ix_notifications_owner_created", "notifications", ["owner_id", "created_at"])


def downgrade() -> None:
    """Drop the intake tables and enum types."""
    op.drop_index("ix_notifications_owner_created", table_name="notifications")
    op.drop_index("ix_notifications_owner_status", table_name="notifications")
    op.drop_table("notifications")

    op.drop_index("ix_form_submissions_qr_code_id", table_name="form_submissions")
    op.drop_index("ix_form_submissions_owner_status", table_name="form_submissions")
    op.drop_index("ix_form_submissions_owner_created", table_name="form_submissions")
    op.drop_table("form_submissions")

    op.drop_table("geofence_locations")

    op.drop_index("ix_qrcodes_owner_created", table_name="qrcodes")
    op.drop_table("qrcodes")

    bind = op.get_bind()
    for enum_type in (
        notification_status_enum,
        notification_type_enum,
        submission_status_enum,
        application_type_enum,
    ):
        enum_type.drop(bind, checkfirst=True)
