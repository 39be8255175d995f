"""add owner catalogs

Revision ID: 1b2c3d4e5f6a
Revises: 0a1b2c3d4e5f
Create Date: 2026-10-18 16:00:00.000000

This migration:
1. Creates catalog_entries (application types, designations, departments)
   with one name per owner and kind
2. Turns form_submissions.application_type into a catalog name and drops
   the fixed application_type enum
3. Adds the SUBMISSION_UPDATE notification type

Owners without application types of their own keep accepting the former
enum values, so existing submissions stay valid.
"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "1b2c3d4e5f6a"
down_revision: str | Sequence[str] | None = "0a1b2c3d4e5f"
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None

catalog_kind_enum = postgresql.ENUM(
    "APPLICATION_TYPE", "DESIGNATION", "DEPARTMENT", name="catalog_kind", create_type=False
)
application_type_enum = postgresql.ENUM(
    "INTERVIEW", "REASON", name="application_type", create_type=False
)


def upgrade() -> None:
    bind = op.get_bind()
    catalog_kind_enum.create(bind, checkfirst=True)

    op.create_table(
        "catalog_entries",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("owner_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("kind", catalog_kind_enum, nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("owner_id", "kind", "name", name="uq_catalog_entries_owner_kind_name"),
    )

    op.alter_column(
        "form_submissions",
        "application_type",
        existing_type=application_type_enum,
        type_=sa.String(length=100),
        existing_nullable=False,
        postgresql_using="lower(application_type::text)",
    )
    application_type_enum.drop(bind, checkfirst=True)

    op.execute("ALTER TYPE notification_type ADD VALUE IF NOT EXISTS 'SUBMISSION_UPDATE'")


def downgrade() -> None:
    """
    Restore the fixed application_type enum.

    Submissions whose type is not a former enum value are mapped to REASON.
    Postgres cannot drop an enum value, so SUBMISSION_UPDATE notifications
    are deleted and the label is left in place.
    """
    bind = op.get_bind()
    op.execute("DELETE FROM notifications WHERE type = 'SUBMISSION_UPDATE'")

    application_type_enum.create(bind, checkfirst=True)
    op.alter_column(
        "form_submissions",
        "application_type",
        existing_type=sa.String(length=100),
        type_=application_type_enum,
        existing_nullable=False,
        postgresql_using=(
            "(CASE WHEN application_type = 'interview' THEN 'INTERVIEW' "
            "ELSE 'REASON' END)::application_type"
        ),
    )

    op.drop_table("catalog_entries")
    catalog_kind_enum.drop(bind, checkfirst=True)
