"""create businesses table

Revision ID: 20261019_0001
Revises:
Create Date: 2026-10-19 09:00:00
"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision = "20261019_0001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "businesses",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("registration_number", sa.String(length=64), nullable=False),
        sa.Column("status", sa.String(length=32), server_default="unverified", nullable=False),
        sa.Column("registration_date", sa.Date(), nullable=True),
        sa.Column("address", sa.Text(), nullable=True),
        sa.Column("phone", sa.String(length=64), nullable=True),
        sa.Column("email", sa.String(length=255), nullable=True),
        sa.Column("website", sa.String(length=255), nullable=True),
        sa.Column("sector", sa.String(length=120), nullable=True),
        sa.Column("region", sa.String(length=120), nullable=True),
        sa.Column("authenticity_score", sa.Integer(), server_default="0", nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("registration_number", name="uq_businesses_registration_number"),
        sa.CheckConstraint(
            "status IN ('verified', 'provisionally_verified', 'unverified', 'under_review')",
            name="ck_businesses_status",
        ),
    )
    op.create_index("ix_businesses_name", "businesses", ["name"], unique=False)
    op.create_index("ix_businesses_status", "businesses", ["status"], unique=False)
    op.create_index("ix_businesses_region", "businesses", ["region"], unique=False)
    op.create_index("ix_businesses_sector", "businesses", ["sector"], unique=False)


def downgrade() -> None:
    op.drop_index("ix_businesses_sector", table_name="businesses")
    op.drop_index("ix_businesses_region", table_name="businesses")
    op.drop_index("ix_businesses_status", table_name="businesses")
    op.drop_index("ix_businesses_name", table_name="businesses")
    op.drop_table("businesses")
