"""create case_snapshots and case_records tables

Revision ID: 20261018_0001
Revises:
Create Date: 2026-10-18 09:00:00
"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision = "20261018_0001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "case_snapshots",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("reference_month", sa.Integer(), nullable=False),
        sa.Column("reference_year", sa.Integer(), nullable=False),
        sa.Column(
            "source_filename",
            sa.String(length=255),
            nullable=True,
            comment="Original filename of the imported spreadsheet",
        ),
        sa.Column("record_count", sa.Integer(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_case_snapshots"),
        sa.UniqueConstraint(
            "reference_month",
            "reference_year",
            name="uq_case_snapshots_reference_period",
        ),
        sa.CheckConstraint(
            "reference_month BETWEEN 1 AND 12",
            name="ck_case_snapshots_reference_month",
        ),
    )
    op.create_index("ix_case_snapshots_reference_year", "case_snapshots", ["reference_year"], unique=False)

    op.create_table(
        "case_records",
        sa.Column(
            "id",
            postgresql.UUID(as_uuid=True),
            nullable=False,
            comment="Identifier generated at normalization time",
        ),
        sa.Column("snapshot_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column(
            "company",
            sa.String(length=32),
            nullable=False,
            comment="MainTenant, PartnerA, PartnerB, PartnerC, Other",
        ),
        sa.Column("phase", sa.String(length=32), nullable=False, comment="Knowledge, Appellate, Execution"),
        sa.Column("risk_level", sa.String(length=32), nullable=False, comment="Remote, Possible, Probable"),
        sa.Column("case_count", sa.Integer(), nullable=False),
        sa.Column("total_value", sa.BigInteger(), nullable=False),
        sa.Column("phase_recognized", sa.Boolean(), nullable=False),
        sa.Column("risk_recognized", sa.Boolean(), nullable=False),
        sa.ForeignKeyConstraint(
            ["snapshot_id"],
            ["case_snapshots.id"],
            name="fk_case_records_snapshot_id_case_snapshots",
            ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint("id", name="pk_case_records"),
    )
    op.create_index("ix_case_records_snapshot_id", "case_records", ["snapshot_id"], unique=False)


def downgrade() -> None:
    op.drop_index("ix_case_records_snapshot_id", table_name="case_records")
    op.drop_table("case_records")
    op.drop_index("ix_case_snapshots_reference_year", table_name="case_snapshots")
    op.drop_table("case_snapshots")
