"""create judges and judgments tables

Revision ID: 20261018_0002
Revises: 20261018_0001
Create Date: 2026-10-18 09:30:00
"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision = "20261018_0002"
down_revision = "20261018_0001"
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "judges",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column(
            "court_code",
            sa.String(length=2),
            nullable=False,
            comment="Regional labor court code, e.g. 09",
        ),
        sa.Column("chamber", sa.String(length=255), nullable=True, comment="Court unit (vara or turma) name"),
        sa.Column("kind", sa.String(length=32), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_judges"),
    )
    op.create_index("ix_judges_court_code", "judges", ["court_code"], unique=False)

    op.create_table(
        "judgments",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("judge_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("case_number", sa.String(length=64), nullable=False),
        sa.Column("outcome", sa.String(length=16), nullable=False, comment="favorable, unfavorable, partial"),
        sa.Column("judged_on", sa.Date(), nullable=True),
        sa.Column("party", sa.String(length=255), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.ForeignKeyConstraint(
            ["judge_id"],
            ["judges.id"],
            name="fk_judgments_judge_id_judges",
            ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint("id", name="pk_judgments"),
    )
    op.create_index("ix_judgments_judge_id", "judgments", ["judge_id"], unique=False)
    op.create_index("ix_judgments_outcome", "judgments", ["outcome"], unique=False)


def downgrade() -> None:
    op.drop_index("ix_judgments_outcome", table_name="judgments")
    op.drop_index("ix_judgments_judge_id", table_name="judgments")
    op.drop_table("judgments")
    op.drop_index("ix_judges_court_code", table_name="judges")
    op.drop_table("judges")
