"""
db/models/case_snapshot.py

CaseSnapshot model: one imported spreadsheet, keyed by reference month/year.
Re-importing a period replaces its records.
"""

import uuid
from typing import TYPE_CHECKING

from sqlalchemy import CheckConstraint, Index, Integer, String, UniqueConstraint
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from db.base import Base, TimestampMixin

if TYPE_CHECKING:
    from db.models.case_record import CaseRecord


class CaseSnapshot(Base, TimestampMixin):
    """
    Represents the normalized cases of one spreadsheet import.

    record_count is denormalized at import time so period listings do not
    need to count child rows.
    """

    __tablename__ = "case_snapshots"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )

    reference_month: Mapped[int] = mapped_column(Integer, nullable=False)

    reference_year: Mapped[int] = mapped_column(Integer, nullable=False)

    source_filename: Mapped[str | None] = mapped_column(
        String(255),
        nullable=True,
        comment="Original filename of the imported spreadsheet",
    )

    record_count: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
    )

    # ── Relationships ──────────────────────────────────────────────────────────

    records: Mapped[list["CaseRecord"]] = relationship(
        "CaseRecord",
        back_populates="snapshot",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    # ── Constraints & Indexes ──────────────────────────────────────────────────

    __table_args__ = (
        UniqueConstraint(
            "reference_month",
            "reference_year",
            name="uq_case_snapshots_reference_period",
        ),
        CheckConstraint(
            "reference_month BETWEEN 1 AND 12",
            name="ck_case_snapshots_reference_month",
        ),
        Index("ix_case_snapshots_reference_year", "reference_year"),
    )

    def __repr__(self) -> str:
        return (
            f"<CaseSnapshot id={self.id} "
            f"period={self.reference_month:02d}/{self.reference_year} "
            f"records={self.record_count}>"
        )
