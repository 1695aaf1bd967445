"""
db/models/case_record.py

CaseRecord model: a persisted NormalizedCase belonging to one snapshot.
"""

from __future__ import annotations

import uuid
from typing import TYPE_CHECKING

from sqlalchemy import BigInteger, Boolean, ForeignKey, Index, Integer, String
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from db.base import Base

if TYPE_CHECKING:
    from db.models.case_snapshot import CaseSnapshot


class CaseRecord(Base):
    __tablename__ = "case_records"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
        comment="Identifier generated at normalization time",
    )
    snapshot_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("case_snapshots.id", ondelete="CASCADE"),
        nullable=False,
    )
    company: Mapped[str] = mapped_column(
        String(32),
        nullable=False,
        comment="MainTenant, PartnerA, PartnerB, PartnerC, Other",
    )
    phase: Mapped[str] = mapped_column(
        String(32),
        nullable=False,
        comment="Knowledge, Appellate, Execution",
    )
    risk_level: Mapped[str] = mapped_column(
        String(32),
        nullable=False,
        comment="Remote, Possible, Probable",
    )
    case_count: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    total_value: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)
    phase_recognized: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    risk_recognized: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    snapshot: Mapped["CaseSnapshot"] = relationship("CaseSnapshot", back_populates="records")

    __table_args__ = (
        Index("ix_case_records_snapshot_id", "snapshot_id"),
    )
