"""
db/models/judgment.py

Judgment model: one recorded decision by a judge on a case.
"""

from __future__ import annotations

import uuid
from datetime import date
from typing import TYPE_CHECKING

from sqlalchemy import Date, ForeignKey, Index, String
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from db.base import Base, TimestampMixin

if TYPE_CHECKING:
    from db.models.judge import Judge


class Judgment(Base, TimestampMixin):
    __tablename__ = "judgments"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )
    judge_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("judges.id", ondelete="CASCADE"),
        nullable=False,
    )
    case_number: Mapped[str] = mapped_column(String(64), nullable=False)
    outcome: Mapped[str] = mapped_column(
        String(16),
        nullable=False,
        comment="favorable, unfavorable, partial",
    )
    judged_on: Mapped[date | None] = mapped_column(Date, nullable=True)
    party: Mapped[str | None] = mapped_column(String(255), nullable=True)

    judge: Mapped["Judge"] = relationship("Judge", back_populates="judgments")

    __table_args__ = (
        Index("ix_judgments_judge_id", "judge_id"),
        Index("ix_judgments_outcome", "outcome"),
    )
