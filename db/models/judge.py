"""
db/models/judge.py

Judge model: a first-instance or appellate judge whose judgments are tracked
for favorability.
"""

import uuid
from typing import TYPE_CHECKING

from sqlalchemy import Index, String
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from db.base import Base, TimestampMixin

if TYPE_CHECKING:
    from db.models.judgment import Judgment


class JudgeKind:
    """Valid judge kinds."""

    FIRST_INSTANCE = "first_instance"
    APPELLATE = "appellate"

    ALL = (FIRST_INSTANCE, APPELLATE)


class Judge(Base, TimestampMixin):
    """
    court_code is the 2-digit regional labor court the judge sits in; it is
    the fallback court for judgments whose case number does not resolve.
    """

    __tablename__ = "judges"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )

    name: Mapped[str] = mapped_column(String(255), nullable=False)

    court_code: Mapped[str] = mapped_column(
        String(2),
        nullable=False,
        comment="Regional labor court code, e.g. 09",
    )

    chamber: Mapped[str | None] = mapped_column(
        String(255),
        nullable=True,
        comment="Court unit (vara or turma) name",
    )

    kind: Mapped[str] = mapped_column(
        String(32),
        nullable=False,
        default=JudgeKind.FIRST_INSTANCE,
    )

    # ── Relationships ──────────────────────────────────────────────────────────

    judgments: Mapped[list["Judgment"]] = relationship(
        "Judgment",
        back_populates="judge",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    __table_args__ = (
        Index("ix_judges_court_code", "court_code"),
    )

    def __repr__(self) -> str:
        return f"<Judge id={self.id} name={self.name!r} court={self.court_code!r}>"
