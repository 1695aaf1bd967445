"""
app/repositories/snapshot_repository.py

Persistence layer for case snapshots and their normalized records.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from sqlalchemy import insert, select
from sqlalchemy.orm import Session

from app.domain.snapshot import ReferencePeriod
from db.models.case_record import CaseRecord
from db.models.case_snapshot import CaseSnapshot
from litigation.base import NormalizedCase, parse_company, parse_phase, parse_risk_level

_DEFAULT_BATCH_SIZE = 1000


class SnapshotRepository:
    """
    Repository for snapshot lookup, replacement and record loading.

    The caller owns the transaction; this class only flushes.
    """

    def __init__(self, session: Session) -> None:
        self._session = session

    def get(self, period: ReferencePeriod) -> CaseSnapshot | None:
        stmt = select(CaseSnapshot).where(
            CaseSnapshot.reference_month == period.month,
            CaseSnapshot.reference_year == period.year,
        )
        return self._session.execute(stmt).scalars().first()

    def latest(self) -> CaseSnapshot | None:
        stmt = select(CaseSnapshot).order_by(
            CaseSnapshot.reference_year.desc(),
            CaseSnapshot.reference_month.desc(),
        )
        return self._session.execute(stmt).scalars().first()

    def list_snapshots(self) -> list[CaseSnapshot]:
        """
        Return every snapshot, newest reference period first.
        """

        stmt = select(CaseSnapshot).order_by(
            CaseSnapshot.reference_year.desc(),
            CaseSnapshot.reference_month.desc(),
        )
        return list(self._session.execute(stmt).scalars().all())

    def load_cases(self, snapshot: CaseSnapshot) -> list[NormalizedCase]:
        """
        Rebuild the immutable NormalizedCase list of one snapshot.
        """

        stmt = (
            select(CaseRecord)
            .where(CaseRecord.snapshot_id == snapshot.id)
            .order_by(CaseRecord.id)
        )
        return [
            NormalizedCase(
                id=row.id,
                company=parse_company(row.company),
                phase=parse_phase(row.phase),
                risk_level=parse_risk_level(row.risk_level),
                case_count=row.case_count,
                total_value=row.total_value,
                phase_recognized=row.phase_recognized,
                risk_recognized=row.risk_recognized,
            )
            for row in self._session.execute(stmt).scalars()
        ]

    def replace(
        self,
        *,
        period: ReferencePeriod,
        cases: Sequence[NormalizedCase],
        source_filename: str | None = None,
        batch_size: int = _DEFAULT_BATCH_SIZE,
    ) -> tuple[CaseSnapshot, bool]:
        """
        Drop the period's snapshot (if any) and insert a fresh one.

        Returns the new snapshot and whether an existing one was replaced.
        """

        existing = self.get(period)
        replaced = existing is not None
        if existing is not None:
            self._session.delete(existing)
            self._session.flush()

        snapshot = CaseSnapshot(
            reference_month=period.month,
            reference_year=period.year,
            source_filename=source_filename,
            record_count=sum(case.case_count for case in cases),
        )
        self._session.add(snapshot)
        self._session.flush()

        payloads: list[dict[str, Any]] = [
            {
                "id": case.id,
                "snapshot_id": snapshot.id,
                "company": case.company.value,
                "phase": case.phase.value,
                "risk_level": case.risk_level.value,
                "case_count": case.case_count,
                "total_value": case.total_value,
                "phase_recognized": case.phase_recognized,
                "risk_recognized": case.risk_recognized,
            }
            for case in cases
        ]
        step = max(1, batch_size)
        for start in range(0, len(payloads), step):
            self._session.execute(insert(CaseRecord), payloads[start : start + step])

        self._session.flush()
        return snapshot, replaced
