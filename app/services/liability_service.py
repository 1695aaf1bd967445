"""
app/services/liability_service.py

Read-side service for liability snapshots.

Views are recomputed from the snapshot's records on every call; nothing
aggregated is stored.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import lru_cache

from sqlalchemy.orm import Session

from app.domain.snapshot import ReferencePeriod
from app.logging_utils import log_event
from app.repositories.snapshot_repository import SnapshotRepository
from db.models.case_snapshot import CaseSnapshot
from litigation.aggregation import AggregationEngine, LiabilityView
from litigation.base import NormalizedCase
from litigation.comparison import SnapshotDiff, compare_views

logger = logging.getLogger(__name__)


class SnapshotNotFoundError(LookupError):
    """
    Raised when no snapshot exists for the requested period.
    """


def snapshot_period(snapshot: CaseSnapshot) -> ReferencePeriod:
    return ReferencePeriod(year=snapshot.reference_year, month=snapshot.reference_month)


@dataclass(frozen=True)
class SnapshotView:
    period: ReferencePeriod
    view: LiabilityView


@dataclass(frozen=True)
class SnapshotComparison:
    base: SnapshotView
    target: SnapshotView
    diff: SnapshotDiff


class LiabilityService:
    """
    Loads snapshots and runs the aggregation engine over their records.
    """

    def __init__(self, engine: AggregationEngine | None = None) -> None:
        self._engine = engine or AggregationEngine()

    def resolve_snapshot(
        self,
        *,
        db: Session,
        period: ReferencePeriod | None = None,
    ) -> CaseSnapshot:
        """
        Return the snapshot for ``period``, or the newest one when omitted.
        """

        repository = SnapshotRepository(db)
        snapshot = repository.get(period) if period is not None else repository.latest()
        if snapshot is None:
            if period is None:
                raise SnapshotNotFoundError("No snapshot has been imported yet.")
            raise SnapshotNotFoundError(f"No snapshot for period {period.label}.")
        return snapshot

    def get_cases(
        self,
        *,
        db: Session,
        period: ReferencePeriod | None = None,
    ) -> tuple[ReferencePeriod, list[NormalizedCase]]:
        snapshot = self.resolve_snapshot(db=db, period=period)
        return snapshot_period(snapshot), SnapshotRepository(db).load_cases(snapshot)

    def get_view(
        self,
        *,
        db: Session,
        period: ReferencePeriod | None = None,
    ) -> SnapshotView:
        resolved, cases = self.get_cases(db=db, period=period)
        view = self._engine.aggregate(cases)
        log_event(
            logger,
            logging.DEBUG,
            "liability_view_computed",
            period=resolved.label,
            total_processes=view.summary.total_processes,
            unrecognized_phase=view.data_quality.unrecognized_phase,
            unrecognized_risk=view.data_quality.unrecognized_risk,
        )
        return SnapshotView(period=resolved, view=view)

    def list_snapshots(self, *, db: Session) -> list[CaseSnapshot]:
        return SnapshotRepository(db).list_snapshots()

    def compare(
        self,
        *,
        db: Session,
        base: ReferencePeriod,
        target: ReferencePeriod,
    ) -> SnapshotComparison:
        """
        Aggregate two snapshots independently and diff their totals.
        """

        base_view = self.get_view(db=db, period=base)
        target_view = self.get_view(db=db, period=target)
        return SnapshotComparison(
            base=base_view,
            target=target_view,
            diff=compare_views(base_view.view, target_view.view),
        )


@lru_cache(maxsize=1)
def get_liability_service() -> LiabilityService:
    return LiabilityService()
