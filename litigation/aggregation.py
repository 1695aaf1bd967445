"""
litigation/aggregation.py

Deterministic aggregation of normalized cases into the dashboard views.

Formulas
--------
percentOfProcesses = group_count / total_count * 100      (0 when total is 0)
percentOfValue     = group_value / total_value * 100      (0 when total is 0)
averageTicket      = group_value / group_count            (0 when count is 0)

Company x phase blocks measure each phase against the company's own value;
the company ``total`` block measures against the global totals.

All values keep full float precision. Rounding for display belongs to
``app.formatters``.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from litigation.base import Company, NormalizedCase, Phase, RiskLevel

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# View models
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class PhaseSummary:
    phase: Phase
    process_count: int
    percent_of_processes: float
    total_value: float
    percent_of_value: float
    average_ticket: float


@dataclass(frozen=True)
class RiskSummary:
    risk_level: RiskLevel
    process_count: int
    percent_of_processes: float
    total_value: float
    percent_of_value: float
    average_ticket: float


@dataclass(frozen=True)
class PhaseBreakdown:
    process_count: int
    value: float
    percent_of_value: float


@dataclass(frozen=True)
class CompanyTotal:
    process_count: int
    percent_of_processes: float
    value: float
    percent_of_value: float


@dataclass(frozen=True)
class CompanyPhaseSummary:
    company: Company
    knowledge: PhaseBreakdown
    appellate: PhaseBreakdown
    execution: PhaseBreakdown
    total: CompanyTotal


@dataclass(frozen=True)
class DashboardSummary:
    total_processes: int
    total_liability: float
    global_average_ticket: float
    percent_probable_risk: float
    percent_appellate_phase: float


@dataclass(frozen=True)
class DataQuality:
    """Records whose label matched no marker and fell back to the default."""

    unrecognized_phase: int
    unrecognized_risk: int


@dataclass(frozen=True)
class LiabilityView:
    phases: tuple[PhaseSummary, ...]
    risks: tuple[RiskSummary, ...]
    companies: tuple[CompanyPhaseSummary, ...]
    summary: DashboardSummary
    data_quality: DataQuality


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def percent(part: float, whole: float) -> float:
    """Return ``part / whole * 100`` or 0.0 when ``whole`` is not positive."""
    if whole <= 0:
        return 0.0
    return part / whole * 100.0


def average(value: float, count: int) -> float:
    if count <= 0:
        return 0.0
    return value / count


@dataclass
class _Bucket:
    count: int = 0
    value: float = 0.0

    def add(self, record: NormalizedCase) -> None:
        self.count += record.case_count
        self.value += record.total_value


# ---------------------------------------------------------------------------
# Engine
# ---------------------------------------------------------------------------


class AggregationEngine:
    """
    Stateless aggregation over one snapshot's record list.

    The input is never mutated and the output depends only on the multiset
    of records, so repeated calls produce identical results. Empty input
    yields every bucket with zeros.

    Usage::

        view = AggregationEngine().aggregate(records)
        view.summary.total_processes
    """

    def aggregate(self, records: Iterable[NormalizedCase]) -> LiabilityView:
        items: Sequence[NormalizedCase] = tuple(records)

        total_count = sum(record.case_count for record in items)
        total_value = float(sum(record.total_value for record in items))

        view = LiabilityView(
            phases=self.summarize_phases(items, total_count, total_value),
            risks=self.summarize_risks(items, total_count, total_value),
            companies=self.summarize_companies(items, total_count, total_value),
            summary=self.summarize(items, total_count, total_value),
            data_quality=DataQuality(
                unrecognized_phase=sum(1 for r in items if not r.phase_recognized),
                unrecognized_risk=sum(1 for r in items if not r.risk_recognized),
            ),
        )
        logger.debug(
            "aggregate records=%d total_processes=%d total_value=%.2f",
            len(items),
            total_count,
            total_value,
        )
        return view

    def summarize_phases(
        self,
        records: Sequence[NormalizedCase],
        total_count: int,
        total_value: float,
    ) -> tuple[PhaseSummary, ...]:
        buckets = {phase: _Bucket() for phase in Phase}
        for record in records:
            buckets[record.phase].add(record)

        return tuple(
            PhaseSummary(
                phase=phase,
                process_count=bucket.count,
                percent_of_processes=percent(bucket.count, total_count),
                total_value=bucket.value,
                percent_of_value=percent(bucket.value, total_value),
                average_ticket=average(bucket.value, bucket.count),
            )
            for phase, bucket in buckets.items()
        )

    def summarize_risks(
        self,
        records: Sequence[NormalizedCase],
        total_count: int,
        total_value: float,
    ) -> tuple[RiskSummary, ...]:
        buckets = {level: _Bucket() for level in RiskLevel}
        for record in records:
            buckets[record.risk_level].add(record)

        return tuple(
            RiskSummary(
                risk_level=level,
                process_count=bucket.count,
                percent_of_processes=percent(bucket.count, total_count),
                total_value=bucket.value,
                percent_of_value=percent(bucket.value, total_value),
                average_ticket=average(bucket.value, bucket.count),
            )
            for level, bucket in buckets.items()
        )

    def summarize_companies(
        self,
        records: Sequence[NormalizedCase],
        total_count: int,
        total_value: float,
    ) -> tuple[CompanyPhaseSummary, ...]:
        grid: dict[Company, dict[Phase, _Bucket]] = {}
        for record in records:
            phases = grid.setdefault(record.company, {phase: _Bucket() for phase in Phase})
            phases[record.phase].add(record)

        summaries: list[CompanyPhaseSummary] = []
        for company in Company:
            phases = grid.get(company)
            if phases is None:
                continue

            company_count = sum(bucket.count for bucket in phases.values())
            company_value = sum(bucket.value for bucket in phases.values())

            def breakdown(phase: Phase) -> PhaseBreakdown:
                bucket = phases[phase]
                return PhaseBreakdown(
                    process_count=bucket.count,
                    value=bucket.value,
                    percent_of_value=percent(bucket.value, company_value),
                )

            summaries.append(
                CompanyPhaseSummary(
                    company=company,
                    knowledge=breakdown(Phase.KNOWLEDGE),
                    appellate=breakdown(Phase.APPELLATE),
                    execution=breakdown(Phase.EXECUTION),
                    total=CompanyTotal(
                        process_count=company_count,
                        percent_of_processes=percent(company_count, total_count),
                        value=company_value,
                        percent_of_value=percent(company_value, total_value),
                    ),
                )
            )
        return tuple(summaries)

    def summarize(
        self,
        records: Sequence[NormalizedCase],
        total_count: int,
        total_value: float,
    ) -> DashboardSummary:
        probable = sum(r.case_count for r in records if r.risk_level is RiskLevel.PROBABLE)
        appellate = sum(r.case_count for r in records if r.phase is Phase.APPELLATE)

        return DashboardSummary(
            total_processes=total_count,
            total_liability=total_value,
            global_average_ticket=average(total_value, total_count),
            percent_probable_risk=percent(probable, total_count),
            percent_appellate_phase=percent(appellate, total_count),
        )
