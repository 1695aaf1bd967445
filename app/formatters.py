"""
app/formatters.py

Presentation-layer rounding for liability and favorability views.

The aggregation engine keeps full float precision; everything that leaves
the API as a whole number is rounded here, half away from zero so that
``0.5`` becomes ``1`` as spreadsheet users expect.
"""

from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal

from litigation.aggregation import (
    CompanyPhaseSummary,
    DashboardSummary,
    LiabilityView,
    PhaseBreakdown,
    PhaseSummary,
    RiskSummary,
)
from litigation.comparison import SnapshotDiff
from litigation.favorability import FavorabilityStats


def round_half_up(value: float) -> int:
    """
    Round to the nearest integer, ties away from zero. Non-finite input is 0.
    """

    if not math.isfinite(value):
        return 0
    return int(Decimal(repr(float(value))).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def _phase_row(item: PhaseSummary) -> dict[str, object]:
    return {
        "phase": item.phase.value,
        "process_count": item.process_count,
        "percent_of_processes": round_half_up(item.percent_of_processes),
        "total_value": round_half_up(item.total_value),
        "percent_of_value": round_half_up(item.percent_of_value),
        "average_ticket": round_half_up(item.average_ticket),
    }


def _risk_row(item: RiskSummary) -> dict[str, object]:
    return {
        "risk_level": item.risk_level.value,
        "process_count": item.process_count,
        "percent_of_processes": round_half_up(item.percent_of_processes),
        "total_value": round_half_up(item.total_value),
        "percent_of_value": round_half_up(item.percent_of_value),
        "average_ticket": round_half_up(item.average_ticket),
    }


def _breakdown(item: PhaseBreakdown) -> dict[str, object]:
    return {
        "process_count": item.process_count,
        "value": round_half_up(item.value),
        "percent_of_value": round_half_up(item.percent_of_value),
    }


def _company_row(item: CompanyPhaseSummary) -> dict[str, object]:
    return {
        "company": item.company.value,
        "knowledge": _breakdown(item.knowledge),
        "appellate": _breakdown(item.appellate),
        "execution": _breakdown(item.execution),
        "total": {
            "process_count": item.total.process_count,
            "percent_of_processes": round_half_up(item.total.percent_of_processes),
            "value": round_half_up(item.total.value),
            "percent_of_value": round_half_up(item.total.percent_of_value),
        },
    }


def _summary(item: DashboardSummary) -> dict[str, object]:
    return {
        "total_processes": item.total_processes,
        "total_liability": round_half_up(item.total_liability),
        "global_average_ticket": round_half_up(item.global_average_ticket),
        "percent_probable_risk": round_half_up(item.percent_probable_risk),
        "percent_appellate_phase": round_half_up(item.percent_appellate_phase),
    }


def format_liability_view(view: LiabilityView) -> dict[str, object]:
    """
    Return the display payload for one aggregated snapshot.

    Keys follow the response schema field names; the schema layer applies
    the public aliases.
    """

    return {
        "fases": [_phase_row(item) for item in view.phases],
        "riscos": [_risk_row(item) for item in view.risks],
        "empresas": [_company_row(item) for item in view.companies],
        "summary": _summary(view.summary),
        "data_quality": {
            "unrecognized_phase": view.data_quality.unrecognized_phase,
            "unrecognized_risk": view.data_quality.unrecognized_risk,
        },
    }


def format_diff(diff: SnapshotDiff) -> dict[str, object]:
    return {
        "process_count": diff.process_count,
        "percent_processes": round_half_up(diff.percent_processes),
        "total_value": round_half_up(diff.total_value),
        "percent_value": round_half_up(diff.percent_value),
    }


def format_favorability(stats: FavorabilityStats) -> dict[str, object]:
    return {
        "total": stats.total,
        "favorable": stats.favorable,
        "unfavorable": stats.unfavorable,
        "partial": stats.partial,
        "percent_favorable": round_half_up(stats.percent_favorable),
        "percent_unfavorable": round_half_up(stats.percent_unfavorable),
    }
