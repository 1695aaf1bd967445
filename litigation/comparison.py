"""
litigation/comparison.py

Pure diff between the aggregated views of two snapshots.
"""

from __future__ import annotations

from dataclasses import dataclass

from litigation.aggregation import LiabilityView


@dataclass(frozen=True)
class SnapshotDiff:
    """
    Change from a base snapshot to a target snapshot.

    Percent changes are relative to the base and are 0.0 when the base
    total is zero.
    """

    process_count: int
    percent_processes: float
    total_value: float
    percent_value: float


def _relative_change(base: float, target: float) -> float:
    if base == 0:
        return 0.0
    return (target - base) / base * 100.0


def compare_views(base: LiabilityView, target: LiabilityView) -> SnapshotDiff:
    base_count = base.summary.total_processes
    target_count = target.summary.total_processes
    base_value = base.summary.total_liability
    target_value = target.summary.total_liability

    return SnapshotDiff(
        process_count=target_count - base_count,
        percent_processes=_relative_change(base_count, target_count),
        total_value=target_value - base_value,
        percent_value=_relative_change(base_value, target_value),
    )
