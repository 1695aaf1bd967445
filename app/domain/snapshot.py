"""
app/domain/snapshot.py

Domain models used by the snapshot import and liability query flows.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, order=True)
class ReferencePeriod:
    """
    Reference month/year a snapshot belongs to. Orders chronologically.
    """

    year: int
    month: int

    def __post_init__(self) -> None:
        if not 1 <= self.month <= 12:
            raise ValueError(f"month must be between 1 and 12, got {self.month}.")
        if self.year < 1900:
            raise ValueError(f"year must be 1900 or later, got {self.year}.")

    @property
    def label(self) -> str:
        return f"{self.month:02d}/{self.year}"


@dataclass(frozen=True)
class ImportSummary:
    """
    End-of-run snapshot import summary.
    """

    period: ReferencePeriod
    records_loaded: int
    replaced: bool
    source_filename: str | None = None
