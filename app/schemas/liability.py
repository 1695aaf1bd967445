"""
app/schemas/liability.py

Response schemas for liability dashboard endpoints.

Fields are declared in snake_case and serialized in camelCase; the
top-level collection keys keep their Portuguese names.
"""

from __future__ import annotations

import uuid

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PeriodResponse(CamelModel):
    month: int = Field(..., ge=1, le=12)
    year: int = Field(..., ge=1900)
    label: str


class PhaseSummaryResponse(CamelModel):
    phase: str
    process_count: int = Field(..., ge=0)
    percent_of_processes: int = Field(..., ge=0, le=100)
    total_value: int = Field(..., ge=0)
    percent_of_value: int = Field(..., ge=0, le=100)
    average_ticket: int = Field(..., ge=0)


class RiskSummaryResponse(CamelModel):
    risk_level: str
    process_count: int = Field(..., ge=0)
    percent_of_processes: int = Field(..., ge=0, le=100)
    total_value: int = Field(..., ge=0)
    percent_of_value: int = Field(..., ge=0, le=100)
    average_ticket: int = Field(..., ge=0)


class PhaseBreakdownResponse(CamelModel):
    process_count: int = Field(..., ge=0)
    value: int = Field(..., ge=0)
    percent_of_value: int = Field(..., ge=0, le=100)


class CompanyTotalResponse(CamelModel):
    process_count: int = Field(..., ge=0)
    percent_of_processes: int = Field(..., ge=0, le=100)
    value: int = Field(..., ge=0)
    percent_of_value: int = Field(..., ge=0, le=100)


class CompanyPhaseSummaryResponse(CamelModel):
    company: str
    knowledge: PhaseBreakdownResponse
    appellate: PhaseBreakdownResponse
    execution: PhaseBreakdownResponse
    total: CompanyTotalResponse


class DashboardSummaryResponse(CamelModel):
    total_processes: int = Field(..., ge=0)
    total_liability: int = Field(..., ge=0)
    global_average_ticket: int = Field(..., ge=0)
    percent_probable_risk: int = Field(..., ge=0, le=100)
    percent_appellate_phase: int = Field(..., ge=0, le=100)


class DataQualityResponse(CamelModel):
    unrecognized_phase: int = Field(..., ge=0)
    unrecognized_risk: int = Field(..., ge=0)


class LiabilityViewResponse(CamelModel):
    """
    API response model for one aggregated snapshot.
    """

    period: PeriodResponse
    fases: list[PhaseSummaryResponse]
    riscos: list[RiskSummaryResponse]
    empresas: list[CompanyPhaseSummaryResponse]
    summary: DashboardSummaryResponse
    data_quality: DataQualityResponse


class CaseRecordResponse(CamelModel):
    id: uuid.UUID
    company: str
    phase: str
    risk_level: str
    case_count: int = Field(..., ge=1)
    total_value: int = Field(..., ge=0)
    phase_recognized: bool
    risk_recognized: bool


class CaseRecordListResponse(CamelModel):
    period: PeriodResponse
    records: list[CaseRecordResponse] = Field(default_factory=list)


class SnapshotPeriodResponse(CamelModel):
    month: int
    year: int
    label: str
    record_count: int = Field(..., ge=0)
    source_filename: str | None = None


class SnapshotDiffResponse(CamelModel):
    process_count: int
    percent_processes: int
    total_value: int
    percent_value: int


class SnapshotComparisonResponse(CamelModel):
    base: LiabilityViewResponse
    target: LiabilityViewResponse
    diff: SnapshotDiffResponse


class ImportSummaryResponse(CamelModel):
    """
    API response model for a completed spreadsheet import.
    """

    period: PeriodResponse
    records_loaded: int = Field(..., ge=0)
    replaced: bool
    source_filename: str | None = None
