"""
app/schemas package marker.
"""

from app.schemas.court import CourtResponse, ParsedCaseNumberResponse, RegionCourtsResponse
from app.schemas.favorability import (
    ChamberFavorabilityResponse,
    CourtFavorabilityReportResponse,
    FavorabilityStatsResponse,
    JudgeCreate,
    JudgeFavorabilityResponse,
    JudgeResponse,
    JudgmentCreate,
    JudgmentResponse,
    JudgmentUpdate,
    StateFavorabilityResponse,
)
from app.schemas.liability import (
    CaseRecordListResponse,
    ImportSummaryResponse,
    LiabilityViewResponse,
    SnapshotComparisonResponse,
    SnapshotPeriodResponse,
)

__all__ = [
    "CaseRecordListResponse",
    "ChamberFavorabilityResponse",
    "CourtFavorabilityReportResponse",
    "CourtResponse",
    "FavorabilityStatsResponse",
    "ImportSummaryResponse",
    "JudgeCreate",
    "JudgeFavorabilityResponse",
    "JudgeResponse",
    "JudgmentCreate",
    "JudgmentResponse",
    "JudgmentUpdate",
    "LiabilityViewResponse",
    "ParsedCaseNumberResponse",
    "RegionCourtsResponse",
    "SnapshotComparisonResponse",
    "SnapshotPeriodResponse",
    "StateFavorabilityResponse",
]
