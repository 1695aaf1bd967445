"""
app/services package marker.
"""

from app.services.favorability_service import (
    FavorabilityService,
    JudgeNotFoundError,
    JudgmentNotFoundError,
    get_favorability_service,
)
from app.services.liability_service import (
    LiabilityService,
    SnapshotNotFoundError,
    get_liability_service,
)
from app.services.spreadsheet_ingestion_service import (
    SnapshotPersistenceError,
    SpreadsheetIngestionService,
    SpreadsheetReadError,
    UploadTooLargeError,
    get_spreadsheet_ingestion_service,
)

__all__ = [
    "FavorabilityService",
    "JudgeNotFoundError",
    "JudgmentNotFoundError",
    "get_favorability_service",
    "LiabilityService",
    "SnapshotNotFoundError",
    "get_liability_service",
    "SnapshotPersistenceError",
    "SpreadsheetIngestionService",
    "SpreadsheetReadError",
    "UploadTooLargeError",
    "get_spreadsheet_ingestion_service",
]
