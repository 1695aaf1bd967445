"""
app/api/routers/liability_router.py

Liability dashboard endpoints: aggregated views, raw records, available
periods, period comparison and spreadsheet upload.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query, UploadFile, status
from sqlalchemy.orm import Session

from app.api.dependencies import get_optional_period, get_spreadsheet_upload
from app.domain.snapshot import ReferencePeriod
from app.formatters import format_diff, format_liability_view
from app.schemas.liability import (
    CaseRecordListResponse,
    CaseRecordResponse,
    ImportSummaryResponse,
    LiabilityViewResponse,
    PeriodResponse,
    SnapshotComparisonResponse,
    SnapshotDiffResponse,
    SnapshotPeriodResponse,
)
from app.services.liability_service import (
    LiabilityService,
    SnapshotNotFoundError,
    SnapshotView,
    get_liability_service,
)
from app.services.spreadsheet_ingestion_service import (
    SnapshotPersistenceError,
    SpreadsheetIngestionService,
    SpreadsheetReadError,
    UploadTooLargeError,
    get_spreadsheet_ingestion_service,
)
from db.session import get_db

router = APIRouter(prefix="/api/passivo", tags=["liability"])


def _period_response(period: ReferencePeriod) -> PeriodResponse:
    return PeriodResponse(month=period.month, year=period.year, label=period.label)


def _view_response(snapshot_view: SnapshotView) -> LiabilityViewResponse:
    return LiabilityViewResponse.model_validate(
        {
            "period": _period_response(snapshot_view.period),
            **format_liability_view(snapshot_view.view),
        }
    )


def _not_found(exc: SnapshotNotFoundError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))


@router.get("", response_model=LiabilityViewResponse)
def get_liability_view(
    period: ReferencePeriod | None = Depends(get_optional_period),
    db: Session = Depends(get_db),
    liability_service: LiabilityService = Depends(get_liability_service),
) -> LiabilityViewResponse:
    """
    Aggregated view of one snapshot; the latest one when no period is given.
    """

    try:
        snapshot_view = liability_service.get_view(db=db, period=period)
    except SnapshotNotFoundError as exc:
        raise _not_found(exc) from exc
    return _view_response(snapshot_view)


@router.get("/raw", response_model=CaseRecordListResponse)
def get_raw_records(
    period: ReferencePeriod | None = Depends(get_optional_period),
    db: Session = Depends(get_db),
    liability_service: LiabilityService = Depends(get_liability_service),
) -> CaseRecordListResponse:
    try:
        resolved, cases = liability_service.get_cases(db=db, period=period)
    except SnapshotNotFoundError as exc:
        raise _not_found(exc) from exc

    return CaseRecordListResponse(
        period=_period_response(resolved),
        records=[
            CaseRecordResponse(
                id=case.id,
                company=case.company.value,
                phase=case.phase.value,
                risk_level=case.risk_level.value,
                case_count=case.case_count,
                total_value=case.total_value,
                phase_recognized=case.phase_recognized,
                risk_recognized=case.risk_recognized,
            )
            for case in cases
        ],
    )


@router.get("/periodos", response_model=list[SnapshotPeriodResponse])
def list_periods(
    db: Session = Depends(get_db),
    liability_service: LiabilityService = Depends(get_liability_service),
) -> list[SnapshotPeriodResponse]:
    """
    Imported snapshot periods, newest first.
    """

    return [
        SnapshotPeriodResponse(
            month=snapshot.reference_month,
            year=snapshot.reference_year,
            label=f"{snapshot.reference_month:02d}/{snapshot.reference_year}",
            record_count=snapshot.record_count,
            source_filename=snapshot.source_filename,
        )
        for snapshot in liability_service.list_snapshots(db=db)
    ]


@router.get("/comparar", response_model=SnapshotComparisonResponse)
def compare_periods(
    mes1: int = Query(..., ge=1, le=12, description="Base month"),
    ano1: int = Query(..., ge=1900, description="Base year"),
    mes2: int = Query(..., ge=1, le=12, description="Target month"),
    ano2: int = Query(..., ge=1900, description="Target year"),
    db: Session = Depends(get_db),
    liability_service: LiabilityService = Depends(get_liability_service),
) -> SnapshotComparisonResponse:
    """
    Compare two snapshots; percent changes are relative to the base period.
    """

    try:
        comparison = liability_service.compare(
            db=db,
            base=ReferencePeriod(year=ano1, month=mes1),
            target=ReferencePeriod(year=ano2, month=mes2),
        )
    except SnapshotNotFoundError as exc:
        raise _not_found(exc) from exc

    return SnapshotComparisonResponse(
        base=_view_response(comparison.base),
        target=_view_response(comparison.target),
        diff=SnapshotDiffResponse.model_validate(format_diff(comparison.diff)),
    )


@router.post("/upload", response_model=ImportSummaryResponse)
def upload_spreadsheet(
    file: UploadFile = Depends(get_spreadsheet_upload),
    month: int = Query(..., ge=1, le=12, description="Reference month of the snapshot"),
    year: int = Query(..., ge=1900, description="Reference year of the snapshot"),
    db: Session = Depends(get_db),
    ingestion_service: SpreadsheetIngestionService = Depends(get_spreadsheet_ingestion_service),
) -> ImportSummaryResponse:
    """
    Import one spreadsheet, replacing any snapshot of the same period.
    """

    try:
        summary = ingestion_service.import_snapshot(
            source=file.file,
            period=ReferencePeriod(year=year, month=month),
            db=db,
            filename=file.filename,
        )
    except UploadTooLargeError as exc:
        raise HTTPException(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail=str(exc),
        ) from exc
    except SpreadsheetReadError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(exc),
        ) from exc
    except SnapshotPersistenceError as exc:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Unable to persist snapshot records.",
        ) from exc
    finally:
        file.file.close()

    return ImportSummaryResponse(
        period=_period_response(summary.period),
        records_loaded=summary.records_loaded,
        replaced=summary.replaced,
        source_filename=summary.source_filename,
    )
