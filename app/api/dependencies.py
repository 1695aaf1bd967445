"""
app/api/dependencies.py

Shared FastAPI dependencies for request validation.
"""

from __future__ import annotations

from fastapi import File, HTTPException, Query, UploadFile, status

from app.domain.snapshot import ReferencePeriod

SPREADSHEET_EXTENSIONS = (".xlsx", ".xlsm", ".csv")
SPREADSHEET_CONTENT_TYPES = {
    "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    "application/vnd.ms-excel.sheet.macroenabled.12",
    "text/csv",
    "application/csv",
}


def get_spreadsheet_upload(file: UploadFile = File(...)) -> UploadFile:
    """
    Validate that the uploaded file is a workbook or CSV by extension or MIME type.
    """

    filename = (file.filename or "").strip().lower()
    content_type = (file.content_type or "").strip().lower()

    is_spreadsheet_filename = filename.endswith(SPREADSHEET_EXTENSIONS)
    is_spreadsheet_content_type = content_type in SPREADSHEET_CONTENT_TYPES

    if not is_spreadsheet_filename and not is_spreadsheet_content_type:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Only .xlsx, .xlsm or .csv spreadsheets are allowed.",
        )

    return file


def get_optional_period(
    month: int | None = Query(default=None, ge=1, le=12, description="Reference month"),
    year: int | None = Query(default=None, ge=1900, description="Reference year"),
) -> ReferencePeriod | None:
    """
    Build a reference period from query parameters; None selects the latest snapshot.
    """

    if month is None and year is None:
        return None
    if month is None or year is None:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="month and year must be provided together.",
        )
    return ReferencePeriod(year=year, month=month)
