"""
app/services/spreadsheet_ingestion_service.py

Service layer for spreadsheet ingestion and snapshot import.

Reading rules
-------------
Columns are positional; row 0 is a header and is always skipped:

    0 case number   1 origin type   2 company label   3 status
    4 phase label   5 value         6 risk prognosis label

Trailing empty cells are dropped first, in CSV and workbooks alike. Rows with
fewer than seven fields or a blank case number are dropped without individual
logging. A missing source or a sheet without data rows yields an
empty list and one error log line. Corrupt or unreadable files raise
SpreadsheetReadError.
"""

from __future__ import annotations

import csv
import io
import logging
import math
import os
from collections.abc import Sequence
from decimal import Decimal
from functools import lru_cache
from pathlib import Path
from typing import BinaryIO, Union
from xml.etree.ElementTree import ParseError
from zipfile import BadZipFile

from openpyxl import load_workbook
from openpyxl.utils.exceptions import InvalidFileException
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.config import get_company_tokens, get_ingestion_settings
from app.domain.snapshot import ImportSummary, ReferencePeriod
from app.formatters import round_half_up
from app.logging_utils import log_event
from app.repositories.snapshot_repository import SnapshotRepository
from litigation.base import DEFAULT_PHASE, DEFAULT_RISK_LEVEL, NormalizedCase
from litigation.normalizer import RowNormalizer

logger = logging.getLogger(__name__)

SpreadsheetSource = Union[str, os.PathLike, BinaryIO]

MIN_ROW_FIELDS = 7
CSV_EXTENSIONS = {".csv", ".txt"}

_COL_CASE_NUMBER = 0
_COL_ORIGIN_TYPE = 1
_COL_COMPANY = 2
_COL_PHASE = 4
_COL_VALUE = 5
_COL_RISK = 6


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class SpreadsheetReadError(ValueError):
    """
    Raised when a spreadsheet exists but cannot be read or holds no cases.
    """


class UploadTooLargeError(SpreadsheetReadError):
    """
    Raised when an uploaded spreadsheet exceeds the configured size cap.
    """


class SnapshotPersistenceError(RuntimeError):
    """
    Raised when normalized cases cannot be persisted as a snapshot.
    """


# ---------------------------------------------------------------------------
# Value coercion
# ---------------------------------------------------------------------------


def coerce_amount(raw: object) -> int:
    """
    Convert a monetary cell to a non-negative whole currency amount.

    Numbers are used as-is, text is parsed as a float, anything else
    (including unparseable text, NaN and negatives) becomes 0.
    """

    if isinstance(raw, bool):
        number = 0.0
    elif isinstance(raw, (int, float, Decimal)):
        number = float(raw)
    elif isinstance(raw, str):
        try:
            number = float(raw.strip())
        except ValueError:
            number = 0.0
    else:
        number = 0.0

    if not math.isfinite(number) or number < 0:
        return 0
    return round_half_up(number)


def _cell_text(raw: object) -> str:
    if raw is None:
        return ""
    return str(raw).strip()


def _trim_trailing_empty(row: Sequence[object]) -> tuple[object, ...]:
    end = len(row)
    while end > 0 and (row[end - 1] is None or row[end - 1] == ""):
        end -= 1
    return tuple(row[:end])


# ---------------------------------------------------------------------------
# Service
# ---------------------------------------------------------------------------


class SpreadsheetIngestionService:
    """
    Reads a tabular source, normalizes each data row and persists snapshots.
    """

    def __init__(
        self,
        *,
        max_upload_bytes: int,
        normalizer: RowNormalizer | None = None,
    ) -> None:
        self._max_upload_bytes = max(1, max_upload_bytes)
        self._normalizer = normalizer or RowNormalizer()

    # ------------------------------------------------------------------
    # Reading
    # ------------------------------------------------------------------

    def read_rows(
        self,
        source: SpreadsheetSource,
        *,
        filename: str | None = None,
    ) -> list[tuple[object, ...]] | None:
        """
        Return every row of the first sheet, or None when the path is missing.

        Args:
            source:   Filesystem path or binary file handle.
            filename: Name used to choose the format for file handles.
        """

        if isinstance(source, (str, os.PathLike)):
            path = Path(source)
            if not path.exists():
                logger.error("Spreadsheet not found: %s", path.resolve())
                return None
            name = filename or path.name
            if Path(name).suffix.lower() in CSV_EXTENSIONS:
                try:
                    with path.open("rb") as handle:
                        return self._read_csv(handle)
                except OSError as exc:
                    raise SpreadsheetReadError(f"Unable to read spreadsheet {path.name}: {exc}") from exc
            return self._read_workbook(path)

        name = filename or getattr(source, "name", "") or ""
        source.seek(0)
        if Path(str(name)).suffix.lower() in CSV_EXTENSIONS:
            return self._read_csv(source)
        return self._read_workbook(source)

    def _read_workbook(self, source: Path | BinaryIO) -> list[tuple[object, ...]]:
        try:
            workbook = load_workbook(source, read_only=True, data_only=True)
        except (InvalidFileException, BadZipFile, KeyError, OSError, ParseError) as exc:
            raise SpreadsheetReadError(f"Invalid spreadsheet file: {exc}") from exc

        try:
            if not workbook.worksheets:
                return []
            sheet = workbook.worksheets[0]
            sheet.reset_dimensions()
            return [_trim_trailing_empty(row) for row in sheet.iter_rows(values_only=True)]
        except (ParseError, ValueError, TypeError, KeyError) as exc:
            raise SpreadsheetReadError(f"Invalid spreadsheet content: {exc}") from exc
        finally:
            workbook.close()

    def _read_csv(self, handle: BinaryIO) -> list[tuple[object, ...]]:
        text_stream: io.TextIOWrapper | None = None
        try:
            text_stream = io.TextIOWrapper(handle, encoding="utf-8-sig", newline="")
            sample = text_stream.read(4096)
            text_stream.seek(0)
            try:
                dialect: type[csv.Dialect] | csv.Dialect = csv.Sniffer().sniff(sample, delimiters=",;\t")
            except csv.Error:
                dialect = csv.excel
            return [_trim_trailing_empty(row) for row in csv.reader(text_stream, dialect)]
        except UnicodeDecodeError as exc:
            raise SpreadsheetReadError("CSV must be UTF-8 encoded.") from exc
        except csv.Error as exc:
            raise SpreadsheetReadError(f"Invalid CSV format: {exc}") from exc
        finally:
            if text_stream is not None:
                try:
                    text_stream.detach()
                except ValueError:
                    pass

    # ------------------------------------------------------------------
    # Normalization
    # ------------------------------------------------------------------

    def build_case(self, row: Sequence[object]) -> NormalizedCase | None:
        """
        Normalize one data row, or return None when the row is not a case.
        """

        if row is None or len(row) < MIN_ROW_FIELDS:
            return None
        if not _cell_text(row[_COL_CASE_NUMBER]):
            return None

        normalizer = self._normalizer
        phase = normalizer.match_phase(row[_COL_PHASE])
        risk = normalizer.match_risk(row[_COL_RISK])

        return NormalizedCase(
            company=normalizer.resolve_company(row[_COL_COMPANY], row[_COL_ORIGIN_TYPE]),
            phase=phase if phase is not None else DEFAULT_PHASE,
            risk_level=risk if risk is not None else DEFAULT_RISK_LEVEL,
            case_count=1,
            total_value=coerce_amount(row[_COL_VALUE]),
            phase_recognized=phase is not None,
            risk_recognized=risk is not None,
        )

    def load_cases(
        self,
        source: SpreadsheetSource,
        *,
        filename: str | None = None,
    ) -> list[NormalizedCase]:
        """
        Read a spreadsheet and return its normalized cases.

        Returns an empty list when the source is missing or has no data rows.
        """

        rows = self.read_rows(source, filename=filename)
        if rows is None:
            return []
        return self._cases_from_rows(rows, source=source, filename=filename)

    def _cases_from_rows(
        self,
        rows: list[tuple[object, ...]],
        *,
        source: SpreadsheetSource,
        filename: str | None,
    ) -> list[NormalizedCase]:
        if len(rows) < 2:
            logger.error("Spreadsheet is empty or has no data rows: %s", filename or source)
            return []

        cases: list[NormalizedCase] = []
        for row in rows[1:]:
            case = self.build_case(row)
            if case is not None:
                cases.append(case)

        log_event(
            logger,
            logging.INFO,
            "spreadsheet_loaded",
            source=filename or (str(source) if isinstance(source, (str, os.PathLike)) else None),
            records_loaded=len(cases),
            rows_skipped=len(rows) - 1 - len(cases),
        )
        return cases

    # ------------------------------------------------------------------
    # Snapshot import
    # ------------------------------------------------------------------

    def import_snapshot(
        self,
        *,
        source: SpreadsheetSource,
        period: ReferencePeriod,
        db: Session,
        filename: str | None = None,
    ) -> ImportSummary:
        """
        Load a spreadsheet and replace the snapshot of ``period`` with it.

        Args:
            source:   Filesystem path or binary file handle.
            period:   Reference month/year of the snapshot.
            db:       Active SQLAlchemy session (caller owns lifecycle).
            filename: Original filename, stored with the snapshot.

        Raises:
            UploadTooLargeError:      handle larger than the configured cap.
            SpreadsheetReadError:     missing or unreadable file, or no valid case rows.
            SnapshotPersistenceError: database failure while replacing.
        """

        if not isinstance(source, (str, os.PathLike)):
            self._ensure_within_limit(source)

        rows = self.read_rows(source, filename=filename)
        if rows is None:
            raise SpreadsheetReadError(f"Spreadsheet not found: {source}")
        cases = self._cases_from_rows(rows, source=source, filename=filename)
        if not cases:
            raise SpreadsheetReadError("Spreadsheet contains no valid case rows.")

        repository = SnapshotRepository(db)
        try:
            snapshot, replaced = repository.replace(
                period=period,
                cases=cases,
                source_filename=filename,
            )
            db.commit()
        except SQLAlchemyError as exc:
            db.rollback()
            raise SnapshotPersistenceError("Failed to persist snapshot records.") from exc

        log_event(
            logger,
            logging.INFO,
            "snapshot_imported",
            period=period.label,
            records_loaded=snapshot.record_count,
            replaced=replaced,
        )
        return ImportSummary(
            period=period,
            records_loaded=snapshot.record_count,
            replaced=replaced,
            source_filename=filename,
        )

    def _ensure_within_limit(self, handle: BinaryIO) -> None:
        handle.seek(0, io.SEEK_END)
        size = handle.tell()
        handle.seek(0)
        if size > self._max_upload_bytes:
            raise UploadTooLargeError(
                f"Spreadsheet is {size} bytes; the limit is {self._max_upload_bytes} bytes."
            )


# ---------------------------------------------------------------------------
# Factory
# ---------------------------------------------------------------------------


@lru_cache(maxsize=1)
def get_spreadsheet_ingestion_service() -> SpreadsheetIngestionService:
    """
    Build and cache the ingestion service with env-driven settings.
    """
    settings = get_ingestion_settings()
    return SpreadsheetIngestionService(
        max_upload_bytes=settings.max_upload_bytes,
        normalizer=RowNormalizer(get_company_tokens()),
    )
