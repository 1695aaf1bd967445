"""
app/api/routers/court_router.py

Regional labor court lookup endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Query

from app.schemas.court import CourtResponse, ParsedCaseNumberResponse, RegionCourtsResponse
from litigation.case_number import COURTS, courts_by_region, parse_case_number

router = APIRouter(prefix="/api/tribunais", tags=["courts"])


@router.get("", response_model=list[CourtResponse])
def list_courts() -> list[CourtResponse]:
    return [CourtResponse.model_validate(COURTS[code]) for code in sorted(COURTS)]


@router.get("/regioes", response_model=list[RegionCourtsResponse])
def list_courts_by_region() -> list[RegionCourtsResponse]:
    return [
        RegionCourtsResponse(
            region=region,
            courts=[CourtResponse.model_validate(info) for info in courts],
        )
        for region, courts in courts_by_region().items()
    ]


@router.get("/resolver", response_model=ParsedCaseNumberResponse)
def resolve_case_number(
    numero: str = Query(..., description="Case number, punctuated or digits only"),
) -> ParsedCaseNumberResponse:
    """
    Resolve the court of a case number. Unresolvable input yields null fields.
    """

    parsed = parse_case_number(numero)
    return ParsedCaseNumberResponse(
        case_number=numero,
        court_code=parsed.court_code,
        court_name=parsed.court_name,
        state=parsed.state,
        state_abbrev=parsed.state_abbrev,
        region=parsed.region,
    )
