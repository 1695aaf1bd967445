"""
app/api/routers/favorability_router.py

Judge and judgment management plus favorability report endpoints.
"""

from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session

from app.formatters import format_favorability
from app.schemas.favorability import (
    ChamberFavorabilityResponse,
    CourtFavorabilityReportResponse,
    CourtFavorabilityResponse,
    FavorabilityStatsResponse,
    JudgeCreate,
    JudgeFavorabilityResponse,
    JudgeResponse,
    JudgmentCreate,
    JudgmentResponse,
    JudgmentUpdate,
    StateFavorabilityResponse,
)
from app.services.favorability_service import (
    FavorabilityPersistenceError,
    FavorabilityService,
    InvalidJudgeError,
    JudgeNotFoundError,
    JudgmentNotFoundError,
    get_favorability_service,
)
from db.session import get_db
from litigation.favorability import FavorabilityStats

router = APIRouter(prefix="/api", tags=["favorability"])


def _stats(stats: FavorabilityStats) -> FavorabilityStatsResponse:
    return FavorabilityStatsResponse.model_validate(format_favorability(stats))


def _persistence_failed(exc: FavorabilityPersistenceError) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=str(exc),
    )


# ---------------------------------------------------------------------------
# Reports
# ---------------------------------------------------------------------------


@router.get("/favorabilidade/juizes", response_model=list[JudgeFavorabilityResponse])
def judge_favorability(
    db: Session = Depends(get_db),
    favorability_service: FavorabilityService = Depends(get_favorability_service),
) -> list[JudgeFavorabilityResponse]:
    return [
        JudgeFavorabilityResponse(
            judge=JudgeResponse.model_validate(item.judge),
            stats=_stats(item.stats),
        )
        for item in favorability_service.judges_with_favorability(db=db)
    ]


@router.get("/favorabilidade/tribunais", response_model=CourtFavorabilityReportResponse)
def court_favorability(
    db: Session = Depends(get_db),
    favorability_service: FavorabilityService = Depends(get_favorability_service),
) -> CourtFavorabilityReportResponse:
    report = favorability_service.court_report(db=db)
    return CourtFavorabilityReportResponse(
        courts=[
            CourtFavorabilityResponse(
                court_code=court.court_code,
                court_name=court.court_name,
                state_abbrev=court.state_abbrev,
                region=court.region,
                stats=_stats(court.stats),
            )
            for court in report.courts
        ],
        unresolved=report.unresolved,
    )


@router.get("/favorabilidade/estados", response_model=list[StateFavorabilityResponse])
def state_favorability(
    db: Session = Depends(get_db),
    favorability_service: FavorabilityService = Depends(get_favorability_service),
) -> list[StateFavorabilityResponse]:
    return [
        StateFavorabilityResponse(
            state_abbrev=state.state_abbrev,
            court_codes=list(state.court_codes),
            stats=_stats(state.stats),
        )
        for state in favorability_service.state_report(db=db)
    ]


@router.get("/favorabilidade/varas", response_model=list[ChamberFavorabilityResponse])
def chamber_favorability(
    db: Session = Depends(get_db),
    favorability_service: FavorabilityService = Depends(get_favorability_service),
) -> list[ChamberFavorabilityResponse]:
    """
    Favorability per court unit, for judges registered with a chamber.
    """
    return [
        ChamberFavorabilityResponse(
            court_code=chamber.court_code,
            court_name=chamber.court_name,
            state_abbrev=chamber.state_abbrev,
            chamber=chamber.chamber,
            judge_count=chamber.judge_count,
            stats=_stats(chamber.stats),
        )
        for chamber in favorability_service.chamber_report(db=db)
    ]


# ---------------------------------------------------------------------------
# Judges
# ---------------------------------------------------------------------------


@router.post(
    "/juizes",
    response_model=JudgeResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_judge(
    body: JudgeCreate,
    db: Session = Depends(get_db),
    favorability_service: FavorabilityService = Depends(get_favorability_service),
) -> JudgeResponse:
    """
    Register a judge. Raises HTTP 422 if the court code or judge kind is unknown.
    """
    try:
        judge = favorability_service.create_judge(
            db=db,
            name=body.name,
            court_code=body.court_code,
            kind=body.kind,
            chamber=body.chamber,
        )
    except InvalidJudgeError as exc:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=str(exc),
        ) from exc
    except FavorabilityPersistenceError as exc:
        raise _persistence_failed(exc) from exc
    return JudgeResponse.model_validate(judge)


@router.delete("/juizes/{judge_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_judge(
    judge_id: uuid.UUID,
    db: Session = Depends(get_db),
    favorability_service: FavorabilityService = Depends(get_favorability_service),
) -> Response:
    try:
        favorability_service.delete_judge(db=db, judge_id=judge_id)
    except JudgeNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except FavorabilityPersistenceError as exc:
        raise _persistence_failed(exc) from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/juizes/{judge_id}/julgamentos", response_model=list[JudgmentResponse])
def list_judge_judgments(
    judge_id: uuid.UUID,
    db: Session = Depends(get_db),
    favorability_service: FavorabilityService = Depends(get_favorability_service),
) -> list[JudgmentResponse]:
    try:
        judgments = favorability_service.list_judgments(db=db, judge_id=judge_id)
    except JudgeNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    return [JudgmentResponse.model_validate(judgment) for judgment in judgments]


# ---------------------------------------------------------------------------
# Judgments
# ---------------------------------------------------------------------------


@router.post(
    "/julgamentos",
    response_model=JudgmentResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_judgment(
    body: JudgmentCreate,
    db: Session = Depends(get_db),
    favorability_service: FavorabilityService = Depends(get_favorability_service),
) -> JudgmentResponse:
    try:
        judgment = favorability_service.record_judgment(
            db=db,
            judge_id=body.judge_id,
            case_number=body.case_number,
            outcome=body.outcome,
            judged_on=body.judged_on,
            party=body.party,
        )
    except JudgeNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except FavorabilityPersistenceError as exc:
        raise _persistence_failed(exc) from exc
    return JudgmentResponse.model_validate(judgment)


@router.patch("/julgamentos/{judgment_id}", response_model=JudgmentResponse)
def update_judgment(
    judgment_id: uuid.UUID,
    body: JudgmentUpdate,
    db: Session = Depends(get_db),
    favorability_service: FavorabilityService = Depends(get_favorability_service),
) -> JudgmentResponse:
    try:
        judgment = favorability_service.update_judgment(
            db=db,
            judgment_id=judgment_id,
            outcome=body.outcome,
            judged_on=body.judged_on,
            party=body.party,
        )
    except JudgmentNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except FavorabilityPersistenceError as exc:
        raise _persistence_failed(exc) from exc
    return JudgmentResponse.model_validate(judgment)


@router.delete("/julgamentos/{judgment_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_judgment(
    judgment_id: uuid.UUID,
    db: Session = Depends(get_db),
    favorability_service: FavorabilityService = Depends(get_favorability_service),
) -> Response:
    try:
        favorability_service.delete_judgment(db=db, judgment_id=judgment_id)
    except JudgmentNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except FavorabilityPersistenceError as exc:
        raise _persistence_failed(exc) from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)
