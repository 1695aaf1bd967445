"""
app/services/favorability_service.py

Judge and judgment management plus favorability reporting.

Write methods commit on success and roll back on database errors; read
methods never mutate session state.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from datetime import date
from functools import lru_cache

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.logging_utils import log_event
from app.repositories.judgment_repository import JudgmentRepository
from db.models.judge import Judge, JudgeKind
from db.models.judgment import Judgment
from litigation.case_number import get_court_by_code
from litigation.favorability import (
    ChamberFavorability,
    CourtFavorabilityReport,
    FavorabilityStats,
    Outcome,
    StateFavorability,
    compute_stats,
    stats_by_chamber,
    stats_by_court,
    stats_by_judge,
    stats_by_state,
)

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class JudgeNotFoundError(LookupError):
    """
    Raised when a judge id does not exist.
    """


class JudgmentNotFoundError(LookupError):
    """
    Raised when a judgment id does not exist.
    """


class InvalidJudgeError(ValueError):
    """
    Raised when a judge has a court code outside the table or an unknown kind.
    """


class FavorabilityPersistenceError(RuntimeError):
    """
    Raised when a judge or judgment change cannot be committed.
    """


@dataclass(frozen=True)
class JudgeFavorability:
    judge: Judge
    stats: FavorabilityStats


# ---------------------------------------------------------------------------
# Service
# ---------------------------------------------------------------------------


class FavorabilityService:
    """
    Coordinates JudgmentRepository and the pure favorability calculations.
    """

    # ------------------------------------------------------------------
    # Reporting
    # ------------------------------------------------------------------

    def judges_with_favorability(self, *, db: Session) -> list[JudgeFavorability]:
        repository = JudgmentRepository(db)
        by_judge = stats_by_judge(repository.list_facts())
        empty = compute_stats(())
        return [
            JudgeFavorability(judge=judge, stats=by_judge.get(judge.id, empty))
            for judge in repository.list_judges()
        ]

    def court_report(self, *, db: Session) -> CourtFavorabilityReport:
        report = stats_by_court(JudgmentRepository(db).list_facts())
        if report.unresolved:
            logger.info("Favorability: %d judgment(s) without a resolvable court", report.unresolved)
        return report

    def state_report(self, *, db: Session) -> tuple[StateFavorability, ...]:
        return stats_by_state(self.court_report(db=db).courts)

    def chamber_report(self, *, db: Session) -> tuple[ChamberFavorability, ...]:
        return stats_by_chamber(JudgmentRepository(db).list_facts())

    # ------------------------------------------------------------------
    # Judges
    # ------------------------------------------------------------------

    def create_judge(
        self,
        *,
        db: Session,
        name: str,
        court_code: str,
        kind: str,
        chamber: str | None = None,
    ) -> Judge:
        court = get_court_by_code(court_code)
        if court is None:
            raise InvalidJudgeError(f"Unknown court code {court_code!r}.")
        if kind not in JudgeKind.ALL:
            raise InvalidJudgeError(f"Unknown judge kind {kind!r}.")

        repository = JudgmentRepository(db)
        try:
            judge = repository.add_judge(name=name, court_code=court.code, kind=kind, chamber=chamber)
            db.commit()
        except SQLAlchemyError as exc:
            db.rollback()
            raise FavorabilityPersistenceError("Failed to create judge.") from exc
        log_event(logger, logging.INFO, "judge_created", judge_id=judge.id, court_code=judge.court_code)
        return judge

    def delete_judge(self, *, db: Session, judge_id: uuid.UUID) -> None:
        repository = JudgmentRepository(db)
        judge = repository.get_judge(judge_id)
        if judge is None:
            raise JudgeNotFoundError(f"Judge {judge_id} not found.")
        try:
            repository.delete_judge(judge)
            db.commit()
        except SQLAlchemyError as exc:
            db.rollback()
            raise FavorabilityPersistenceError("Failed to delete judge.") from exc
        log_event(logger, logging.INFO, "judge_deleted", judge_id=judge_id)

    # ------------------------------------------------------------------
    # Judgments
    # ------------------------------------------------------------------

    def list_judgments(self, *, db: Session, judge_id: uuid.UUID) -> list[Judgment]:
        repository = JudgmentRepository(db)
        if repository.get_judge(judge_id) is None:
            raise JudgeNotFoundError(f"Judge {judge_id} not found.")
        return repository.list_judgments(judge_id)

    def record_judgment(
        self,
        *,
        db: Session,
        judge_id: uuid.UUID,
        case_number: str,
        outcome: Outcome,
        judged_on: date | None = None,
        party: str | None = None,
    ) -> Judgment:
        repository = JudgmentRepository(db)
        if repository.get_judge(judge_id) is None:
            raise JudgeNotFoundError(f"Judge {judge_id} not found.")
        try:
            judgment = repository.add_judgment(
                judge_id=judge_id,
                case_number=case_number,
                outcome=outcome,
                judged_on=judged_on,
                party=party,
            )
            db.commit()
        except SQLAlchemyError as exc:
            db.rollback()
            raise FavorabilityPersistenceError("Failed to record judgment.") from exc
        log_event(
            logger,
            logging.INFO,
            "judgment_recorded",
            judgment_id=judgment.id,
            judge_id=judge_id,
            outcome=outcome.value,
        )
        return judgment

    def update_judgment(
        self,
        *,
        db: Session,
        judgment_id: uuid.UUID,
        outcome: Outcome | None = None,
        judged_on: date | None = None,
        party: str | None = None,
    ) -> Judgment:
        """
        Apply the provided fields; ``None`` leaves a field unchanged.
        """

        repository = JudgmentRepository(db)
        judgment = repository.get_judgment(judgment_id)
        if judgment is None:
            raise JudgmentNotFoundError(f"Judgment {judgment_id} not found.")

        if outcome is not None:
            judgment.outcome = outcome.value
        if judged_on is not None:
            judgment.judged_on = judged_on
        if party is not None:
            judgment.party = party
        try:
            db.commit()
        except SQLAlchemyError as exc:
            db.rollback()
            raise FavorabilityPersistenceError("Failed to update judgment.") from exc
        log_event(logger, logging.INFO, "judgment_updated", judgment_id=judgment_id, outcome=judgment.outcome)
        return judgment

    def delete_judgment(self, *, db: Session, judgment_id: uuid.UUID) -> None:
        repository = JudgmentRepository(db)
        judgment = repository.get_judgment(judgment_id)
        if judgment is None:
            raise JudgmentNotFoundError(f"Judgment {judgment_id} not found.")
        try:
            repository.delete_judgment(judgment)
            db.commit()
        except SQLAlchemyError as exc:
            db.rollback()
            raise FavorabilityPersistenceError("Failed to delete judgment.") from exc
        log_event(logger, logging.INFO, "judgment_deleted", judgment_id=judgment_id)


@lru_cache(maxsize=1)
def get_favorability_service() -> FavorabilityService:
    return FavorabilityService()
