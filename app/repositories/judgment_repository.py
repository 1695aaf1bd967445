"""
app/repositories/judgment_repository.py

Persistence helpers for judges and their recorded judgments.
"""

from __future__ import annotations

import uuid
from datetime import date

from sqlalchemy import select
from sqlalchemy.orm import Session

from db.models.judge import Judge
from db.models.judgment import Judgment
from litigation.favorability import JudgmentFact, Outcome


class JudgmentRepository:
    """
    Repository for CRUD-like operations on judges and judgments.
    """

    def __init__(self, session: Session) -> None:
        self._session = session

    # ------------------------------------------------------------------
    # Judges
    # ------------------------------------------------------------------

    def list_judges(self) -> list[Judge]:
        stmt = select(Judge).order_by(Judge.name, Judge.id)
        return list(self._session.execute(stmt).scalars().all())

    def get_judge(self, judge_id: uuid.UUID) -> Judge | None:
        return self._session.get(Judge, judge_id)

    def add_judge(
        self,
        *,
        name: str,
        court_code: str,
        kind: str,
        chamber: str | None = None,
    ) -> Judge:
        judge = Judge(
            name=name.strip(),
            court_code=court_code,
            chamber=chamber.strip() if chamber else None,
            kind=kind,
        )
        self._session.add(judge)
        self._session.flush()
        return judge

    def delete_judge(self, judge: Judge) -> None:
        self._session.delete(judge)
        self._session.flush()

    # ------------------------------------------------------------------
    # Judgments
    # ------------------------------------------------------------------

    def list_judgments(self, judge_id: uuid.UUID) -> list[Judgment]:
        stmt = (
            select(Judgment)
            .where(Judgment.judge_id == judge_id)
            .order_by(Judgment.judged_on.desc().nulls_last(), Judgment.created_at.desc())
        )
        return list(self._session.execute(stmt).scalars().all())

    def get_judgment(self, judgment_id: uuid.UUID) -> Judgment | None:
        return self._session.get(Judgment, judgment_id)

    def add_judgment(
        self,
        *,
        judge_id: uuid.UUID,
        case_number: str,
        outcome: Outcome,
        judged_on: date | None = None,
        party: str | None = None,
    ) -> Judgment:
        judgment = Judgment(
            judge_id=judge_id,
            case_number=case_number.strip(),
            outcome=outcome.value,
            judged_on=judged_on,
            party=party,
        )
        self._session.add(judgment)
        self._session.flush()
        return judgment

    def delete_judgment(self, judgment: Judgment) -> None:
        self._session.delete(judgment)
        self._session.flush()

    def list_facts(self) -> list[JudgmentFact]:
        """
        Return every judgment joined with its judge's court code and chamber.
        """

        stmt = (
            select(
                Judgment.judge_id,
                Judgment.case_number,
                Judgment.outcome,
                Judge.court_code,
                Judge.chamber,
            )
            .join(Judge, Judge.id == Judgment.judge_id)
            .order_by(Judgment.id)
        )
        return [
            JudgmentFact(
                judge_id=judge_id,
                case_number=case_number,
                outcome=Outcome(outcome),
                judge_court_code=court_code,
                judge_chamber=chamber,
            )
            for judge_id, case_number, outcome, court_code, chamber in self._session.execute(stmt)
        ]
