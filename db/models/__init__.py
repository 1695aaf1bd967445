"""
Model package exports.

Import all SQLAlchemy models here so metadata registration and Alembic
autogeneration work without extra imports.
"""

from db.models.case_record import CaseRecord
from db.models.case_snapshot import CaseSnapshot
from db.models.judge import Judge, JudgeKind
from db.models.judgment import Judgment

__all__ = [
    "CaseRecord",
    "CaseSnapshot",
    "Judge",
    "JudgeKind",
    "Judgment",
]
