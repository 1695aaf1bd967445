"""
app/repositories package marker.
"""

from app.repositories.judgment_repository import JudgmentRepository
from app.repositories.snapshot_repository import SnapshotRepository

__all__ = [
    "JudgmentRepository",
    "SnapshotRepository",
]
