"""
app/domain package marker.
"""

from app.domain.snapshot import ImportSummary, ReferencePeriod

__all__ = [
    "ImportSummary",
    "ReferencePeriod",
]
