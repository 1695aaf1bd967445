"""
app/api/routers package marker.
"""

from app.api.routers.court_router import router as court_router
from app.api.routers.favorability_router import router as favorability_router
from app.api.routers.liability_router import router as liability_router

__all__ = [
    "court_router",
    "favorability_router",
    "liability_router",
]
