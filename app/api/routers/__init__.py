"""
app/api/routers package marker.
"""

from app.api.routers.onboarding import router as onboarding_router
from app.api.routers.people import router as people_router

__all__ = [
    "onboarding_router",
    "people_router",
]
