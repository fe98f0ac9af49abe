"""
app/services package marker.
"""

from app.services.onboarding_service import OnboardingService, build_onboarding_service
from app.services.people_export_service import render_people_csv
from app.services.people_import_service import (
    PeopleImportPersistenceError,
    PeopleImportService,
    get_people_import_service,
)

__all__ = [
    "OnboardingService",
    "build_onboarding_service",
    "PeopleImportPersistenceError",
    "PeopleImportService",
    "get_people_import_service",
    "render_people_csv",
]
