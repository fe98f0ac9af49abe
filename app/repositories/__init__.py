"""
app/repositories package marker.
"""

from app.repositories.onboarding_repository import OnboardingRepository
from app.repositories.person_repository import PersonRepository

__all__ = [
    "OnboardingRepository",
    "PersonRepository",
]
