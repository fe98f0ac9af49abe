"""
app/domain package marker.
"""

from app.domain.onboarding import OnboardingState, OnboardingStep, OnboardingStepId, OnboardingStepStatus
from app.domain.people_import import CSVError, CSVValidationResult, CSVValidationSummary, ParsedPerson

__all__ = [
    "CSVError",
    "CSVValidationResult",
    "CSVValidationSummary",
    "OnboardingState",
    "OnboardingStep",
    "OnboardingStepId",
    "OnboardingStepStatus",
    "ParsedPerson",
]
