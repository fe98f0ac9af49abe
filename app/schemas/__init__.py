"""
app/schemas package marker.
"""

from app.schemas.onboarding import MarkOnboardingStepRequest, OnboardingEnvelope, OnboardingStateResponse
from app.schemas.people import CSVErrorResponse, PeopleUploadRequest, PeopleUploadResponse

__all__ = [
    "CSVErrorResponse",
    "MarkOnboardingStepRequest",
    "OnboardingEnvelope",
    "OnboardingStateResponse",
    "PeopleUploadRequest",
    "PeopleUploadResponse",
]
