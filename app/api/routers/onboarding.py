"""
app/api/routers/onboarding.py

Onboarding checklist HTTP endpoints.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import SQLAlchemyError

from app.api.dependencies import get_onboarding_service, get_organization_id
from app.domain.onboarding import OnboardingState
from app.schemas.onboarding import MarkOnboardingStepRequest, OnboardingEnvelope, OnboardingStateResponse
from app.services.onboarding_service import OnboardingService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/onboarding", tags=["onboarding"])


def _envelope(state: OnboardingState) -> OnboardingEnvelope:
    return OnboardingEnvelope(onboarding=OnboardingStateResponse.from_domain(state))


def _storage_failure(organization_id: str) -> HTTPException:
    logger.exception("Onboarding storage failure organization=%s", organization_id)
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail="Unable to load onboarding state.",
    )


@router.get("/status", response_model=OnboardingEnvelope)
def get_onboarding_status(
    organization_id: str = Depends(get_organization_id),
    onboarding_service: OnboardingService = Depends(get_onboarding_service),
) -> OnboardingEnvelope:
    try:
        return _envelope(onboarding_service.compute_state(organization_id))
    except SQLAlchemyError as exc:
        raise _storage_failure(organization_id) from exc


@router.post("/recompute", response_model=OnboardingEnvelope)
def recompute_onboarding(
    organization_id: str = Depends(get_organization_id),
    onboarding_service: OnboardingService = Depends(get_onboarding_service),
) -> OnboardingEnvelope:
    try:
        return _envelope(onboarding_service.compute_state(organization_id))
    except SQLAlchemyError as exc:
        raise _storage_failure(organization_id) from exc


@router.post("/mark-step", response_model=OnboardingEnvelope)
def mark_onboarding_step(
    payload: MarkOnboardingStepRequest,
    organization_id: str = Depends(get_organization_id),
    onboarding_service: OnboardingService = Depends(get_onboarding_service),
) -> OnboardingEnvelope:
    """
    Record send_test_email or activate_automation. Other step ids are
    accepted and leave progress unchanged.
    """

    try:
        return _envelope(onboarding_service.mark_step(organization_id, payload.step_id))
    except SQLAlchemyError as exc:
        raise _storage_failure(organization_id) from exc
