"""
app/schemas/onboarding.py

Request/response schemas for onboarding endpoints.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from app.domain.onboarding import OnboardingState


class CamelModel(BaseModel):
    """
    Base for wire models: camelCase on the wire, snake_case in Python.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class MarkOnboardingStepRequest(CamelModel):
    step_id: str = Field(..., min_length=1)


class OnboardingStepResponse(CamelModel):
    id: str
    title: str
    description: str
    route: str
    status: str
    next_step_id: str | None = None


class OnboardingProgressCounterResponse(CamelModel):
    completed: int = Field(..., ge=0)
    total: int = Field(..., ge=0)


class OnboardingStateResponse(CamelModel):
    steps: list[OnboardingStepResponse]
    current_step_id: str
    completed_steps: list[str]
    progress: OnboardingProgressCounterResponse
    has_first_send: bool
    has_people: bool
    is_complete: bool

    @classmethod
    def from_domain(cls, state: OnboardingState) -> "OnboardingStateResponse":
        return cls(
            steps=[
                OnboardingStepResponse(
                    id=step.id,
                    title=step.title,
                    description=step.description,
                    route=step.route,
                    status=step.status,
                    next_step_id=step.next_step_id,
                )
                for step in state.steps
            ],
            current_step_id=state.current_step_id,
            completed_steps=list(state.completed_steps),
            progress=OnboardingProgressCounterResponse(
                completed=state.progress.completed,
                total=state.progress.total,
            ),
            has_first_send=state.has_first_send,
            has_people=state.has_people,
            is_complete=state.is_complete,
        )


class OnboardingEnvelope(CamelModel):
    onboarding: OnboardingStateResponse
