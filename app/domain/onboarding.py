"""
app/domain/onboarding.py

Domain models for the onboarding checklist.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime


class OnboardingStepId:
    ADD_PEOPLE = "add_people"
    CHOOSE_TEMPLATE = "choose_template"
    CONFIGURE_SETTINGS = "configure_settings"
    SEND_TEST_EMAIL = "send_test_email"
    ACTIVATE_AUTOMATION = "activate_automation"


class OnboardingStepStatus:
    LOCKED = "locked"
    ACTIVE = "active"
    DONE = "done"


# Reported as current_step_id once every step is done.
ONBOARDING_COMPLETE = "complete"


@dataclass(frozen=True)
class OnboardingStep:
    id: str
    title: str
    description: str
    route: str
    status: str
    next_step_id: str | None = None


@dataclass(frozen=True)
class OnboardingProgressCounter:
    completed: int
    total: int


@dataclass(frozen=True)
class OnboardingState:
    """
    Fully derived checklist returned by every onboarding entry point.
    """

    steps: list[OnboardingStep]
    current_step_id: str
    completed_steps: list[str]
    progress: OnboardingProgressCounter
    has_first_send: bool
    has_people: bool

    @property
    def is_complete(self) -> bool:
        return self.current_step_id == ONBOARDING_COMPLETE


@dataclass(frozen=True)
class OrganizationSettings:
    """
    Projection of the organization columns the settings step reads.
    """

    timezone: str | None = None
    email_from_address: str | None = None
    birthday_send_hour: int | None = None
    birthday_send_minute: int | None = None


@dataclass
class OnboardingProgressRecord:
    """
    Store-agnostic view of the persisted onboarding_progress row.
    """

    organization_id: str
    completed_steps: list[str] = field(default_factory=list)
    test_email_sent_at: datetime | None = None
    automation_activated_at: datetime | None = None
