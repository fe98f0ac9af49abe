"""
app/services/onboarding_service.py

Onboarding checklist derivation and the narrow step-marking write path.

Five steps run in a fixed order. The first three are derived from live
organization data on every call; the last two are done once their
one-way timestamp has been stored. The first step that is not done is
the active one, every later step stays locked. The stored
completed_steps list is a cache of that derivation and is rewritten only
when it drifts.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Set
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Protocol

from sqlalchemy.orm import Session

from app.config import get_onboarding_settings
from app.domain.onboarding import (
    ONBOARDING_COMPLETE,
    OnboardingProgressCounter,
    OnboardingProgressRecord,
    OnboardingState,
    OnboardingStep,
    OnboardingStepId,
    OnboardingStepStatus,
    OrganizationSettings,
)
from app.logging_utils import log_event
from app.repositories.onboarding_repository import OnboardingRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StepMetadata:
    title: str
    description: str
    route: str


STEP_ORDER: tuple[str, ...] = (
    OnboardingStepId.ADD_PEOPLE,
    OnboardingStepId.CHOOSE_TEMPLATE,
    OnboardingStepId.CONFIGURE_SETTINGS,
    OnboardingStepId.SEND_TEST_EMAIL,
    OnboardingStepId.ACTIVATE_AUTOMATION,
)

STEP_METADATA: dict[str, StepMetadata] = {
    OnboardingStepId.ADD_PEOPLE: StepMetadata(
        title="Add people",
        description="Upload a CSV or add people manually.",
        route="people",
    ),
    OnboardingStepId.CHOOSE_TEMPLATE: StepMetadata(
        title="Choose a template",
        description="Set your default email template.",
        route="templates",
    ),
    OnboardingStepId.CONFIGURE_SETTINGS: StepMetadata(
        title="Configure send time",
        description="Set timezone, send time, and sender email.",
        route="settings",
    ),
    OnboardingStepId.SEND_TEST_EMAIL: StepMetadata(
        title="Send a test email",
        description="Send a test to confirm delivery.",
        route="templates",
    ),
    OnboardingStepId.ACTIVATE_AUTOMATION: StepMetadata(
        title="Activate automation",
        description="Turn on automated birthday sends.",
        route="settings",
    ),
}


class OnboardingStore(Protocol):
    """
    Storage contract the onboarding service reads and writes through.
    """

    def get_organization_settings(self, organization_id: str) -> OrganizationSettings | None: ...

    def count_active_people(self, organization_id: str) -> int: ...

    def has_default_template_assignment(self, organization_id: str) -> bool: ...

    def count_successful_deliveries(self, organization_id: str) -> int: ...

    def get_progress(self, organization_id: str) -> OnboardingProgressRecord | None: ...

    def create_progress(self, organization_id: str) -> OnboardingProgressRecord: ...

    def update_progress(
        self,
        organization_id: str,
        *,
        completed_steps: list[str] | None = None,
        test_email_sent_at: datetime | None = None,
        automation_activated_at: datetime | None = None,
    ) -> OnboardingProgressRecord: ...

    def commit(self) -> None: ...


def is_settings_configured(
    settings: OrganizationSettings | None,
    *,
    default_from_email: str | None,
) -> bool:
    """
    Sender resolvable (org address or global fallback), send hour and
    minute set, and a timezone chosen.
    """

    if settings is None:
        return False
    has_sender = bool(settings.email_from_address or default_from_email)
    return (
        has_sender
        and settings.birthday_send_hour is not None
        and settings.birthday_send_minute is not None
        and bool(settings.timezone)
    )


def build_steps(done_step_ids: Set[str]) -> tuple[list[OnboardingStep], str]:
    """
    Lay the fixed step order over a set of done ids.

    Returns the steps and the current step id, which is
    ONBOARDING_COMPLETE when nothing is left to do.
    """

    steps: list[OnboardingStep] = []
    current_step_id = ONBOARDING_COMPLETE
    active_found = False

    for index, step_id in enumerate(STEP_ORDER):
        if step_id in done_step_ids:
            status = OnboardingStepStatus.DONE
        elif not active_found:
            status = OnboardingStepStatus.ACTIVE
            active_found = True
            current_step_id = step_id
        else:
            status = OnboardingStepStatus.LOCKED

        metadata = STEP_METADATA[step_id]
        steps.append(
            OnboardingStep(
                id=step_id,
                title=metadata.title,
                description=metadata.description,
                route=metadata.route,
                status=status,
                next_step_id=STEP_ORDER[index + 1] if index + 1 < len(STEP_ORDER) else None,
            )
        )

    return steps, current_step_id


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class OnboardingService:
    """
    Computes onboarding state for one organization and records the
    user-driven steps.
    """

    def __init__(
        self,
        *,
        store: OnboardingStore,
        default_from_email: str | None,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self._store = store
        self._default_from_email = default_from_email
        self._clock = clock

    def compute_state(self, organization_id: str) -> OnboardingState:
        """
        Derive the checklist from live data and refresh the stored snapshot.
        """

        progress, created = self._ensure_progress(organization_id)
        settings = self._store.get_organization_settings(organization_id)
        people_count = self._store.count_active_people(organization_id)
        has_template = self._store.has_default_template_assignment(organization_id)
        successful_deliveries = self._store.count_successful_deliveries(organization_id)

        done: set[str] = set()
        if people_count > 0:
            done.add(OnboardingStepId.ADD_PEOPLE)
        if has_template:
            done.add(OnboardingStepId.CHOOSE_TEMPLATE)
        if is_settings_configured(settings, default_from_email=self._default_from_email):
            done.add(OnboardingStepId.CONFIGURE_SETTINGS)
        if progress.test_email_sent_at is not None:
            done.add(OnboardingStepId.SEND_TEST_EMAIL)
        if progress.automation_activated_at is not None:
            done.add(OnboardingStepId.ACTIVATE_AUTOMATION)

        steps, current_step_id = build_steps(done)
        completed_steps = [step.id for step in steps if step.status == OnboardingStepStatus.DONE]

        snapshot_changed = completed_steps != list(progress.completed_steps)
        if snapshot_changed:
            self._store.update_progress(organization_id, completed_steps=completed_steps)
            log_event(
                logger,
                logging.INFO,
                "onboarding_snapshot_updated",
                organization_id=organization_id,
                previous=list(progress.completed_steps),
                completed_steps=completed_steps,
            )
        if created or snapshot_changed:
            self._store.commit()

        return OnboardingState(
            steps=steps,
            current_step_id=current_step_id,
            completed_steps=completed_steps,
            progress=OnboardingProgressCounter(completed=len(completed_steps), total=len(STEP_ORDER)),
            has_first_send=successful_deliveries > 0,
            has_people=people_count > 0,
        )

    def mark_step(self, organization_id: str, step_id: str) -> OnboardingState:
        """
        Record a user-driven step, then return the recomputed state.

        Only send_test_email and activate_automation are recorded, each at
        most once. Any other step id changes nothing.
        """

        progress, created = self._ensure_progress(organization_id)
        now = self._clock()
        test_email_sent_at: datetime | None = None
        automation_activated_at: datetime | None = None

        if step_id == OnboardingStepId.SEND_TEST_EMAIL and progress.test_email_sent_at is None:
            test_email_sent_at = now
        if step_id == OnboardingStepId.ACTIVATE_AUTOMATION and progress.automation_activated_at is None:
            automation_activated_at = now

        marked = test_email_sent_at is not None or automation_activated_at is not None
        if marked:
            self._store.update_progress(
                organization_id,
                test_email_sent_at=test_email_sent_at,
                automation_activated_at=automation_activated_at,
            )
            log_event(
                logger,
                logging.INFO,
                "onboarding_step_marked",
                organization_id=organization_id,
                step_id=step_id,
                marked_at=now,
            )
        else:
            logger.debug("Onboarding step %r ignored for organization %s", step_id, organization_id)

        if created or marked:
            self._store.commit()

        return self.compute_state(organization_id)

    def _ensure_progress(self, organization_id: str) -> tuple[OnboardingProgressRecord, bool]:
        existing = self._store.get_progress(organization_id)
        if existing is not None:
            return existing, False

        created = self._store.create_progress(organization_id)
        log_event(
            logger,
            logging.INFO,
            "onboarding_progress_created",
            organization_id=organization_id,
        )
        return created, True


def build_onboarding_service(db: Session) -> OnboardingService:
    """
    Wire the service to a request-scoped session.
    """

    settings = get_onboarding_settings()
    return OnboardingService(
        store=OnboardingRepository(db),
        default_from_email=settings.default_from_email,
    )
