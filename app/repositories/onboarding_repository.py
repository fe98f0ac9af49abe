"""
app/repositories/onboarding_repository.py

Reads and writes backing the onboarding checklist.
"""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import exists, func, select
from sqlalchemy.orm import Session

from app.domain.onboarding import OnboardingProgressRecord, OrganizationSettings
from db.models.delivery_log import SUCCESSFUL_DELIVERY_STATUSES, DeliveryLog
from db.models.onboarding_progress import OnboardingProgress
from db.models.organization import Organization
from db.models.person import Person
from db.models.template import OrganizationTemplate


class OnboardingRepository:
    """
    SQLAlchemy-backed onboarding store. Flushes, never commits on its own.
    """

    def __init__(self, session: Session) -> None:
        self._session = session

    def get_organization_settings(self, organization_id: str) -> OrganizationSettings | None:
        stmt = select(
            Organization.timezone,
            Organization.email_from_address,
            Organization.birthday_send_hour,
            Organization.birthday_send_minute,
        ).where(Organization.id == organization_id)
        row = self._session.execute(stmt).one_or_none()
        if row is None:
            return None
        return OrganizationSettings(
            timezone=row.timezone,
            email_from_address=row.email_from_address,
            birthday_send_hour=row.birthday_send_hour,
            birthday_send_minute=row.birthday_send_minute,
        )

    def count_active_people(self, organization_id: str) -> int:
        stmt = (
            select(func.count())
            .select_from(Person)
            .where(Person.organization_id == organization_id, Person.opted_out.is_(False))
        )
        return int(self._session.scalar(stmt) or 0)

    def has_default_template_assignment(self, organization_id: str) -> bool:
        stmt = select(
            exists().where(
                OrganizationTemplate.organization_id == organization_id,
                OrganizationTemplate.is_default.is_(True),
                OrganizationTemplate.is_active.is_(True),
            )
        )
        return bool(self._session.scalar(stmt))

    def count_successful_deliveries(self, organization_id: str) -> int:
        stmt = (
            select(func.count())
            .select_from(DeliveryLog)
            .where(
                DeliveryLog.organization_id == organization_id,
                DeliveryLog.status.in_(SUCCESSFUL_DELIVERY_STATUSES),
            )
        )
        return int(self._session.scalar(stmt) or 0)

    def get_progress(self, organization_id: str) -> OnboardingProgressRecord | None:
        progress = self._find_progress(organization_id)
        if progress is None:
            return None
        return self._to_record(progress)

    def create_progress(self, organization_id: str) -> OnboardingProgressRecord:
        progress = OnboardingProgress(organization_id=organization_id, completed_steps=[])
        self._session.add(progress)
        self._session.flush()
        return self._to_record(progress)

    def update_progress(
        self,
        organization_id: str,
        *,
        completed_steps: list[str] | None = None,
        test_email_sent_at: datetime | None = None,
        automation_activated_at: datetime | None = None,
    ) -> OnboardingProgressRecord:
        progress = self._find_progress(organization_id)
        if progress is None:
            raise LookupError(f"No onboarding progress for organization {organization_id}")

        if completed_steps is not None:
            progress.completed_steps = list(completed_steps)
        if test_email_sent_at is not None:
            progress.test_email_sent_at = test_email_sent_at
        if automation_activated_at is not None:
            progress.automation_activated_at = automation_activated_at

        self._session.flush()
        return self._to_record(progress)

    def commit(self) -> None:
        self._session.commit()

    def rollback(self) -> None:
        self._session.rollback()

    def _find_progress(self, organization_id: str) -> OnboardingProgress | None:
        stmt = select(OnboardingProgress).where(OnboardingProgress.organization_id == organization_id)
        return self._session.scalars(stmt).one_or_none()

    @staticmethod
    def _to_record(progress: OnboardingProgress) -> OnboardingProgressRecord:
        return OnboardingProgressRecord(
            organization_id=progress.organization_id,
            completed_steps=list(progress.completed_steps or []),
            test_email_sent_at=progress.test_email_sent_at,
            automation_activated_at=progress.automation_activated_at,
        )
