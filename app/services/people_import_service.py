"""
app/services/people_import_service.py

Service layer for people CSV uploads: validate, upsert the valid rows,
then report onboarding progress.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from functools import lru_cache

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.config import get_csv_import_settings, get_phone_settings
from app.domain.people_import import CSVError, PeopleImportResult
from app.logging_utils import log_event
from app.repositories.person_repository import PersonRepository
from app.services.onboarding_service import OnboardingService, build_onboarding_service
from app.validators.csv_validator import CSVValidator

logger = logging.getLogger(__name__)


class PeopleImportPersistenceError(RuntimeError):
    """
    Raised when valid rows cannot be persisted.
    """


class PeopleImportService:
    """
    Coordinates CSV validation, person upserts and the onboarding refresh.
    """

    def __init__(
        self,
        *,
        max_validation_errors: int,
        log_validation_errors: bool,
        validator: CSVValidator | None = None,
        person_repository_factory: Callable[[Session], PersonRepository] = PersonRepository,
        onboarding_service_factory: Callable[[Session], OnboardingService] = build_onboarding_service,
    ) -> None:
        self._max_validation_errors = max(1, max_validation_errors)
        self._log_validation_errors = log_validation_errors
        self._validator = validator or CSVValidator()
        self._person_repository_factory = person_repository_factory
        self._onboarding_service_factory = onboarding_service_factory

    def import_csv(
        self,
        *,
        csv_content: str,
        organization_id: str,
        db: Session,
    ) -> PeopleImportResult:
        """
        Validate CSV text and upsert every valid row for the organization.

        Invalid rows never block valid ones. The caller owns the session
        lifecycle; this method commits after a successful upsert.
        """

        validation = self._validator.validate(csv_content)
        for error in validation.errors:
            self._log_error(organization_id, error)

        persisted = 0
        if validation.valid:
            repository = self._person_repository_factory(db)
            try:
                persisted = repository.upsert_people(organization_id, validation.valid)
                db.commit()
            except SQLAlchemyError as exc:
                db.rollback()
                raise PeopleImportPersistenceError("Failed to persist imported people.") from exc

        onboarding = self._onboarding_service_factory(db).compute_state(organization_id)

        log_event(
            logger,
            logging.INFO,
            "people_import_completed",
            organization_id=organization_id,
            total_rows=validation.summary.total_rows,
            valid_rows=validation.summary.valid_rows,
            error_rows=validation.summary.error_rows,
            persisted_rows=persisted,
        )

        return PeopleImportResult(
            summary=validation.summary,
            errors=validation.errors[: self._max_validation_errors],
            onboarding=onboarding,
            persisted_rows=persisted,
        )

    def _log_error(self, organization_id: str, error: CSVError) -> None:
        if not self._log_validation_errors:
            return
        value = error.data.get(error.field) if error.data and error.field else None
        logger.warning(
            "CSV import error organization=%s row=%s field=%s message=%s value=%r",
            organization_id,
            error.row,
            error.field,
            error.message,
            value,
        )


@lru_cache(maxsize=1)
def get_people_import_service() -> PeopleImportService:
    """
    Build and cache the import service with env-driven settings.
    """

    settings = get_csv_import_settings()
    return PeopleImportService(
        max_validation_errors=settings.max_validation_errors,
        log_validation_errors=settings.log_validation_errors,
        validator=CSVValidator(default_country_code=get_phone_settings().default_country_code),
    )
