"""
app/domain/people_import.py

Domain models produced by the people CSV import pipeline.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date

from app.domain.onboarding import OnboardingState


@dataclass(frozen=True)
class ParsedPerson:
    """
    One validated roster row, ready for upsert.
    """

    full_name: str
    first_name: str
    email: str
    birthday: date
    phone: str | None = None
    department: str | None = None
    role: str | None = None
    # Optional columns the source row carried, blank or not.
    supplied_fields: frozenset[str] = frozenset()


@dataclass(frozen=True)
class CSVError:
    """
    One row-level (or, at row 0, file-level) import problem.
    """

    row: int
    message: str
    field: str | None = None
    data: dict[str, str] | None = None


@dataclass(frozen=True)
class CSVValidationSummary:
    total_rows: int
    valid_rows: int
    error_rows: int
    duplicate_emails: int


@dataclass(frozen=True)
class CSVValidationResult:
    """
    Partitioned outcome of validating one CSV document.
    """

    summary: CSVValidationSummary
    valid: list[ParsedPerson] = field(default_factory=list)
    errors: list[CSVError] = field(default_factory=list)


@dataclass(frozen=True)
class PeopleImportResult:
    """
    Upload outcome: validation summary, the (possibly truncated) error
    list and the onboarding state after persistence.
    """

    summary: CSVValidationSummary
    errors: list[CSVError]
    onboarding: OnboardingState
    persisted_rows: int = 0
