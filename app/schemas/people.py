"""
app/schemas/people.py

Request/response schemas for people import endpoints.
"""

from __future__ import annotations

from typing import Any

from pydantic import Field

from app.domain.people_import import CSVError, PeopleImportResult
from app.schemas.onboarding import CamelModel, OnboardingStateResponse


class PeopleUploadRequest(CamelModel):
    csv_content: str | None = None


class CSVErrorResponse(CamelModel):
    """
    One row-level import error. Row 0 marks a file-level problem.
    """

    row: int = Field(..., ge=0)
    message: str
    field: str | None = None
    data: dict[str, Any] | None = None

    @classmethod
    def from_domain(cls, error: CSVError) -> "CSVErrorResponse":
        return cls(row=error.row, message=error.message, field=error.field, data=error.data)


class CSVValidationSummaryResponse(CamelModel):
    total_rows: int = Field(..., ge=0)
    valid_rows: int = Field(..., ge=0)
    error_rows: int = Field(..., ge=0)
    duplicate_emails: int = Field(..., ge=0)


class PeopleUploadResponse(CamelModel):
    success: bool = True
    summary: CSVValidationSummaryResponse
    errors: list[CSVErrorResponse] = Field(default_factory=list)
    onboarding: OnboardingStateResponse

    @classmethod
    def from_domain(cls, result: PeopleImportResult) -> "PeopleUploadResponse":
        return cls(
            summary=CSVValidationSummaryResponse(
                total_rows=result.summary.total_rows,
                valid_rows=result.summary.valid_rows,
                error_rows=result.summary.error_rows,
                duplicate_emails=result.summary.duplicate_emails,
            ),
            errors=[CSVErrorResponse.from_domain(error) for error in result.errors],
            onboarding=OnboardingStateResponse.from_domain(result.onboarding),
        )
