"""
app/validators/person_schema.py

Field-level contract for one person row after header normalization.
"""

from __future__ import annotations

from email_validator import EmailNotValidError, validate_email
from pydantic import BaseModel, ConfigDict, ValidationError, field_validator
from pydantic_core import PydanticCustomError

FULL_NAME_MAX_LENGTH = 200
OPTIONAL_FIELDS = frozenset({"phone", "first_name", "department", "role"})


class PersonRowSchema(BaseModel):
    """
    Required: full_name (1-200 chars), a syntactically valid email and a
    non-empty birthday string. Everything else is optional; unknown
    columns are ignored.
    """

    model_config = ConfigDict(extra="ignore", str_strip_whitespace=True)

    full_name: str
    email: str
    birthday: str
    phone: str | None = None
    first_name: str | None = None
    department: str | None = None
    role: str | None = None

    @field_validator("full_name")
    @classmethod
    def _check_full_name(cls, value: str) -> str:
        if not value:
            raise PydanticCustomError("full_name_required", "Full name is required")
        if len(value) > FULL_NAME_MAX_LENGTH:
            raise PydanticCustomError(
                "full_name_too_long",
                "Full name must be at most {max_length} characters",
                {"max_length": FULL_NAME_MAX_LENGTH},
            )
        return value

    @field_validator("email")
    @classmethod
    def _check_email(cls, value: str) -> str:
        try:
            validate_email(value, check_deliverability=False, test_environment=True)
        except EmailNotValidError as exc:
            raise PydanticCustomError("invalid_email", "Invalid email address") from exc
        return value

    @field_validator("birthday")
    @classmethod
    def _check_birthday(cls, value: str) -> str:
        if not value:
            raise PydanticCustomError("birthday_required", "Birthday is required")
        return value

    @field_validator("phone", "first_name", "department", "role")
    @classmethod
    def _blank_to_none(cls, value: str | None) -> str | None:
        return value or None


def format_validation_error(exc: ValidationError) -> str:
    """
    Flatten pydantic errors into one ``field: message; field: message`` line.
    """

    return "; ".join(
        f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
        for error in exc.errors()
    )
