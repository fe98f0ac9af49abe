"""
app/config.py

Application-level configuration helpers.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

from db.config import load_env_files

DEFAULT_FROM_EMAIL = "notifications@mail.usemomentos.xyz"


@lru_cache(maxsize=1)
def _load_env_once() -> None:
    """
    Ensure project `.env` files are loaded once before reading app settings.
    """

    load_env_files()


def _get_bool_env(name: str, default: bool) -> bool:
    """
    Read a boolean from environment variables with safe fallback.
    """

    _load_env_once()
    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    return raw_value.strip().lower() in {"1", "true", "yes", "on"}


def _get_int_env(name: str, default: int) -> int:
    """
    Read an integer from environment variables with safe fallback.
    """

    _load_env_once()
    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    try:
        return int(raw_value)
    except ValueError:
        return default


def _get_str_env(name: str, default: str) -> str:
    """
    Read a string from environment variables with fallback.
    """

    _load_env_once()
    value = os.getenv(name)
    if value is None:
        return default
    stripped = value.strip()
    return stripped if stripped else default


def _get_optional_str_env(name: str) -> str | None:
    """
    Read an optional string value from environment variables.
    """

    _load_env_once()
    value = os.getenv(name)
    if value is None:
        return None
    stripped = value.strip()
    return stripped if stripped else None


@dataclass(frozen=True)
class CSVImportSettings:
    """
    Runtime settings for people CSV imports.
    """

    max_validation_errors: int = 500
    log_validation_errors: bool = True


@dataclass(frozen=True)
class PhoneSettings:
    """
    Phone normalization settings.

    default_country_code is prepended to numbers written without a
    leading ``+`` or ``00``.
    """

    default_country_code: str | None = None


@dataclass(frozen=True)
class OnboardingSettings:
    """
    Onboarding checklist settings.
    """

    default_from_email: str | None = DEFAULT_FROM_EMAIL


@lru_cache(maxsize=1)
def get_csv_import_settings() -> CSVImportSettings:
    """
    Return cached CSV import settings from environment variables.
    """

    return CSVImportSettings(
        max_validation_errors=max(1, _get_int_env("CSV_IMPORT_MAX_VALIDATION_ERRORS", 500)),
        log_validation_errors=_get_bool_env("CSV_IMPORT_LOG_VALIDATION_ERRORS", True),
    )


@lru_cache(maxsize=1)
def get_phone_settings() -> PhoneSettings:
    """
    Return cached phone normalization settings.
    """

    return PhoneSettings(default_country_code=_get_optional_str_env("DEFAULT_PHONE_COUNTRY_CODE"))


@lru_cache(maxsize=1)
def get_onboarding_settings() -> OnboardingSettings:
    """
    Return cached onboarding settings.
    """

    return OnboardingSettings(
        default_from_email=_get_str_env("DEFAULT_FROM_EMAIL", DEFAULT_FROM_EMAIL),
    )
