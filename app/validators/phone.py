"""
app/validators/phone.py

Phone plausibility check and canonical ``+<digits>`` normalization.
"""

from __future__ import annotations

import re

_NON_DIGIT = re.compile(r"[^0-9]")
_NON_DIGIT_OR_PLUS = re.compile(r"[^0-9+]")

ACCEPTED_PHONE_FORMATS = "08012345678 or +2348012345678"
_LOCAL_LENGTH = 10
_TRUNK_LENGTH = 11
_COUNTRY_PREFIX = "234"
_INTERNATIONAL_LENGTH = 13


class PhoneNormalizationError(ValueError):
    """
    Raised when a phone number cannot be turned into ``+<digits>`` form.
    """


def is_plausible_phone(raw: str) -> bool:
    """
    Lenient shape check applied before normalization.

    Accepts a bare 10-digit local number, an 11-digit number with a
    leading 0, or a 13-digit number carrying the 234 country prefix.
    Separators and a leading ``+`` are ignored.
    """

    digits = _NON_DIGIT.sub("", raw)
    if digits.startswith("0") and len(digits) == _TRUNK_LENGTH:
        return True
    if digits.startswith(_COUNTRY_PREFIX) and len(digits) == _INTERNATIONAL_LENGTH:
        return True
    return len(digits) == _LOCAL_LENGTH


def normalize_phone(raw: str, *, default_country_code: str | None = None) -> str:
    """
    Normalize a phone number to ``+<digits>``.

    ``00`` is treated as an international prefix. Numbers without one get
    ``default_country_code`` prepended when configured; otherwise they
    must already be 10 to 15 digits long.
    """

    trimmed = raw.strip()
    if not trimmed:
        raise PhoneNormalizationError("Phone number is required")

    cleaned = _NON_DIGIT_OR_PLUS.sub("", trimmed)
    if cleaned.startswith("00"):
        cleaned = f"+{cleaned[2:]}"

    digits = _NON_DIGIT.sub("", cleaned)
    if not digits:
        raise PhoneNormalizationError("Invalid phone number")

    if cleaned.startswith("+"):
        return f"+{digits}"

    if default_country_code is not None:
        country_code = _NON_DIGIT.sub("", default_country_code)
        if not country_code:
            raise PhoneNormalizationError("DEFAULT_PHONE_COUNTRY_CODE is invalid")
        return f"+{country_code}{digits}"

    if 10 <= len(digits) <= 15:
        return f"+{digits}"

    raise PhoneNormalizationError("Phone number must include country code")


def normalize_optional_phone(
    raw: str | None,
    *,
    default_country_code: str | None = None,
) -> str | None:
    """
    Like normalize_phone, but blank or missing input yields None.
    """

    if raw is None or not raw.strip():
        return None
    return normalize_phone(raw, default_country_code=default_country_code)
