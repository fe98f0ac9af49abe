"""
tests/test_phone.py

Phone plausibility and normalization.
"""

from __future__ import annotations

import pytest

from app.validators.phone import (
    PhoneNormalizationError,
    is_plausible_phone,
    normalize_optional_phone,
    normalize_phone,
)


class TestIsPlausiblePhone:
    @pytest.mark.parametrize(
        "raw",
        [
            "08012345678",
            "0801 234 5678",
            "+2348012345678",
            "234-801-234-5678",
            "4155552671",
            "(415) 555-2671",
        ],
    )
    def test_accepts(self, raw: str) -> None:
        assert is_plausible_phone(raw)

    @pytest.mark.parametrize(
        "raw",
        [
            "",
            "12345",
            "18012345678",
            "+14155552671",
            "+447700900123",
            "23480123456789",
            "080123456789",
        ],
    )
    def test_rejects(self, raw: str) -> None:
        assert not is_plausible_phone(raw)


class TestNormalizePhone:
    def test_plus_prefixed_number_keeps_digits_only(self) -> None:
        assert normalize_phone("+234 (801) 234-5678") == "+2348012345678"

    def test_double_zero_prefix_becomes_plus(self) -> None:
        assert normalize_phone("002348012345678") == "+2348012345678"

    def test_bare_digits_without_default_country_code(self) -> None:
        assert normalize_phone("2348012345678") == "+2348012345678"
        assert normalize_phone("08012345678") == "+08012345678"

    def test_default_country_code_is_prepended(self) -> None:
        assert normalize_phone("415 555 2671", default_country_code="+1") == "+14155552671"

    def test_default_country_code_ignored_for_international_numbers(self) -> None:
        assert normalize_phone("+447700900123", default_country_code="1") == "+447700900123"

    def test_invalid_default_country_code(self) -> None:
        with pytest.raises(PhoneNormalizationError, match="DEFAULT_PHONE_COUNTRY_CODE is invalid"):
            normalize_phone("4155552671", default_country_code="+")

    def test_too_short_without_country_code(self) -> None:
        with pytest.raises(PhoneNormalizationError, match="must include country code"):
            normalize_phone("5552671")

    @pytest.mark.parametrize("raw", ["   ", ""])
    def test_blank_is_required_error(self, raw: str) -> None:
        with pytest.raises(PhoneNormalizationError, match="required"):
            normalize_phone(raw)

    @pytest.mark.parametrize("raw", ["+", "abc", "00"])
    def test_no_digits(self, raw: str) -> None:
        with pytest.raises(PhoneNormalizationError, match="Invalid phone number"):
            normalize_phone(raw)

    def test_error_is_value_error(self) -> None:
        assert issubclass(PhoneNormalizationError, ValueError)


class TestNormalizeOptionalPhone:
    @pytest.mark.parametrize("raw", [None, "", "   "])
    def test_blank_returns_none(self, raw: str | None) -> None:
        assert normalize_optional_phone(raw) is None

    def test_value_is_normalized(self) -> None:
        assert normalize_optional_phone(" +2348012345678 ") == "+2348012345678"
