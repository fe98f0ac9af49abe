"""
tests/test_birthday_parsing.py

Birthday layouts, their precedence and calendar validation.
"""

from __future__ import annotations

from datetime import date

import pytest

from app.validators.dates import BirthdayParseError, parse_birthday

TODAY = date(2026, 10, 19)


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("1990-05-23", date(1990, 5, 23)),
        ("1990-5-3", date(1990, 5, 3)),
        ("23/05/1990", date(1990, 5, 23)),
        ("23-05-1990", date(1990, 5, 23)),
        ("1900-01-01", date(1900, 1, 1)),
        ("2026-01-01", date(2026, 1, 1)),
    ],
)
def test_supported_layouts(raw: str, expected: date) -> None:
    assert parse_birthday(raw, today=TODAY) == expected


def test_ambiguous_slash_date_prefers_day_first() -> None:
    assert parse_birthday("03/04/2020", today=TODAY) == date(2020, 4, 3)


def test_month_first_used_when_day_first_is_out_of_range() -> None:
    assert parse_birthday("12/25/2020", today=TODAY) == date(2020, 12, 25)


def test_leap_day_accepted_in_leap_year() -> None:
    assert parse_birthday("2020-02-29", today=TODAY) == date(2020, 2, 29)
    assert parse_birthday("29/02/2000", today=TODAY) == date(2000, 2, 29)


@pytest.mark.parametrize(
    "raw",
    [
        "02/30/2020",
        "2019-02-29",
        "2021-04-31",
        "1899-12-31",
        "2027-01-01",
        "1990-13-01",
        "1990-00-10",
        "00/01/1990",
        "May 23, 1990",
        "1990/05/23",
        "90-05-23",
        "",
        "1990-05-23T00:00:00",
        "１９９０-05-23",
    ],
)
def test_rejected_values(raw: str) -> None:
    with pytest.raises(BirthdayParseError) as exc_info:
        parse_birthday(raw, today=TODAY)

    assert exc_info.value.raw == raw
    assert str(exc_info.value) == (
        f'Invalid date format "{raw}". Use YYYY-MM-DD (e.g. 1990-05-23) or DD/MM/YYYY'
    )


def test_trailing_newline_is_not_accepted() -> None:
    with pytest.raises(BirthdayParseError):
        parse_birthday("1990-05-23\n", today=TODAY)


def test_upper_year_bound_follows_today() -> None:
    assert parse_birthday("2027-01-01", today=date(2027, 1, 2)) == date(2027, 1, 1)
