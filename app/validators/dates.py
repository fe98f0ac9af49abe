"""
app/validators/dates.py

Birthday parsing across the date layouts people actually type.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date

MIN_BIRTH_YEAR = 1900


@dataclass(frozen=True)
class DatePattern:
    name: str
    regex: re.Pattern[str]
    order: tuple[str, str, str]


_SLASH = re.compile(r"([0-9]{1,2})/([0-9]{1,2})/([0-9]{4})")

# Tried in order. Both slash layouts share one regex, so the day-first
# reading wins whenever it yields a real date.
BIRTHDAY_PATTERNS: tuple[DatePattern, ...] = (
    DatePattern("YYYY-MM-DD", re.compile(r"([0-9]{4})-([0-9]{1,2})-([0-9]{1,2})"), ("year", "month", "day")),
    DatePattern("DD/MM/YYYY", _SLASH, ("day", "month", "year")),
    DatePattern("MM/DD/YYYY", _SLASH, ("month", "day", "year")),
    DatePattern("DD-MM-YYYY", re.compile(r"([0-9]{1,2})-([0-9]{1,2})-([0-9]{4})"), ("day", "month", "year")),
)


class BirthdayParseError(ValueError):
    """
    Raised when no supported layout yields a real calendar date.
    """

    def __init__(self, raw: str) -> None:
        super().__init__(
            f'Invalid date format "{raw}". Use YYYY-MM-DD (e.g. 1990-05-23) or DD/MM/YYYY'
        )
        self.raw = raw


def parse_birthday(raw: str, *, today: date) -> date:
    """
    Parse a birthday string.

    Each layout's components are range-checked (month 1-12, day 1-31,
    year 1900 through the current year) and then built into a real
    ``date`` so impossible days such as 31 February are rejected. A
    failing layout falls through to the next one.
    """

    for pattern in BIRTHDAY_PATTERNS:
        match = pattern.regex.fullmatch(raw)
        if match is None:
            continue

        parts = {key: int(group) for key, group in zip(pattern.order, match.groups())}
        year, month, day = parts["year"], parts["month"], parts["day"]

        if not 1 <= month <= 12:
            continue
        if not 1 <= day <= 31:
            continue
        if not MIN_BIRTH_YEAR <= year <= today.year:
            continue

        try:
            return date(year, month, day)
        except ValueError:
            continue

    raise BirthdayParseError(raw)
