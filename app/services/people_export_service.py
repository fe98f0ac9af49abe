"""
app/services/people_export_service.py

CSV rendering of an organization's roster.
"""

from __future__ import annotations

from collections.abc import Iterable

from app.validators.csv_validator import render_csv
from db.models.person import Person

EXPORT_HEADERS: tuple[str, ...] = (
    "full_name",
    "first_name",
    "email",
    "phone",
    "birthday",
    "department",
    "role",
    "opted_out",
)


def render_people_csv(people: Iterable[Person]) -> str:
    rows = (
        (
            person.full_name,
            person.first_name,
            person.email,
            person.phone,
            person.birthday.isoformat(),
            person.department,
            person.role,
            "true" if person.opted_out else "false",
        )
        for person in people
    )
    return render_csv(EXPORT_HEADERS, rows)
