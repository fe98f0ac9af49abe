"""
app/repositories/person_repository.py

Persistence for roster entries.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from sqlalchemy import func, select
from sqlalchemy.dialects.postgresql import Insert, insert
from sqlalchemy.orm import Session

from app.domain.people_import import ParsedPerson
from db.base import new_id
from db.models.person import Person

_DEFAULT_BATCH_SIZE = 500
_UPSERT_CONSTRAINT = "uq_people_organization_id_email"
_ALWAYS_UPDATED_COLUMNS = ("full_name", "first_name", "phone", "birthday")
# Overwritten only when the import row carried the column.
_SUPPLIED_ONLY_COLUMNS = ("department", "role")


def update_columns_for(person: ParsedPerson) -> tuple[str, ...]:
    """
    Columns an upsert may overwrite on an existing row for this person.
    """

    return _ALWAYS_UPDATED_COLUMNS + tuple(
        column for column in _SUPPLIED_ONLY_COLUMNS if column in person.supplied_fields
    )


def build_upsert_statement(payloads: list[dict[str, Any]], update_columns: Sequence[str]) -> Insert:
    stmt = insert(Person).values(payloads)
    return stmt.on_conflict_do_update(
        constraint=_UPSERT_CONSTRAINT,
        set_={
            **{column: stmt.excluded[column] for column in update_columns},
            "updated_at": func.now(),
        },
    ).returning(Person.id)


class PersonRepository:
    """
    Repository for person upserts and roster reads.
    """

    def __init__(self, session: Session) -> None:
        self._session = session

    def upsert_people(
        self,
        organization_id: str,
        people: Sequence[ParsedPerson],
        *,
        batch_size: int = _DEFAULT_BATCH_SIZE,
    ) -> int:
        """
        Insert or update people keyed on (organization_id, email).

        Department and role of existing rows are kept unless the import
        row supplied those columns. Opt-out flags are never touched.
        Rows are grouped by the columns they overwrite so each batch
        shares one ON CONFLICT clause.
        """

        if not people:
            return 0

        groups: dict[tuple[str, ...], list[dict[str, Any]]] = {}
        for person in people:
            groups.setdefault(update_columns_for(person), []).append(
                self._to_payload(organization_id, person)
            )

        size = max(1, batch_size)
        written = 0
        for update_columns, payloads in groups.items():
            for start in range(0, len(payloads), size):
                stmt = build_upsert_statement(payloads[start : start + size], update_columns)
                written += len(self._session.scalars(stmt).all())

        return written

    def list_people(self, organization_id: str) -> list[Person]:
        stmt = (
            select(Person)
            .where(Person.organization_id == organization_id)
            .order_by(Person.full_name.asc())
        )
        return list(self._session.scalars(stmt).all())

    @staticmethod
    def _to_payload(organization_id: str, person: ParsedPerson) -> dict[str, Any]:
        return {
            "id": new_id(),
            "organization_id": organization_id,
            "full_name": person.full_name,
            "first_name": person.first_name,
            "email": person.email,
            "phone": person.phone,
            "birthday": person.birthday,
            "department": person.department,
            "role": person.role,
            "opted_out": False,
        }
