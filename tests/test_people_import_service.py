"""
tests/test_people_import_service.py

Unit tests for PeopleImportService orchestration.
"""

from __future__ import annotations

import logging
import unittest
from datetime import date

from sqlalchemy.exc import OperationalError

from app.services.onboarding_service import OnboardingService
from app.services.people_import_service import PeopleImportPersistenceError, PeopleImportService
from app.validators.csv_validator import CSVValidator
from tests.fakes import FakeOnboardingStore, FakePersonRepository, FakeSession

ORG_ID = "org-42"

HEADER = "full_name,email,phone,birthday\n"
VALID_CSV = (
    HEADER
    + "Ada Lovelace,ada@acme.io,08012345678,1990-05-23\n"
    + "Alan Turing,alan@acme.io,,23/06/1912\n"
)


class TestPeopleImportService(unittest.TestCase):
    def setUp(self) -> None:
        self.session = FakeSession()
        self.repository = FakePersonRepository()
        self.store = FakeOnboardingStore()

    def _service(self, **overrides) -> PeopleImportService:
        options = {
            "max_validation_errors": 500,
            "log_validation_errors": False,
            "validator": CSVValidator(today=lambda: date(2026, 10, 19)),
            "person_repository_factory": lambda _db: self.repository,
            "onboarding_service_factory": lambda _db: OnboardingService(
                store=self.store,
                default_from_email=None,
            ),
        }
        options.update(overrides)
        return PeopleImportService(**options)

    def _import(self, csv_content: str, **overrides):
        return self._service(**overrides).import_csv(
            csv_content=csv_content,
            organization_id=ORG_ID,
            db=self.session,
        )

    def test_valid_rows_are_upserted_and_committed(self) -> None:
        result = self._import(VALID_CSV)

        self.assertEqual(result.summary.total_rows, 2)
        self.assertEqual(result.summary.valid_rows, 2)
        self.assertEqual(result.persisted_rows, 2)
        self.assertEqual(len(self.repository.upserts), 1)
        organization_id, people = self.repository.upserts[0]
        self.assertEqual(organization_id, ORG_ID)
        self.assertEqual([person.email for person in people], ["ada@acme.io", "alan@acme.io"])
        self.assertEqual(self.session.commits, 1)

    def test_onboarding_reflects_new_people(self) -> None:
        self.store.people_count = 2

        result = self._import(VALID_CSV)

        self.assertTrue(result.onboarding.has_people)
        self.assertIn("add_people", result.onboarding.completed_steps)
        self.assertEqual(result.onboarding.current_step_id, "choose_template")

    def test_no_valid_rows_skips_persistence(self) -> None:
        result = self._import(HEADER + "Ada Lovelace,not-an-email,,1990-05-23\n")

        self.assertEqual(result.summary.valid_rows, 0)
        self.assertEqual(result.summary.error_rows, 1)
        self.assertEqual(self.repository.upserts, [])
        self.assertEqual(self.session.commits, 0)
        self.assertEqual(result.onboarding.current_step_id, "add_people")

    def test_parse_failure_still_returns_onboarding(self) -> None:
        result = self._import('full_name,email\n"Ada,ada@acme.io\n')

        self.assertEqual(result.errors[0].row, 0)
        self.assertTrue(result.errors[0].message.startswith("CSV parsing failed"))
        self.assertEqual(self.repository.upserts, [])
        self.assertIsNotNone(result.onboarding)

    def test_persistence_failure_rolls_back_and_raises(self) -> None:
        self.repository = FakePersonRepository(error=OperationalError("INSERT", {}, Exception("down")))

        with self.assertRaises(PeopleImportPersistenceError):
            self._import(VALID_CSV)

        self.assertEqual(self.session.rollbacks, 1)
        self.assertEqual(self.session.commits, 0)

    def test_errors_are_truncated_but_summary_is_not(self) -> None:
        rows = "".join(f"Person {i},bad-email-{i},,1990-05-23\n" for i in range(5))

        result = self._import(HEADER + rows, max_validation_errors=2)

        self.assertEqual(result.summary.error_rows, 5)
        self.assertEqual(len(result.errors), 2)
        self.assertEqual([error.row for error in result.errors], [2, 3])

    def test_row_errors_logged_when_enabled(self) -> None:
        with self.assertLogs("app.services.people_import_service", level=logging.WARNING) as captured:
            self._import(
                HEADER + "Ada Lovelace,ada@acme.io,12,1990-05-23\n",
                log_validation_errors=True,
            )

        self.assertTrue(any("row=2" in line and "field=phone" in line for line in captured.output))


if __name__ == "__main__":
    unittest.main()
