"""
app/validators/csv_validator.py

Parsing and row-level validation for people CSV imports.
"""

from __future__ import annotations

import csv
import io
from collections.abc import Callable, Iterable, Mapping
from datetime import date

from pydantic import ValidationError

from app.domain.people_import import CSVError, CSVValidationResult, CSVValidationSummary, ParsedPerson
from app.validators.dates import BirthdayParseError, parse_birthday
from app.validators.person_schema import OPTIONAL_FIELDS, PersonRowSchema, format_validation_error
from app.validators.phone import (
    ACCEPTED_PHONE_FORMATS,
    PhoneNormalizationError,
    is_plausible_phone,
    normalize_optional_phone,
)

_BOM = "\ufeff"
_HEADER_ROW_OFFSET = 2
_QUOTE = '"'
_INLINE_SPACE = " \t"
_FIELD_END = ",\r\n"

HEADER_SYNONYMS: dict[str, str] = {
    "full_name": "full_name",
    "fullname": "full_name",
    "name": "full_name",
    "full name": "full_name",
    "email": "email",
    "email address": "email",
    "e-mail": "email",
    "phone": "phone",
    "phone number": "phone",
    "phonenumber": "phone",
    "mobile": "phone",
    "mobile number": "phone",
    "whatsapp": "phone",
    "whatsapp number": "phone",
    "birthday": "birthday",
    "birth_day": "birthday",
    "date_of_birth": "birthday",
    "dob": "birthday",
    "birth date": "birthday",
    "first_name": "first_name",
    "firstname": "first_name",
    "first name": "first_name",
    "department": "department",
    "dept": "department",
    "role": "role",
    "position": "role",
    "title": "role",
}

SAMPLE_CSV_HEADERS: tuple[str, ...] = (
    "full_name",
    "email",
    "phone",
    "birthday",
    "first_name",
    "department",
    "role",
)

_SAMPLE_CSV_ROWS: tuple[tuple[str, ...], ...] = (
    (
        "Jane Doe",
        "jane.doe@example.com",
        "+14155552671",
        "1990-05-23",
        "Jane",
        "Engineering",
        "Software Engineer",
    ),
    (
        "John Smith",
        "john.smith@example.com",
        "+447700900123",
        "1985-12-15",
        "John",
        "Marketing",
        "Marketing Manager",
    ),
    (
        "Mary Johnson",
        "mary.j@example.com",
        "+2348012345678",
        "1992-03-08",
        "Mary",
        "Sales",
        "Sales Representative",
    ),
)


class CSVParseError(ValueError):
    """
    Raised when CSV text cannot be tokenized into header-mapped records.
    """


def quote_csv_cell(value: str | None) -> str:
    """
    Wrap one cell in double quotes, doubling any embedded quote.
    """

    return '"' + (value or "").replace('"', '""') + '"'


def render_csv(header: Iterable[str], rows: Iterable[Iterable[str | None]]) -> str:
    """
    Bare header line followed by fully quoted rows, joined with ``\\n``.
    """

    lines = [",".join(header)]
    lines.extend(",".join(quote_csv_cell(cell) for cell in row) for row in rows)
    return "\n".join(lines)


def _trim_around_quoted_fields(text: str) -> str:
    """
    Drop spaces and tabs between a delimiter and an opening quote, and
    between a closing quote and the next delimiter or line break.

    Quoted content is copied untouched. Any other text after a closing
    quote is kept so the strict reader still rejects it.
    """

    out: list[str] = []
    pending: list[str] = []
    in_quotes = False
    at_field_start = True
    after_quote = False
    index = 0

    while index < len(text):
        char = text[index]
        index += 1

        if in_quotes:
            out.append(char)
            if char == _QUOTE:
                if text.startswith(_QUOTE, index):
                    out.append(_QUOTE)
                    index += 1
                else:
                    in_quotes = False
                    after_quote = True
            continue

        if char in _INLINE_SPACE and (at_field_start or after_quote):
            pending.append(char)
            continue

        opens_quote = char == _QUOTE and at_field_start
        if opens_quote or (after_quote and char in _FIELD_END):
            pending.clear()
        out.extend(pending)
        pending.clear()
        out.append(char)

        in_quotes = opens_quote
        at_field_start = char in _FIELD_END
        after_quote = False

    if not after_quote:
        out.extend(pending)
    return "".join(out)


def read_csv_records(csv_content: str) -> list[dict[str, str]]:
    """
    Tokenize CSV text into header-keyed records with trimmed values.

    A leading byte-order mark is dropped, blank lines are skipped and
    whitespace around quoted fields is ignored.
    Unterminated quotes, stray characters after a closing quote and rows
    whose field count differs from the header raise CSVParseError.
    """

    text = csv_content[1:] if csv_content.startswith(_BOM) else csv_content
    reader = csv.reader(io.StringIO(_trim_around_quoted_fields(text), newline=""), strict=True)
    header: list[str] | None = None
    records: list[dict[str, str]] = []

    try:
        for cells in reader:
            if _is_blank_line(cells):
                continue
            values = [cell.strip() for cell in cells]
            if header is None:
                header = values
                continue
            if len(values) != len(header):
                raise CSVParseError(
                    f"Invalid record length on line {reader.line_num}: "
                    f"expected {len(header)} fields, got {len(values)}"
                )
            records.append(dict(zip(header, values)))
    except csv.Error as exc:
        raise CSVParseError(f"{exc} (line {reader.line_num})") from exc

    return records


def normalize_keys(record: Mapping[str, str]) -> dict[str, str]:
    """
    Map header synonyms onto canonical field names.

    Unknown headers are kept lower-cased and trimmed.
    """

    normalized: dict[str, str] = {}
    for key, value in record.items():
        lowered = key.strip().lower()
        normalized[HEADER_SYNONYMS.get(lowered, lowered)] = value
    return normalized


def extract_first_name(full_name: str) -> str:
    return full_name.split(" ")[0]


def _is_blank_line(cells: list[str]) -> bool:
    return not cells or (len(cells) == 1 and not cells[0].strip())


class CSVValidator:
    """
    Turns CSV text into ParsedPerson rows plus structured row errors.

    Only a structurally broken file yields a file-level error; every
    data problem is reported against its row and the batch continues.
    """

    def __init__(
        self,
        *,
        default_country_code: str | None = None,
        today: Callable[[], date] = date.today,
    ) -> None:
        self._default_country_code = default_country_code
        self._today = today

    def validate(self, csv_content: str) -> CSVValidationResult:
        try:
            records = read_csv_records(csv_content)
        except CSVParseError as exc:
            return CSVValidationResult(
                valid=[],
                errors=[CSVError(row=0, message=f"CSV parsing failed: {exc}")],
                summary=CSVValidationSummary(
                    total_rows=0,
                    valid_rows=0,
                    error_rows=1,
                    duplicate_emails=0,
                ),
            )

        errors: list[CSVError] = []
        valid: list[ParsedPerson] = []
        seen_emails: dict[str, int] = {}
        today = self._today()

        if not records:
            errors.append(CSVError(row=0, message="CSV file is empty or contains no valid data rows"))

        for index, raw_record in enumerate(records):
            row_number = index + _HEADER_ROW_OFFSET
            outcome = self._validate_record(
                record=normalize_keys(raw_record),
                row_number=row_number,
                seen_emails=seen_emails,
                today=today,
            )
            if isinstance(outcome, CSVError):
                errors.append(outcome)
            else:
                valid.append(outcome)

        return CSVValidationResult(
            valid=valid,
            errors=errors,
            summary=CSVValidationSummary(
                total_rows=len(records),
                valid_rows=len(valid),
                error_rows=len(errors),
                # Emails claimed by rows that later failed the phone check.
                duplicate_emails=len(seen_emails) - len(valid),
            ),
        )

    def _validate_record(
        self,
        *,
        record: dict[str, str],
        row_number: int,
        seen_emails: dict[str, int],
        today: date,
    ) -> ParsedPerson | CSVError:
        try:
            row = PersonRowSchema.model_validate(record)
        except ValidationError as exc:
            return CSVError(row=row_number, message=format_validation_error(exc), data=record)

        try:
            birthday = parse_birthday(row.birthday, today=today)
        except BirthdayParseError as exc:
            return CSVError(row=row_number, field="birthday", message=str(exc), data=record)

        email = row.email.lower()
        first_row = seen_emails.get(email)
        if first_row is not None:
            return CSVError(
                row=row_number,
                field="email",
                message=f"Duplicate email (first seen at row {first_row})",
                data=record,
            )
        seen_emails[email] = row_number

        phone: str | None = None
        if row.phone:
            if not is_plausible_phone(row.phone):
                return CSVError(
                    row=row_number,
                    field="phone",
                    message=f"Invalid phone number format. Use: {ACCEPTED_PHONE_FORMATS}",
                    data=record,
                )
            try:
                phone = normalize_optional_phone(
                    row.phone,
                    default_country_code=self._default_country_code,
                )
            except PhoneNormalizationError as exc:
                return CSVError(
                    row=row_number,
                    field="phone",
                    message=str(exc) or "Invalid phone number",
                    data=record,
                )

        return ParsedPerson(
            full_name=row.full_name,
            first_name=row.first_name or extract_first_name(row.full_name),
            email=email,
            phone=phone,
            birthday=birthday,
            department=row.department,
            role=row.role,
            supplied_fields=frozenset(row.model_fields_set & OPTIONAL_FIELDS),
        )

    @staticmethod
    def generate_sample_csv() -> str:
        """
        Three-row example file offered as a download.
        """

        return render_csv(SAMPLE_CSV_HEADERS, _SAMPLE_CSV_ROWS)
