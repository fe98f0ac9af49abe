"""
app/validators package marker.
"""

from app.validators.csv_validator import CSVValidator
from app.validators.dates import BirthdayParseError, parse_birthday
from app.validators.phone import PhoneNormalizationError, is_plausible_phone, normalize_phone

__all__ = [
    "BirthdayParseError",
    "CSVValidator",
    "PhoneNormalizationError",
    "is_plausible_phone",
    "normalize_phone",
    "parse_birthday",
]
