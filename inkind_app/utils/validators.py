"""
Field parsers and validators shared by the JSON routes and the CSV importer.

Every validator either returns a normalized value or raises
``ValidationError`` with a message that names the offending field, so callers
can surface the message verbatim. The ``normalize_*`` helpers are the lenient
variants used by the donation importer: they drop unusable values instead of
raising.
"""

from __future__ import annotations

import math
import re
from datetime import date, datetime

# General-ledger accounts a donation may be booked against.
ALLOWED_GL_CODES: dict[str, str] = {
    "7601": "Food",
    "7604": "Transportation",
    "7606": "Personal Needs",
    "7607": "General",
    "7101": "Rent/Space",
    "7301": "Client Meals",
    "7404": "Contracted Outside Services",
    "7380": "Supplies",
}

EMAIL_REGEX = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
ZIP_REGEX = re.compile(r"^\d{5}$")
STATE_REGEX = re.compile(r"^[A-Z]{2}$")
CODE_REGEX = re.compile(r"^[A-Z0-9_-]{2,50}$")
GL_REGEX = re.compile(r"^\d{4}$")
# Grouped form is tried first, so an ungrouped run stops after three digits ("1500" reads as 150).
MONEY_REGEX = re.compile(r"-?\d{1,3}(?:,\d{3})*(?:\.\d+)?|-?\d+(?:\.\d+)?")

_DATE_FORMATS = (
    "%Y-%m-%d",
    "%Y/%m/%d",
    "%m/%d/%Y",
    "%m/%d/%y",
    "%m-%d-%Y",
    "%B %d, %Y",
    "%b %d, %Y",
    "%d %B %Y",
    "%d %b %Y",
)

_TRUE_STRINGS = {"true", "1", "yes", "y", "on"}
_FALSE_STRINGS = {"false", "0", "no", "n", "off"}


class ValidationError(ValueError):
    """Raised when a field value fails validation."""


def _to_number(value) -> float | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        text = str(value).strip()
        if not text:
            return None
        try:
            number = float(text)
        except ValueError:
            return None
    return number if math.isfinite(number) else None


def validate_gl_acct(value) -> str:
    if value is None or value == "":
        raise ValidationError("gl_acct is required.")
    normalized = str(value).strip()
    if not GL_REGEX.match(normalized):
        raise ValidationError("gl_acct must be exactly 4 digits.")
    if normalized not in ALLOWED_GL_CODES:
        raise ValidationError("gl_acct must be one of the allowed GL codes.")
    return normalized


def parse_date(text: str) -> date | None:
    """Parse the date spellings commonly found in spreadsheets; None if unparseable."""
    for fmt in _DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    except ValueError:
        return None


def validate_date(value) -> date:
    """Return the calendar date for ``value`` (serialized as ``YYYY-MM-DD``)."""
    if not value:
        raise ValidationError("date_received is required.")
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    parsed = parse_date(str(value).strip())
    if parsed is None:
        raise ValidationError("date_received must be a valid date.")
    return parsed


def validate_quantity(value) -> float:
    if value is None:
        raise ValidationError("quantity is required.")
    number = _to_number(value)
    if number is None:
        raise ValidationError("quantity must be a number.")
    return number


def validate_amount(value) -> float:
    if value is None:
        raise ValidationError("amount is required.")
    number = _to_number(value)
    if number is None:
        raise ValidationError("amount must be a valid number.")
    return round(number, 2)


def validate_optional_string(value, label: str, max_length: int | None = 500) -> str | None:
    if value is None:
        return None
    normalized = str(value).strip()
    if not normalized:
        return None
    if max_length is not None and len(normalized) > max_length:
        raise ValidationError(f"{label} must be {max_length} characters or fewer.")
    return normalized


def validate_required_string(value, label: str, max_length: int = 255) -> str:
    normalized = validate_optional_string(value, label, max_length)
    if normalized is None:
        raise ValidationError(f"{label} is required.")
    return normalized


def validate_choice(value, label: str, choices) -> str:
    if value is None:
        raise ValidationError(f"{label} is required.")
    normalized = str(value).strip()
    if normalized not in choices:
        raise ValidationError(f"{label} must be one of: {', '.join(choices)}")
    return normalized


def validate_code(value, label: str) -> str:
    """Upper-case an organization/ministry code and check its shape."""
    if value is None:
        raise ValidationError(f"{label} is required.")
    normalized = str(value).strip().upper()
    if not CODE_REGEX.match(normalized):
        raise ValidationError(f"{label} must be 2-50 characters using letters, numbers, hyphens, or underscores.")
    return normalized


def validate_optional_code(value, label: str) -> str | None:
    if value is None or not str(value).strip():
        return None
    return validate_code(value, label)


def validate_positive_id(value, label: str) -> int:
    if value is None or value == "":
        raise ValidationError(f"{label} is required.")
    number = _to_number(value)
    if number is None or not number.is_integer() or number <= 0:
        raise ValidationError(f"{label} must be a positive integer.")
    return int(number)


def validate_optional_id(value, label: str) -> int | None:
    if value is None or value == "":
        return None
    return validate_positive_id(value, label)


def validate_optional_email(value, label: str = "email", max_length: int = 255) -> str | None:
    email = validate_optional_string(value, label, max_length)
    if email is None:
        return None
    email = email.lower()
    if not EMAIL_REGEX.match(email):
        raise ValidationError(f"{label} must be a valid email address.")
    return email


def validate_optional_zip(value) -> str | None:
    normalized = validate_optional_string(value, "zip", 10)
    if normalized is None:
        return None
    if not ZIP_REGEX.match(normalized):
        raise ValidationError("zip must be exactly 5 digits.")
    return normalized


def validate_optional_state(value) -> str | None:
    if value is None:
        return None
    normalized = str(value).strip().upper()
    if not normalized:
        return None
    if not STATE_REGEX.match(normalized):
        raise ValidationError("state must be a 2-letter code.")
    return normalized


def normalize_optional_email(value) -> str | None:
    """Lower-cased email, or None when blank or malformed."""
    trimmed = str(value if value is not None else "").strip().lower()
    if not trimmed:
        return None
    return trimmed if EMAIL_REGEX.match(trimmed) else None


def normalize_optional_zip(value) -> str | None:
    """Five-digit zip, or None when blank or malformed."""
    trimmed = str(value if value is not None else "").strip()
    if not trimmed:
        return None
    return trimmed if ZIP_REGEX.match(trimmed) else None


def normalize_bool(value) -> bool | None:
    """Coerce form-style truthy/falsey input; None stays None."""
    if value is None:
        return None
    if isinstance(value, str):
        token = value.strip().lower()
        if token in _TRUE_STRINGS:
            return True
        if token in _FALSE_STRINGS:
            return False
    return bool(value)


def parse_money(value) -> float | None:
    """
    Extract the first number from free text such as ``"$1,234.50 (est.)"``.

    Thousands separators are dropped. Returns None when the text holds no
    number.
    """
    raw = str(value if value is not None else "").strip()
    if not raw:
        return None
    match = MONEY_REGEX.search(raw)
    if not match:
        return None
    number = float(match.group(0).replace(",", ""))
    return number if math.isfinite(number) else None
