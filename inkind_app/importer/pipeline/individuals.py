"""Individual CSV import: strict validation, duplicate-email skipping."""

from __future__ import annotations

from flask import current_app, has_app_context
from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError

from inkind_app.importer.contracts import (
    INDIVIDUAL_HEADER_SPECS,
    HeaderMap,
    individual_headers_missing,
    resolve_header_map,
)
from inkind_app.importer.csv_text import parse_csv_text
from inkind_app.models import Individual, StoreError, db
from inkind_app.utils.validators import (
    validate_optional_email,
    validate_optional_state,
    validate_optional_string,
    validate_optional_zip,
    validate_required_string,
)

from .summary import CSVHeaderError, CSVImportError, ImportSummary, importer_setting

DEFAULT_ERROR_LIMIT = 20


def _existing_emails() -> set[str]:
    rows = db.session.execute(select(func.lower(Individual.email)).where(Individual.email.is_not(None))).scalars()
    return {email for email in rows if email}


def _individual_values(header_map: HeaderMap, values: list[str]) -> dict:
    def raw(name: str) -> str:
        return header_map.value(values, name)

    return {
        "individual_first_name": validate_required_string(raw("first_name"), "individual_first_name", 100),
        "individual_last_name": validate_required_string(raw("last_name"), "individual_last_name", 100),
        "address": validate_optional_string(raw("address"), "address", 255),
        "city": validate_optional_string(raw("city"), "city", 120),
        "state": validate_optional_state(raw("state")),
        "zip": validate_optional_zip(raw("zip")),
        "email": validate_optional_email(raw("email")),
    }


def import_individuals(csv_text: str | None, *, error_limit: int | None = None) -> ImportSummary:
    """
    Import individuals from CSV text.

    Rows whose email already exists, or was imported earlier in the same
    file, are tallied under ``skipped["email"]`` rather than inserted.
    """

    if not (csv_text or "").strip():
        raise CSVImportError("CSV body is required.")

    rows = parse_csv_text(csv_text)
    if not rows:
        raise CSVImportError("CSV file appears to be empty.")

    header_map = resolve_header_map(rows[0], INDIVIDUAL_HEADER_SPECS)
    if individual_headers_missing(header_map):
        raise CSVHeaderError("CSV must include headers for individual_first_name and individual_last_name.")

    if error_limit is None:
        error_limit = importer_setting("IMPORTER_INDIVIDUAL_ERROR_LIMIT", DEFAULT_ERROR_LIMIT)

    existing_emails = _existing_emails()
    seen_emails: set[str] = set()
    summary = ImportSummary(total=max(len(rows) - 1, 0), error_limit=error_limit, skipped={"email": 0, "blank": 0})

    if has_app_context():
        current_app.logger.info("Individual import started: %s data rows", summary.total)

    for row_index in range(1, len(rows)):
        row_number = row_index + 1
        values = [value.strip() for value in rows[row_index]]
        if all(value == "" for value in values):
            summary.skip("blank")
            continue

        try:
            fields = _individual_values(header_map, values)
            email = fields["email"]
            if email and (email in existing_emails or email in seen_emails):
                summary.skip("email")
                continue
            Individual.insert(**fields)
        except (ValueError, StoreError, SQLAlchemyError) as exc:
            summary.record_error(row_number, str(exc))
            if has_app_context():
                current_app.logger.debug("Individual import row %s failed: %s", row_number, exc)
            continue

        summary.created += 1
        if email:
            seen_emails.add(email)

    if has_app_context():
        current_app.logger.info(
            "Individual import finished: created=%s skipped=%s errors=%s total=%s",
            summary.created,
            summary.skipped,
            len(summary.errors),
            summary.total,
        )
    return summary
