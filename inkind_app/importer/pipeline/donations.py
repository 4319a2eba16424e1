"""Row-by-row donation import with donor resolution and partial-failure accounting."""

from __future__ import annotations

from typing import Sequence

from flask import current_app, has_app_context
from sqlalchemy.exc import SQLAlchemyError

from inkind_app.importer.contracts import (
    DONATION_HEADER_SPECS,
    HeaderMap,
    donation_headers_missing,
    resolve_header_map,
)
from inkind_app.importer.csv_text import parse_csv_text
from inkind_app.models import Donation, StoreError
from inkind_app.utils.validators import (
    normalize_optional_email,
    normalize_optional_zip,
    parse_money,
    validate_amount,
    validate_date,
    validate_gl_acct,
    validate_optional_string,
    validate_quantity,
)

from .donors import DEFAULT_ORG_CODE_ATTEMPTS, DonorFields, DonorResolutionError, ResolutionContext, resolve_donor
from .summary import CSVHeaderError, CSVImportError, ImportSummary, importer_setting

DEFAULT_ERROR_LIMIT = 50
DESCRIPTION_MAX_LENGTH = 1000
ANONYMOUS_FLAGS = frozenset({"y", "yes"})


def recover_description_commas(values: Sequence[str], header_map: HeaderMap) -> list[str]:
    """
    Re-join a description that was split on unquoted commas.

    Applies only when the file has a description column, the total column is
    the last header and the row is wider than the header. Everything from the
    description position up to the final field becomes one description; the
    final field stays the total.
    """

    values = list(values)
    description_idx = header_map.index("description")
    if description_idx == -1 or header_map.index("total") != header_map.width - 1:
        return values
    if len(values) <= header_map.width:
        return values
    return [*values[:description_idx], ",".join(values[description_idx:-1]), values[-1]]


def _donor_fields(header_map: HeaderMap, values: Sequence[str]) -> DonorFields:
    def text(name: str) -> str:
        return header_map.value(values, name).strip()

    return DonorFields(
        organization_name=text("organization_name"),
        first_name=text("first_name"),
        last_name=text("last_name"),
        address=text("address") or None,
        city=text("city") or None,
        state=text("state").upper() or None,
        zip=normalize_optional_zip(text("zip")),
        email=normalize_optional_email(text("email")),
    )


def _donation_values(header_map: HeaderMap, values: Sequence[str]) -> dict:
    def raw(name: str) -> str:
        return header_map.value(values, name)

    date_received = validate_date(raw("date_received"))
    gl_acct = validate_gl_acct(raw("gl_acct") or raw("category"))

    quantity = parse_money(raw("quantity"))
    if quantity is None:
        quantity = parse_money(raw("pounds"))
    quantity = validate_quantity(quantity if quantity is not None else 1)

    amount = parse_money(raw("total"))
    if amount is None:
        amount = parse_money(raw("description"))
    amount = validate_amount(amount if amount is not None else 0)

    description = validate_optional_string(raw("description"), "description", DESCRIPTION_MAX_LENGTH)

    return {
        "date_received": date_received,
        "gl_acct": gl_acct,
        "quantity": quantity,
        "amount": amount,
        "description": description,
    }


def import_donations(
    csv_text: str | None,
    *,
    user_id: int | None = None,
    error_limit: int | None = None,
    recover_commas: bool | None = None,
) -> ImportSummary:
    """
    Import donations from CSV text, committing each row on its own.

    Raises ``CSVImportError`` for an empty body and ``CSVHeaderError`` when the
    date column or both the GL account and category columns are missing. Any
    other failure is confined to its row and recorded in the summary.
    """

    if not (csv_text or "").strip():
        raise CSVImportError("CSV body is required.")

    rows = parse_csv_text(csv_text)
    if not rows:
        raise CSVImportError("CSV file appears to be empty.")

    header_map = resolve_header_map(rows[0], DONATION_HEADER_SPECS)
    if donation_headers_missing(header_map):
        raise CSVHeaderError("CSV must include Date and either GL Acct# or Category columns.")

    if error_limit is None:
        error_limit = importer_setting("IMPORTER_DONATION_ERROR_LIMIT", DEFAULT_ERROR_LIMIT)
    if recover_commas is None:
        recover_commas = importer_setting("IMPORTER_RECOVER_DESCRIPTION_COMMAS", True)

    context = ResolutionContext.load(
        max_code_attempts=importer_setting("IMPORTER_ORG_CODE_ATTEMPTS", DEFAULT_ORG_CODE_ATTEMPTS)
    )
    summary = ImportSummary(total=max(len(rows) - 1, 0), error_limit=error_limit, skipped={"blank": 0})

    if has_app_context():
        current_app.logger.info("Donation import started: %s data rows, user_id=%s", summary.total, user_id)

    for row_index in range(1, len(rows)):
        row_number = row_index + 1
        values = [value.strip() for value in rows[row_index]]
        if all(value == "" for value in values):
            summary.skip("blank")
            continue

        if recover_commas:
            values = recover_description_commas(values, header_map)

        try:
            fields = _donation_values(header_map, values)
            anonymous = header_map.value(values, "anonymous").strip().lower() in ANONYMOUS_FLAGS
            organization_code, individual_id = resolve_donor(
                context,
                _donor_fields(header_map, values),
                anonymous=anonymous,
            )
            Donation.insert(
                **fields,
                ministry_code=None,
                organization_code=organization_code,
                individual_id=individual_id,
                user_id=user_id,
            )
        except (ValueError, StoreError, DonorResolutionError, SQLAlchemyError) as exc:
            summary.record_error(row_number, str(exc))
            if has_app_context():
                current_app.logger.debug("Donation import row %s failed: %s", row_number, exc)
            continue

        summary.created += 1

    if has_app_context():
        current_app.logger.info(
            "Donation import finished: created=%s skipped=%s errors=%s total=%s",
            summary.created,
            summary.skipped,
            len(summary.errors),
            summary.total,
        )
    return summary
