"""
Donor resolution for the donation importer.

A ``ResolutionContext`` is loaded once per import and threaded through every
row. It maps lower-cased organization names and individual identities to
existing keys so each donor is matched or created at most once per file,
without re-querying the database per row. Each import builds its own
context; nothing is kept at module level.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from flask import current_app, has_app_context
from sqlalchemy import select

from inkind_app.models import ConflictError, Individual, Organization, db

ORG_CODE_MAX_LENGTH = 50
ORG_CODE_BASE_LENGTH = 46
DEFAULT_ORG_CODE = "ORG"
DEFAULT_ORG_CODE_ATTEMPTS = 5
UNKNOWN_NAME = "Unknown"

_NON_CODE_CHARS = re.compile(r"[^A-Z0-9]+")


class DonorResolutionError(Exception):
    """Raised when a donor could not be matched or created for a row."""


def make_organization_code(name: str, used_codes: set[str] | frozenset[str]) -> str:
    """
    Derive an organization code from ``name`` that is not in ``used_codes``.

    "Acme Food Bank" -> "ACME_FOOD_BANK"; if taken, "ACME_FOOD_BANK_1",
    "ACME_FOOD_BANK_2", ... with the base shortened so the code stays within
    50 characters.
    """

    base = _NON_CODE_CHARS.sub("_", str(name or "").strip().upper()).strip("_")
    if not base:
        base = DEFAULT_ORG_CODE
    base = base[:ORG_CODE_BASE_LENGTH]

    candidate = base
    suffix = 1
    while candidate in used_codes:
        suffix_text = f"_{suffix}"
        candidate = f"{base[: ORG_CODE_MAX_LENGTH - len(suffix_text)]}{suffix_text}"
        suffix += 1
    return candidate


def individual_key(first_name, last_name, address, city, state, zip_code) -> str | None:
    """Composite identity used when no email matches; None when every part is blank."""

    parts = [str(value or "").strip().lower() for value in (first_name, last_name, address, city, state, zip_code)]
    if not any(parts):
        return None
    return "|".join(parts)


@dataclass(frozen=True)
class DonorFields:
    """Donor-identifying values taken from one CSV row (already normalized)."""

    organization_name: str = ""
    first_name: str = ""
    last_name: str = ""
    address: str | None = None
    city: str | None = None
    state: str | None = None
    zip: str | None = None
    email: str | None = None

    @property
    def identifies_individual(self) -> bool:
        return bool(self.first_name or self.last_name or self.email)

    @property
    def key(self) -> str | None:
        return individual_key(self.first_name, self.last_name, self.address, self.city, self.state, self.zip)


@dataclass
class ResolutionContext:
    organizations_by_name: dict[str, str] = field(default_factory=dict)
    organization_codes: set[str] = field(default_factory=set)
    individuals_by_email: dict[str, int] = field(default_factory=dict)
    individuals_by_key: dict[str, int] = field(default_factory=dict)
    max_code_attempts: int = DEFAULT_ORG_CODE_ATTEMPTS

    @classmethod
    def load(cls, *, max_code_attempts: int = DEFAULT_ORG_CODE_ATTEMPTS) -> "ResolutionContext":
        """Snapshot existing organizations and individuals from the database."""

        context = cls(max_code_attempts=max_code_attempts)

        org_rows = db.session.execute(select(Organization.organization_code, Organization.organization_name)).all()
        for code, name in org_rows:
            context.organizations_by_name[str(name or "").strip().lower()] = code
            context.organization_codes.add(code)

        individual_rows = db.session.execute(
            select(
                Individual.individual_id,
                Individual.individual_first_name,
                Individual.individual_last_name,
                Individual.address,
                Individual.city,
                Individual.state,
                Individual.zip,
                Individual.email,
            )
        ).all()
        for individual_id, first, last, address, city, state, zip_code, email in individual_rows:
            context.register_individual(
                individual_id,
                email=str(email or "").strip().lower() or None,
                key=individual_key(first, last, address, city, state, zip_code),
            )

        if has_app_context():
            current_app.logger.debug(
                "Donor resolution context loaded: %s organizations, %s individual emails, %s individual keys",
                len(context.organization_codes),
                len(context.individuals_by_email),
                len(context.individuals_by_key),
            )
        return context

    def register_organization(self, name: str, code: str) -> None:
        self.organizations_by_name[name.strip().lower()] = code
        self.organization_codes.add(code)

    def register_individual(self, individual_id: int, *, email: str | None, key: str | None) -> None:
        if email:
            self.individuals_by_email[email] = individual_id
        if key:
            self.individuals_by_key[key] = individual_id

    def find_individual(self, donor: DonorFields) -> int | None:
        if donor.email and donor.email in self.individuals_by_email:
            return self.individuals_by_email[donor.email]
        key = donor.key
        if key:
            return self.individuals_by_key.get(key)
        return None


def resolve_organization(context: ResolutionContext, donor: DonorFields) -> str:
    """Return the code of the organization named in ``donor``, creating it if new."""

    name = donor.organization_name.strip()
    existing = context.organizations_by_name.get(name.lower())
    if existing:
        return existing

    code = make_organization_code(name, context.organization_codes)
    for _attempt in range(context.max_code_attempts):
        try:
            organization = Organization.insert(
                organization_code=code,
                organization_name=name,
                contact_first_name=donor.first_name or None,
                contact_last_name=donor.last_name or None,
                address=donor.address,
                city=donor.city,
                state=donor.state,
                zip=donor.zip,
                contact_email=donor.email,
            )
        except ConflictError:
            # Another writer took the code after the context was loaded.
            context.organization_codes.add(code)
            code = make_organization_code(name, context.organization_codes)
            continue

        created_code = organization.organization_code
        context.register_organization(name, created_code)
        if has_app_context():
            current_app.logger.info("Created organization %s for '%s' during import", created_code, name)
        return created_code

    raise DonorResolutionError(
        f"Could not create a unique organization code for '{name}' after {context.max_code_attempts} attempts."
    )


def resolve_individual(context: ResolutionContext, donor: DonorFields) -> int:
    """Match ``donor`` by email then by name/address key, creating a new individual if needed."""

    existing = context.find_individual(donor)
    if existing is not None:
        return existing

    individual = Individual.insert(
        individual_first_name=donor.first_name or UNKNOWN_NAME,
        individual_last_name=donor.last_name or UNKNOWN_NAME,
        address=donor.address,
        city=donor.city,
        state=donor.state,
        zip=donor.zip,
        email=donor.email,
    )
    individual_id = individual.individual_id
    context.register_individual(individual_id, email=donor.email, key=donor.key)
    return individual_id


def resolve_donor(
    context: ResolutionContext,
    donor: DonorFields,
    *,
    anonymous: bool = False,
) -> tuple[str | None, int | None]:
    """
    Return ``(organization_code, individual_id)`` for a row.

    Anonymous rows resolve to ``(None, None)``. An organization name takes
    precedence over individual fields; a row with neither resolves to
    ``(None, None)`` as well.
    """

    if anonymous:
        return None, None
    if donor.organization_name:
        return resolve_organization(context, donor), None
    if donor.identifies_individual:
        return None, resolve_individual(context, donor)
    return None, None
