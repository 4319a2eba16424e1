"""Donation CSV header contract.

Aliases are listed in priority order; the first one present wins.
"""

from __future__ import annotations

from typing import Tuple

from .base import HeaderMap, HeaderSpec

DONATION_HEADER_SPECS: Tuple[HeaderSpec, ...] = (
    HeaderSpec("date_received", "Date the donation was received.", ("date",)),
    HeaderSpec("category", "Fallback source for the GL account code.", ("category",)),
    HeaderSpec("gl_acct", "General-ledger account code.", ("glacct", "glacct#", "glacctnum", "glacctnumber")),
    HeaderSpec("quantity", "Number of units donated.", ("qty", "quantity")),
    HeaderSpec("pounds", "Weight, used as quantity when qty is blank.", ("pounds",)),
    HeaderSpec("anonymous", "Y/Yes suppresses donor matching.", ("anonymousyfores", "anonymous")),
    HeaderSpec("organization_name", "Donating organization.", ("orgname", "organization", "organizationname")),
    HeaderSpec("first_name", "Donor or contact first name.", ("firstname", "first")),
    HeaderSpec("last_name", "Donor or contact last name.", ("lastname", "last")),
    HeaderSpec("address", "Street address.", ("address",)),
    HeaderSpec("city", "City.", ("city",)),
    HeaderSpec("state", "State code.", ("state",)),
    HeaderSpec("zip", "Five-digit zip code.", ("zip",)),
    HeaderSpec("email", "Donor email.", ("email",)),
    HeaderSpec("description", "Free-text description of the items.", ("description",)),
    HeaderSpec("total", "Fair market value per unit.", ("totalfairmarket", "totalfairmarketvalue", "total")),
)


def donation_headers_missing(header_map: HeaderMap) -> bool:
    """A donation file needs a date column plus a GL account or category column."""

    return not header_map.has("date_received") or not (header_map.has("gl_acct") or header_map.has("category"))
