"""Individual CSV header contract."""

from __future__ import annotations

from typing import Tuple

from .base import HeaderMap, HeaderSpec

INDIVIDUAL_HEADER_SPECS: Tuple[HeaderSpec, ...] = (
    HeaderSpec("first_name", "Given name.", ("individual_first_name", "first_name")),
    HeaderSpec("last_name", "Family name.", ("individual_last_name", "last_name")),
    HeaderSpec("address", "Street address.", ("address",)),
    HeaderSpec("city", "City.", ("city",)),
    HeaderSpec("state", "Two-letter state code.", ("state",)),
    HeaderSpec("zip", "Five-digit zip code.", ("zip",)),
    HeaderSpec("email", "Email address, used for duplicate detection.", ("email",)),
)


def individual_headers_missing(header_map: HeaderMap) -> bool:
    return not (header_map.has("first_name") and header_map.has("last_name"))
