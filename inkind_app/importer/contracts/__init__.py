"""Header contracts for the donation and individual CSV importers."""

from __future__ import annotations

from .base import HeaderMap, HeaderSpec, find_header_index, normalize_header, resolve_header_map
from .donation import DONATION_HEADER_SPECS, donation_headers_missing
from .individual import INDIVIDUAL_HEADER_SPECS, individual_headers_missing

__all__ = [
    "HeaderMap",
    "HeaderSpec",
    "find_header_index",
    "normalize_header",
    "resolve_header_map",
    "DONATION_HEADER_SPECS",
    "donation_headers_missing",
    "INDIVIDUAL_HEADER_SPECS",
    "individual_headers_missing",
]
