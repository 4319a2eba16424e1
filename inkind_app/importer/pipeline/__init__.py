"""Import pipelines for donation and individual CSV files."""

from __future__ import annotations

from .donations import import_donations, recover_description_commas
from .donors import (
    DonorFields,
    DonorResolutionError,
    ResolutionContext,
    individual_key,
    make_organization_code,
    resolve_donor,
    resolve_individual,
    resolve_organization,
)
from .individuals import import_individuals
from .summary import CSVHeaderError, CSVImportError, ImportSummary

__all__ = [
    "CSVHeaderError",
    "CSVImportError",
    "DonorFields",
    "DonorResolutionError",
    "ImportSummary",
    "ResolutionContext",
    "import_donations",
    "import_individuals",
    "individual_key",
    "make_organization_code",
    "recover_description_commas",
    "resolve_donor",
    "resolve_individual",
    "resolve_organization",
]
