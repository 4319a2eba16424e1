"""Run summary and structural errors shared by the CSV import pipelines."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from flask import current_app, has_app_context


class CSVImportError(Exception):
    """Structural failure that aborts an import before any row is processed."""


class CSVHeaderError(CSVImportError):
    """Raised when the header row lacks the columns an import requires."""


@dataclass
class ImportSummary:
    """
    Ledger of one import run.

    ``total`` counts every data row (header excluded), including blank and
    skipped rows. ``errors`` is capped at ``error_limit`` entries; failures
    past the cap are still not created, just not itemised.
    """

    total: int
    error_limit: int
    skipped: dict[str, int]
    created: int = 0
    errors: list[dict[str, Any]] = field(default_factory=list)

    def record_error(self, row_number: int, message: str) -> None:
        if len(self.errors) < self.error_limit:
            self.errors.append({"row": row_number, "error": message})

    def skip(self, reason: str) -> None:
        self.skipped[reason] = self.skipped.get(reason, 0) + 1

    def to_dict(self) -> dict[str, Any]:
        return {
            "created": self.created,
            "skipped": dict(self.skipped),
            "errors": list(self.errors),
            "total": self.total,
        }


def importer_setting(key: str, default):
    """Read an importer setting from the active app config, falling back to ``default``."""
    if has_app_context():
        return current_app.config.get(key, default)
    return default
