"""
CSV import package.

Exposes the donation and individual import pipelines and registers the
``flask importer`` command group on the application.
"""

from __future__ import annotations

from flask import Flask

from .cli import importer_cli
from .pipeline import CSVHeaderError, CSVImportError, ImportSummary, import_donations, import_individuals

__all__ = [
    "init_importer",
    "CSVHeaderError",
    "CSVImportError",
    "ImportSummary",
    "import_donations",
    "import_individuals",
]


def init_importer(app: Flask) -> None:
    """Register the ``importer`` CLI group; limits are read from ``app.config`` at import time."""
    if "importer" not in app.cli.commands:
        app.cli.add_command(importer_cli)
        app.logger.debug("Importer CLI registered")
