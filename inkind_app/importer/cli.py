"""
``flask importer`` commands for running CSV imports from the shell.

Both commands share the request pipeline, commit row by row, and print the
run summary as JSON.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

import click
from flask.cli import ScriptInfo

from inkind_app.importer.pipeline import CSVImportError, import_donations, import_individuals


@click.group(name="importer")
def importer_cli():
    """CSV import commands for donations and individuals."""


def _read_csv(file_path: Path) -> str:
    try:
        return file_path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise click.ClickException(f"{file_path} is not valid UTF-8: {exc}") from exc


@importer_cli.command("donations")
@click.argument("file_path", type=click.Path(path_type=Path, exists=True, dir_okay=False))
@click.option("--user-id", type=int, default=None, help="Attribute created donations to this user id.")
@click.pass_context
def import_donations_command(ctx, file_path: Path, user_id: Optional[int]):
    """Import donations from FILE_PATH."""
    app = ctx.ensure_object(ScriptInfo).load_app()
    csv_text = _read_csv(file_path)
    with app.app_context():
        try:
            summary = import_donations(csv_text, user_id=user_id)
        except CSVImportError as exc:
            raise click.ClickException(str(exc)) from exc
    click.echo(json.dumps(summary.to_dict(), indent=2))


@importer_cli.command("individuals")
@click.argument("file_path", type=click.Path(path_type=Path, exists=True, dir_okay=False))
@click.pass_context
def import_individuals_command(ctx, file_path: Path):
    """Import individuals from FILE_PATH."""
    app = ctx.ensure_object(ScriptInfo).load_app()
    csv_text = _read_csv(file_path)
    with app.app_context():
        try:
            summary = import_individuals(csv_text)
        except CSVImportError as exc:
            raise click.ClickException(str(exc)) from exc
    click.echo(json.dumps(summary.to_dict(), indent=2))
