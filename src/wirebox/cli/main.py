# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: wirebox
"""
wirebox CLI

Inspect registry files, check that every active row can be activated and
print the registry row schema.
"""

from __future__ import annotations

import json
from pathlib import Path

import typer

from wirebox import __version__
from wirebox.cli import display_table
from wirebox.injection.activator import ImportActivator
from wirebox.injection.errors import RegistrySourceError, UnresolvedImplementationError
from wirebox.injection.keys import ServiceKey
from wirebox.injection.registry import FileRegistrySource, RegistryRecord

app = typer.Typer(help="wirebox registry tools", no_args_is_help=True)

EXIT_UNREADABLE = 1
EXIT_INVALID = 2


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"wirebox {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show the version and exit.",
    ),
) -> None:
    """Tools for wirebox registry files."""


def _read_records(path: Path) -> list[RegistryRecord]:
    try:
        return list(FileRegistrySource(path).records())
    except RegistrySourceError as exc:
        typer.echo(f"Cannot read registry: {exc.message}", err=True)
        for error in exc.context.get("errors", []):
            location = ".".join(str(part) for part in error.get("loc", ()))
            typer.echo(f"  {location}: {error.get('msg')}", err=True)
        raise typer.Exit(code=EXIT_UNREADABLE) from exc


@app.command()
def show(
    path: Path = typer.Argument(..., help="JSON or YAML registry file"),
    all_rows: bool = typer.Option(False, "--all", help="Include inactive rows"),
) -> None:
    """Show the rows of a registry file (active rows only by default)."""
    records = _read_records(path)
    rows = [
        [
            record.developer_name,
            record.implementation_type,
            record.service_lifetime.display_name,
            "yes" if record.active else "no",
        ]
        for record in records
        if all_rows or record.active
    ]
    if not rows:
        typer.echo("No registry rows to show.")
        return
    display_table(
        ["DeveloperName", "Implementation_Type", "Service_Lifetime", "Active"],
        rows,
        title=str(path),
    )


@app.command()
def validate(path: Path = typer.Argument(..., help="JSON or YAML registry file")) -> None:
    """Check that every active row resolves and that no key is repeated."""
    records = _read_records(path)
    activator = ImportActivator()
    problems: list[str] = []
    seen: dict[ServiceKey, RegistryRecord] = {}
    active = 0

    for record in records:
        if not record.active:
            continue
        active += 1
        key = ServiceKey.of(record.developer_name)
        earlier = seen.get(key)
        if earlier is not None:
            problems.append(
                f"'{key}' is registered as {earlier.service_lifetime.display_name} "
                f"and again as {record.service_lifetime.display_name}"
            )
        else:
            seen[key] = record
        try:
            activator.resolve(record.implementation_type)
        except UnresolvedImplementationError as exc:
            problems.append(
                f"'{record.developer_name}': {record.implementation_type} "
                f"cannot be resolved ({exc.context.get('reason')})"
            )

    if problems:
        typer.echo(f"Registry {path} is INVALID:", err=True)
        for problem in problems:
            typer.echo(f"  {problem}", err=True)
        raise typer.Exit(code=EXIT_INVALID)
    typer.echo(f"Registry {path} is valid: {active} active of {len(records)} row(s).")


@app.command()
def schema() -> None:
    """Show the JSON schema of a registry row."""
    typer.echo(json.dumps(RegistryRecord.model_json_schema(by_alias=True), indent=2))


if __name__ == "__main__":
    app()
