"""jsondb CLI: create or inspect a database.

Commands:
    jsondb create --name NAME [--directory DIR]   create an empty database
    jsondb open PATH                              show a database's metadata

Every command accepts ``--json`` to print a machine-readable envelope::

    {"status": 0, "data": {...}}                  on success
    {"status": -1, "error": {"cause": "..."}}     on failure

The process exits with 1 whenever a command fails.
"""

from __future__ import annotations

import json
import logging
import sys
from collections.abc import Callable
from pathlib import Path
from typing import Any

import click

from jsondb.config import JsonDbConfig, load_config
from jsondb.database import Database
from jsondb.errors import JsonDbError, describe_error

STATUS_OK = 0
STATUS_FAILURE = -1
EXIT_FAILURE = 1

# KeyError comes from Metadata.from_dict on a record with missing fields
_EXPECTED_ERRORS = (JsonDbError, OSError, json.JSONDecodeError, KeyError)


def _setup_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )


def _run(
    execute: Callable[[], dict[str, Any]],
    as_json: bool,
    print_text: Callable[[dict[str, Any]], None],
) -> None:
    """Run a command body and report its outcome as text or JSON."""
    try:
        data = execute()
    except _EXPECTED_ERRORS as exc:
        cause = describe_error(exc)
        if as_json:
            click.echo(json.dumps({"status": STATUS_FAILURE, "error": {"cause": cause}}, indent=2))
        else:
            click.echo(cause)
        sys.exit(EXIT_FAILURE)

    if as_json:
        click.echo(json.dumps({"status": STATUS_OK, "data": data}, indent=2))
    else:
        print_text(data)


# ---------------------------------------------------------------------------
# Root group
# ---------------------------------------------------------------------------


@click.group()
@click.version_option(package_name="jsondb")
@click.pass_context
def cli(ctx: click.Context) -> None:
    """jsondb: file-backed JSON document store."""
    try:
        config = load_config()
    except Exception as exc:
        raise click.ClickException(str(exc)) from exc
    _setup_logging(config.log_level)
    ctx.obj = config


# ---------------------------------------------------------------------------
# jsondb create
# ---------------------------------------------------------------------------


@cli.command()
@click.option("-n", "--name", required=True, help="Database name")
@click.option("-d", "--directory", default=None, help="Database directory")
@click.option("-j", "--json", "as_json", is_flag=True, help="JSON output format")
@click.pass_obj
def create(config: JsonDbConfig, name: str, directory: str | None, as_json: bool) -> None:
    """Create an empty database."""

    def execute() -> dict[str, Any]:
        # Explicit argument, then configured directory, then the current one
        if directory is not None:
            base = Path(directory)
        elif config.storage.directory is not None:
            base = config.storage.directory
        else:
            base = Path.cwd()
        Database.create(name, base, pretty=config.storage.pretty)
        return {"path": str(base.absolute() / name)}

    def print_text(data: dict[str, Any]) -> None:
        click.echo(f"Created an empty database inside: {data['path']}")

    _run(execute, as_json, print_text)


# ---------------------------------------------------------------------------
# jsondb open
# ---------------------------------------------------------------------------


@cli.command("open")
@click.argument("path")
@click.option("-j", "--json", "as_json", is_flag=True, help="JSON output format")
@click.pass_obj
def open_cmd(config: JsonDbConfig, path: str, as_json: bool) -> None:
    """Open an existing database and show its metadata."""

    def execute() -> dict[str, Any]:
        db = Database.open(path, pretty=config.storage.pretty)
        data: dict[str, Any] = {"path": str(db.path), "name": db.name}
        if db.metadata is not None:
            data["created"] = db.metadata.created.isoformat()
            data["modified"] = db.metadata.modified.isoformat()
        return data

    def print_text(data: dict[str, Any]) -> None:
        click.echo(f"Database : {data['name']}")
        click.echo(f"Path     : {data['path']}")
        if "created" in data:
            click.echo(f"Created  : {data['created']}")
            click.echo(f"Modified : {data['modified']}")

    _run(execute, as_json, print_text)
