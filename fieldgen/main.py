from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Optional

import typer
from pydantic import ValidationError

from fieldgen.config import get_settings
from fieldgen.exceptions import UnknownPolicyError
from fieldgen.reporter import print_fields
from fieldgen.resolver import (
    available_keyword_policies,
    build_context,
    load_columns,
    resolve_columns,
)
from fieldgen.utils.logging import configure_logging

app = typer.Typer(help="fieldgen column metadata resolution CLI.")


@app.command()
def info() -> None:
    """
    Show effective configuration values.
    """
    settings = get_settings()
    typer.echo(
        f"naming={settings.column_naming.value} prefixes={settings.field_prefixes} "
        f"keywords={settings.keyword_policy} date_type={settings.date_type.value} | "
        f"strip_is={settings.strip_boolean_is_prefix} annotate={settings.always_annotate} "
        f"capital_mode={settings.capital_mode} | "
        f"fill_rules={len(settings.fill_rules)} type_overrides={len(settings.type_overrides)}"
    )


@app.command()
def policies() -> None:
    """
    List available keyword policies.
    """
    typer.echo("Available keyword policies: " + ", ".join(available_keyword_policies()))


@app.command()
def resolve(
    columns_file: Path = typer.Argument(
        ...,
        exists=True,
        dir_okay=False,
        readable=True,
        help="JSON array of column records (name, type, nullable, comment, primary_key, ...).",
    ),
    keyword_policy: Optional[str] = typer.Option(
        None,
        "--keyword-policy",
        "-k",
        help="Keyword policy to apply (e.g., mysql, postgresql, h2, none). Defaults to settings.",
    ),
    as_json: bool = typer.Option(
        False,
        "--json",
        help="Emit resolved fields as JSON instead of a table.",
    ),
) -> None:
    """
    Resolve the columns of one table and print the resulting field metadata.
    """
    settings = get_settings()
    configure_logging(level=settings.log_level, json_logs=settings.log_json)

    try:
        context = build_context(settings, keyword_policy=keyword_policy)
        columns = load_columns(columns_file)
    except (
        UnknownPolicyError,
        ValidationError,
        json.JSONDecodeError,
        UnicodeDecodeError,
        OSError,
    ) as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=2)

    fields = resolve_columns(columns, context)
    if as_json:
        typer.echo(json.dumps([field.model_dump(mode="json") for field in fields], indent=2))
        return
    print_fields(fields)


def main() -> None:
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("Cancelled by user.", err=True)
        sys.exit(130)


if __name__ == "__main__":
    main()
