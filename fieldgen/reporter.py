from __future__ import annotations

from typing import List, Optional, Sequence

from rich import box
from rich.console import Console
from rich.table import Table

from fieldgen.domain.models import ResolvedField


def _flag(value: bool) -> str:
    return "✓" if value else ""


def _roles(field: ResolvedField) -> str:
    roles: List[str] = []
    if field.is_primary_key:
        roles.append("pk+auto" if field.is_auto_increment else "pk")
    if field.is_version_field:
        roles.append("version")
    if field.is_logic_delete_field:
        roles.append("logic-delete")
    return ", ".join(roles)


def build_table(fields: Sequence[ResolvedField], title: Optional[str] = None) -> Table:
    """
    Build a rich table with one row per resolved field, in input order.
    """
    table = Table(
        title=title or "Resolved Fields",
        box=box.ROUNDED,
        caption=f"{len(fields)} field(s)",
    )

    table.add_column("Column", style="cyan", no_wrap=True)
    table.add_column("Escaped", style="dim")
    table.add_column("Property", style="bold green")
    table.add_column("Type", style="magenta")
    table.add_column("Mapping", justify="center", style="yellow")
    table.add_column("Fill", style="blue")
    table.add_column("Roles", style="red")
    table.add_column("Comment")

    for field in fields:
        property_name = field.property_name
        if field.error:
            property_name = f"[red]error: {field.error}[/red]"
        table.add_row(
            field.column_name,
            field.escaped_column_name if field.is_reserved_keyword else "",
            property_name,
            field.property_type or "N/A",
            _flag(field.requires_explicit_mapping),
            field.fill_strategy.value if field.fill_strategy else "",
            _roles(field),
            field.comment or "",
        )
    return table


def print_fields(fields: Sequence[ResolvedField], console: Optional[Console] = None) -> None:
    """
    Render resolved fields as a rich table.
    """
    console = console or Console()

    if not fields:
        console.print("[yellow]No columns to display.[/yellow]")
        return

    console.print(build_table(fields))


__all__ = ["build_table", "print_fields"]
