"""Output formatters for CLI commands."""

import csv
import dataclasses
import io
import json
from collections.abc import Sequence
from decimal import Decimal
from typing import Any

from pydantic import BaseModel
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.text import Text

from ledgerkit.cli.config import OutputFormat
from ledgerkit.domain import Money
from ledgerkit.journal.writer import format_commodity
from ledgerkit.numeric import format_decimal

console = Console(emoji=False)
error_console = Console(stderr=True, emoji=False)


def format_quantity(value: Decimal) -> str:
    """Render a quantity without exponent notation."""
    return format_decimal(value)


def format_money(money: Money) -> str:
    """Render an amount the way the journal writes it."""
    if money.commodity == "$":
        sign = "-" if money.is_negative() else ""
        return f"{sign}$ {format_decimal(money.quantity.copy_abs())}"
    return f"{format_commodity(money.commodity)} {format_decimal(money.quantity)}"


def _to_row(item: Any) -> dict[str, Any]:
    if isinstance(item, BaseModel):
        return item.model_dump(exclude_none=True)
    if dataclasses.is_dataclass(item) and not isinstance(item, type):
        return dataclasses.asdict(item)
    return dict(item)


def _json_default(value: Any) -> Any:
    if isinstance(value, Decimal):
        return format_decimal(value)
    return str(value)


def format_output(
    data: Any | Sequence[Any],
    output_format: OutputFormat,
    *,
    title: str | None = None,
    columns: list[str] | None = None,
) -> None:
    """Format and print output in the specified format.

    Args:
        data: A dict, dataclass or Pydantic model, or a list of them
        output_format: Output format (table, json, csv)
        title: Optional title for table output
        columns: Optional column names to include (for table/csv)
    """
    many = isinstance(data, Sequence) and not isinstance(data, str)
    rows = [_to_row(item) for item in data] if many else [_to_row(data)]

    if output_format == OutputFormat.JSON:
        _format_json(rows if many else rows[0])
    elif output_format == OutputFormat.CSV:
        _format_csv(rows, columns)
    else:
        _format_table(rows, title, columns)


def _format_json(payload: list[dict[str, Any]] | dict[str, Any]) -> None:
    console.print_json(json.dumps(payload, default=_json_default))


def _format_csv(rows: list[dict[str, Any]], columns: list[str] | None) -> None:
    if not rows:
        return

    if columns is None:
        columns = list(rows[0].keys())

    output = io.StringIO()
    writer = csv.DictWriter(output, fieldnames=columns, extrasaction="ignore", lineterminator="\n")
    writer.writeheader()
    writer.writerows(
        {key: format_decimal(value) if isinstance(value, Decimal) else value for key, value in row.items()}
        for row in rows
    )
    console.print(output.getvalue(), end="", markup=False, highlight=False)


def _snake_to_title(s: str) -> str:
    """Convert snake_case to Title Case for table headers."""
    return " ".join(word.capitalize() for word in s.split("_"))


def _format_table(
    rows: list[dict[str, Any]],
    title: str | None,
    columns: list[str] | None,
) -> None:
    if not rows:
        console.print("[dim]No data[/dim]")
        return

    if columns is None:
        columns = list(rows[0].keys())

    table = Table(title=title, show_header=True, header_style="bold")
    for col in columns:
        table.add_column(_snake_to_title(col))

    for row in rows:
        table.add_row(*[_cell(row.get(col, "")) for col in columns])

    console.print(table)


def _cell(value: Any) -> Text:
    """Table cells are literal text, never markup."""
    if isinstance(value, Decimal):
        return Text(format_decimal(value))
    if value is None:
        return Text("")
    return Text(str(value))


def print_error(message: str) -> None:
    """Print an error message to stderr."""
    error_console.print(f"[red]Error:[/red] {escape(message)}")


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[green]✓[/green] {escape(message)}")


def print_warning(message: str) -> None:
    """Print a warning message."""
    console.print(f"[yellow]Warning:[/yellow] {escape(message)}")


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[blue]i[/blue] {escape(message)}")
