"""Developer tools for inspecting the journal format."""

from pathlib import Path

import typer
from rich.table import Table
from rich.text import Text

from ledgerkit.cli.config import CLIConfig
from ledgerkit.cli.errors import ledger_command
from ledgerkit.cli.formatters import console
from ledgerkit.journal import TokenType, parse, tokenize

app = typer.Typer(no_args_is_help=True)


def _read_source(config: CLIConfig, source: Path | None) -> str:
    path = source or config.resolve_journal()
    return path.read_text(encoding="utf-8")


@app.command("tokens")
@ledger_command
def tokens(
    ctx: typer.Context,
    source: Path | None = typer.Argument(
        None,
        help="File to tokenize (default: the configured journal).",
    ),
    skip_newlines: bool = typer.Option(
        False,
        "--skip-newlines",
        help="Hide NEWLINE tokens.",
    ),
) -> None:
    """Dump the lexer's token stream."""
    config: CLIConfig = ctx.obj
    stream = tokenize(_read_source(config, source))

    table = Table(show_header=True, header_style="bold")
    table.add_column("Line", justify="right")
    table.add_column("Col", justify="right")
    table.add_column("Type")
    table.add_column("Value")

    for token in stream:
        if skip_newlines and token.type == TokenType.NEWLINE:
            continue
        table.add_row(str(token.line), str(token.column), token.type.value, Text(repr(token.value)))

    console.print(table)


@app.command("ast")
@ledger_command
def ast(
    ctx: typer.Context,
    source: Path | None = typer.Argument(
        None,
        help="File to parse (default: the configured journal).",
    ),
) -> None:
    """Dump the parsed syntax tree as JSON."""
    config: CLIConfig = ctx.obj
    tree = parse(_read_source(config, source))
    console.print_json(tree.model_dump_json())
