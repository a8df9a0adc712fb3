"""Account and commodity listings."""

import typer

from ledgerkit.cli.config import CLIConfig, OutputFormat
from ledgerkit.cli.errors import ledger_command
from ledgerkit.cli.formatters import format_output, print_info
from ledgerkit.cli.service_factory import get_service
from ledgerkit.domain import Account


@ledger_command
def list_accounts(
    ctx: typer.Context,
    output: OutputFormat = typer.Option(
        OutputFormat.TABLE,
        "--output",
        "-o",
        help="Output format.",
    ),
) -> None:
    """List every account that has a posting, sorted by name."""
    config: CLIConfig = ctx.obj
    names = get_service(config).list_accounts()

    if not names:
        print_info("No accounts found.")
        return

    rows = []
    for name in names:
        account = Account(name=name)
        rows.append({"account": name, "kind": account.kind.value if account.kind else ""})

    format_output(rows, output, title="Accounts")


@ledger_command
def list_commodities(
    ctx: typer.Context,
    output: OutputFormat = typer.Option(
        OutputFormat.TABLE,
        "--output",
        "-o",
        help="Output format.",
    ),
) -> None:
    """List every commodity used in a posting, sorted by symbol."""
    config: CLIConfig = ctx.obj
    symbols = get_service(config).list_commodities()

    if not symbols:
        print_info("No commodities found.")
        return

    format_output([{"commodity": s} for s in symbols], output, title="Commodities")
