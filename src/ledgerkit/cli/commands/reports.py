"""Balance and register reports."""

import typer
from rich.table import Table
from rich.text import Text

from ledgerkit.cli.config import CLIConfig, OutputFormat
from ledgerkit.cli.errors import ledger_command, parse_date_option
from ledgerkit.cli.formatters import console, format_money, format_output, print_info
from ledgerkit.cli.service_factory import get_service
from ledgerkit.domain import Account, Money
from ledgerkit.ports import TransactionFilter


def _amount_text(value: str, negative: bool) -> Text:
    return Text(value, style="red" if negative else "")


@ledger_command
def balance(
    ctx: typer.Context,
    pattern: str | None = typer.Argument(
        None,
        help="Account pattern ('*' matches one segment, '**' any number).",
    ),
    as_of: str | None = typer.Option(
        None,
        "--as-of",
        help="Ignore transactions after this date (YYYY-MM-DD).",
    ),
    subaccounts: bool = typer.Option(
        False,
        "--subaccounts",
        "-s",
        help="Roll subaccount balances up into their parents.",
    ),
    target: str | None = typer.Option(
        None,
        "--in",
        help="Convert the total of the matching accounts into this commodity.",
    ),
    output: OutputFormat = typer.Option(
        OutputFormat.TABLE,
        "--output",
        "-o",
        help="Output format.",
    ),
) -> None:
    """Show account balances.

    Example:
        ledgerkit balance 'Assets:**' --subaccounts
        ledgerkit balance 'Assets:**' --in '$' --as-of 2024-06-30
    """
    config: CLIConfig = ctx.obj
    as_of_date = parse_date_option(as_of, "--as-of")
    service = get_service(config)

    if target:
        total = service.get_balance_in_commodity(pattern or "**", target, as_of_date=as_of_date)
        row = {"account": pattern or "**", "commodity": total.commodity, "quantity": total.quantity}
        if output == OutputFormat.TABLE:
            console.print(Text.assemble((row["account"], "bold"), "  ", format_money(total)))
        else:
            format_output(row, output)
        return

    balances = service.get_balances(as_of_date=as_of_date, include_subaccounts=subaccounts)
    if pattern:
        balances = [b for b in balances if Account(name=b.account).matches_pattern(pattern)]

    rows = [
        {"account": b.account, "commodity": commodity, "quantity": quantity}
        for b in balances
        for commodity, quantity in sorted(b.positions.items())
    ]

    if not rows:
        print_info("No balances found.")
        return

    if output != OutputFormat.TABLE:
        format_output(rows, output)
        return

    table = Table(title="Balances", show_header=True, header_style="bold")
    table.add_column("Account")
    table.add_column("Amount", justify="right")
    for row in rows:
        quantity = row["quantity"]
        amount = format_money(Money(quantity=quantity, commodity=row["commodity"]))
        table.add_row(Text(row["account"]), _amount_text(amount, quantity < 0))
    console.print(table)


@ledger_command
def register(
    ctx: typer.Context,
    pattern: str = typer.Argument(
        ...,
        help="Account pattern ('*' matches one segment, '**' any number).",
    ),
    from_date: str | None = typer.Option(
        None,
        "--from",
        help="Start date (YYYY-MM-DD).",
    ),
    to_date: str | None = typer.Option(
        None,
        "--to",
        help="End date (YYYY-MM-DD).",
    ),
    output: OutputFormat = typer.Option(
        OutputFormat.TABLE,
        "--output",
        "-o",
        help="Output format.",
    ),
) -> None:
    """Show postings to matching accounts with a running balance.

    The running balance is kept per account and commodity.

    Example:
        ledgerkit register 'Expenses:**' --from 2024-01-01 --to 2024-01-31
    """
    config: CLIConfig = ctx.obj
    start = parse_date_option(from_date, "--from")
    end = parse_date_option(to_date, "--to")

    service = get_service(config)
    rows = service.get_register(pattern, TransactionFilter(from_date=start, to_date=end))

    if not rows:
        print_info("No postings found.")
        return

    if output != OutputFormat.TABLE:
        format_output(
            [
                {
                    "date": row.date.isoformat(),
                    "description": row.description,
                    "account": row.account,
                    "commodity": row.amount.commodity,
                    "amount": row.amount.quantity,
                    "balance": row.running_balance.quantity,
                }
                for row in rows
            ],
            output,
        )
        return

    table = Table(title=f"Register: {pattern}", show_header=True, header_style="bold")
    table.add_column("Date")
    table.add_column("Description")
    table.add_column("Account")
    table.add_column("Amount", justify="right")
    table.add_column("Balance", justify="right")

    for row in rows:
        table.add_row(
            row.date.isoformat(),
            Text(row.description),
            Text(row.account),
            _amount_text(format_money(row.amount), row.amount.is_negative()),
            _amount_text(format_money(row.running_balance), row.running_balance.is_negative()),
        )

    console.print(table)
