"""Journal maintenance commands."""

from decimal import Decimal, InvalidOperation

import typer

from ledgerkit.builders import PriceBuilder
from ledgerkit.cli.config import CLIConfig
from ledgerkit.cli.errors import ledger_command, parse_date_option
from ledgerkit.cli.formatters import console, print_error, print_success, print_warning
from ledgerkit.cli.service_factory import get_repository


@ledger_command
def check(
    ctx: typer.Context,
    strict: bool = typer.Option(
        False,
        "--strict",
        help="Exit with status 1 if any entry had to be skipped.",
    ),
) -> None:
    """Parse the journal and report what it contains.

    Entries that parse but fail validation (for example an unbalanced
    transaction) are listed and skipped. A syntax error aborts the check.
    """
    config: CLIConfig = ctx.obj
    repository = get_repository(config)
    loaded = repository.load()

    print_success(
        f"{repository.path}: {len(loaded.transactions)} transactions, "
        f"{len(loaded.prices)} prices, {len(loaded.comments)} comments"
    )

    for skipped in loaded.skipped:
        print_warning(f"line {skipped.line}: skipped {skipped.kind}: {skipped.reason}")

    if strict and loaded.skipped:
        raise typer.Exit(1)


@ledger_command
def add_price(
    ctx: typer.Context,
    base: str = typer.Argument(..., help="Commodity being priced (e.g., ETH)."),
    quote: str = typer.Argument(..., help="Commodity the price is expressed in (e.g., '$')."),
    price: str = typer.Argument(..., help="Quote units per base unit."),
    on: str | None = typer.Option(
        None,
        "--date",
        "-d",
        help="Date of the price (YYYY-MM-DD, default today).",
    ),
    comment: str | None = typer.Option(
        None,
        "--comment",
        "-m",
        help="Comment written after the directive.",
    ),
) -> None:
    """Append a price directive to the journal.

    Example:
        ledgerkit add-price ETH '$' 2500.50 --date 2024-01-15
    """
    config: CLIConfig = ctx.obj

    try:
        rate = Decimal(price)
    except InvalidOperation:
        print_error(f"Invalid price: {price}")
        raise typer.Exit(1) from None
    if not rate.is_finite() or rate <= 0:
        print_error("Price must be a positive number.")
        raise typer.Exit(1)

    builder = PriceBuilder().with_base(base).with_quote(quote).with_price(rate)
    price_date = parse_date_option(on, "--date")
    if price_date is not None:
        builder = builder.with_date(price_date)
    if comment:
        builder = builder.with_comment(comment)
    directive = builder.build()

    repository = get_repository(config)
    repository.upsert_prices([directive])

    console.print(repository.writer.write_price(directive), markup=False, highlight=False)
    print_success(f"Price appended to {repository.path}")
