"""Price directive queries."""

import typer

from ledgerkit.cli.config import CLIConfig, OutputFormat
from ledgerkit.cli.errors import ledger_command, parse_date_option
from ledgerkit.cli.formatters import console, format_output, format_quantity, print_error, print_info
from ledgerkit.cli.service_factory import get_service
from ledgerkit.ports import PriceFilter


@ledger_command
def list_prices(
    ctx: typer.Context,
    base: str | None = typer.Option(None, "--base", "-b", help="Only prices of this commodity."),
    quote: str | None = typer.Option(None, "--quote", "-q", help="Only prices expressed in this commodity."),
    output: OutputFormat = typer.Option(
        OutputFormat.TABLE,
        "--output",
        "-o",
        help="Output format.",
    ),
) -> None:
    """List price directives in journal order."""
    config: CLIConfig = ctx.obj
    prices = get_service(config).list_prices(PriceFilter(base_commodity=base, quote_commodity=quote))

    if not prices:
        print_info("No prices found.")
        return

    format_output(
        [
            {
                "date": p.date.isoformat(),
                "base": p.base_commodity,
                "quote": p.quote_commodity,
                "price": p.price,
                "comment": p.comment,
            }
            for p in prices
        ],
        output,
        title="Prices",
    )


@ledger_command
def get_price(
    ctx: typer.Context,
    base: str = typer.Argument(..., help="Commodity being priced."),
    quote: str = typer.Argument(..., help="Commodity the price is expressed in."),
    as_of: str | None = typer.Option(
        None,
        "--as-of",
        help="Latest price on or before this date (YYYY-MM-DD, default today).",
    ),
) -> None:
    """Look up the exchange rate between two commodities.

    Falls back to the inverse pair when no direct price exists.

    Example:
        ledgerkit price ETH '$' --as-of 2024-01-31
    """
    config: CLIConfig = ctx.obj
    as_of_date = parse_date_option(as_of, "--as-of")

    price = get_service(config).get_price(base, quote, as_of_date)
    if price is None:
        print_error(f"No price found for {base} in {quote}")
        raise typer.Exit(1)

    console.print(
        f"{price.date.isoformat()}  1 {price.base_commodity} = "
        f"{format_quantity(price.price)} {price.quote_commodity}",
        markup=False,
        highlight=False,
    )
