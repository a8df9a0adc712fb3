"""ledgerkit CLI - Command-line interface for plain-text journals."""

from ledgerkit.cli.app import app

# Import command modules to register them with the app
from ledgerkit.cli.commands import accounts, dev, journal, prices, reports

# Top-level commands
app.command("check")(journal.check)
app.command("add-price")(journal.add_price)
app.command("balance")(reports.balance)
app.command("register")(reports.register)
app.command("accounts")(accounts.list_accounts)
app.command("commodities")(accounts.list_commodities)
app.command("prices")(prices.list_prices)
app.command("price")(prices.get_price)

# Register sub-apps
app.add_typer(dev.app, name="dev", help="Developer tools for inspecting the journal format.")


def main() -> None:
    """Entry point for the CLI."""
    app()


__all__ = ["app", "main"]
