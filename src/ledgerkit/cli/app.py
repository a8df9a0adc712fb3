"""Main Typer application."""

import logging
from pathlib import Path

import typer
from rich.logging import RichHandler

from ledgerkit.cli.config import CLIConfig, _default_config_dir
from ledgerkit.cli.formatters import error_console

# Create main app
app = typer.Typer(
    name="ledgerkit",
    help="Query and extend a Ledger-style plain-text journal.",
    no_args_is_help=True,
)


def _configure_logging(verbose: bool) -> None:
    """Send library logs to stderr through rich."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=error_console, show_path=False, rich_tracebacks=True)],
        force=True,
    )


@app.callback()
def main(
    ctx: typer.Context,
    file: Path | None = typer.Option(
        None,
        "--file",
        "-f",
        help="Journal file to read and append to.",
        envvar="LEDGER_FILE",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose output.",
    ),
    config_dir: Path | None = typer.Option(
        None,
        "--config-dir",
        "-c",
        help="Config directory (default: ~/.config/ledgerkit).",
        envvar="LEDGERKIT_CONFIG_DIR",
    ),
) -> None:
    """Query and extend a Ledger-style plain-text journal.

    The journal is taken from --file, then LEDGER_FILE, then the
    journal_path entry of config.json.
    """
    _configure_logging(verbose)
    ctx.obj = CLIConfig(
        journal_path=file.expanduser() if file else None,
        verbose=verbose,
        config_dir=config_dir or _default_config_dir(),
    )
