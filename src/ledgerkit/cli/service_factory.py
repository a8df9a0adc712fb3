"""Service factory for CLI commands."""

from typing import TYPE_CHECKING

from ledgerkit.services import BalanceCalculator, LedgerService
from ledgerkit.store import JournalRepository

if TYPE_CHECKING:
    from ledgerkit.cli.config import CLIConfig


def get_repository(config: "CLIConfig") -> JournalRepository:
    """Create a JournalRepository for the configured journal.

    Settings priority:
    1. config.json in the config directory (~/.config/ledgerkit/config.json)
    2. Environment variables (LEDGER_FILE, LEDGERKIT_DATE_FORMAT, ...)
    3. --file on the command line
    """
    settings = config.load_settings()
    journal = config.resolve_journal()
    return JournalRepository(
        journal,
        writer=settings.writer(),
        decimal_config=settings.decimal_config(),
    )


def get_service(config: "CLIConfig") -> LedgerService:
    """Create a LedgerService over a single journal file."""
    repository = get_repository(config)
    return LedgerService(
        ledger_repository=repository,
        price_repository=repository,
        calculator=BalanceCalculator(repository.decimal_config),
    )
