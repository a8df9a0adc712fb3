"""ledgerkit: a double-entry ledger kept as a Ledger-style plain-text journal.

Example:
    from ledgerkit import JournalRepository, LedgerService, TransactionBuilder

    repo = JournalRepository("main.journal")
    service = LedgerService(ledger_repository=repo, price_repository=repo)

    service.append_transaction(
        TransactionBuilder()
        .with_date("2024/01/15")
        .with_description("Coffee")
        .add_posting("Assets:Cash", "-5", "$")
        .add_posting("Expenses:Food", "5", "$")
        .build()
    )

    for balance in service.get_balances(include_subaccounts=True):
        print(balance.account, balance.positions)
"""

from ledgerkit.builders import PriceBuilder, TransactionBuilder
from ledgerkit.config import LedgerConfig
from ledgerkit.domain import (
    Account,
    AccountKind,
    Commodity,
    CommodityType,
    Money,
    Posting,
    Price,
    Transaction,
)
from ledgerkit.exceptions import (
    BalanceError,
    CommodityMismatchError,
    LedgerError,
    ParseError,
    UnbalancedCommodity,
    ValidationError,
)
from ledgerkit.journal import JournalWriter, load_journal, parse, tokenize
from ledgerkit.numeric import DecimalConfig
from ledgerkit.ports import PriceFilter, TransactionFilter
from ledgerkit.services import Balance, BalanceCalculator, LedgerService, Position
from ledgerkit.store import JournalRepository

__version__ = "0.1.0"

__all__ = [
    # Domain
    "Account",
    "AccountKind",
    "Commodity",
    "CommodityType",
    "Money",
    "Posting",
    "Price",
    "Transaction",
    # Journal format
    "JournalWriter",
    "load_journal",
    "parse",
    "tokenize",
    # Services
    "Balance",
    "BalanceCalculator",
    "LedgerService",
    "Position",
    # Storage
    "JournalRepository",
    "PriceFilter",
    "TransactionFilter",
    # Builders
    "PriceBuilder",
    "TransactionBuilder",
    # Configuration
    "DecimalConfig",
    "LedgerConfig",
    # Exceptions
    "BalanceError",
    "CommodityMismatchError",
    "LedgerError",
    "ParseError",
    "UnbalancedCommodity",
    "ValidationError",
]
