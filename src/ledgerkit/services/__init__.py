"""Balance aggregation and the ledger service facade."""

from ledgerkit.services.balance import Balance, BalanceCalculator, Position, find_price
from ledgerkit.services.ledger import LedgerService, RegisterRow

__all__ = [
    "Balance",
    "BalanceCalculator",
    "LedgerService",
    "Position",
    "RegisterRow",
    "find_price",
]
