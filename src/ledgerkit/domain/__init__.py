"""Ledger domain model: immutable value objects independent of the text format."""

from ledgerkit.domain.account import Account, AccountKind
from ledgerkit.domain.commodity import ARS, EUR, USD, Commodity, CommodityType
from ledgerkit.domain.money import Money
from ledgerkit.domain.posting import Posting
from ledgerkit.domain.price import Price
from ledgerkit.domain.transaction import Transaction

__all__ = [
    "Account",
    "AccountKind",
    "Commodity",
    "CommodityType",
    "Money",
    "Posting",
    "Price",
    "Transaction",
    "ARS",
    "EUR",
    "USD",
]
