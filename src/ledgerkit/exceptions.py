"""Typed exceptions for ledgerkit."""

from dataclasses import dataclass
from decimal import Decimal
from typing import Any


class LedgerError(Exception):
    """Base exception for all ledgerkit errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ParseError(LedgerError):
    """A token required by the journal grammar is missing."""

    def __init__(self, message: str, *, line: int, column: int) -> None:
        self.line = line
        self.column = column
        super().__init__(f"{message} at line {line}, column {column}")


class ValidationError(LedgerError):
    """A domain object was constructed with invalid data."""

    def __init__(self, message: str, *, field: str | None = None, value: Any = None) -> None:
        self.field = field
        self.value = value
        super().__init__(message)


@dataclass(frozen=True, slots=True)
class UnbalancedCommodity:
    """A commodity whose postings do not sum to zero."""

    commodity: str
    imbalance: Decimal


class BalanceError(LedgerError):
    """Transaction postings do not sum to zero for one or more commodities."""

    def __init__(self, message: str, *, unbalanced: list[UnbalancedCommodity]) -> None:
        self.unbalanced = unbalanced
        super().__init__(message)

    @classmethod
    def from_imbalances(cls, imbalances: dict[str, Decimal]) -> "BalanceError":
        """Build an error from a commodity -> signed sum mapping.

        Zero sums are ignored.
        """
        unbalanced = [
            UnbalancedCommodity(commodity=commodity, imbalance=imbalance)
            for commodity, imbalance in imbalances.items()
            if not imbalance.is_zero()
        ]
        details = ", ".join(f"{u.commodity}: {u.imbalance}" for u in unbalanced)
        return cls(f"Transaction does not balance: {details}", unbalanced=unbalanced)


class CommodityMismatchError(LedgerError):
    """Arithmetic attempted between amounts of different commodities."""

    def __init__(self, message: str, *, left: str, right: str) -> None:
        self.left = left
        self.right = right
        super().__init__(message)
