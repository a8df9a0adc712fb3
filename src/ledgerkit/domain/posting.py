"""Postings: one account/amount line of a transaction."""

from dataclasses import dataclass, field, replace
from decimal import Decimal
from types import MappingProxyType
from typing import Mapping

from ledgerkit.domain.account import Account
from ledgerkit.domain.money import Money


@dataclass(frozen=True)
class Posting:
    """A single debit or credit to an account.

    By convention:
        - Positive quantity = Debit
        - Negative quantity = Credit

    Attributes:
        account: The account being affected (a name string is accepted)
        amount: Signed amount
        comment: Optional note for this posting
        metadata: Free-form key/value annotations

    Equality uses account and amount only.
    """

    account: Account
    amount: Money
    comment: str | None = field(default=None, compare=False)
    metadata: Mapping[str, str] = field(default_factory=dict, compare=False)

    def __post_init__(self) -> None:
        if isinstance(self.account, str):
            object.__setattr__(self, "account", Account(name=self.account))
        object.__setattr__(self, "metadata", MappingProxyType(dict(self.metadata)))

    @property
    def commodity(self) -> str:
        return self.amount.commodity

    @property
    def quantity(self) -> Decimal:
        return self.amount.quantity

    @property
    def is_debit(self) -> bool:
        """Return True if this is a debit posting."""
        return self.amount.is_positive()

    @property
    def is_credit(self) -> bool:
        """Return True if this is a credit posting."""
        return self.amount.is_negative()

    def negate(self) -> "Posting":
        """Return the same posting with the opposite sign."""
        return replace(self, amount=self.amount.negate())

    def with_amount(self, amount: Money) -> "Posting":
        return replace(self, amount=amount)

    def __str__(self) -> str:
        return f"  {self.account.name}  {self.amount}"
