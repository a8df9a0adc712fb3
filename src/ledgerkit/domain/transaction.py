"""Transactions: balanced sets of postings."""

import uuid
from collections.abc import Iterable
from dataclasses import dataclass, field, replace
from datetime import date
from decimal import Decimal
from types import MappingProxyType
from typing import Mapping

from ledgerkit.domain.posting import Posting
from ledgerkit.exceptions import BalanceError, ValidationError
from ledgerkit.numeric import exact_add


def _new_id() -> str:
    return str(uuid.uuid4())


@dataclass(frozen=True, eq=False)
class Transaction:
    """A complete, balanced transaction.

    Attributes:
        date: The transaction date
        description: Payee or narration (must not be empty)
        postings: Two or more postings; stored as a tuple
        comment: Optional free-form comment
        external_id: Optional identifier from the system the data came from
        metadata: Free-form key/value annotations
        id: Identifier; a random UUID when not given

    For every commodity, the signed quantities of the postings must sum to
    zero. Construction raises ValidationError or BalanceError otherwise, so
    an invalid Transaction never exists. Equality is by id.
    """

    date: date
    description: str
    postings: tuple[Posting, ...]
    comment: str | None = None
    external_id: str | None = None
    metadata: Mapping[str, str] = field(default_factory=dict)
    id: str = field(default_factory=_new_id)

    def __post_init__(self) -> None:
        object.__setattr__(self, "postings", tuple(self.postings))
        object.__setattr__(self, "metadata", MappingProxyType(dict(self.metadata)))
        self._validate()

    def _validate(self) -> None:
        if not self.description or not self.description.strip():
            raise ValidationError("Transaction description cannot be empty", field="description")

        if len(self.postings) < 2:
            raise ValidationError(
                "Transaction must have at least 2 postings",
                field="postings",
                value=len(self.postings),
            )

        imbalances = self.imbalances()
        if any(not total.is_zero() for total in imbalances.values()):
            raise BalanceError.from_imbalances(imbalances)

    def imbalances(self) -> dict[str, Decimal]:
        """Return the signed sum of quantities per commodity."""
        totals: dict[str, Decimal] = {}
        for posting in self.postings:
            totals[posting.commodity] = exact_add(totals.get(posting.commodity, Decimal(0)), posting.quantity)
        return totals

    def is_balanced(self) -> bool:
        return all(total.is_zero() for total in self.imbalances().values())

    @property
    def commodities(self) -> list[str]:
        """Commodities used by the postings, in first-seen order."""
        return _unique(p.commodity for p in self.postings)

    @property
    def accounts(self) -> list[str]:
        """Account names used by the postings, in first-seen order."""
        return _unique(p.account.name for p in self.postings)

    def postings_for_account(self, pattern: str) -> list[Posting]:
        return [p for p in self.postings if p.account.matches_pattern(pattern)]

    def postings_for_commodity(self, commodity: str) -> list[Posting]:
        return [p for p in self.postings if p.commodity == commodity]

    def with_id(self, id: str) -> "Transaction":
        """Return a copy carrying a different id."""
        return replace(self, id=id)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Transaction):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def __str__(self) -> str:
        lines = [f"{self.date.strftime('%Y/%m/%d')} {self.description}"]
        lines.extend(str(p) for p in self.postings)
        return "\n".join(lines)


def _unique(values: Iterable[str]) -> list[str]:
    return list(dict.fromkeys(values))
