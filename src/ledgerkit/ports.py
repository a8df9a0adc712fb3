"""Repository interfaces consumed by the ledger service."""

from dataclasses import dataclass
from datetime import date, datetime
from typing import Protocol

from ledgerkit.domain import Price, Transaction


@dataclass(frozen=True)
class HeadInfo:
    """Version marker of a ledger store, used for cache invalidation."""

    version: str
    last_modified: datetime | None = None


@dataclass(frozen=True)
class TransactionFilter:
    """Criteria for listing transactions. Unset fields do not filter."""

    from_date: date | None = None
    to_date: date | None = None
    account_pattern: str | None = None
    commodity: str | None = None
    description: str | None = None
    offset: int | None = None
    limit: int | None = None

    def matches(self, transaction: Transaction) -> bool:
        """Check the per-transaction criteria (offset/limit excluded)."""
        if self.from_date and transaction.date < self.from_date:
            return False
        if self.to_date and transaction.date > self.to_date:
            return False
        if self.account_pattern and not transaction.postings_for_account(self.account_pattern):
            return False
        if self.commodity and not transaction.postings_for_commodity(self.commodity):
            return False
        if self.description and self.description.lower() not in transaction.description.lower():
            return False
        return True

    def apply(self, transactions: list[Transaction]) -> list[Transaction]:
        """Filter, then apply offset and limit."""
        result = [t for t in transactions if self.matches(t)]
        if self.offset:
            result = result[self.offset :]
        if self.limit:
            result = result[: self.limit]
        return result


@dataclass(frozen=True)
class PriceFilter:
    """Criteria for listing prices. Unset fields do not filter."""

    base_commodity: str | None = None
    quote_commodity: str | None = None
    from_date: date | None = None
    to_date: date | None = None

    def matches(self, price: Price) -> bool:
        if self.base_commodity and price.base_commodity != self.base_commodity:
            return False
        if self.quote_commodity and price.quote_commodity != self.quote_commodity:
            return False
        if self.from_date and price.date < self.from_date:
            return False
        if self.to_date and price.date > self.to_date:
            return False
        return True


class LedgerRepository(Protocol):
    """Storage of transactions."""

    def head(self) -> HeadInfo: ...

    def list_transactions(self, filter: TransactionFilter | None = None) -> list[Transaction]: ...

    def get_transaction(self, id: str) -> Transaction | None: ...

    def append_transactions(self, transactions: list[Transaction]) -> list[Transaction]:
        """Append atomically; return the transactions as stored."""
        ...

    def exists_external_id(self, external_id: str) -> bool:
        """Idempotency check for imports."""
        ...

    def list_accounts(self) -> list[str]: ...

    def list_commodities(self) -> list[str]: ...


class PriceRepository(Protocol):
    """Storage of price directives."""

    def list_prices(self, filter: PriceFilter | None = None) -> list[Price]: ...

    def get_price(
        self,
        base_commodity: str,
        quote_commodity: str,
        as_of_date: date | None = None,
    ) -> Price | None:
        """Latest price on or before ``as_of_date``, inverting if needed."""
        ...

    def upsert_prices(self, prices: list[Price]) -> None: ...

    def list_base_commodities(self) -> list[str]: ...
