"""Fluent builders for transactions and prices."""

from datetime import date
from decimal import Decimal

from ledgerkit.domain import Account, Money, Posting, Price, Transaction
from ledgerkit.journal.convert import parse_date
from ledgerkit.numeric import to_decimal

__all__ = [
    "PriceBuilder",
    "TransactionBuilder",
]


def _as_date(value: date | str) -> date:
    return parse_date(value) if isinstance(value, str) else value


class TransactionBuilder:
    """Fluent builder for transactions.

    Example:
        txn = (
            TransactionBuilder()
            .with_date("2024/01/15")
            .with_description("Coffee")
            .add_posting("Assets:Cash", "-5", "$")
            .add_posting("Expenses:Food", "5", "$")
            .build()
        )

    ``build`` runs the usual Transaction validation.
    """

    def __init__(self) -> None:
        self._id: str | None = None
        self._date: date = date.today()
        self._description = "Test transaction"
        self._postings: list[Posting] = []
        self._comment: str | None = None
        self._external_id: str | None = None
        self._metadata: dict[str, str] = {}

    def with_id(self, id: str) -> "TransactionBuilder":
        self._id = id
        return self

    def with_date(self, value: date | str) -> "TransactionBuilder":
        """Set the date from a date or ``YYYY/MM/DD`` / ``YYYY-MM-DD`` text."""
        self._date = _as_date(value)
        return self

    def with_description(self, description: str) -> "TransactionBuilder":
        self._description = description
        return self

    def with_comment(self, comment: str) -> "TransactionBuilder":
        self._comment = comment
        return self

    def with_external_id(self, external_id: str) -> "TransactionBuilder":
        self._external_id = external_id
        return self

    def with_metadata(self, metadata: dict[str, str]) -> "TransactionBuilder":
        self._metadata = dict(metadata)
        return self

    def add_posting(
        self,
        account: str,
        quantity: Decimal | str | int,
        commodity: str,
        *,
        comment: str | None = None,
    ) -> "TransactionBuilder":
        """Add a posting of ``quantity`` ``commodity`` to ``account``."""
        self._postings.append(
            Posting(
                account=Account(name=account),
                amount=Money(quantity=to_decimal(quantity), commodity=commodity),
                comment=comment,
            )
        )
        return self

    def with_postings(self, postings: list[Posting]) -> "TransactionBuilder":
        """Replace all postings."""
        self._postings = list(postings)
        return self

    def build(self) -> Transaction:
        """Build the transaction.

        Raises:
            ValidationError: If the description is empty or there are fewer than 2 postings
            BalanceError: If the postings do not balance
        """
        kwargs = {}
        if self._id is not None:
            kwargs["id"] = self._id
        return Transaction(
            date=self._date,
            description=self._description,
            postings=self._postings,
            comment=self._comment,
            external_id=self._external_id,
            metadata=self._metadata,
            **kwargs,
        )

    @classmethod
    def balanced_usd(
        cls,
        from_account: str,
        to_account: str,
        amount: Decimal | str | int,
    ) -> Transaction:
        """Shortcut for a two-posting dollar transfer."""
        quantity = to_decimal(amount)
        return (
            cls()
            .add_posting(from_account, -quantity, "$")
            .add_posting(to_account, quantity, "$")
            .build()
        )


class PriceBuilder:
    """Fluent builder for price directives.

    Example:
        price = PriceBuilder().with_base("ETH").with_price("2500.50").build()
    """

    def __init__(self) -> None:
        self._date: date = date.today()
        self._base = "ETH"
        self._quote = "$"
        self._price: Decimal = Decimal(1)
        self._comment: str | None = None

    def with_date(self, value: date | str) -> "PriceBuilder":
        self._date = _as_date(value)
        return self

    def with_base(self, commodity: str) -> "PriceBuilder":
        self._base = commodity
        return self

    def with_quote(self, commodity: str) -> "PriceBuilder":
        self._quote = commodity
        return self

    def with_price(self, price: Decimal | str | int) -> "PriceBuilder":
        self._price = to_decimal(price)
        return self

    def with_comment(self, comment: str) -> "PriceBuilder":
        self._comment = comment
        return self

    def build(self) -> Price:
        return Price(
            date=self._date,
            base_commodity=self._base,
            quote_commodity=self._quote,
            price=self._price,
            comment=self._comment,
        )
