"""Price directives: exchange rates between two commodities."""

from dataclasses import dataclass, field
from datetime import date
from decimal import Context, Decimal

from ledgerkit.exceptions import ValidationError
from ledgerkit.numeric import DEFAULT_DECIMAL_CONFIG, format_decimal, to_decimal


@dataclass(frozen=True)
class Price:
    """The value of one unit of ``base_commodity`` in ``quote_commodity``.

    Attributes:
        date: Date the rate applies from
        base_commodity: Commodity being priced (e.g., "ETH")
        quote_commodity: Commodity the price is expressed in (e.g., "$")
        price: Quote units per base unit
        comment: Optional annotation
    """

    date: date
    base_commodity: str
    quote_commodity: str
    price: Decimal
    comment: str | None = field(default=None, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "price", to_decimal(self.price))

    def convert(self, quantity: Decimal, context: Context | None = None) -> Decimal:
        """Convert a base-commodity quantity into the quote commodity."""
        ctx = context or DEFAULT_DECIMAL_CONFIG.context()
        return ctx.multiply(quantity, self.price)

    def invert(self, context: Context | None = None) -> "Price":
        """Swap base and quote, taking the reciprocal rate.

        Raises:
            ValidationError: The price is zero
        """
        if self.price.is_zero():
            raise ValidationError("Cannot invert a zero price", field="price", value=self.price)
        ctx = context or DEFAULT_DECIMAL_CONFIG.context()
        return Price(
            date=self.date,
            base_commodity=self.quote_commodity,
            quote_commodity=self.base_commodity,
            price=ctx.divide(Decimal(1), self.price),
            comment=self.comment,
        )

    def __str__(self) -> str:
        return (
            f"P {self.date.strftime('%Y/%m/%d')} {self.base_commodity} "
            f"{self.quote_commodity} {format_decimal(self.price)}"
        )
