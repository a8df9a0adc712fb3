"""Money: a decimal quantity of a single commodity."""

from dataclasses import dataclass
from decimal import Context, Decimal

from ledgerkit.domain.commodity import Commodity
from ledgerkit.exceptions import CommodityMismatchError
from ledgerkit.numeric import DEFAULT_DECIMAL_CONFIG, exact_add, format_decimal, to_decimal


@dataclass(frozen=True)
class Money:
    """An amount of a commodity.

    Attributes:
        quantity: Signed decimal quantity (positive=debit, negative=credit)
        commodity: Commodity symbol

    Construction accepts a Decimal, str or int quantity and either a
    Commodity or a symbol string. Adding or subtracting amounts of
    different commodities raises CommodityMismatchError.
    """

    quantity: Decimal
    commodity: str

    def __post_init__(self) -> None:
        object.__setattr__(self, "quantity", to_decimal(self.quantity))
        if isinstance(self.commodity, Commodity):
            object.__setattr__(self, "commodity", self.commodity.symbol)

    @classmethod
    def zero(cls, commodity: Commodity | str) -> "Money":
        """Return a zero amount of ``commodity``."""
        return cls(quantity=Decimal(0), commodity=commodity)

    def is_zero(self) -> bool:
        return self.quantity.is_zero()

    def is_positive(self) -> bool:
        return self.quantity > 0

    def is_negative(self) -> bool:
        return self.quantity < 0

    def abs(self) -> "Money":
        return Money(quantity=self.quantity.copy_abs(), commodity=self.commodity)

    def negate(self) -> "Money":
        return Money(quantity=self.quantity.copy_negate(), commodity=self.commodity)

    def add(self, other: "Money") -> "Money":
        """Return the sum of two amounts of the same commodity."""
        self._check_commodity(other, "add")
        return Money(quantity=exact_add(self.quantity, other.quantity), commodity=self.commodity)

    def subtract(self, other: "Money") -> "Money":
        """Return the difference of two amounts of the same commodity."""
        self._check_commodity(other, "subtract")
        return Money(quantity=exact_add(self.quantity, other.quantity.copy_negate()), commodity=self.commodity)

    def multiply(self, factor: Decimal | str | int, context: Context | None = None) -> "Money":
        """Scale the quantity by ``factor`` using the given decimal context."""
        ctx = context or DEFAULT_DECIMAL_CONFIG.context()
        return Money(quantity=ctx.multiply(self.quantity, to_decimal(factor)), commodity=self.commodity)

    def _check_commodity(self, other: "Money", operation: str) -> None:
        if self.commodity != other.commodity:
            raise CommodityMismatchError(
                f"Cannot {operation} different commodities: {self.commodity} and {other.commodity}",
                left=self.commodity,
                right=other.commodity,
            )

    __add__ = add
    __sub__ = subtract
    __neg__ = negate

    def __str__(self) -> str:
        return f"{self.commodity} {format_decimal(self.quantity)}"
