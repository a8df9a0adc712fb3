"""Commodities: units of value held in ledger accounts."""

from dataclasses import dataclass, field
from enum import StrEnum

from ledgerkit.exceptions import ValidationError


class CommodityType(StrEnum):
    """Broad class of a commodity, used to pick a display precision."""

    FIAT = "fiat"
    CRYPTO = "crypto"
    STOCK = "stock"
    FUND = "fund"
    BOND = "bond"


DEFAULT_PRECISION: dict[CommodityType, int] = {
    CommodityType.FIAT: 2,
    CommodityType.CRYPTO: 8,
    CommodityType.STOCK: 3,
    CommodityType.FUND: 4,
    CommodityType.BOND: 4,
}


@dataclass(frozen=True)
class Commodity:
    """A currency, token, security or bond identified by its symbol.

    Attributes:
        symbol: Symbol as written in the journal (e.g., "$", "ETH", "AY24")
        type: Commodity class
        precision: Decimal places for display; defaults by type
        name: Optional human-readable name
    """

    symbol: str
    type: CommodityType = field(default=CommodityType.FIAT, compare=False)
    precision: int | None = field(default=None, compare=False)
    name: str | None = field(default=None, compare=False)

    def __post_init__(self) -> None:
        if not self.symbol or not self.symbol.strip():
            raise ValidationError("Commodity symbol cannot be empty", field="symbol", value=self.symbol)
        if self.precision is None:
            object.__setattr__(self, "precision", DEFAULT_PRECISION[self.type])

    def __str__(self) -> str:
        return self.symbol


USD = Commodity(symbol="$", type=CommodityType.FIAT, precision=2, name="US Dollar")
EUR = Commodity(symbol="EUR", type=CommodityType.FIAT, precision=2, name="Euro")
ARS = Commodity(symbol="ARS", type=CommodityType.FIAT, precision=2, name="Argentine Peso")
