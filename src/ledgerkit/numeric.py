"""Decimal arithmetic configuration.

Quantities are always ``decimal.Decimal``. Operations that can lose precision
(division, multiplication) take an explicit context built from a
``DecimalConfig`` instead of relying on the thread-local default context.
Addition is always exact.
"""

from dataclasses import dataclass
from decimal import MAX_EMAX, MAX_PREC, MIN_EMIN, ROUND_HALF_UP, Context, Decimal

DEFAULT_PRECISION = 20


@dataclass(frozen=True, slots=True)
class DecimalConfig:
    """Precision and rounding used for ledger arithmetic."""

    precision: int = DEFAULT_PRECISION
    rounding: str = ROUND_HALF_UP

    def context(self) -> Context:
        """Build a fresh decimal context for these settings."""
        return Context(prec=self.precision, rounding=self.rounding)


DEFAULT_DECIMAL_CONFIG = DecimalConfig()

# Sums of ledger quantities must be exact; the balance check depends on it.
_EXACT = Context(prec=MAX_PREC, Emax=MAX_EMAX, Emin=MIN_EMIN)


def to_decimal(value: Decimal | str | int) -> Decimal:
    """Coerce a quantity to Decimal.

    Floats are rejected; pass a string instead.
    """
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        msg = f"Refusing to build a Decimal from float {value!r}; pass a string"
        raise TypeError(msg)
    return Decimal(value)


def exact_add(left: Decimal, right: Decimal) -> Decimal:
    """Add two Decimals without rounding, whatever their magnitudes."""
    return _EXACT.add(left, right)


def format_decimal(value: Decimal) -> str:
    """Render a Decimal in plain positional notation (never exponent form)."""
    text = format(value, "f")
    if text.startswith("-") and value.is_zero():
        return text[1:]
    return text
