"""Fold transactions into positions and balances."""

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import date
from decimal import Context, Decimal

from ledgerkit.domain import Account, Money, Price, Transaction
from ledgerkit.numeric import DEFAULT_DECIMAL_CONFIG, DecimalConfig, exact_add

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Position:
    """Net quantity of one commodity held in one account."""

    account: str
    commodity: str
    quantity: Decimal


@dataclass
class Balance:
    """Per-commodity totals for an account (or an account pattern)."""

    account: str
    positions: dict[str, Decimal] = field(default_factory=dict)

    def quantity(self, commodity: str) -> Decimal:
        return self.positions.get(commodity, Decimal(0))


class BalanceCalculator:
    """Aggregates transactions into positions and balances.

    Example:
        calculator = BalanceCalculator()
        balances = calculator.calculate_balances(transactions, include_subaccounts=True)
        total = calculator.convert_balance(
            calculator.get_balance_for_pattern(transactions, "Assets:**"),
            "$",
            prices,
        )
    """

    def __init__(self, decimal_config: DecimalConfig = DEFAULT_DECIMAL_CONFIG) -> None:
        self.decimal_config = decimal_config

    def calculate_positions(
        self,
        transactions: Iterable[Transaction],
        *,
        as_of_date: date | None = None,
    ) -> list[Position]:
        """Sum postings per (account, commodity).

        Transactions dated after ``as_of_date`` are ignored. Positions that net
        to exactly zero are left out.
        """
        totals: dict[tuple[str, str], Decimal] = {}

        for transaction in transactions:
            if as_of_date and transaction.date > as_of_date:
                continue
            for posting in transaction.postings:
                key = (posting.account.name, posting.commodity)
                totals[key] = exact_add(totals.get(key, Decimal(0)), posting.quantity)

        return [
            Position(account=account, commodity=commodity, quantity=quantity)
            for (account, commodity), quantity in totals.items()
            if not quantity.is_zero()
        ]

    def calculate_balances(
        self,
        transactions: Iterable[Transaction],
        *,
        as_of_date: date | None = None,
        include_subaccounts: bool = False,
    ) -> list[Balance]:
        """Group positions by account, sorted by account name.

        With ``include_subaccounts`` every account's positions are also added
        to each of its ancestors, creating ancestor balances as needed.
        """
        direct: dict[str, dict[str, Decimal]] = {}
        for position in self.calculate_positions(transactions, as_of_date=as_of_date):
            direct.setdefault(position.account, {})[position.commodity] = position.quantity

        balances = {name: dict(positions) for name, positions in direct.items()}

        if include_subaccounts:
            for name, positions in direct.items():
                for ancestor in Account(name=name).ancestors:
                    target = balances.setdefault(ancestor.name, {})
                    for commodity, quantity in positions.items():
                        target[commodity] = exact_add(target.get(commodity, Decimal(0)), quantity)

        return [Balance(account=name, positions=balances[name]) for name in sorted(balances)]

    def get_balance_for_pattern(
        self,
        transactions: Iterable[Transaction],
        pattern: str,
        *,
        as_of_date: date | None = None,
    ) -> Balance:
        """Aggregate the positions of every account matching ``pattern``."""
        aggregated: dict[str, Decimal] = {}
        for position in self.calculate_positions(transactions, as_of_date=as_of_date):
            if Account(name=position.account).matches_pattern(pattern):
                current = aggregated.get(position.commodity, Decimal(0))
                aggregated[position.commodity] = exact_add(current, position.quantity)
        return Balance(account=pattern, positions=aggregated)

    def convert_balance(
        self,
        balance: Balance,
        target_commodity: str,
        prices: Iterable[Price],
        *,
        as_of_date: date | None = None,
    ) -> Money:
        """Express a balance in a single commodity.

        Each commodity is converted with a direct price, or the inverse of a
        price quoted the other way round. Commodities without either are left
        out of the total; this is best effort, not an error.
        """
        context = self.decimal_config.context()
        candidates = [p for p in prices if as_of_date is None or p.date <= as_of_date]
        total = Decimal(0)

        for commodity, quantity in balance.positions.items():
            if commodity == target_commodity:
                total = context.add(total, quantity)
                continue
            price = find_price(candidates, commodity, target_commodity, context=context)
            if price is None:
                logger.debug("No price for %s in %s, omitting from total", commodity, target_commodity)
                continue
            total = context.add(total, price.convert(quantity, context))

        return Money(quantity=total, commodity=target_commodity)


def find_price(
    prices: Iterable[Price],
    base_commodity: str,
    quote_commodity: str,
    *,
    context: Context | None = None,
) -> Price | None:
    """Return the most recent direct price, else the most recent inverse price inverted.

    Among prices with the same date the one listed last wins. A zero price
    has no inverse, so it is never used the other way round.
    """
    direct: Price | None = None
    inverse: Price | None = None
    for price in prices:
        if price.base_commodity == base_commodity and price.quote_commodity == quote_commodity:
            if direct is None or price.date >= direct.date:
                direct = price
        elif price.base_commodity == quote_commodity and price.quote_commodity == base_commodity:
            if price.price.is_zero():
                continue
            if inverse is None or price.date >= inverse.date:
                inverse = price

    if direct is not None:
        return direct
    if inverse is not None:
        return inverse.invert(context)
    return None
