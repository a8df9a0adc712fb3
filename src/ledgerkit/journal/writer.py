"""Render transactions and prices as canonical journal text."""

import logging
import re
from collections.abc import Sequence
from datetime import date
from enum import StrEnum

from ledgerkit.domain import Posting, Price, Transaction
from ledgerkit.numeric import format_decimal

logger = logging.getLogger(__name__)

_NEEDS_QUOTES = re.compile(r"[^A-Za-z0-9_-]")
_MIN_PADDING = 4


class DateFormat(StrEnum):
    """Separator style for written dates."""

    SLASH = "slash"
    DASH = "dash"


def format_commodity(commodity: str) -> str:
    """Quote a commodity symbol when it would not lex as a bare identifier."""
    if _NEEDS_QUOTES.search(commodity) or commodity[:1].isdigit():
        return f'"{commodity}"'
    return commodity


class JournalWriter:
    """Serializes domain objects to journal text.

    Example:
        writer = JournalWriter(date_format=DateFormat.DASH, amount_alignment=60)
        text = writer.append_to_journal(existing, [transaction], [price])

    Output for a transaction:
        2024/01/15 Coffee ; extid:abc123
          Assets:Cash                                     -$ 5
          Expenses:Food                                   $ 5
    """

    def __init__(
        self,
        *,
        date_format: DateFormat | str = DateFormat.SLASH,
        amount_alignment: int = 50,
        indent_size: int = 2,
    ) -> None:
        self.date_format = DateFormat(date_format)
        self.amount_alignment = amount_alignment
        self.indent_size = indent_size

    def write_transaction(self, transaction: Transaction) -> str:
        """Render a transaction header and its postings."""
        header = f"{self.format_date(transaction.date)} {transaction.description}"

        # The external id travels inside the comment as extid:<value>.
        comment_parts = []
        if transaction.external_id:
            comment_parts.append(f"extid:{transaction.external_id}")
        if transaction.comment:
            comment_parts.append(transaction.comment)
        if comment_parts:
            header += f" ; {' '.join(comment_parts)}"

        lines = [header]
        lines.extend(self.write_posting(posting) for posting in transaction.postings)
        return "\n".join(lines)

    def write_posting(self, posting: Posting) -> str:
        """Render one posting with its amount aligned to ``amount_alignment``."""
        indent = " " * self.indent_size
        account = posting.account.name
        padding = max(_MIN_PADDING, self.amount_alignment - len(indent) - len(account))

        line = f"{indent}{account}{' ' * padding}{self.format_amount(posting)}"
        if posting.comment:
            line += f"  ; {posting.comment}"
        return line

    def write_price(self, price: Price) -> str:
        """Render a ``P`` directive."""
        line = (
            f"P {self.format_date(price.date)} {self._price_commodity(price.base_commodity)} "
            f"{self._price_commodity(price.quote_commodity)} {format_decimal(price.price)}"
        )
        if price.comment:
            line += f" ;; {price.comment}"
        return line

    def format_amount(self, posting: Posting) -> str:
        """Render ``$ N`` / ``-$ N`` for dollars and ``SYMBOL N`` otherwise."""
        quantity = posting.quantity
        if posting.commodity == "$":
            if quantity < 0:
                return f"-$ {format_decimal(quantity.copy_abs())}"
            return f"$ {format_decimal(quantity)}"
        return f"{format_commodity(posting.commodity)} {format_decimal(quantity)}"

    def format_date(self, value: date) -> str:
        separator = "/" if self.date_format == DateFormat.SLASH else "-"
        return f"{value.year:04d}{separator}{value.month:02d}{separator}{value.day:02d}"

    def write_entries(self, transactions: Sequence[Transaction], prices: Sequence[Price]) -> str:
        """Render transactions and prices merged in date order.

        The sort is stable, so entries sharing a date keep their input order
        with transactions ahead of prices. Every entry is followed by a
        blank line.
        """
        entries: list[Transaction | Price] = [*transactions, *prices]
        entries.sort(key=lambda entry: entry.date)

        lines = []
        for entry in entries:
            if isinstance(entry, Transaction):
                lines.append(self.write_transaction(entry))
            else:
                lines.append(self.write_price(entry))
            lines.append("")
        return "\n".join(lines)

    def append_to_journal(
        self,
        existing: str,
        transactions: Sequence[Transaction],
        prices: Sequence[Price] = (),
    ) -> str:
        """Return ``existing`` followed by the new entries.

        Trailing whitespace of ``existing`` is normalised so that exactly
        one blank line separates it from the appended block.
        """
        logger.debug("Appending %d transaction(s) and %d price(s)", len(transactions), len(prices))
        result = existing.rstrip()
        if result:
            result += "\n\n"
        return result + self.write_entries(transactions, prices)

    def _price_commodity(self, commodity: str) -> str:
        # A bare $ lexes as a commodity token, so it is left unquoted in directives.
        return commodity if commodity == "$" else format_commodity(commodity)


def append_to_journal(
    existing: str,
    transactions: Sequence[Transaction],
    prices: Sequence[Price] = (),
) -> str:
    """Append entries using a default JournalWriter."""
    return JournalWriter().append_to_journal(existing, transactions, prices)
