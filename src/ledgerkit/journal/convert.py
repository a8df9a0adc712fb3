"""Convert journal syntax nodes into domain objects."""

import logging
import re
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal, InvalidOperation

from ledgerkit.domain import Account, Money, Posting, Price, Transaction
from ledgerkit.exceptions import LedgerError, ValidationError
from ledgerkit.journal.ast import CommentNode, JournalAST, PostingNode, PriceNode, TransactionNode
from ledgerkit.journal.parser import parse
from ledgerkit.numeric import exact_add

logger = logging.getLogger(__name__)

_DATE = re.compile(r"^(\d{4})[/-](\d{1,2})[/-](\d{1,2})$")
_EXTERNAL_ID = re.compile(r"extid:(\S+)")
_EXTERNAL_ID_TOKEN = re.compile(r"extid:\S+\s*")


def parse_date(value: str) -> date:
    """Parse ``YYYY/MM/DD`` or ``YYYY-MM-DD`` (separators may be mixed).

    Raises:
        ValueError: If the text is not a valid calendar date
    """
    match = _DATE.match(value)
    if match is None:
        msg = f"Invalid date: {value!r}"
        raise ValueError(msg)
    year, month, day = (int(part) for part in match.groups())
    return date(year, month, day)


def extract_external_id(comment: str | None) -> tuple[str | None, str | None]:
    """Split an ``extid:<token>`` marker out of a comment.

    Returns:
        Tuple of (external_id, remaining comment or None if nothing is left)
    """
    if not comment:
        return None, comment
    match = _EXTERNAL_ID.search(comment)
    if match is None:
        return None, comment
    remaining = _EXTERNAL_ID_TOKEN.sub("", comment, count=1).strip()
    return match.group(1), remaining or None


def node_to_posting(node: PostingNode) -> Posting:
    """Convert a posting node that carries an explicit amount."""
    if node.amount is None:
        raise ValidationError("Posting must have an amount", field="amount")

    quantity = Decimal(node.amount.quantity)
    if node.amount.is_negative:
        quantity = -quantity

    return Posting(
        account=Account(name=node.account),
        amount=Money(quantity=quantity, commodity=node.amount.commodity),
        comment=node.comment,
    )


def node_to_transaction(node: TransactionNode) -> Transaction:
    """Convert a transaction node, inferring the elided posting if any.

    At most one posting may omit its amount. It receives, for each
    commodity, the negated sum of the explicit postings; one posting is
    emitted per commodity with a non-zero sum.

    Raises:
        ValidationError: More than one elided posting, or invalid fields
        BalanceError: The resulting postings do not balance
        ValueError: The date is not a valid calendar date
    """
    explicit = [p for p in node.postings if p.amount is not None]
    elided = [p for p in node.postings if p.amount is None]

    if len(elided) > 1:
        raise ValidationError(
            "Only one posting may have an elided amount",
            field="postings",
            value=len(elided),
        )

    postings = [node_to_posting(p) for p in explicit]

    if elided:
        elided_node = elided[0]
        account = Account(name=elided_node.account)
        sums: dict[str, Decimal] = {}
        for posting in postings:
            sums[posting.commodity] = exact_add(sums.get(posting.commodity, Decimal(0)), posting.quantity)
        postings.extend(
            Posting(
                account=account,
                amount=Money(quantity=total.copy_negate(), commodity=commodity),
                comment=elided_node.comment,
            )
            for commodity, total in sums.items()
            if not total.is_zero()
        )

    external_id, comment = extract_external_id(node.comment)

    return Transaction(
        id=f"{node.date}-{node.line}",
        date=parse_date(node.date),
        description=node.description,
        postings=postings,
        comment=comment,
        external_id=external_id,
    )


def node_to_price(node: PriceNode) -> Price:
    """Convert a price directive node."""
    return Price(
        date=parse_date(node.date),
        base_commodity=node.base_commodity,
        quote_commodity=node.quote_commodity,
        price=Decimal(node.price),
        comment=node.comment,
    )


@dataclass(frozen=True)
class SkippedEntry:
    """An entry that parsed but could not be converted."""

    line: int
    kind: str
    reason: str


@dataclass
class LoadedJournal:
    """Domain view of one journal text."""

    transactions: list[Transaction] = field(default_factory=list)
    prices: list[Price] = field(default_factory=list)
    comments: list[CommentNode] = field(default_factory=list)
    skipped: list[SkippedEntry] = field(default_factory=list)


def convert_ast(ast: JournalAST) -> LoadedJournal:
    """Convert every entry of an AST, skipping the ones that fail.

    A failing entry is logged as a warning and recorded in ``skipped`` so
    that one bad transaction does not prevent loading the rest.
    """
    loaded = LoadedJournal()

    for entry in ast.entries:
        try:
            if isinstance(entry, TransactionNode):
                loaded.transactions.append(node_to_transaction(entry))
            elif isinstance(entry, PriceNode):
                loaded.prices.append(node_to_price(entry))
            else:
                loaded.comments.append(entry)
        except (LedgerError, ValueError, InvalidOperation) as e:
            logger.warning("Skipping invalid %s at line %d: %s", entry.type, entry.line, e)
            loaded.skipped.append(SkippedEntry(line=entry.line, kind=entry.type, reason=str(e)))

    return loaded


def load_journal(text: str) -> LoadedJournal:
    """Parse and convert journal text.

    Raises:
        ParseError: If the text is structurally malformed
    """
    return convert_ast(parse(text))
