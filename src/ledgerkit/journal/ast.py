"""Journal syntax tree produced by the parser.

Nodes keep the source text of dates and numbers unparsed; conversion into
domain objects happens in ``ledgerkit.journal.convert``. Entries form a
tagged union discriminated by ``type`` and appear in textual order.
"""

from enum import StrEnum
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field


class CommodityPosition(StrEnum):
    """Where the commodity symbol sits relative to the number."""

    PREFIX = "prefix"
    SUFFIX = "suffix"


class AmountNode(BaseModel):
    """An amount as written, e.g. ``-$ 100`` or ``0.123 ETH``."""

    quantity: str
    commodity: str
    is_negative: bool = False
    commodity_position: CommodityPosition = CommodityPosition.PREFIX

    model_config = ConfigDict(frozen=True)

    @property
    def signed_quantity(self) -> str:
        """Return the quantity text with its sign applied."""
        return f"-{self.quantity}" if self.is_negative else self.quantity


class PostingNode(BaseModel):
    """One indented posting line. ``amount`` is None for an elided posting."""

    type: Literal["posting"] = "posting"
    account: str
    amount: AmountNode | None = Field(default=None)
    comment: str | None = Field(default=None)
    line: int

    model_config = ConfigDict(frozen=True)


class TransactionNode(BaseModel):
    """A dated header line followed by its postings."""

    type: Literal["transaction"] = "transaction"
    date: str
    description: str
    postings: list[PostingNode] = Field(default_factory=list)
    comment: str | None = Field(default=None)
    line: int

    model_config = ConfigDict(frozen=True)


class PriceNode(BaseModel):
    """A ``P DATE BASE [QUOTE] PRICE`` directive."""

    type: Literal["price"] = "price"
    date: str
    base_commodity: str
    quote_commodity: str
    price: str
    comment: str | None = Field(default=None)
    line: int

    model_config = ConfigDict(frozen=True)


class CommentNode(BaseModel):
    """A standalone comment line, prefix stripped."""

    type: Literal["comment"] = "comment"
    text: str
    line: int

    model_config = ConfigDict(frozen=True)


JournalEntry = Annotated[TransactionNode | PriceNode | CommentNode, Field(discriminator="type")]


class JournalAST(BaseModel):
    """All entries of one journal, in textual order."""

    entries: list[JournalEntry] = Field(default_factory=list)

    @property
    def transactions(self) -> list[TransactionNode]:
        return [e for e in self.entries if isinstance(e, TransactionNode)]

    @property
    def prices(self) -> list[PriceNode]:
        return [e for e in self.entries if isinstance(e, PriceNode)]

    @property
    def comments(self) -> list[CommentNode]:
        return [e for e in self.entries if isinstance(e, CommentNode)]
