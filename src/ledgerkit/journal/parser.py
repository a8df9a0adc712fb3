"""Recursive-descent parser from journal tokens to a JournalAST.

The parser is deliberately permissive. Lines that do not start with a
comment, a price directive or a date are skipped without error, because
hand-edited journals are full of small irregularities. ParseError is
raised only when a construct has started and a required token is missing
(a price directive without a price, an amount without a number).
"""

import re

from ledgerkit.exceptions import ParseError
from ledgerkit.journal.ast import (
    AmountNode,
    CommentNode,
    CommodityPosition,
    JournalAST,
    JournalEntry,
    PostingNode,
    PriceNode,
    TransactionNode,
)
from ledgerkit.journal.lexer import Token, TokenType, tokenize

_COMMENT_PREFIX = re.compile(r"^;+\s*")

# Tokens that make up a transaction description.
_DESCRIPTION_TYPES = {TokenType.TEXT, TokenType.COMMODITY, TokenType.NUMBER, TokenType.DATE}
_AMOUNT_START_TYPES = {
    TokenType.MINUS,
    TokenType.COMMODITY,
    TokenType.QUOTED_COMMODITY,
    TokenType.NUMBER,
}


def _strip_comment(value: str) -> str:
    return _COMMENT_PREFIX.sub("", value).strip()


class Parser:
    """Parses journal text into a JournalAST.

    A Parser instance holds only the state of the call in progress, so
    calling ``parse`` repeatedly (or from separate instances) is safe and
    deterministic.

    Example:
        ast = Parser().parse(text)
        for entry in ast.entries:
            ...
    """

    def __init__(self) -> None:
        self._tokens: list[Token] = []
        self._pos = 0

    def parse(self, text: str) -> JournalAST:
        """Parse journal text.

        Raises:
            ParseError: If a required token is missing
        """
        self._tokens = tokenize(text)
        self._pos = 0

        entries: list[JournalEntry] = []
        while not self._at_end():
            self._skip_newlines()
            if self._at_end():
                break
            entry = self._parse_entry()
            if entry is not None:
                entries.append(entry)

        return JournalAST(entries=entries)

    # Entries

    def _parse_entry(self) -> JournalEntry | None:
        if self._check(TokenType.COMMENT):
            token = self._advance()
            return CommentNode(text=_strip_comment(token.value), line=token.line)

        if self._check(TokenType.PRICE_DIRECTIVE):
            return self._parse_price_directive()

        if self._check(TokenType.DATE):
            return self._parse_transaction()

        self._skip_line()
        return None

    def _parse_price_directive(self) -> PriceNode:
        line = self._advance().line

        if not self._check(TokenType.DATE):
            raise self._error("Expected date after P")
        date = self._advance().value

        base = self._parse_commodity_symbol()

        if self._check(TokenType.COMMODITY) and self._peek().value == "$":
            quote = self._advance().value
            price = self._parse_number_value()
        elif self._check(TokenType.COMMODITY) or self._check(TokenType.QUOTED_COMMODITY):
            quote = self._parse_commodity_symbol()
            price = self._parse_number_value()
        elif self._check(TokenType.NUMBER) or self._check(TokenType.MINUS):
            quote = "$"
            price = self._parse_number_value()
        else:
            raise self._error("Expected quote commodity or price")

        comment = None
        if self._check(TokenType.COMMENT):
            comment = _strip_comment(self._advance().value)

        self._skip_to_end_of_line()

        return PriceNode(
            date=date,
            base_commodity=base,
            quote_commodity=quote,
            price=price,
            comment=comment,
            line=line,
        )

    def _parse_transaction(self) -> TransactionNode:
        date_token = self._advance()

        words: list[str] = []
        while not self._at_end() and not self._check(TokenType.NEWLINE) and not self._check(TokenType.COMMENT):
            token = self._advance()
            if token.type in _DESCRIPTION_TYPES:
                words.append(token.value)

        comment = None
        if self._check(TokenType.COMMENT):
            comment = _strip_comment(self._advance().value)

        self._skip_newlines()

        postings: list[PostingNode] = []
        while self._check(TokenType.INDENT):
            posting = self._parse_posting()
            if posting is not None:
                postings.append(posting)
            self._skip_newlines()

        return TransactionNode(
            date=date_token.value,
            description=" ".join(words).strip(),
            postings=postings,
            comment=comment,
            line=date_token.line,
        )

    def _parse_posting(self) -> PostingNode | None:
        line = self._advance().line

        if self._check(TokenType.NEWLINE) or self._at_end():
            return None

        if self._check(TokenType.COMMENT):
            self._advance()
            return None

        if not self._check(TokenType.ACCOUNT) and not self._check(TokenType.COMMODITY):
            self._skip_to_end_of_line()
            return None

        account = self._advance().value
        # Names with unusual characters can arrive split over several tokens.
        while (self._check(TokenType.ACCOUNT) or self._check(TokenType.COMMODITY)) and ":" in self._peek().value:
            account += self._advance().value

        amount = None
        if self._peek().type in _AMOUNT_START_TYPES:
            amount = self._parse_amount()

        comment = None
        if self._check(TokenType.COMMENT):
            comment = _strip_comment(self._advance().value)

        self._skip_to_end_of_line()

        return PostingNode(account=account, amount=amount, comment=comment, line=line)

    # Amounts

    def _parse_amount(self) -> AmountNode:
        """Parse ``-$ N``, ``$ N``, ``SYM N``, ``"SYM" N``, ``N SYM`` or bare ``N``."""
        is_negative = False
        position = CommodityPosition.PREFIX

        if self._check(TokenType.MINUS):
            is_negative = True
            self._advance()

        if self._check(TokenType.COMMODITY) and self._peek().value == "$":
            commodity = self._advance().value
            quantity = self._parse_number_value()
        elif self._check(TokenType.COMMODITY) or self._check(TokenType.QUOTED_COMMODITY):
            commodity = self._parse_commodity_symbol()
            if not (self._check(TokenType.NUMBER) or self._check(TokenType.MINUS)):
                raise self._error("Expected number after commodity")
            quantity = self._parse_number_value()
        elif self._check(TokenType.NUMBER):
            quantity = self._parse_number_value()
            if self._check(TokenType.COMMODITY) or self._check(TokenType.QUOTED_COMMODITY):
                commodity = self._parse_commodity_symbol()
                position = CommodityPosition.SUFFIX
            else:
                commodity = "$"
        else:
            raise self._error("Expected amount")

        if quantity.startswith("-"):
            is_negative = not is_negative
            quantity = quantity[1:]

        return AmountNode(
            quantity=quantity,
            commodity=commodity,
            is_negative=is_negative,
            commodity_position=position,
        )

    def _parse_commodity_symbol(self) -> str:
        if self._check(TokenType.QUOTED_COMMODITY):
            value = self._advance().value
            return value[1:-1] if value.endswith('"') and len(value) > 1 else value[1:]
        if self._check(TokenType.COMMODITY):
            return self._advance().value
        raise self._error("Expected commodity symbol")

    def _parse_number_value(self) -> str:
        value = ""
        if self._check(TokenType.MINUS):
            self._advance()
            value = "-"
        if not self._check(TokenType.NUMBER):
            raise self._error("Expected number")
        return value + self._advance().value

    # Token helpers

    def _skip_newlines(self) -> None:
        while self._check(TokenType.NEWLINE):
            self._advance()

    def _skip_line(self) -> None:
        self._skip_to_end_of_line()
        if self._check(TokenType.NEWLINE):
            self._advance()

    def _skip_to_end_of_line(self) -> None:
        while not self._at_end() and not self._check(TokenType.NEWLINE):
            self._advance()

    def _check(self, type_: TokenType) -> bool:
        return not self._at_end() and self._peek().type == type_

    def _advance(self) -> Token:
        token = self._peek()
        if not self._at_end():
            self._pos += 1
        return token

    def _peek(self) -> Token:
        return self._tokens[self._pos]

    def _at_end(self) -> bool:
        return self._peek().type == TokenType.EOF

    def _error(self, message: str) -> ParseError:
        token = self._peek()
        return ParseError(message, line=token.line, column=token.column)


def parse(text: str) -> JournalAST:
    """Parse journal text into a JournalAST. See Parser."""
    return Parser().parse(text)
