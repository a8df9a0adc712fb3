"""Lexer for Ledger-style plain-text journals.

The lexer turns journal text into a flat token stream terminated by an EOF
token. It never raises: anything it does not recognise becomes a TEXT token
running to the end of the line (or the next ``;``).

Indentation is significant. A run of spaces or tabs at column 1 produces an
INDENT token, which is how posting lines are told apart from header lines.
"""

import re
from collections.abc import Callable
from dataclasses import dataclass
from enum import StrEnum

_DATE_START = re.compile(r"\d{4}[/-]")
_DATE_SEPARATORS = "/-"


class TokenType(StrEnum):
    """Kinds of journal tokens."""

    DATE = "DATE"
    TEXT = "TEXT"
    ACCOUNT = "ACCOUNT"
    NUMBER = "NUMBER"
    COMMODITY = "COMMODITY"
    QUOTED_COMMODITY = "QUOTED_COMMODITY"
    PRICE_DIRECTIVE = "PRICE_DIRECTIVE"
    COMMENT = "COMMENT"
    NEWLINE = "NEWLINE"
    INDENT = "INDENT"
    MINUS = "MINUS"
    EOF = "EOF"


@dataclass(frozen=True, slots=True)
class Token:
    """A lexical token with its 1-based source position."""

    type: TokenType
    value: str
    line: int
    column: int


def _is_digit(char: str) -> bool:
    return "0" <= char <= "9"


def _is_identifier_start(char: str) -> bool:
    return ("a" <= char <= "z") or ("A" <= char <= "Z") or char == "_"


def _is_identifier_char(char: str) -> bool:
    return _is_identifier_start(char) or _is_digit(char) or char in ":-"


class Lexer:
    """Single-pass scanner over one journal text.

    Example:
        tokens = Lexer("P 2024/01/15 ETH $ 2500.50\\n").tokenize()
    """

    def __init__(self, text: str) -> None:
        self._text = text
        self._pos = 0
        self._line = 1
        self._column = 1
        self._tokens: list[Token] = []

    def tokenize(self) -> list[Token]:
        """Scan the whole input and return the tokens, ending with EOF."""
        self._tokens = []
        self._pos = 0
        self._line = 1
        self._column = 1

        while self._pos < len(self._text):
            self._scan_token()

        self._tokens.append(Token(TokenType.EOF, "", self._line, self._column))
        return self._tokens

    def _scan_token(self) -> None:
        char = self._text[self._pos]

        if char == "\n":
            self._add(TokenType.NEWLINE, "\n")
            self._pos += 1
            self._line += 1
            self._column = 1
            return

        if char == "\r":
            self._pos += 1
            return

        if char in " \t":
            if self._column == 1:
                self._add(TokenType.INDENT, self._consume_while(lambda c: c in " \t"))
            else:
                self._advance()
            return

        if char == ";":
            self._add(TokenType.COMMENT, self._consume_while(lambda c: c != "\n"))
            return

        if char == "P" and self._column == 1 and self._peek(1) == " ":
            self._advance()
            self._add(TokenType.PRICE_DIRECTIVE, "P")
            return

        if self._is_date_start():
            date = self._scan_date()
            if date is not None:
                self._add(TokenType.DATE, date)
                return

        if char == '"':
            self._add(TokenType.QUOTED_COMMODITY, self._scan_quoted())
            return

        if char == "-" and (self._peek(1) == "$" or _is_digit(self._peek(1))):
            self._advance()
            self._add(TokenType.MINUS, "-")
            return

        if char == "$":
            self._advance()
            self._add(TokenType.COMMODITY, "$")
            return

        if _is_digit(char) or (char == "-" and _is_digit(self._peek(1))):
            self._add(TokenType.NUMBER, self._scan_number())
            return

        if _is_identifier_start(char):
            identifier = self._consume_while(_is_identifier_char)
            # Account vs commodity is only a guess here; the parser decides from context.
            kind = TokenType.ACCOUNT if ":" in identifier else TokenType.COMMODITY
            self._add(kind, identifier)
            return

        self._add(TokenType.TEXT, self._scan_text())

    def _is_date_start(self) -> bool:
        return _DATE_START.match(self._text, self._pos, self._pos + 5) is not None

    def _scan_date(self) -> str | None:
        """Scan YYYY<sep>MM<sep>DD, rewinding completely on failure."""
        start_pos, start_column = self._pos, self._column

        # Each separator may independently be '/' or '-'.
        for width in (4, 2):
            self._consume_digits(width)
            if not self._consume_separator():
                self._rewind(start_pos, start_column)
                return None
        self._consume_digits(2)

        return self._text[start_pos : self._pos]

    def _scan_quoted(self) -> str:
        start = self._pos
        self._advance()
        while self._pos < len(self._text) and self._text[self._pos] != '"':
            self._advance()
        if self._pos < len(self._text):
            self._advance()
        return self._text[start : self._pos]

    def _scan_number(self) -> str:
        start = self._pos
        if self._text[self._pos] == "-":
            self._advance()
        self._consume_while(_is_digit)
        if self._peek(0) == ".":
            self._advance()
            self._consume_while(_is_digit)
        return self._text[start : self._pos]

    def _scan_text(self) -> str:
        text = self._consume_while(lambda c: c not in "\n;")
        return text.strip()

    def _consume_digits(self, limit: int) -> str:
        start = self._pos
        while self._pos - start < limit and _is_digit(self._peek(0)):
            self._advance()
        return self._text[start : self._pos]

    def _consume_separator(self) -> bool:
        if self._peek(0) and self._peek(0) in _DATE_SEPARATORS:
            self._advance()
            return True
        return False

    def _consume_while(self, predicate: Callable[[str], bool]) -> str:
        start = self._pos
        while self._pos < len(self._text) and predicate(self._text[self._pos]):
            self._advance()
        return self._text[start : self._pos]

    def _advance(self) -> None:
        self._pos += 1
        self._column += 1

    def _rewind(self, pos: int, column: int) -> None:
        self._pos = pos
        self._column = column

    def _peek(self, offset: int) -> str:
        pos = self._pos + offset
        if pos >= len(self._text):
            return ""
        return self._text[pos]

    def _add(self, type_: TokenType, value: str) -> None:
        self._tokens.append(Token(type_, value, self._line, self._column - len(value)))


def tokenize(text: str) -> list[Token]:
    """Tokenize journal text. See Lexer."""
    return Lexer(text).tokenize()
