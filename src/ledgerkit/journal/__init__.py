"""Plain-text journal format: lexer, parser, syntax tree, writer and conversion."""

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
from ledgerkit.journal.convert import (
    LoadedJournal,
    SkippedEntry,
    convert_ast,
    extract_external_id,
    load_journal,
    node_to_price,
    node_to_transaction,
    parse_date,
)
from ledgerkit.journal.lexer import Lexer, Token, TokenType, tokenize
from ledgerkit.journal.parser import Parser, parse
from ledgerkit.journal.writer import DateFormat, JournalWriter, append_to_journal, format_commodity

__all__ = [
    # Lexing
    "Lexer",
    "Token",
    "TokenType",
    "tokenize",
    # Parsing
    "Parser",
    "parse",
    # Syntax tree
    "AmountNode",
    "CommentNode",
    "CommodityPosition",
    "JournalAST",
    "JournalEntry",
    "PostingNode",
    "PriceNode",
    "TransactionNode",
    # Conversion
    "LoadedJournal",
    "SkippedEntry",
    "convert_ast",
    "extract_external_id",
    "load_journal",
    "node_to_price",
    "node_to_transaction",
    "parse_date",
    # Writing
    "DateFormat",
    "JournalWriter",
    "append_to_journal",
    "format_commodity",
]
