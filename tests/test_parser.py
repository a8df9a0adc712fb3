"""Tests for the journal parser."""

import pytest

from ledgerkit.exceptions import ParseError
from ledgerkit.journal import (
    CommentNode,
    CommodityPosition,
    JournalAST,
    Parser,
    PostingNode,
    PriceNode,
    TransactionNode,
    parse,
)

SAMPLE_JOURNAL = """\
; Opening balances
2024/01/15 Coffee shop ; extid:abc123
  Assets:Cash                                     -$ 5
  Expenses:Food                                   $ 5

P 2024/01/15 ETH $ 2500.50
"""


def _amount_of(line: str):
    """Parse a single posting line inside a minimal transaction."""
    ast = parse(f"2024/01/15 Test\n{line}\n")
    return ast.transactions[0].postings[0].amount


class TestJournalStructure:
    """Tests for entry recognition and ordering."""

    def test_entries_in_textual_order(self) -> None:
        """Should keep comment, transaction and price in file order."""
        ast = parse(SAMPLE_JOURNAL)

        assert [type(e) for e in ast.entries] == [CommentNode, TransactionNode, PriceNode]
        assert [e.line for e in ast.entries] == [1, 2, 6]

    def test_comment_prefix_is_stripped(self) -> None:
        """Should strip ';' and ';;' prefixes from comment text."""
        ast = parse("; Opening balances\n;; second\n")
        assert [c.text for c in ast.comments] == ["Opening balances", "second"]

    def test_transaction_fields(self) -> None:
        """Should capture date, description, comment and postings."""
        txn = parse(SAMPLE_JOURNAL).transactions[0]

        assert txn.date == "2024/01/15"
        assert txn.description == "Coffee shop"
        assert txn.comment == "extid:abc123"
        assert [p.account for p in txn.postings] == ["Assets:Cash", "Expenses:Food"]
        assert [p.line for p in txn.postings] == [3, 4]

    def test_description_absorbs_numbers(self) -> None:
        """Should join number tokens into the description."""
        txn = parse("2024/01/15 Invoice 42 paid\n").transactions[0]
        assert txn.description == "Invoice 42 paid"

    def test_transaction_without_postings(self) -> None:
        """Should parse a lone header with no postings."""
        txn = parse("2024/01/15 Nothing\n").transactions[0]
        assert txn.postings == []

    def test_unrecognised_lines_are_skipped(self) -> None:
        """Should ignore lines that do not start an entry."""
        text = (
            "random words here\n"
            "  Assets:Cash  $ 5\n"
            "2024/01/15 Coffee\n"
            "  Assets:Cash  -$ 5\n"
            "  Expenses:Food  $ 5\n"
        )
        ast = parse(text)
        assert len(ast.entries) == 1
        assert ast.transactions[0].line == 3

    def test_crlf_line_endings(self) -> None:
        """Should parse Windows line endings."""
        ast = parse(SAMPLE_JOURNAL.replace("\n", "\r\n"))
        assert [type(e) for e in ast.entries] == [CommentNode, TransactionNode, PriceNode]

    def test_parse_is_deterministic(self) -> None:
        """Should produce equal trees for equal input."""
        parser = Parser()
        assert parser.parse(SAMPLE_JOURNAL) == parser.parse(SAMPLE_JOURNAL)
        assert parse(SAMPLE_JOURNAL) == Parser().parse(SAMPLE_JOURNAL)

    def test_entries_are_discriminated_by_type(self) -> None:
        """Should serialize the entry union with its type tag."""
        ast = parse(SAMPLE_JOURNAL)
        data = ast.model_dump()

        assert [e["type"] for e in data["entries"]] == ["comment", "transaction", "price"]
        assert JournalAST.model_validate(data) == ast


class TestPostings:
    """Tests for posting lines."""

    def test_coffee_scenario(self) -> None:
        """Should parse '$ -5' as a negative dollar amount."""
        ast = parse("2024/01/15 Coffee\n  Assets:Cash    $ -5\n  Expenses:Food    $ 5\n")

        assert len(ast.entries) == 1
        postings = ast.transactions[0].postings
        assert [p.amount.signed_quantity for p in postings] == ["-5", "5"]
        assert {p.amount.commodity for p in postings} == {"$"}

    def test_elided_amount(self) -> None:
        """Should leave the amount empty when none is written."""
        ast = parse("2024/01/15 Coffee\n  Expenses:Food  $ 5\n  Assets:Cash\n")
        assert ast.transactions[0].postings[1].amount is None

    def test_posting_comment(self) -> None:
        """Should capture a trailing posting comment."""
        ast = parse("2024/01/15 Coffee\n  Expenses:Food  $ 5 ; lunch\n")
        posting = ast.transactions[0].postings[0]
        assert posting.comment == "lunch"

    def test_comment_only_posting_line_is_dropped(self) -> None:
        """Should consume an indented comment without creating a posting."""
        ast = parse("2024/01/15 Coffee\n  ; just a note\n  Expenses:Food  $ 5\n")
        assert [p.account for p in ast.transactions[0].postings] == ["Expenses:Food"]

    def test_account_without_colon(self) -> None:
        """Should accept a single-segment account lexed as a commodity."""
        ast = parse("2024/01/15 Coffee\n  Cash  $ 5\n")
        assert ast.transactions[0].postings[0] == PostingNode(
            account="Cash",
            amount=_amount_of("  X:Y  $ 5"),
            line=2,
        )


class TestAmounts:
    """Tests for the amount surface forms."""

    def test_negative_dollar_prefix(self) -> None:
        """Should parse '-$ 100'."""
        amount = _amount_of("  Assets:Cash  -$ 100")
        assert amount.is_negative is True
        assert amount.quantity == "100"
        assert amount.commodity == "$"
        assert amount.commodity_position == CommodityPosition.PREFIX

    def test_symbol_prefix(self) -> None:
        """Should parse 'ETH 0.123' as prefix."""
        amount = _amount_of("  Assets:Crypto  ETH 0.123")
        assert amount.commodity == "ETH"
        assert amount.quantity == "0.123"
        assert amount.commodity_position == CommodityPosition.PREFIX

    def test_symbol_suffix(self) -> None:
        """Should parse '0.123 ETH' as suffix."""
        amount = _amount_of("  Assets:Crypto  0.123 ETH")
        assert amount.commodity == "ETH"
        assert amount.quantity == "0.123"
        assert amount.commodity_position == CommodityPosition.SUFFIX

    def test_quoted_symbol_is_unquoted(self) -> None:
        """Should strip quotes from quoted commodities."""
        amount = _amount_of('  Assets:Bonds  "AY24" 897')
        assert amount.commodity == "AY24"
        assert amount.quantity == "897"

    def test_bare_number_defaults_to_dollars(self) -> None:
        """Should default a bare number to '$'."""
        amount = _amount_of("  Assets:Cash  100")
        assert amount.commodity == "$"
        assert amount.commodity_position == CommodityPosition.PREFIX
        assert amount.is_negative is False

    def test_negative_bare_number(self) -> None:
        """Should parse '-100' as negative dollars."""
        amount = _amount_of("  Assets:Cash  -100")
        assert amount.is_negative is True
        assert amount.quantity == "100"

    def test_sign_after_symbol(self) -> None:
        """Should move the number's sign into the flag."""
        amount = _amount_of("  Assets:Crypto  ETH -1.5")
        assert amount.is_negative is True
        assert amount.quantity == "1.5"

    def test_double_negative_cancels(self) -> None:
        """Should XOR the leading minus with the number's sign."""
        amount = _amount_of("  Assets:Cash  -$ -5")
        assert amount.is_negative is False
        assert amount.quantity == "5"


class TestPriceDirectives:
    """Tests for P lines."""

    def test_dollar_quote(self) -> None:
        """Should parse the documented price scenario."""
        [price] = parse("P 2024/01/15 ETH $ 2500.50\n").prices
        assert price.date == "2024/01/15"
        assert price.base_commodity == "ETH"
        assert price.quote_commodity == "$"
        assert price.price == "2500.50"

    def test_symbol_quote(self) -> None:
        """Should accept a non-dollar quote commodity."""
        [price] = parse("P 2024-01-15 AY24 ARS 95.5\n").prices
        assert price.quote_commodity == "ARS"
        assert price.price == "95.5"

    def test_quote_defaults_to_dollars(self) -> None:
        """Should default the quote to '$' when a number follows the base."""
        [price] = parse("P 2024/01/15 ETH 2500\n").prices
        assert price.quote_commodity == "$"
        assert price.price == "2500"

    def test_quoted_base(self) -> None:
        """Should strip quotes from a quoted base commodity."""
        [price] = parse('P 2024/01/15 "S&P500" $ 4700\n').prices
        assert price.base_commodity == "S&P500"

    def test_price_comment(self) -> None:
        """Should capture a ';;' comment without its prefix."""
        [price] = parse("P 2024/01/15 ETH $ 2500 ;; coingecko\n").prices
        assert price.comment == "coingecko"


class TestParseErrors:
    """Tests for structural errors."""

    def test_price_without_date(self) -> None:
        """Should fail when P is not followed by a date."""
        with pytest.raises(ParseError, match="Expected date after P") as exc_info:
            parse("P ETH $ 2500\n")
        assert exc_info.value.line == 1

    def test_price_without_number(self) -> None:
        """Should fail when the price is missing."""
        with pytest.raises(ParseError, match="Expected number"):
            parse("P 2024/01/15 ETH $\n")

    def test_commodity_without_number(self) -> None:
        """Should fail when a posting amount has no number."""
        with pytest.raises(ParseError) as exc_info:
            parse("2024/01/15 Coffee\n  Assets:Cash  ETH\n")
        assert exc_info.value.line == 2
        assert "line 2" in str(exc_info.value)

    def test_error_aborts_whole_parse(self) -> None:
        """Should not return partial results."""
        text = SAMPLE_JOURNAL + "P 2024/01/16 ETH $\n"
        with pytest.raises(ParseError):
            parse(text)
