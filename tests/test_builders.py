"""Tests for transaction and price builders."""

from datetime import date
from decimal import Decimal

import pytest

from ledgerkit.builders import PriceBuilder, TransactionBuilder
from ledgerkit.domain import Account, Money, Posting
from ledgerkit.exceptions import BalanceError, ValidationError


class TestTransactionBuilder:
    """Tests for TransactionBuilder."""

    def test_full_transaction(self) -> None:
        """Build a transaction with every optional field."""
        txn = (
            TransactionBuilder()
            .with_id("t-1")
            .with_date("2024-01-15")
            .with_description("Coffee")
            .with_comment("morning")
            .with_external_id("bank-001")
            .with_metadata({"source": "import"})
            .add_posting("Assets:Cash", "-5", "$")
            .add_posting("Expenses:Food", Decimal(5), "$", comment="latte")
            .build()
        )

        assert txn.id == "t-1"
        assert txn.date == date(2024, 1, 15)
        assert txn.comment == "morning"
        assert txn.external_id == "bank-001"
        assert txn.metadata["source"] == "import"
        assert txn.postings[1].comment == "latte"

    def test_defaults(self) -> None:
        """Should default to today and a placeholder description."""
        txn = TransactionBuilder.balanced_usd("Assets:Cash", "Expenses:Food", 10)

        assert txn.date == date.today()
        assert txn.description == "Test transaction"
        assert [p.quantity for p in txn.postings] == [Decimal(-10), Decimal(10)]

    def test_with_postings_replaces(self) -> None:
        """Should replace previously added postings."""
        postings = [
            Posting(account=Account(name="Assets:Cash"), amount=Money(quantity="1", commodity="EUR")),
            Posting(account=Account(name="Income:Gift"), amount=Money(quantity="-1", commodity="EUR")),
        ]
        txn = TransactionBuilder().add_posting("Assets:Cash", "9", "$").with_postings(postings).build()
        assert txn.commodities == ["EUR"]

    def test_build_validates(self) -> None:
        """Should run Transaction validation."""
        with pytest.raises(BalanceError):
            TransactionBuilder().add_posting("Assets:Cash", "1", "$").add_posting("Income:Gift", "2", "$").build()
        with pytest.raises(ValidationError):
            TransactionBuilder().add_posting("Assets:Cash", "0", "$").build()

    def test_rejects_bad_date_text(self) -> None:
        """Should raise for unparseable dates."""
        with pytest.raises(ValueError):
            TransactionBuilder().with_date("15/01/2024")


class TestPriceBuilder:
    """Tests for PriceBuilder."""

    def test_defaults(self) -> None:
        """Should default to one ETH in dollars today."""
        price = PriceBuilder().build()

        assert price.base_commodity == "ETH"
        assert price.quote_commodity == "$"
        assert price.price == Decimal(1)
        assert price.date == date.today()

    def test_all_fields(self) -> None:
        """Build a fully specified price."""
        price = (
            PriceBuilder()
            .with_date(date(2024, 1, 15))
            .with_base("$")
            .with_quote("ARS")
            .with_price("812.5")
            .with_comment("blue")
            .build()
        )

        assert price.base_commodity == "$"
        assert price.quote_commodity == "ARS"
        assert price.price == Decimal("812.5")
        assert price.comment == "blue"
