"""Tests for the LedgerService facade."""

from datetime import date
from decimal import Decimal
from pathlib import Path

import pytest

from ledgerkit.builders import PriceBuilder, TransactionBuilder
from ledgerkit.ports import TransactionFilter
from ledgerkit.services import LedgerService
from ledgerkit.store import JournalRepository

JOURNAL = """\
2024/01/01 Opening
  Assets:Bank:Checking  $ 1000
  Equity:Opening

2024/01/10 Groceries
  Expenses:Food  $ 40
  Assets:Bank:Checking

2024/01/20 Buy ETH
  Assets:Crypto  ETH 0.1
  Assets:Bank:Checking  -$ 250
  Equity:Trading

P 2024/01/20 ETH $ 2500
"""


@pytest.fixture
def service(tmp_path: Path) -> LedgerService:
    path = tmp_path / "main.journal"
    path.write_text(JOURNAL, encoding="utf-8")
    repo = JournalRepository(path)
    return LedgerService(ledger_repository=repo, price_repository=repo)


class TestBalances:
    """Tests for balance queries."""

    def test_get_balance(self, service: LedgerService) -> None:
        """Should aggregate a pattern."""
        balance = service.get_balance("Assets:**")
        assert balance.positions == {"$": Decimal(710), "ETH": Decimal("0.1")}

    def test_get_balance_as_of(self, service: LedgerService) -> None:
        """Should honour the cutoff date."""
        assert service.get_balance("Assets:**", as_of_date=date(2024, 1, 10)).positions == {"$": Decimal(960)}

    def test_get_balance_in_commodity(self, service: LedgerService) -> None:
        """Should convert with stored prices."""
        total = service.get_balance_in_commodity("Assets:**", "$")
        assert total.commodity == "$"
        assert total.quantity == Decimal(960)

    def test_get_balances_with_subaccounts(self, service: LedgerService) -> None:
        """Should include rolled-up parents."""
        balances = {b.account: b for b in service.get_balances(include_subaccounts=True)}
        assert balances["Assets:Bank"].quantity("$") == Decimal(710)

    def test_get_positions(self, service: LedgerService) -> None:
        """Should list non-zero positions."""
        positions = service.get_positions()
        assert {(p.account, p.commodity) for p in positions} == {
            ("Assets:Bank:Checking", "$"),
            ("Equity:Opening", "$"),
            ("Expenses:Food", "$"),
            ("Assets:Crypto", "ETH"),
            ("Equity:Trading", "ETH"),
            ("Equity:Trading", "$"),
        }

    def test_filtered_positions(self, service: LedgerService) -> None:
        """Should only fold transactions passing the filter."""
        positions = service.get_positions(filter=TransactionFilter(commodity="ETH"))
        assert {(p.account, p.commodity) for p in positions} == {
            ("Assets:Crypto", "ETH"),
            ("Assets:Bank:Checking", "$"),
            ("Equity:Trading", "ETH"),
            ("Equity:Trading", "$"),
        }


class TestRegister:
    """Tests for the register report."""

    def test_running_balance(self, service: LedgerService) -> None:
        """Should accumulate per account and commodity."""
        rows = service.get_register("Assets:Bank:Checking")

        assert [row.amount.quantity for row in rows] == [Decimal(1000), Decimal(-40), Decimal(-250)]
        assert [row.running_balance.quantity for row in rows] == [Decimal(1000), Decimal(960), Decimal(710)]
        assert rows[1].description == "Groceries"

    def test_date_range(self, service: LedgerService) -> None:
        """Should restrict to the filter's dates."""
        rows = service.get_register("Assets:**", TransactionFilter(from_date=date(2024, 1, 15)))
        assert [(row.account, row.amount.commodity) for row in rows] == [
            ("Assets:Crypto", "ETH"),
            ("Assets:Bank:Checking", "$"),
        ]


class TestWrites:
    """Tests for appending through the service."""

    def test_append_transaction(self, service: LedgerService) -> None:
        """Should store and return a single transaction."""
        txn = (
            TransactionBuilder()
            .with_date("2024/02/01")
            .with_description("Rent")
            .with_external_id("rent-2024-02")
            .add_posting("Expenses:Rent", "500", "$")
            .add_posting("Assets:Bank:Checking", "-500", "$")
            .build()
        )

        stored = service.append_transaction(txn)

        assert stored.external_id == "rent-2024-02"
        assert service.exists_external_id("rent-2024-02")
        assert service.get_transaction(stored.id) == stored
        assert len(service.list_transactions()) == 4

    def test_upsert_and_get_price(self, service: LedgerService) -> None:
        """Should expose newly stored prices."""
        service.upsert_prices([PriceBuilder().with_date("2024/02/01").with_price("3000").build()])

        assert service.get_price("ETH", "$", date(2024, 2, 1)).price == Decimal(3000)
        assert len(service.list_prices()) == 2

    def test_head_changes_after_write(self, service: LedgerService) -> None:
        """Should report a new version after appending."""
        before = service.get_head()
        service.upsert_prices([PriceBuilder().with_date("2024/02/01").build()])
        assert service.get_head().version != before.version

    def test_listings(self, service: LedgerService) -> None:
        """Should list accounts and commodities."""
        assert "Equity:Opening" in service.list_accounts()
        assert service.list_commodities() == ["$", "ETH"]
