"""Tests for the file-backed journal repository."""

from datetime import date
from decimal import Decimal
from pathlib import Path

import pytest

from ledgerkit.builders import PriceBuilder, TransactionBuilder
from ledgerkit.journal import DateFormat, JournalWriter
from ledgerkit.ports import PriceFilter, TransactionFilter
from ledgerkit.store import JournalRepository

JOURNAL = """\
; Main journal
2024/01/15 Coffee ; extid:bank-001
  Assets:Cash                                     -$ 5
  Expenses:Food                                   $ 5

2024/02/01 Salary
  Assets:Bank:Checking                            $ 3000
  Income:Salary

P 2024/01/15 $ ARS 800
P 2024/01/20 ETH $ 2500
P 2024/02/10 ETH $ 2700
"""


@pytest.fixture
def journal_path(tmp_path: Path) -> Path:
    path = tmp_path / "main.journal"
    path.write_text(JOURNAL, encoding="utf-8")
    return path


@pytest.fixture
def repo(journal_path: Path) -> JournalRepository:
    return JournalRepository(journal_path)


class TestReading:
    """Tests for listing stored entries."""

    def test_list_transactions(self, repo: JournalRepository) -> None:
        """Should load every transaction in file order."""
        transactions = repo.list_transactions()
        assert [t.description for t in transactions] == ["Coffee", "Salary"]

    def test_filter_transactions(self, repo: JournalRepository) -> None:
        """Should apply the filter criteria."""
        assert len(repo.list_transactions(TransactionFilter(from_date=date(2024, 2, 1)))) == 1
        assert len(repo.list_transactions(TransactionFilter(account_pattern="Income:**"))) == 1
        assert len(repo.list_transactions(TransactionFilter(description="coff"))) == 1
        assert len(repo.list_transactions(TransactionFilter(offset=1))) == 1
        assert len(repo.list_transactions(TransactionFilter(limit=1))) == 1

    def test_get_transaction_by_id(self, repo: JournalRepository) -> None:
        """Should find transactions by their date-line id."""
        txn = repo.get_transaction("2024/02/01-6")
        assert txn is not None
        assert txn.description == "Salary"
        assert repo.get_transaction("missing") is None

    def test_external_ids(self, repo: JournalRepository) -> None:
        """Should detect external ids already in the journal."""
        assert repo.exists_external_id("bank-001")
        assert not repo.exists_external_id("bank-002")

    def test_accounts_and_commodities(self, repo: JournalRepository) -> None:
        """Should list unique names sorted."""
        assert repo.list_accounts() == [
            "Assets:Bank:Checking",
            "Assets:Cash",
            "Expenses:Food",
            "Income:Salary",
        ]
        assert repo.list_commodities() == ["$"]

    def test_list_prices(self, repo: JournalRepository) -> None:
        """Should list and filter price directives."""
        assert len(repo.list_prices()) == 3
        assert len(repo.list_prices(PriceFilter(base_commodity="ETH"))) == 2
        assert len(repo.list_prices(PriceFilter(to_date=date(2024, 1, 31)))) == 2
        assert repo.list_base_commodities() == ["$", "ETH"]

    def test_missing_file_is_empty(self, tmp_path: Path) -> None:
        """Should treat a missing journal as empty."""
        repo = JournalRepository(tmp_path / "none.journal")

        assert repo.list_transactions() == []
        assert repo.head().version == "empty"


class TestGetPrice:
    """Tests for price lookup."""

    def test_latest_on_or_before(self, repo: JournalRepository) -> None:
        """Should return the latest price not after the date."""
        assert repo.get_price("ETH", "$", date(2024, 1, 31)).price == Decimal(2500)
        assert repo.get_price("ETH", "$", date(2024, 2, 10)).price == Decimal(2700)
        assert repo.get_price("ETH", "$", date(2024, 1, 1)) is None

    def test_defaults_to_today(self, repo: JournalRepository) -> None:
        """Should use today's date when none is given."""
        assert repo.get_price("ETH", "$").price == Decimal(2700)

    def test_inverse_lookup(self, repo: JournalRepository) -> None:
        """Should invert a price quoted the other way round."""
        stored = repo.get_price("$", "ARS")
        price = repo.get_price("ARS", "$")

        assert price == stored.invert()
        assert price.base_commodity == "ARS"
        assert price.quote_commodity == "$"
        assert price.price == Decimal("0.00125")

    def test_zero_price_not_inverted(self, tmp_path: Path) -> None:
        """Should report no price rather than invert a zero rate."""
        path = tmp_path / "zero.journal"
        path.write_text("P 2024/01/01 ETH $ 0\n", encoding="utf-8")
        repo = JournalRepository(path)

        assert repo.get_price("ETH", "$").price == Decimal(0)
        assert repo.get_price("$", "ETH") is None


class TestWriting:
    """Tests for appending entries."""

    def test_append_transactions(self, repo: JournalRepository, journal_path: Path) -> None:
        """Should append and return the transactions as read back."""
        txn = (
            TransactionBuilder()
            .with_date("2024/03/01")
            .with_description("Rent")
            .with_external_id("bank-002")
            .add_posting("Expenses:Rent", "1200", "$")
            .add_posting("Assets:Bank:Checking", "-1200", "$")
            .build()
        )

        [stored] = repo.append_transactions([txn])

        assert stored.description == "Rent"
        assert stored.id == "2024/03/01-14"
        assert stored.postings == txn.postings
        assert repo.exists_external_id("bank-002")
        assert journal_path.read_text(encoding="utf-8").startswith(JOURNAL.rstrip() + "\n\n2024/03/01 Rent")

    def test_append_creates_file(self, tmp_path: Path) -> None:
        """Should create the journal and its directory on first append."""
        path = tmp_path / "books" / "new.journal"
        repo = JournalRepository(path)

        [stored] = repo.append_transactions([TransactionBuilder.balanced_usd("Assets:Cash", "Expenses:Food", "5")])

        assert path.exists()
        assert stored.id.endswith("-1")
        assert not path.with_name("new.journal.tmp").exists()

    def test_writer_settings_used(self, tmp_path: Path) -> None:
        """Should write with the configured writer."""
        path = tmp_path / "dash.journal"
        repo = JournalRepository(path, writer=JournalWriter(date_format=DateFormat.DASH))

        repo.upsert_prices([PriceBuilder().with_date("2024/01/15").with_price("2500").build()])

        assert path.read_text(encoding="utf-8") == "P 2024-01-15 ETH $ 2500\n"

    def test_upsert_prices(self, repo: JournalRepository) -> None:
        """Should make new prices visible to lookups."""
        repo.upsert_prices([PriceBuilder().with_date("2024/03/01").with_price("3100").build()])
        assert repo.get_price("ETH", "$", date(2024, 3, 1)).price == Decimal(3100)


class TestCaching:
    """Tests for version-keyed caching."""

    def test_reuses_cache_while_unchanged(self, repo: JournalRepository) -> None:
        """Should not reload an unchanged file."""
        assert repo.load() is repo.load()

    def test_reloads_after_external_edit(self, repo: JournalRepository, journal_path: Path) -> None:
        """Should notice edits made outside the repository."""
        assert len(repo.list_transactions()) == 2

        journal_path.write_text(
            JOURNAL + "\n2024/03/05 Book\n  Expenses:Books  $ 20\n  Assets:Cash\n",
            encoding="utf-8",
        )

        assert len(repo.list_transactions()) == 3

    def test_head_version_changes(self, repo: JournalRepository, journal_path: Path) -> None:
        """Should derive the version from the file metadata."""
        before = repo.head()
        journal_path.write_text(JOURNAL + "; more\n", encoding="utf-8")

        assert repo.head().version != before.version
        assert before.last_modified is not None
