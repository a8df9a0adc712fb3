"""File-backed ledger and price repository over a single journal."""

import logging
import os
from datetime import UTC, date, datetime
from pathlib import Path

from ledgerkit.domain import Price, Transaction
from ledgerkit.journal.convert import LoadedJournal, load_journal
from ledgerkit.journal.writer import JournalWriter
from ledgerkit.numeric import DEFAULT_DECIMAL_CONFIG, DecimalConfig
from ledgerkit.ports import HeadInfo, PriceFilter, TransactionFilter
from ledgerkit.services.balance import find_price

logger = logging.getLogger(__name__)


class JournalRepository:
    """Reads and appends to one journal file.

    Implements both LedgerRepository and PriceRepository. The converted
    journal is cached and reloaded whenever the file's version (mtime and
    size) changes. A missing file reads as an empty journal.

    Example:
        repo = JournalRepository(Path("~/finance/main.journal").expanduser())
        for txn in repo.list_transactions(TransactionFilter(account_pattern="Assets:**")):
            ...
    """

    def __init__(
        self,
        path: Path | str,
        *,
        writer: JournalWriter | None = None,
        decimal_config: DecimalConfig = DEFAULT_DECIMAL_CONFIG,
    ) -> None:
        self.path = Path(path)
        self.writer = writer or JournalWriter()
        self.decimal_config = decimal_config
        self._cache: LoadedJournal | None = None
        self._cache_version: str | None = None

    # Versioning

    def head(self) -> HeadInfo:
        """Return the file version used to key the cache."""
        try:
            stat = self.path.stat()
        except FileNotFoundError:
            return HeadInfo(version="empty")
        return HeadInfo(
            version=f"{stat.st_mtime_ns}-{stat.st_size}",
            last_modified=datetime.fromtimestamp(stat.st_mtime, tz=UTC),
        )

    def load(self) -> LoadedJournal:
        """Return the converted journal, re-reading the file if it changed."""
        version = self.head().version
        if self._cache is not None and self._cache_version == version:
            return self._cache

        logger.debug("Loading journal %s (version %s)", self.path, version)
        self._cache = load_journal(self._read())
        self._cache_version = version
        return self._cache

    # Transactions

    def list_transactions(self, filter: TransactionFilter | None = None) -> list[Transaction]:
        transactions = list(self.load().transactions)
        if filter is None:
            return transactions
        return filter.apply(transactions)

    def get_transaction(self, id: str) -> Transaction | None:
        return next((t for t in self.load().transactions if t.id == id), None)

    def append_transactions(self, transactions: list[Transaction]) -> list[Transaction]:
        """Append transactions and return them as they read back from the file.

        Returned transactions carry the ids the journal assigns on load.
        """
        existing = self._read()
        last_existing_line = _line_count(existing.rstrip())
        self._write(self.writer.append_to_journal(existing, transactions, []))

        return [t for t in self.load().transactions if _line_of(t) > last_existing_line]

    def exists_external_id(self, external_id: str) -> bool:
        return any(t.external_id == external_id for t in self.load().transactions)

    def list_accounts(self) -> list[str]:
        return sorted({p.account.name for t in self.load().transactions for p in t.postings})

    def list_commodities(self) -> list[str]:
        return sorted({p.commodity for t in self.load().transactions for p in t.postings})

    # Prices

    def list_prices(self, filter: PriceFilter | None = None) -> list[Price]:
        prices = list(self.load().prices)
        if filter is None:
            return prices
        return [p for p in prices if filter.matches(p)]

    def get_price(
        self,
        base_commodity: str,
        quote_commodity: str,
        as_of_date: date | None = None,
    ) -> Price | None:
        """Latest price on or before ``as_of_date`` (default today).

        Falls back to the latest inverse price, inverted.
        """
        target = as_of_date or date.today()
        candidates = [p for p in self.load().prices if p.date <= target]
        return find_price(
            candidates,
            base_commodity,
            quote_commodity,
            context=self.decimal_config.context(),
        )

    def upsert_prices(self, prices: list[Price]) -> None:
        """Append price directives.

        Later directives for the same pair and date take precedence on lookup.
        """
        self._write(self.writer.append_to_journal(self._read(), [], prices))

    def list_base_commodities(self) -> list[str]:
        return sorted({p.base_commodity for p in self.load().prices})

    # File access

    def _read(self) -> str:
        try:
            return self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return ""

    def _write(self, content: str) -> None:
        """Write through a temporary file and an atomic rename."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        temp_path = self.path.with_name(f"{self.path.name}.tmp")
        try:
            temp_path.write_text(content, encoding="utf-8")
            os.replace(temp_path, self.path)
        except OSError:
            temp_path.unlink(missing_ok=True)
            raise
        finally:
            self._cache = None
            self._cache_version = None


def _line_count(text: str) -> int:
    return text.count("\n") + 1 if text else 0


def _line_of(transaction: Transaction) -> int:
    # Loaded transactions are identified as "<date>-<line>".
    return int(transaction.id.rsplit("-", 1)[1])
