"""Ledger service facade over repositories and the balance calculator."""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from ledgerkit.domain import Money, Price, Transaction
from ledgerkit.numeric import exact_add
from ledgerkit.ports import HeadInfo, LedgerRepository, PriceFilter, PriceRepository, TransactionFilter
from ledgerkit.services.balance import Balance, BalanceCalculator, Position


@dataclass(frozen=True)
class RegisterRow:
    """One posting in a register report, with the running balance after it."""

    date: date
    description: str
    account: str
    amount: Money
    running_balance: Money


class LedgerService:
    """Entry point for applications working with a ledger.

    Example:
        repo = JournalRepository("main.journal")
        service = LedgerService(ledger_repository=repo, price_repository=repo)
        net_worth = service.get_balance_in_commodity("Assets:**", "$")
    """

    def __init__(
        self,
        *,
        ledger_repository: LedgerRepository,
        price_repository: PriceRepository,
        calculator: BalanceCalculator | None = None,
    ) -> None:
        self.ledger_repository = ledger_repository
        self.price_repository = price_repository
        self.calculator = calculator or BalanceCalculator()

    # Transactions

    def get_head(self) -> HeadInfo:
        return self.ledger_repository.head()

    def list_transactions(self, filter: TransactionFilter | None = None) -> list[Transaction]:
        return self.ledger_repository.list_transactions(filter)

    def get_transaction(self, id: str) -> Transaction | None:
        return self.ledger_repository.get_transaction(id)

    def append_transactions(self, transactions: list[Transaction]) -> list[Transaction]:
        return self.ledger_repository.append_transactions(transactions)

    def append_transaction(self, transaction: Transaction) -> Transaction:
        [stored] = self.append_transactions([transaction])
        return stored

    def exists_external_id(self, external_id: str) -> bool:
        return self.ledger_repository.exists_external_id(external_id)

    # Prices

    def list_prices(self, filter: PriceFilter | None = None) -> list[Price]:
        return self.price_repository.list_prices(filter)

    def get_price(
        self,
        base_commodity: str,
        quote_commodity: str,
        as_of_date: date | None = None,
    ) -> Price | None:
        return self.price_repository.get_price(base_commodity, quote_commodity, as_of_date)

    def upsert_prices(self, prices: list[Price]) -> None:
        self.price_repository.upsert_prices(prices)

    # Accounts

    def list_accounts(self) -> list[str]:
        return self.ledger_repository.list_accounts()

    def list_commodities(self) -> list[str]:
        return self.ledger_repository.list_commodities()

    # Balances

    def get_positions(
        self,
        *,
        as_of_date: date | None = None,
        filter: TransactionFilter | None = None,
    ) -> list[Position]:
        transactions = self.ledger_repository.list_transactions(filter)
        return self.calculator.calculate_positions(transactions, as_of_date=as_of_date)

    def get_balances(
        self,
        *,
        as_of_date: date | None = None,
        include_subaccounts: bool = False,
        filter: TransactionFilter | None = None,
    ) -> list[Balance]:
        transactions = self.ledger_repository.list_transactions(filter)
        return self.calculator.calculate_balances(
            transactions,
            as_of_date=as_of_date,
            include_subaccounts=include_subaccounts,
        )

    def get_balance(
        self,
        account_pattern: str,
        *,
        as_of_date: date | None = None,
        filter: TransactionFilter | None = None,
    ) -> Balance:
        transactions = self.ledger_repository.list_transactions(filter)
        return self.calculator.get_balance_for_pattern(transactions, account_pattern, as_of_date=as_of_date)

    def get_balance_in_commodity(
        self,
        account_pattern: str,
        target_commodity: str,
        *,
        as_of_date: date | None = None,
        filter: TransactionFilter | None = None,
    ) -> Money:
        """Balance of matching accounts converted to one commodity (best effort)."""
        balance = self.get_balance(account_pattern, as_of_date=as_of_date, filter=filter)
        prices = self.price_repository.list_prices()
        return self.calculator.convert_balance(balance, target_commodity, prices, as_of_date=as_of_date)

    # Reports

    def get_register(
        self,
        account_pattern: str,
        filter: TransactionFilter | None = None,
    ) -> list[RegisterRow]:
        """List matching postings with a running balance per (account, commodity)."""
        running: dict[tuple[str, str], Decimal] = {}
        rows = []

        for transaction in self.ledger_repository.list_transactions(filter):
            for posting in transaction.postings:
                if not posting.account.matches_pattern(account_pattern):
                    continue
                key = (posting.account.name, posting.commodity)
                running[key] = exact_add(running.get(key, Decimal(0)), posting.quantity)
                rows.append(
                    RegisterRow(
                        date=transaction.date,
                        description=transaction.description,
                        account=posting.account.name,
                        amount=posting.amount,
                        running_balance=Money(quantity=running[key], commodity=posting.commodity),
                    )
                )

        return rows
