"""Ledger accounts and account-pattern matching."""

from dataclasses import dataclass, field
from enum import StrEnum

from ledgerkit.exceptions import ValidationError


class AccountKind(StrEnum):
    """Classification of accounts in double-entry bookkeeping.

    Debit increases: ASSET, EXPENSE
    Credit increases: LIABILITY, EQUITY, INCOME
    """

    ASSET = "asset"
    LIABILITY = "liability"
    EQUITY = "equity"
    INCOME = "income"
    EXPENSE = "expense"


KIND_PREFIXES: dict[str, AccountKind] = {
    "Assets": AccountKind.ASSET,
    "Liabilities": AccountKind.LIABILITY,
    "Equity": AccountKind.EQUITY,
    "Income": AccountKind.INCOME,
    "Expenses": AccountKind.EXPENSE,
    "Expense": AccountKind.EXPENSE,
}


@dataclass(frozen=True)
class Account:
    """A ledger account identified by its full colon-separated name.

    Attributes:
        name: Full hierarchical account name (e.g., "Assets:Bank:Checking")
        kind: Account classification; inferred from the top-level segment
            when omitted (unknown roots default to ASSET)

    Equality and hashing use the name only.
    """

    name: str
    kind: AccountKind | None = field(default=None, compare=False)

    def __post_init__(self) -> None:
        if not self.name or not self.name.strip():
            raise ValidationError("Account name cannot be empty", field="name", value=self.name)
        if self.kind is None:
            object.__setattr__(self, "kind", KIND_PREFIXES.get(self.segments[0], AccountKind.ASSET))

    @property
    def segments(self) -> tuple[str, ...]:
        """Return the name split on ':'."""
        return tuple(self.name.split(":"))

    @property
    def depth(self) -> int:
        """Return the number of segments."""
        return len(self.segments)

    @property
    def parent(self) -> "Account | None":
        """Return the parent account, or None for a top-level account."""
        segments = self.segments
        if len(segments) <= 1:
            return None
        return Account(name=":".join(segments[:-1]), kind=self.kind)

    @property
    def ancestors(self) -> list["Account"]:
        """Return all ancestors, nearest first."""
        result = []
        parent = self.parent
        while parent is not None:
            result.append(parent)
            parent = parent.parent
        return result

    @property
    def root(self) -> str:
        """Return the top-level segment."""
        return self.segments[0]

    @property
    def leaf(self) -> str:
        """Return the last segment."""
        return self.segments[-1]

    def is_descendant_of(self, ancestor: "Account") -> bool:
        """Check if this account sits strictly below ``ancestor``."""
        own, other = self.segments, ancestor.segments
        if len(own) <= len(other):
            return False
        return own[: len(other)] == other

    def is_ancestor_of(self, descendant: "Account") -> bool:
        """Check if ``descendant`` sits strictly below this account."""
        return descendant.is_descendant_of(self)

    def matches_pattern(self, pattern: str) -> bool:
        """Match the account against a wildcard pattern.

        ``*`` matches exactly one segment and ``**`` matches zero or more.

        Example:
            Account("Assets:Bank:Checking").matches_pattern("Assets:**")  # True
            Account("Assets:Bank:Checking").matches_pattern("**:Checking")  # True
        """
        return _match_segments(self.segments, tuple(pattern.split(":")))

    def __str__(self) -> str:
        return self.name


def _match_segments(segments: tuple[str, ...], patterns: tuple[str, ...]) -> bool:
    if not patterns:
        return not segments

    head, rest = patterns[0], patterns[1:]
    if head == "**":
        # Try every possible number of consumed segments.
        return any(_match_segments(segments[skip:], rest) for skip in range(len(segments) + 1))
    if not segments:
        return False
    if head == "*" or head == segments[0]:
        return _match_segments(segments[1:], rest)
    return False
