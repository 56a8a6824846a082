"""
Data models for the Retailer Rewards engine.
All models are dataclasses for simplicity and type safety.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Optional, Union


@dataclass(frozen=True)
class Transaction:
    """
    Represents a purchase made by a customer.

    Fields:
    - customer_id: customer identifier (e.g. 'C001')
    - transaction_id: unique identifier for the transaction
    - amount: purchase amount in dollars (may be fractional, or missing)
    - date: ISO-8601 date or timestamp string
    """
    customer_id: str
    transaction_id: str
    amount: Any
    date: str


@dataclass(frozen=True, order=True)
class MonthKey:
    """
    A calendar month.

    Fields:
    - year: four-digit year
    - month: 1..12
    """
    year: int
    month: int

    @property
    def key(self) -> str:
        """Canonical YYYY-MM form."""
        return f"{self.year}-{self.month:02d}"

    def previous(self) -> "MonthKey":
        if self.month == 1:
            return MonthKey(self.year - 1, 12)
        return MonthKey(self.year, self.month - 1)


class Scope(str, Enum):
    GLOBAL = "global"
    YEAR = "year"


@dataclass(frozen=True)
class WithinYear:
    """Rolling window scope restricted to a single calendar year."""
    year: int


@dataclass(frozen=True)
class ExactMonth:
    year: int
    month: int  # 1..12


@dataclass(frozen=True)
class RollingWindow:
    """
    The last `size` months ending at the anchor month.

    scope is either Scope.GLOBAL (anchor = latest transaction in any year)
    or WithinYear(year) (anchor = latest transaction in that year, window
    truncated at January).
    """
    size: int = 3
    scope: Union[Scope, WithinYear] = Scope.GLOBAL


MonthSelection = Union[ExactMonth, RollingWindow]


@dataclass
class MonthTotal:
    month_key: MonthKey
    label: str
    points: int


@dataclass
class TransactionRow:
    """A single transaction with its computed points, for per-row display."""
    date: str
    transaction_id: str
    amount: Any
    points: int


@dataclass
class AggregationResult:
    """
    Points summary for one customer and one month selection.

    Fields:
    - months: MonthTotal entries ordered oldest to newest
    - total: sum of points across months
    - has_activity: True if any transaction fell inside the window
    - rows: matching transactions (only for ExactMonth selections)
    """
    months: List[MonthTotal]
    total: int
    has_activity: bool
    rows: List[TransactionRow] = field(default_factory=list)


@dataclass
class CustomerEntry:
    position: int  # 1-based position across all pages
    customer_id: str


@dataclass
class Page:
    """
    One page of the customer list.

    Fields:
    - entries: customers on this page
    - page: the (clamped) current page, 1-based
    - page_size: maximum entries per page
    - total_items: number of customers across all pages
    - total_pages: at least 1, even when there are no customers
    """
    entries: List[CustomerEntry]
    page: int
    page_size: int
    total_items: int
    total_pages: int

    @property
    def has_previous(self) -> bool:
        return self.page > 1

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages


class InvalidDateError(ValueError):
    """Raised when a transaction date cannot be parsed into a calendar month."""

    def __init__(self, value: Optional[str]):
        self.value = value
        super().__init__(f"Invalid date: {value!r}")
