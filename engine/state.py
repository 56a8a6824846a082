"""
Month bucketing and points aggregation from transaction logs.
Deterministic and unit-testable: all dates are decomposed in UTC and the
reference clock is passed in explicitly.
"""

import logging
from datetime import UTC, date, datetime
from typing import Iterable, List, Optional, Union

from engine.models import (
    AggregationResult,
    ExactMonth,
    InvalidDateError,
    MonthKey,
    MonthSelection,
    MonthTotal,
    RollingWindow,
    Scope,
    Transaction,
    TransactionRow,
    WithinYear,
)
from engine.rewards import DEFAULT_CONFIG, calculate_points

logger = logging.getLogger(__name__)

MONTH_ABBREVIATIONS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)


def _parse_year_month(value: str) -> datetime:
    """Reduced-precision ISO-8601 date (YYYY-MM), first day of the month."""
    try:
        return datetime.strptime(value, "%Y-%m")
    except ValueError:
        raise InvalidDateError(value) from None


def parse_timestamp(value: Union[str, date, datetime]) -> datetime:
    """
    Parse an ISO-8601 date or timestamp into an aware UTC datetime.

    Date-only values are midnight UTC of that day (YYYY-MM counts as the 1st),
    naive timestamps are taken as UTC, and timestamps with an offset are
    converted to UTC.

    Raises:
        InvalidDateError: If the value is empty or not ISO-8601 parseable
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime(value.year, value.month, value.day)
    elif isinstance(value, str) and value.strip():
        try:
            parsed = datetime.fromisoformat(value.strip())
        except ValueError:
            parsed = _parse_year_month(value.strip())
    else:
        raise InvalidDateError(value)

    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=UTC)
    return parsed.astimezone(UTC)


def month_key_of(value: Union[str, date, datetime]) -> MonthKey:
    """
    Extract the calendar month of a date string.

    Args:
        value: Date in ISO-8601 form (e.g. "2025-08-17" or "2025-08-17T12:00:00Z")

    Returns:
        MonthKey with year and 1-based month

    Example:
        >>> month_key_of("2025-01-15").key
        '2025-01'
    """
    ts = parse_timestamp(value)
    return MonthKey(ts.year, ts.month)


def month_label(month: Union[str, MonthKey]) -> str:
    """Format "YYYY-MM" (or a MonthKey) as "Mon YYYY", e.g. "2025-08" -> "Aug 2025"."""
    if isinstance(month, str):
        try:
            year_str, month_str = month.split("-")
            month = MonthKey(int(year_str), int(month_str))
        except ValueError:
            raise ValueError(f"Invalid month key: {month!r}. Expected YYYY-MM.") from None
    if not 1 <= month.month <= 12:
        raise ValueError(f"Invalid month: {month.month}. Must be 1..12.")
    return f"{MONTH_ABBREVIATIONS[month.month - 1]} {month.year}"


def rolling_window_keys(anchor: MonthKey, size: int) -> List[MonthKey]:
    """
    The `size` consecutive months ending at (and including) the anchor.

    Crosses year boundaries freely; ordered oldest to newest.

    Example:
        >>> [m.key for m in rolling_window_keys(MonthKey(2025, 2), 3)]
        ['2024-12', '2025-01', '2025-02']
    """
    keys = [anchor]
    while len(keys) < size:
        keys.append(keys[-1].previous())
    return list(reversed(keys))


def _window_within_year(months_in_year: List[int], year: int, size: int) -> List[MonthKey]:
    if not months_in_year:
        return []
    anchor = max(months_in_year)
    start = max(1, anchor - size + 1)
    return [MonthKey(year, m) for m in range(start, anchor + 1)]


def resolve_window(
    transactions: List[Transaction],
    selection: MonthSelection,
    now: Optional[datetime] = None,
) -> List[MonthKey]:
    """
    Resolve a month selection to the ordered list of months it covers.

    Args:
        transactions: Transactions of a single customer
        selection: ExactMonth or RollingWindow
        now: Reference clock for a global window with no transactions
            (defaults to the current UTC time)

    Returns:
        MonthKeys ordered oldest to newest (empty for a year with no activity)

    Raises:
        ValueError: If the selection is out of range
        InvalidDateError: If a transaction date cannot be parsed
    """
    if isinstance(selection, ExactMonth):
        if not 1 <= selection.month <= 12:
            raise ValueError(f"Invalid month: {selection.month}. Must be 1..12.")
        return [MonthKey(selection.year, selection.month)]

    if not isinstance(selection, RollingWindow):
        raise ValueError(f"Unsupported month selection: {selection!r}")
    if selection.size < 1:
        raise ValueError(f"Invalid window size: {selection.size}. Must be at least 1.")

    if isinstance(selection.scope, WithinYear):
        year = selection.scope.year
        months_in_year = [
            key.month
            for key in (month_key_of(txn.date) for txn in transactions)
            if key.year == year
        ]
        return _window_within_year(months_in_year, year, selection.size)

    if selection.scope != Scope.GLOBAL:
        raise ValueError(f"Unsupported window scope: {selection.scope!r}")

    if transactions:
        # Ties resolve to any latest transaction; only its month matters
        latest = max(parse_timestamp(txn.date) for txn in transactions)
        anchor = MonthKey(latest.year, latest.month)
    else:
        reference = parse_timestamp(now or datetime.now(UTC))
        anchor = MonthKey(reference.year, reference.month)

    return rolling_window_keys(anchor, selection.size)


def aggregate(
    transactions: Iterable[Transaction],
    customer_id: str,
    selection: MonthSelection,
    now: Optional[datetime] = None,
    config: dict = None,
) -> AggregationResult:
    """
    Build the points summary for one customer and one month selection.

    Args:
        transactions: All known transactions (any customer)
        customer_id: Customer to summarize
        selection: ExactMonth(year, month) or RollingWindow(size, scope)
        now: Reference clock for the global window fallback
        config: Optional points config dict (uses defaults if not provided)

    Returns:
        AggregationResult with per-month totals (oldest first), grand total,
        activity flag and, for ExactMonth, the matching transaction rows

    Example:
        >>> txns = [
        ...     Transaction("C001", "T1", 99.23, "2025-08-17T12:00:00Z"),
        ...     Transaction("C001", "T2", 120.00, "2025-07-05T12:00:00Z"),
        ... ]
        >>> result = aggregate(txns, "C001", RollingWindow())
        >>> [(m.month_key.key, m.points) for m in result.months]
        [('2025-06', 0), ('2025-07', 90), ('2025-08', 49)]
        >>> result.total
        139
    """
    if config is None:
        config = DEFAULT_CONFIG

    mine = [txn for txn in transactions if txn.customer_id == customer_id]
    window = resolve_window(mine, selection, now)

    buckets = {key: 0 for key in window}
    rows = []
    has_activity = False

    for txn in mine:
        key = month_key_of(txn.date)
        if key not in buckets:
            continue
        points = calculate_points(txn.amount, config)
        buckets[key] += points
        has_activity = True
        if isinstance(selection, ExactMonth):
            rows.append(TransactionRow(txn.date, txn.transaction_id, txn.amount, points))

    months = [MonthTotal(key, month_label(key), buckets[key]) for key in window]
    total = sum(m.points for m in months)

    logger.debug(
        "Aggregated %d transactions for %s over %s: total=%d",
        len(mine), customer_id, [key.key for key in window], total,
    )

    return AggregationResult(months=months, total=total, has_activity=has_activity, rows=rows)


def summarize_month(
    transactions: Iterable[Transaction],
    year: int,
    month: int,
    config: dict = None,
) -> dict:
    """
    Collect every transaction of a given month with its points.

    Args:
        transactions: Transactions to scan (not filtered by customer)
        year: Target year
        month: Target month (1..12)
        config: Optional points config dict

    Returns:
        Dictionary with keys:
        - 'rows': list[TransactionRow] in input order
        - 'total': int
    """
    target = MonthKey(year, month)
    rows = [
        TransactionRow(txn.date, txn.transaction_id, txn.amount, calculate_points(txn.amount, config))
        for txn in transactions
        if month_key_of(txn.date) == target
    ]
    return {
        "rows": rows,
        "total": sum(row.points for row in rows),
    }
