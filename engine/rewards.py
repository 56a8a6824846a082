"""
Reward point calculation.
Converts purchase amounts into loyalty points using a two-tier formula.
"""

import math
from decimal import Decimal, InvalidOperation
from typing import Any, Iterable, Mapping


# Default configuration values
DEFAULT_CONFIG = {
    # Points tiers
    "tier1_threshold": 50,
    "tier1_multiplier": 1,
    "tier2_threshold": 100,
    "tier2_multiplier": 2,

    # Rolling window
    "rolling_window_months": 3,
}


def _whole_dollars(amount: Any) -> int:
    """
    Coerce an amount to whole dollars, flooring any fractional part.

    None, non-numeric strings, NaN and infinities all count as 0.
    """
    if amount is None:
        return 0
    if isinstance(amount, Decimal):
        if not amount.is_finite():
            return 0
        return math.floor(amount)
    if isinstance(amount, str):
        amount = amount.strip()
        if not amount:
            return 0
        try:
            value = Decimal(amount)
        except InvalidOperation:
            return 0
        return math.floor(value) if value.is_finite() else 0
    if isinstance(amount, int):
        return int(amount)
    try:
        value = float(amount)
    except (TypeError, ValueError, OverflowError):
        return 0
    if not math.isfinite(value):
        return 0
    return math.floor(value)


def calculate_points(amount: Any, config: dict = None) -> int:
    """
    Calculate reward points for a single purchase amount.

    Rules:
    - Fractions do not count (floor to whole dollars)
    - +1 point per whole dollar between $50 and $100
    - +2 points per whole dollar over $100
    - Missing or invalid amounts earn nothing

    Args:
        amount: Purchase amount (number, Decimal or numeric string)
        config: Optional config dict (uses defaults if not provided)

    Returns:
        Non-negative integer points

    Example:
        >>> calculate_points(120)
        90
        >>> calculate_points(99.99)
        49
    """
    if config is None:
        config = DEFAULT_CONFIG

    tier1 = config.get("tier1_threshold", 50)
    tier2 = config.get("tier2_threshold", 100)
    tier1_rate = config.get("tier1_multiplier", 1)
    tier2_rate = config.get("tier2_multiplier", 2)

    dollars = _whole_dollars(amount)
    over_tier2 = max(0, dollars - tier2)
    within_tier1 = max(0, min(dollars, tier2) - tier1)

    return over_tier2 * tier2_rate + within_tier1 * tier1_rate


def _amount_of(txn: Any) -> Any:
    if isinstance(txn, Mapping):
        return txn.get("amount")
    return getattr(txn, "amount", None)


def total_points(transactions: Iterable[Any], config: dict = None) -> int:
    """
    Sum points over a sequence of transactions.

    Accepts Transaction objects or mappings with an 'amount' key.
    An empty sequence totals 0.
    """
    return sum(calculate_points(_amount_of(txn), config) for txn in transactions)
