"""
Customer list and pagination.
"""

import math
from typing import Iterable, List

from engine.models import CustomerEntry, Page, Transaction


def list_customers(transactions: Iterable[Transaction]) -> List[str]:
    """Distinct customer ids across all transactions, sorted."""
    return sorted({txn.customer_id for txn in transactions})


def paginate(customers: List[str], page: int, page_size: int) -> Page:
    """
    Slice the customer list into a single page.

    The requested page is clamped into [1, total_pages]; an empty list still
    has one (empty) page.

    Args:
        customers: Ordered customer ids
        page: Requested 1-based page number
        page_size: Entries per page (must be >= 1)

    Returns:
        Page with entries numbered by their overall 1-based position

    Raises:
        ValueError: If page_size is less than 1
    """
    if page_size < 1:
        raise ValueError(f"Invalid page size: {page_size}. Must be at least 1.")

    total_pages = max(1, math.ceil(len(customers) / page_size))
    current = min(max(1, page), total_pages)
    start = (current - 1) * page_size

    entries = [
        CustomerEntry(position=start + i + 1, customer_id=customer_id)
        for i, customer_id in enumerate(customers[start:start + page_size])
    ]

    return Page(
        entries=entries,
        page=current,
        page_size=page_size,
        total_items=len(customers),
        total_pages=total_pages,
    )
