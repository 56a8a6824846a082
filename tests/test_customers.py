"""
Tests for the customer list and pagination.
"""

import pytest
from engine.customers import list_customers, paginate
from engine.models import Transaction


class TestListCustomers:

    def test_distinct_and_sorted(self):
        transactions = [
            Transaction("C003", "T1", 10, "2025-01-01"),
            Transaction("C001", "T2", 10, "2025-01-01"),
            Transaction("C003", "T3", 10, "2025-01-02"),
            Transaction("C002", "T4", 10, "2025-01-03"),
        ]
        assert list_customers(transactions) == ["C001", "C002", "C003"]

    def test_empty(self):
        assert list_customers([]) == []


class TestPaginate:

    CUSTOMERS = [f"C{i:03d}" for i in range(1, 13)]

    def test_first_page(self):
        page = paginate(self.CUSTOMERS, 1, 5)

        assert [e.customer_id for e in page.entries] == ["C001", "C002", "C003", "C004", "C005"]
        assert [e.position for e in page.entries] == [1, 2, 3, 4, 5]
        assert page.total_pages == 3
        assert page.total_items == 12
        assert page.has_previous is False
        assert page.has_next is True

    def test_last_partial_page(self):
        page = paginate(self.CUSTOMERS, 3, 5)

        assert [e.customer_id for e in page.entries] == ["C011", "C012"]
        assert [e.position for e in page.entries] == [11, 12]
        assert page.has_next is False

    def test_page_is_clamped(self):
        assert paginate(self.CUSTOMERS, 99, 5).page == 3
        assert paginate(self.CUSTOMERS, 0, 5).page == 1
        assert paginate(self.CUSTOMERS, -4, 5).page == 1

    def test_empty_list_has_one_page(self):
        page = paginate([], 2, 5)

        assert page.entries == []
        assert page.page == 1
        assert page.total_pages == 1

    def test_invalid_page_size(self):
        with pytest.raises(ValueError):
            paginate(self.CUSTOMERS, 1, 0)
