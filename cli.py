"""
Command-line interface for the Retailer Rewards engine.
Reads transactions from a JSON file and prints points summaries.
"""

import argparse
import json
import sys
from pathlib import Path
from typing import List

from engine.customers import list_customers, paginate
from engine.models import ExactMonth, InvalidDateError, RollingWindow, Scope, Transaction, WithinYear
from engine.rewards import DEFAULT_CONFIG, calculate_points
from engine.state import aggregate, month_key_of


# Default JSON file path
DATA_PATH = Path("data/transactions.json")
PAGE_SIZE = 5


def _is_id(value) -> bool:
    return isinstance(value, str) and len(value) > 0


def load_transactions(path: Path) -> List[Transaction]:
    """
    Load all transactions from a JSON array file.

    Records without ids or with unparseable dates are skipped with a warning.

    Returns:
        List of Transaction objects
    """
    transactions = []

    if not path.exists():
        return transactions

    with open(path, "r", encoding="utf-8") as f:
        records = json.load(f)

    for index, row in enumerate(records):
        if not isinstance(row, dict) or not _is_id(row.get("customerId")) or not _is_id(row.get("transactionId")):
            print(f"Warning: skipping record {index}: missing or invalid customerId/transactionId", file=sys.stderr)
            continue
        try:
            month_key_of(row.get("date"))
        except InvalidDateError:
            print(f"Warning: skipping record {index}: invalid date {row.get('date')!r}", file=sys.stderr)
            continue

        transactions.append(Transaction(
            customer_id=row["customerId"],
            transaction_id=row["transactionId"],
            amount=row.get("amount"),
            date=row["date"],
        ))

    return transactions


def _format_amount(amount) -> str:
    try:
        return f"${float(amount):.2f}"
    except (TypeError, ValueError):
        return "-"


def cmd_points(args):
    """
    Show the points earned by a single purchase amount.

    Args:
        args: Parsed command-line arguments with fields:
            - amount: purchase amount (string, coerced like any transaction amount)
    """
    print(f"{args.amount} -> {calculate_points(args.amount)} points")


def cmd_customers(args):
    """
    List customers, one page at a time.

    Args:
        args: Parsed command-line arguments with fields:
            - data: path to the JSON file
            - page: 1-based page number
            - page_size: entries per page
    """
    if args.page_size < 1:
        print(f"Error: Page size must be at least 1. Got: {args.page_size}")
        sys.exit(1)

    transactions = load_transactions(Path(args.data))
    if not transactions:
        print("No transactions found.")
        return

    page = paginate(list_customers(transactions), args.page, args.page_size)

    print(f"\n=== Customers (page {page.page} / {page.total_pages}) ===\n")
    for entry in page.entries:
        print(f"  {entry.position:>3}. {entry.customer_id}")
    print()


def cmd_summary(args):
    """
    Show the points summary for a customer.

    Args:
        args: Parsed command-line arguments with fields:
            - data: path to the JSON file
            - customer: customer id
            - months: 'last' (or 'last_N' for the window size) or a month number 1..12
            - year: calendar year (required for a month or the 'year' scope)
            - scope: 'global' | 'year'
    """
    window = DEFAULT_CONFIG["rolling_window_months"]
    if args.months.strip().lower() in ("last", f"last_{window}"):
        if args.scope == Scope.YEAR.value:
            if args.year is None:
                print("Error: --year is required with --scope year.")
                sys.exit(1)
            selection = RollingWindow(window, WithinYear(args.year))
        else:
            selection = RollingWindow(window, Scope.GLOBAL)
    else:
        if not args.months.strip().isdecimal() or not 1 <= int(args.months.strip()) <= 12:
            print(f"Error: Invalid months '{args.months}'. Expected 'last', 'last_{window}' or 1..12.")
            sys.exit(1)
        if args.year is None:
            print("Error: --year is required when selecting a specific month.")
            sys.exit(1)
        selection = ExactMonth(args.year, int(args.months.strip()))

    transactions = load_transactions(Path(args.data))
    if args.customer not in list_customers(transactions):
        print(f"Error: Customer '{args.customer}' not found.")
        sys.exit(1)

    result = aggregate(transactions, args.customer, selection)

    if isinstance(selection, ExactMonth):
        print(f"\n=== {args.customer}: {selection.year}-{selection.month:02d} ===\n")
        if not result.rows:
            print("  (No transactions recorded)")
        for row in result.rows:
            print(f"  {row.date}  {row.transaction_id:<10} {_format_amount(row.amount):>10}  {row.points} pts")
    else:
        print(f"\n=== {args.customer}: Last {selection.size} Months ===\n")
        if not result.months:
            print("  (No activity in the selected year)")
        for month in result.months:
            print(f"  {month.label}: {month.points} pts")
        if result.months and not result.has_activity:
            print("  (No transactions in this window)")

    print(f"\nTotal Points: {result.total}")
    print()


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Retailer Rewards CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter
    )
    parser.add_argument("--data", default=str(DATA_PATH), help="Transactions JSON file")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Points command
    parser_points = subparsers.add_parser("points", help="Points for a single amount")
    parser_points.add_argument("--amount", required=True, help="Purchase amount")

    # Customers command
    parser_customers = subparsers.add_parser("customers", help="List customers")
    parser_customers.add_argument("--page", type=int, default=1, help="Page number (1-based)")
    parser_customers.add_argument("--page-size", type=int, default=PAGE_SIZE, help="Customers per page")

    # Summary command
    parser_summary = subparsers.add_parser("summary", help="Points summary for a customer")
    parser_summary.add_argument("--customer", required=True, help="Customer ID (e.g. C001)")
    parser_summary.add_argument("--months", default="last", help="'last' (rolling window) or month number 1..12")
    parser_summary.add_argument("--year", type=int, default=None, help="Calendar year (YYYY)")
    parser_summary.add_argument("--scope", choices=[s.value for s in Scope], default=Scope.GLOBAL.value,
                                help="Rolling window scope (global | year)")

    # Parse arguments
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    # Execute command
    if args.command == "points":
        cmd_points(args)
    elif args.command == "customers":
        cmd_customers(args)
    elif args.command == "summary":
        cmd_summary(args)


if __name__ == "__main__":
    main()
