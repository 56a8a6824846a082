"""
Generate a random sample transactions file for the rewards CLI and API.

Usage:
    python scripts/generate_data.py [--output data/transactions.json] [--seed 42]
"""

import argparse
import json
import random
from pathlib import Path
from typing import Dict, List

CUSTOMERS = [f"C{i:03d}" for i in range(1, 17)]
YEARS = [2021, 2022, 2023, 2024, 2025]
BASE_AMOUNTS = [40, 55, 75, 95, 120, 150, 200]


def random_transactions_for_customer(customer_id: str, rng: random.Random) -> List[Dict]:
    count = 10 + rng.randrange(10)
    transactions = []
    for i in range(count):
        year = rng.choice(YEARS)
        month = rng.randint(1, 12)
        day = rng.randint(1, 28)
        jitter = rng.random() * 20 - 10
        amount = max(1, round(rng.choice(BASE_AMOUNTS) + jitter, 2))
        transactions.append({
            "customerId": customer_id,
            "transactionId": f"T{customer_id[1:]}{i + 1:04d}",
            "amount": amount,
            "date": f"{year}-{month:02d}-{day:02d}",
        })
    return transactions


def generate(seed=None) -> List[Dict]:
    rng = random.Random(seed)
    return [txn for customer_id in CUSTOMERS for txn in random_transactions_for_customer(customer_id, rng)]


def main(argv=None):
    parser = argparse.ArgumentParser(description="Generate sample reward transactions")
    parser.add_argument("--output", default="data/transactions.json", help="Output JSON file")
    parser.add_argument("--seed", type=int, default=None, help="Random seed for reproducible output")
    args = parser.parse_args(argv)

    transactions = generate(args.seed)
    output = Path(args.output)
    output.parent.mkdir(parents=True, exist_ok=True)
    with open(output, "w", encoding="utf-8") as f:
        json.dump(transactions, f, indent=2)

    print(f"Wrote {len(transactions)} transactions for {len(CUSTOMERS)} customers -> {output}")


if __name__ == "__main__":
    main()
