"""
Tests for the sample data generator.
"""

import json
import sys
from pathlib import Path

# scripts/ is not a package
sys.path.insert(0, str(Path(__file__).resolve().parents[1] / "scripts"))

from engine.state import month_key_of  # noqa: E402
from generate_data import CUSTOMERS, YEARS, generate, main  # noqa: E402


class TestGenerate:

    def test_same_seed_same_output(self):
        assert generate(7) == generate(7)

    def test_record_shape(self):
        transactions = generate(42)

        assert {t["customerId"] for t in transactions} == set(CUSTOMERS)
        for txn in transactions:
            assert txn["amount"] >= 1
            assert month_key_of(txn["date"]).year in YEARS
            assert txn["transactionId"].startswith("T" + txn["customerId"][1:])

    def test_count_per_customer(self):
        transactions = generate(3)
        for customer_id in CUSTOMERS:
            count = sum(1 for t in transactions if t["customerId"] == customer_id)
            assert 10 <= count <= 19

    def test_writes_file(self, tmp_path, capsys):
        output = tmp_path / "out" / "transactions.json"
        main(["--output", str(output), "--seed", "1"])

        assert json.loads(output.read_text(encoding="utf-8")) == generate(1)
        assert "Wrote" in capsys.readouterr().out
