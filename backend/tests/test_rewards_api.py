import sys
import unittest
from datetime import UTC, datetime
from pathlib import Path

from fastapi.testclient import TestClient


# Ensure `backend/` is on sys.path so `import app...` works
REPO_ROOT = Path(__file__).resolve().parents[2]
BACKEND_DIR = REPO_ROOT / "backend"
sys.path.insert(0, str(BACKEND_DIR))

from app.dependencies.services import get_clock, get_transactions  # noqa: E402
from app.main import app  # noqa: E402
from app.services.errors import ServiceError  # noqa: E402
from engine.models import Transaction  # noqa: E402


TRANSACTIONS = [
    Transaction("C001", "T1", 99.23, "2025-08-17T12:00:00Z"),
    Transaction("C001", "T2", 120.00, "2025-07-05T12:00:00Z"),
    Transaction("C001", "T3", 45.00, "2025-06-10T12:00:00Z"),
    Transaction("C001", "T4", 150.00, "2025-06-20T12:00:00Z"),
    Transaction("C001", "T5", 200.00, "2024-12-01T12:00:00Z"),
    Transaction("C002", "T6", 60.00, "2025-02-03T12:00:00Z"),
] + [Transaction(f"C{i:03d}", f"T{i}0", 10.0, "2023-01-01") for i in range(3, 8)]


class RewardsApiTests(unittest.TestCase):
    def setUp(self):
        app.dependency_overrides[get_transactions] = lambda: TRANSACTIONS
        app.dependency_overrides[get_clock] = lambda: datetime(2026, 3, 15, tzinfo=UTC)
        self.client = TestClient(app)

    def tearDown(self):
        app.dependency_overrides.clear()

    def test_customers_first_page(self):
        resp = self.client.get("/api/v1/customers")
        self.assertEqual(resp.status_code, 200)
        data = resp.json()
        self.assertEqual(
            [c["customer_id"] for c in data["customers"]],
            ["C001", "C002", "C003", "C004", "C005"],
        )
        self.assertEqual(data["customers"][0]["position"], 1)
        self.assertEqual(data["total_items"], 7)
        self.assertEqual(data["total_pages"], 2)
        self.assertFalse(data["has_previous"])
        self.assertTrue(data["has_next"])

    def test_customers_page_is_clamped(self):
        resp = self.client.get("/api/v1/customers", params={"page": 9})
        self.assertEqual(resp.status_code, 200)
        data = resp.json()
        self.assertEqual(data["page"], 2)
        self.assertEqual([c["position"] for c in data["customers"]], [6, 7])

    def test_last_3_months_default_scope(self):
        resp = self.client.get("/api/v1/customers/C001/rewards")
        self.assertEqual(resp.status_code, 200)
        data = resp.json()
        self.assertEqual(data["selection"], "last_3")
        self.assertEqual(data["scope"], "global")
        self.assertEqual(
            [(m["month"], m["points"]) for m in data["months"]],
            [("2025-06", 150), ("2025-07", 90), ("2025-08", 49)],
        )
        self.assertEqual(data["months"][2]["label"], "Aug 2025")
        self.assertEqual(data["total"], 289)
        self.assertTrue(data["has_activity"])
        self.assertEqual(data["rows"], [])

    def test_last_3_months_within_year(self):
        resp = self.client.get(
            "/api/v1/customers/C002/rewards",
            params={"scope": "year", "year": 2025},
        )
        self.assertEqual(resp.status_code, 200)
        data = resp.json()
        self.assertEqual([m["month"] for m in data["months"]], ["2025-01", "2025-02"])
        self.assertEqual(data["total"], 10)
        self.assertEqual(data["year"], 2025)

    def test_within_year_without_activity(self):
        resp = self.client.get(
            "/api/v1/customers/C002/rewards",
            params={"scope": "year", "year": 2021},
        )
        self.assertEqual(resp.status_code, 200)
        data = resp.json()
        self.assertEqual(data["months"], [])
        self.assertEqual(data["total"], 0)
        self.assertFalse(data["has_activity"])

    def test_specific_month_rows(self):
        resp = self.client.get(
            "/api/v1/customers/C001/rewards",
            params={"months": "6", "year": 2025},
        )
        self.assertEqual(resp.status_code, 200)
        data = resp.json()
        self.assertEqual(data["selection"], "2025-06")
        self.assertEqual([r["transaction_id"] for r in data["rows"]], ["T3", "T4"])
        self.assertEqual([r["points"] for r in data["rows"]], [0, 150])
        self.assertEqual(data["total"], 150)

    def test_unknown_customer_returns_404(self):
        resp = self.client.get("/api/v1/customers/C999/rewards")
        self.assertEqual(resp.status_code, 404)
        self.assertEqual(resp.json()["detail"]["error"]["code"], "NOT_FOUND")

    def test_invalid_month_returns_400(self):
        resp = self.client.get(
            "/api/v1/customers/C001/rewards",
            params={"months": "13", "year": 2025},
        )
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["detail"]["error"]["code"], "VALIDATION_ERROR")

    def test_non_ascii_digit_month_returns_400(self):
        resp = self.client.get(
            "/api/v1/customers/C001/rewards",
            params={"months": "²", "year": 2025},
        )
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["detail"]["error"]["details"]["field"], "months")

    def test_last_token_without_size(self):
        resp = self.client.get("/api/v1/customers/C001/rewards", params={"months": "last"})
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["selection"], "last_3")
        self.assertEqual(resp.json()["total"], 289)

    def test_specific_month_requires_year(self):
        resp = self.client.get("/api/v1/customers/C001/rewards", params={"months": "6"})
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["detail"]["error"]["details"]["field"], "year")

    def test_non_integer_year_returns_400(self):
        resp = self.client.get(
            "/api/v1/customers/C001/rewards",
            params={"months": "6", "year": "abc"},
        )
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["detail"]["error"]["code"], "VALIDATION_ERROR")

    def test_points_endpoint(self):
        resp = self.client.get("/api/v1/points", params={"amount": "120"})
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json(), {"amount": "120", "points": 90})

        resp = self.client.get("/api/v1/points", params={"amount": "abc"})
        self.assertEqual(resp.json()["points"], 0)

        resp = self.client.get("/api/v1/points")
        self.assertEqual(resp.json()["points"], 0)


class RewardsApiDataUnavailableTests(unittest.TestCase):
    def setUp(self):
        def failing_load():
            raise ServiceError(503, "DATA_UNAVAILABLE", "Transaction data could not be loaded.", {})

        app.dependency_overrides[get_transactions] = failing_load
        self.client = TestClient(app)

    def tearDown(self):
        app.dependency_overrides.clear()

    def test_customers_returns_503(self):
        resp = self.client.get("/api/v1/customers")
        self.assertEqual(resp.status_code, 503)
        self.assertEqual(resp.json()["detail"]["error"]["code"], "DATA_UNAVAILABLE")


if __name__ == "__main__":
    unittest.main()
