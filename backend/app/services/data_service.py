import json
import logging
from typing import Any, List

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from app.services.errors import ServiceError
from app.services.events import LogEvent, log_event
from engine.models import Transaction
from engine.state import month_key_of

logger = logging.getLogger(__name__)


class TransactionRecord(BaseModel):
    """A transaction as stored in the JSON data file (camelCase keys)."""
    model_config = ConfigDict(populate_by_name=True)

    customer_id: str = Field(..., alias="customerId", min_length=1)
    transaction_id: str = Field(..., alias="transactionId", min_length=1)
    amount: Any = None  # invalid amounts earn 0 points, they are not rejected
    date: str

    @field_validator("date")
    @classmethod
    def date_must_parse(cls, v):
        month_key_of(v)
        return v

    def to_transaction(self) -> Transaction:
        return Transaction(
            customer_id=self.customer_id,
            transaction_id=self.transaction_id,
            amount=self.amount,
            date=self.date,
        )


def _load_json(file_path: str) -> Any:
    """Load JSON file, raising ServiceError if it is missing or unreadable"""
    try:
        with open(file_path, "r", encoding="utf-8") as f:
            return json.load(f)
    except (OSError, json.JSONDecodeError) as exc:
        log_event(LogEvent.API_ERROR, endpoint="transactions", message=str(exc))
        raise ServiceError(
            503,
            "DATA_UNAVAILABLE",
            "Transaction data could not be loaded.",
            {"path": file_path, "reason": str(exc)},
        ) from exc


def load_transactions(file_path: str) -> List[Transaction]:
    """
    Load transactions from a JSON array file.

    Records with missing ids or unparseable dates are skipped with a warning.
    """
    log_event(LogEvent.API_START, endpoint="transactions", path=file_path)
    raw = _load_json(file_path)

    if not isinstance(raw, list):
        log_event(LogEvent.API_ERROR, endpoint="transactions", message="expected a JSON array")
        raise ServiceError(
            503,
            "DATA_UNAVAILABLE",
            "Transaction data could not be loaded.",
            {"path": file_path, "reason": "expected a JSON array"},
        )

    transactions = []
    skipped = 0
    for index, item in enumerate(raw):
        try:
            record = TransactionRecord.model_validate(item)
        except ValidationError as exc:
            skipped += 1
            logger.warning(
                "Skipping malformed transaction at index %d (%d error(s)): %s",
                index, exc.error_count(), item,
            )
            continue
        transactions.append(record.to_transaction())

    log_event(LogEvent.API_SUCCESS, count=len(transactions), skipped=skipped)
    return transactions
