from datetime import UTC, datetime
from functools import lru_cache
from typing import List

from fastapi import Depends

from app.config import AppConfig
from app.services.data_service import load_transactions
from app.services.rewards_service import RewardsService
from engine.models import Transaction


@lru_cache(maxsize=1)
def get_transactions() -> List[Transaction]:
    # Loaded once per process; a failed load is retried on the next request
    return load_transactions(AppConfig.DATA_FILE)


def get_clock() -> datetime:
    return datetime.now(UTC)


def get_rewards_service(
    transactions: List[Transaction] = Depends(get_transactions),
    now: datetime = Depends(get_clock),
) -> RewardsService:
    # Creates a RewardsService over the loaded transactions and the request-time clock.
    return RewardsService(transactions, now=now)
