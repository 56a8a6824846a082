from .data_service import load_transactions
from .errors import ServiceError
from .events import LogEvent, log_event, recent_events
from .rewards_service import RewardsService

__all__ = [
    "load_transactions",
    "ServiceError",
    "LogEvent",
    "log_event",
    "recent_events",
    "RewardsService",
]
