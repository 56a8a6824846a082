"""
Event log for data loads and user interactions.

Each event is written to the module logger and kept in a bounded in-memory
buffer; the oldest events are dropped once the buffer is full.
"""

import logging
from collections import deque
from datetime import UTC, datetime
from enum import Enum
from typing import Any, Dict, List

from app.config import AppConfig

logger = logging.getLogger(__name__)


class LogEvent(str, Enum):
    API_START = "API_START"
    API_SUCCESS = "API_SUCCESS"
    API_ERROR = "API_ERROR"
    SELECT_CUSTOMER = "SELECT_CUSTOMER"
    CHANGE_FILTER = "CHANGE_FILTER"
    PAGINATE = "PAGINATE"


_buffer: deque = deque(maxlen=AppConfig.LOG_BUFFER_SIZE)


def log_event(event: LogEvent, **details: Any) -> Dict[str, Any]:
    """Record an event and return the stored record."""
    record = {"type": event.value, "ts": datetime.now(UTC).isoformat(), **details}
    if event == LogEvent.API_ERROR:
        logger.warning("[LOG] %s", record)
    else:
        logger.info("[LOG] %s", record)
    _buffer.append(record)
    return record


def recent_events() -> List[Dict[str, Any]]:
    """Buffered events, oldest first."""
    return list(_buffer)


def clear_events() -> None:
    _buffer.clear()
