"""
Application settings with environment variable overrides.
"""

import logging
import os

from engine.models import Scope
from engine.rewards import DEFAULT_CONFIG

logger = logging.getLogger(__name__)

# Repository root holds the data/ directory
ROOT_DIR = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))


class AppConfig:
    """Centralized rewards API settings with environment variable overrides"""
    DATA_FILE = os.getenv("REWARDS_DATA_FILE", os.path.join(ROOT_DIR, "data", "transactions.json"))

    # Parse page size with validation and fallback
    _default_page_size = 5
    try:
        PAGE_SIZE = int(os.getenv("REWARDS_PAGE_SIZE", str(_default_page_size)))
        if PAGE_SIZE < 1:
            raise ValueError(PAGE_SIZE)
    except (TypeError, ValueError):
        logger.warning(
            "Invalid REWARDS_PAGE_SIZE value; falling back to default %s",
            _default_page_size,
        )
        PAGE_SIZE = _default_page_size

    # Parse rolling window size with validation and fallback
    _default_window_months = DEFAULT_CONFIG["rolling_window_months"]
    try:
        WINDOW_MONTHS = int(os.getenv("REWARDS_WINDOW_MONTHS", str(_default_window_months)))
        if WINDOW_MONTHS < 1:
            raise ValueError(WINDOW_MONTHS)
    except (TypeError, ValueError):
        logger.warning(
            "Invalid REWARDS_WINDOW_MONTHS value; falling back to default %s",
            _default_window_months,
        )
        WINDOW_MONTHS = _default_window_months

    # Scope used for rolling windows when a request does not name one
    try:
        DEFAULT_SCOPE = Scope(os.getenv("REWARDS_DEFAULT_SCOPE", Scope.GLOBAL.value).lower())
    except ValueError:
        logger.warning(
            "Invalid REWARDS_DEFAULT_SCOPE value; falling back to default %s",
            Scope.GLOBAL.value,
        )
        DEFAULT_SCOPE = Scope.GLOBAL

    # Parse event buffer size with validation and fallback
    _default_log_buffer_size = 200
    try:
        LOG_BUFFER_SIZE = int(os.getenv("REWARDS_LOG_BUFFER_SIZE", str(_default_log_buffer_size)))
        if LOG_BUFFER_SIZE < 1:
            raise ValueError(LOG_BUFFER_SIZE)
    except (TypeError, ValueError):
        logger.warning(
            "Invalid REWARDS_LOG_BUFFER_SIZE value; falling back to default %s",
            _default_log_buffer_size,
        )
        LOG_BUFFER_SIZE = _default_log_buffer_size
