import logging
from datetime import datetime
from typing import List, Optional

from app.config import AppConfig
from app.schemas.rewards import (
    CustomerEntryResponse,
    CustomerPageResponse,
    MonthPointsResponse,
    PointsResponse,
    RewardsSummaryResponse,
    TransactionRowResponse,
)
from app.services.errors import ServiceError
from app.services.events import LogEvent, log_event
from engine.customers import list_customers, paginate
from engine.models import (
    ExactMonth,
    InvalidDateError,
    MonthSelection,
    RollingWindow,
    Scope,
    Transaction,
    WithinYear,
)
from engine.rewards import calculate_points
from engine.state import aggregate

logger = logging.getLogger(__name__)

ROLLING_SELECTION = "last"


def _validation_error(message: str, details: dict) -> ServiceError:
    return ServiceError(400, "VALIDATION_ERROR", message, details)


class RewardsService:
    """Customer listing and points summaries over an in-memory transaction list."""

    def __init__(
        self,
        transactions: List[Transaction],
        now: Optional[datetime] = None,
        page_size: int = AppConfig.PAGE_SIZE,
        window_months: int = AppConfig.WINDOW_MONTHS,
        default_scope: Scope = AppConfig.DEFAULT_SCOPE,
    ) -> None:
        self.transactions = transactions
        self.now = now
        self.page_size = page_size
        self.window_months = window_months
        self.default_scope = default_scope

    def get_customer_page(self, page: int = 1) -> CustomerPageResponse:
        customers = list_customers(self.transactions)
        result = paginate(customers, page, self.page_size)
        log_event(LogEvent.PAGINATE, page=result.page)

        return CustomerPageResponse(
            customers=[
                CustomerEntryResponse(position=e.position, customer_id=e.customer_id)
                for e in result.entries
            ],
            page=result.page,
            page_size=result.page_size,
            total_items=result.total_items,
            total_pages=result.total_pages,
            has_previous=result.has_previous,
            has_next=result.has_next,
        )

    def _parse_selection(
        self,
        months: str,
        year: Optional[int],
        scope: Optional[str],
    ) -> MonthSelection:
        raw_months = (months or ROLLING_SELECTION).strip().lower()

        if raw_months in (ROLLING_SELECTION, f"{ROLLING_SELECTION}_{self.window_months}"):
            try:
                resolved_scope = Scope(scope.strip().lower()) if scope else self.default_scope
            except ValueError:
                raise _validation_error(
                    f"Invalid scope '{scope}'. Must be one of: global, year.",
                    {"field": "scope"},
                ) from None
            if resolved_scope == Scope.YEAR:
                if year is None:
                    raise _validation_error(
                        "A year is required for a rolling window within a year.",
                        {"field": "year"},
                    )
                return RollingWindow(self.window_months, WithinYear(year))
            return RollingWindow(self.window_months, Scope.GLOBAL)

        if not raw_months.isdecimal() or not 1 <= int(raw_months) <= 12:
            raise _validation_error(
                f"Invalid months '{months}'. Must be '{ROLLING_SELECTION}', "
                f"'{ROLLING_SELECTION}_{self.window_months}' or 1..12.",
                {"field": "months"},
            )
        if year is None:
            raise _validation_error(
                "A year is required when selecting a specific month.",
                {"field": "year"},
            )
        return ExactMonth(year, int(raw_months))

    def get_summary(
        self,
        customer_id: str,
        months: str = ROLLING_SELECTION,
        year: Optional[int] = None,
        scope: Optional[str] = None,
    ) -> RewardsSummaryResponse:
        if customer_id not in list_customers(self.transactions):
            raise ServiceError(404, "NOT_FOUND", f"Customer '{customer_id}' not found.", {})

        selection = self._parse_selection(months, year, scope)
        log_event(LogEvent.SELECT_CUSTOMER, customerId=customer_id)
        log_event(LogEvent.CHANGE_FILTER, months=months, year=year, scope=scope)

        try:
            result = aggregate(self.transactions, customer_id, selection, now=self.now)
        except InvalidDateError as exc:
            # The loader drops unparseable dates, so this means bad injected data
            logger.exception("Unparseable transaction date for %s", customer_id)
            raise ServiceError(
                500, "INVALID_DATA", "Transaction data contains an invalid date.", {"value": exc.value}
            ) from exc

        if isinstance(selection, ExactMonth):
            label = f"{selection.year}-{selection.month:02d}"
            scope_value, year_value = None, selection.year
        else:
            label = f"last_{selection.size}"
            if isinstance(selection.scope, WithinYear):
                scope_value, year_value = Scope.YEAR.value, selection.scope.year
            else:
                scope_value, year_value = Scope.GLOBAL.value, None

        return RewardsSummaryResponse(
            customer_id=customer_id,
            selection=label,
            scope=scope_value,
            year=year_value,
            months=[
                MonthPointsResponse(month=m.month_key.key, label=m.label, points=m.points)
                for m in result.months
            ],
            total=result.total,
            has_activity=result.has_activity,
            rows=[
                TransactionRowResponse(
                    date=row.date,
                    transaction_id=row.transaction_id,
                    amount=row.amount,
                    points=row.points,
                )
                for row in result.rows
            ],
        )

    @staticmethod
    def get_points(amount: Optional[str]) -> PointsResponse:
        return PointsResponse(amount=amount, points=calculate_points(amount))
