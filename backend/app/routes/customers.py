from typing import Optional

from fastapi import APIRouter, Depends, Query

from app.dependencies.services import get_rewards_service
from app.routes.errors import to_http_exception
from app.schemas.rewards import CustomerPageResponse, RewardsSummaryResponse
from app.services.errors import ServiceError
from app.services.rewards_service import ROLLING_SELECTION, RewardsService

router = APIRouter(
    prefix="/api/v1/customers",
    tags=["customers"]
)


@router.get("", response_model=CustomerPageResponse)
def get_customers(
    page: int = Query(1, description="1-based page; out-of-range pages are clamped"),
    service: RewardsService = Depends(get_rewards_service),
):
    try:
        return service.get_customer_page(page)
    except ServiceError as exc:
        raise to_http_exception(exc)


@router.get("/{customer_id}/rewards", response_model=RewardsSummaryResponse)
def get_customer_rewards(
    customer_id: str,
    months: str = Query(ROLLING_SELECTION, description=f"'{ROLLING_SELECTION}' (or 'last_N' for the configured window) or a month number 1..12"),
    year: Optional[int] = Query(None, description="Calendar year for a month or a year-scoped window"),
    scope: Optional[str] = Query(None, description="Rolling window scope: global | year"),
    service: RewardsService = Depends(get_rewards_service),
):
    """
    Points summary for one customer.

    Examples:
        /api/v1/customers/C001/rewards                         -> last 3 months (latest activity)
        /api/v1/customers/C001/rewards?scope=year&year=2024    -> last 3 months within 2024
        /api/v1/customers/C001/rewards?months=6&year=2025      -> June 2025 with per-transaction rows
    """
    try:
        return service.get_summary(customer_id, months=months, year=year, scope=scope)
    except ServiceError as exc:
        raise to_http_exception(exc)
