"""
Response schemas for the rewards API.
"""

from typing import Any, List, Optional

from pydantic import BaseModel, Field


class MonthPointsResponse(BaseModel):
    month: str = Field(..., description="Month key in YYYY-MM form")
    label: str = Field(..., description="Display label, e.g. 'Aug 2025'")
    points: int = Field(..., ge=0)


class TransactionRowResponse(BaseModel):
    date: str
    transaction_id: str
    amount: Any = None
    points: int = Field(..., ge=0)


class RewardsSummaryResponse(BaseModel):
    """
    Points summary for one customer.

    `rows` is only populated when a specific month is selected.
    """
    customer_id: str
    selection: str = Field(..., description="'last_N' or 'YYYY-MM'")
    scope: Optional[str] = Field(None, description="Rolling window scope, if any")
    year: Optional[int] = None
    months: List[MonthPointsResponse]
    total: int = Field(..., ge=0)
    has_activity: bool
    rows: List[TransactionRowResponse] = Field(default_factory=list)


class CustomerEntryResponse(BaseModel):
    position: int
    customer_id: str


class CustomerPageResponse(BaseModel):
    customers: List[CustomerEntryResponse]
    page: int
    page_size: int
    total_items: int
    total_pages: int
    has_previous: bool
    has_next: bool


class PointsResponse(BaseModel):
    amount: Optional[str] = None
    points: int = Field(..., ge=0)
