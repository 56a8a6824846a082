from typing import Optional

from fastapi import APIRouter

from app.schemas.rewards import PointsResponse
from app.services.rewards_service import RewardsService

router = APIRouter(
    prefix="/api/v1/points",
    tags=["points"]
)


@router.get("", response_model=PointsResponse)
def get_points(amount: Optional[str] = None):
    """Points earned by a single purchase amount; invalid amounts earn 0."""
    return RewardsService.get_points(amount)
