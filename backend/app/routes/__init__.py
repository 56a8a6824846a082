from .customers import router as customers_router
from .points import router as points_router

__all__ = [
    "customers_router",
    "points_router",
]
