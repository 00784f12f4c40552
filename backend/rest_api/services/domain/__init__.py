"""
Domain services (business logic).

Routers stay thin and delegate to these services:
    Router (thin) → Service (orchestration) → Repository (data access) → Model
"""

from .order_info_service import (
    OrderInfoService,
    PerformersReader,
    ScoresReader,
    UsersReader,
    get_order_info_service,
)

__all__ = [
    "OrderInfoService",
    "PerformersReader",
    "ScoresReader",
    "UsersReader",
    "get_order_info_service",
]
