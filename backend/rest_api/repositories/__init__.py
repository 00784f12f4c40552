"""
Repository Pattern implementation.
Centralizes data access behind small async repositories.

Usage:
    from rest_api.repositories import FilterItem, FilterModel, get_order_repository

    repo = get_order_repository(db)
    orders = await repo.get_all(FilterModel(FilterItem("client", 7)))
    order = await repo.get_by_id(123)
"""

from .filters import FilterItem, FilterModel, SqlPredicate
from .base import BaseRepository
from .records import (
    FullOrderInfo,
    MenuItemRecord,
    NewPerformer,
    OrderCreateInfo,
    OrderRecord,
    OrderUpdatableInfo,
    PerformerRecord,
    RestaurantRecord,
    ScoreRecord,
    UserRecord,
)
from .user import UserRepository, get_user_repository
from .score import ScoreRepository, get_score_repository
from .restaurant import MenuItemRepository, RestaurantRepository, get_restaurant_repository
from .performer import PerformerRepository, get_performer_repository
from .order import OrderRepository, get_order_repository

__all__ = [
    # Filters
    "FilterItem",
    "FilterModel",
    "SqlPredicate",
    # Base
    "BaseRepository",
    # Records
    "FullOrderInfo",
    "MenuItemRecord",
    "NewPerformer",
    "OrderCreateInfo",
    "OrderRecord",
    "OrderUpdatableInfo",
    "PerformerRecord",
    "RestaurantRecord",
    "ScoreRecord",
    "UserRecord",
    # User
    "UserRepository",
    "get_user_repository",
    # Score
    "ScoreRepository",
    "get_score_repository",
    # Restaurant
    "RestaurantRepository",
    "MenuItemRepository",
    "get_restaurant_repository",
    # Performer
    "PerformerRepository",
    "get_performer_repository",
    # Order
    "OrderRepository",
    "get_order_repository",
]
