"""
SQLAlchemy ORM Models Package.

All models are organized into domain-specific modules:
- base: Base class and TimestampMixin
- user: User
- restaurant: Restaurant, MenuItem
- billing: Score
- order: Order, Performer
"""

# Base classes
from .base import Base, TimestampMixin

# Users (clients and staff)
from .user import User

# Restaurants and their menus
from .restaurant import Restaurant, MenuItem

# Payments
from .billing import Score

# Orders and staff assignments
from .order import Order, Performer

__all__ = [
    "Base",
    "TimestampMixin",
    "User",
    "Restaurant",
    "MenuItem",
    "Score",
    "Order",
    "Performer",
]
