"""
Seed data for development and testing.
Creates one restaurant with a small menu and a staff roster.
"""

from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from rest_api.models import MenuItem, Restaurant, User
from shared.config.constants import Roles
from shared.config.logging import get_logger

logger = get_logger(__name__)


DEFAULT_RESTAURANT_NAME = "Downtown"
DEFAULT_RESTAURANT_CAPACITY = 40

MENU = [
    ("Tomato soup", Decimal("7.50")),
    ("Grilled salmon", Decimal("21.00")),
    ("Mushroom risotto", Decimal("14.00")),
    ("Cheesecake", Decimal("6.50")),
]

STAFF = [
    ("manager@example.com", Roles.MANAGER, "Maria", "Lopez"),
    ("cook1@example.com", Roles.COOK, "Ivan", "Petrov"),
    ("cook2@example.com", Roles.COOK, "Sara", "Kim"),
    ("waiter@example.com", Roles.WAITER, "Tom", "Baker"),
    ("client@example.com", Roles.CLIENT, "Ana", "Diaz"),
]


async def seed(db: AsyncSession) -> bool:
    """
    Insert the demo restaurant, menu and users.
    Idempotent: returns False without writing if the restaurant exists.
    """
    existing = await db.scalar(
        select(Restaurant.id).where(Restaurant.name == DEFAULT_RESTAURANT_NAME).limit(1)
    )
    if existing:
        logger.info("Database already seeded, skipping", restaurant_id=existing)
        return False

    restaurant = Restaurant(name=DEFAULT_RESTAURANT_NAME, capacity=DEFAULT_RESTAURANT_CAPACITY)
    db.add(restaurant)
    await db.flush()

    for name, price in MENU:
        db.add(MenuItem(restaurant_id=restaurant.id, name=name, price=price))

    for email, role, first_name, last_name in STAFF:
        db.add(User(email=email, role=role, first_name=first_name, last_name=last_name))

    await db.commit()
    logger.info(
        "Seed complete",
        restaurant_id=restaurant.id,
        menu_items=len(MENU),
        users=len(STAFF),
    )
    return True
