"""
Restaurant Repository - restaurants and their menu items.
"""

from typing import Any, Mapping

from sqlalchemy import Table, select
from sqlalchemy.ext.asyncio import AsyncSession

from rest_api.models import MenuItem, Restaurant
from shared.utils.exceptions import NotFoundError
from .base import BaseRepository
from .filters import FilterItem, FilterModel
from .records import MenuItemRecord, RestaurantRecord


class RestaurantRepository(BaseRepository[RestaurantRecord]):
    """Repository for Restaurant rows."""

    @property
    def table(self) -> Table:
        return Restaurant.__table__

    @property
    def entity_name(self) -> str:
        return "Restaurant"

    def _from_row(self, row: Mapping[str, Any]) -> RestaurantRecord:
        return RestaurantRecord(id=row["id"], name=row["name"], capacity=row["capacity"])

    async def lock(self, restaurant_id: int) -> RestaurantRecord:
        """
        Fetch a restaurant holding a row lock until the transaction ends.

        Order creations against the same restaurant serialize on this lock
        (PostgreSQL; SQLite has no row locks and ignores FOR UPDATE).

        Raises:
            NotFoundError: If the restaurant does not exist
        """
        stmt = select(self.table).where(self.table.c.id == restaurant_id).with_for_update()
        row = (await self._db.execute(stmt)).mappings().one_or_none()
        if row is None:
            raise NotFoundError(self.entity_name, restaurant_id)
        return self._from_row(row)

    async def get_menu(self, restaurant_id: int) -> list[MenuItemRecord]:
        """Menu items offered by a restaurant."""
        return await MenuItemRepository(self._db).get_all(
            FilterModel(FilterItem("restaurant_id", restaurant_id))
        )


class MenuItemRepository(BaseRepository[MenuItemRecord]):
    """Repository for MenuItem rows."""

    @property
    def table(self) -> Table:
        return MenuItem.__table__

    @property
    def entity_name(self) -> str:
        return "Menu item"

    def _from_row(self, row: Mapping[str, Any]) -> MenuItemRecord:
        return MenuItemRecord(
            id=row["id"],
            restaurant_id=row["restaurant_id"],
            name=row["name"],
            price=float(row["price"]),
        )


def get_restaurant_repository(db: AsyncSession) -> RestaurantRepository:
    """Factory function for dependency injection."""
    return RestaurantRepository(db)
