"""
Performer Repository - which cooks and waiters work which order.
"""

from datetime import datetime, timezone
from typing import Any, Mapping

from sqlalchemy import Table
from sqlalchemy.ext.asyncio import AsyncSession

from rest_api.models import Performer
from .base import BaseRepository
from .filters import FilterItem, FilterModel
from .records import NewPerformer, PerformerRecord


class PerformerRepository(BaseRepository[PerformerRecord]):
    """
    Repository for performer assignments.

    An assignment opens when a user is attached to an order and closes
    when its end_time is set.
    """

    @property
    def table(self) -> Table:
        return Performer.__table__

    @property
    def entity_name(self) -> str:
        return "Performer"

    def _from_row(self, row: Mapping[str, Any]) -> PerformerRecord:
        return PerformerRecord(
            id=row["id"],
            performer_id=row["performer_id"],
            order_id=row["order_id"],
            start_time=row["start_time"],
            end_time=row["end_time"],
        )

    async def add(self, performer: NewPerformer) -> PerformerRecord:
        """Open an assignment starting now."""
        return await self._insert(
            {
                "performer_id": performer.performer_id,
                "order_id": performer.order_id,
                "start_time": datetime.now(timezone.utc),
            }
        )

    async def close(self, performer_id: int) -> PerformerRecord:
        """
        Close an assignment by setting its end time to now.

        Raises:
            NotFoundError: If the assignment does not exist
        """
        return await self._update(performer_id, {"end_time": datetime.now(timezone.utc)})

    async def get_for_order(self, order_id: int) -> list[PerformerRecord]:
        """All assignments of an order, in creation order."""
        return await self.get_all(FilterModel(FilterItem("order_id", order_id)))


def get_performer_repository(db: AsyncSession) -> PerformerRepository:
    """Factory function for dependency injection."""
    return PerformerRepository(db)
