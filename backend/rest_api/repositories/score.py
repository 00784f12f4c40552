"""
Score Repository - payment records of orders placed with a menu.
"""

from typing import Any, Mapping

from sqlalchemy import Table
from sqlalchemy.ext.asyncio import AsyncSession

from rest_api.models import Score
from shared.config.constants import ErrorMessages
from shared.utils.exceptions import AlreadyExistsError
from .base import BaseRepository
from .filters import FilterItem, FilterModel
from .records import ScoreRecord


class ScoreRepository(BaseRepository[ScoreRecord]):
    """Repository for Score rows."""

    @property
    def table(self) -> Table:
        return Score.__table__

    @property
    def entity_name(self) -> str:
        return "Score"

    def _from_row(self, row: Mapping[str, Any]) -> ScoreRecord:
        return ScoreRecord(
            id=row["id"],
            payment_token=row["payment_token"],
            payment_amount=float(row["payment_amount"]),
            created_at=row["created_at"],
        )

    async def add(self, payment_token: str, payment_amount: float) -> ScoreRecord:
        """
        Record a payment.

        Raises:
            AlreadyExistsError: If the payment token was already used
        """
        existing = await self.get_all(FilterModel(FilterItem("payment_token", payment_token)))
        if existing:
            raise AlreadyExistsError(ErrorMessages.PAYMENT_ALREADY_USED, score_id=existing[0].id)

        return await self._insert(
            {"payment_token": payment_token, "payment_amount": payment_amount}
        )


def get_score_repository(db: AsyncSession) -> ScoreRepository:
    """Factory function for dependency injection."""
    return ScoreRepository(db)
