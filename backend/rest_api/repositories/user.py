"""
User Repository - read access to clients and staff.
"""

from typing import Any, Mapping

from sqlalchemy import Table
from sqlalchemy.ext.asyncio import AsyncSession

from rest_api.models import User
from .base import BaseRepository
from .records import UserRecord


class UserRepository(BaseRepository[UserRecord]):
    """Repository for User rows (read-only from the order flow)."""

    @property
    def table(self) -> Table:
        return User.__table__

    @property
    def entity_name(self) -> str:
        return "User"

    def _from_row(self, row: Mapping[str, Any]) -> UserRecord:
        return UserRecord(
            id=row["id"],
            email=row["email"],
            role=row["role"],
            first_name=row["first_name"],
            last_name=row["last_name"],
        )


def get_user_repository(db: AsyncSession) -> UserRepository:
    """Factory function for dependency injection."""
    return UserRepository(db)
