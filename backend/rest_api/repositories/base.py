"""
Base Repository implementation.
Provides the data access primitives every concrete repository builds on.
"""

from abc import ABC, abstractmethod
from typing import Any, Generic, Mapping, TypeVar

from sqlalchemy import Table, insert, text, update
from sqlalchemy.ext.asyncio import AsyncSession

from shared.utils.exceptions import NotFoundError
from .filters import FilterItem, FilterModel


RecordT = TypeVar("RecordT")


class BaseRepository(ABC, Generic[RecordT]):
    """
    Abstract base repository over a single table.

    Subclasses must implement:
    - table: the SQLAlchemy Table the repository owns
    - entity_name: human readable name used in NotFound messages
    - _from_row(): map a result row to the repository's record type

    Repositories flush but never commit; the request boundary owns the
    transaction (see shared.infrastructure.db.safe_commit).
    """

    def __init__(self, db: AsyncSession):
        self._db = db

    @property
    @abstractmethod
    def table(self) -> Table:
        """Return the SQLAlchemy table."""
        ...

    @property
    @abstractmethod
    def entity_name(self) -> str:
        ...

    @abstractmethod
    def _from_row(self, row: Mapping[str, Any]) -> RecordT:
        """Map a result row to a record."""
        ...

    async def get_all(self, filter: FilterModel | None = None) -> list[RecordT]:
        """
        Find all rows matching the filter, in storage (id) order.

        Args:
            filter: Optional equality filter

        Returns:
            List of records, empty when nothing matches
        """
        return await self._select(filter or FilterModel())

    async def get_by_id(self, entity_id: int) -> RecordT:
        """
        Find a row by primary key.

        Raises:
            NotFoundError: If no row has this id
        """
        return await self._select_by_id(entity_id)

    async def _select(self, filter: FilterModel) -> list[RecordT]:
        predicate = filter.to_predicate()
        columns = ", ".join(column.name for column in self.table.c)
        stmt = (
            text(f"SELECT {columns} FROM {self.table.name} {predicate.clause} ORDER BY id")
            .bindparams(**predicate.params)
            .columns(*self.table.c)
        )
        result = await self._db.execute(stmt)
        return [self._from_row(row) for row in result.mappings()]

    async def _select_by_id(self, entity_id: int) -> RecordT:
        rows = await self._select(FilterModel(FilterItem("id", entity_id)))
        if not rows:
            raise NotFoundError(self.entity_name, entity_id)
        return rows[0]

    async def _insert(self, values: dict[str, Any]) -> RecordT:
        stmt = insert(self.table).values(**values).returning(*self.table.c)
        result = await self._db.execute(stmt)
        row = result.mappings().one()
        await self._db.flush()
        return self._from_row(row)

    async def _update(self, entity_id: int, values: dict[str, Any]) -> RecordT:
        stmt = (
            update(self.table)
            .where(self.table.c.id == entity_id)
            .values(**values)
            .returning(*self.table.c)
        )
        result = await self._db.execute(stmt)
        row = result.mappings().one_or_none()
        if row is None:
            raise NotFoundError(self.entity_name, entity_id)
        await self._db.flush()
        return self._from_row(row)
