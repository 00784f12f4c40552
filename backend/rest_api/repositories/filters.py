"""
Filter Model - optional equality predicates for repository queries.

A FilterModel is an ordered set of (field, value) items. Items whose value is
None are dropped; the rest render, in insertion order, into a WHERE fragment
with named placeholders and a separate dict of bound values:

    filter = FilterModel(FilterItem("client", 7), FilterItem("status", None))
    filter.to_predicate()
    # SqlPredicate(clause="WHERE client = :client_0", params={"client_0": 7})

Field names are identifiers chosen by the code, never request input, and are
validated as such. Values only ever reach the database as bound parameters.
"""

import re
from dataclasses import dataclass, field
from typing import Any

_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


@dataclass(frozen=True)
class FilterItem:
    """A single `key = value` condition; value None means "not filtered"."""

    key: str
    value: Any = None

    def __post_init__(self):
        if not _IDENTIFIER.match(self.key):
            raise ValueError(f"Invalid filter field name: {self.key!r}")

    @property
    def is_present(self) -> bool:
        # 0, False and "" are real values
        return self.value is not None


@dataclass(frozen=True)
class SqlPredicate:
    """Rendered WHERE fragment plus its bound values."""

    clause: str = ""
    params: dict[str, Any] = field(default_factory=dict)

    def __bool__(self) -> bool:
        return bool(self.clause)


class FilterModel:
    """Ordered collection of FilterItems."""

    def __init__(self, *items: FilterItem):
        self._items: list[FilterItem] = list(items)

    def add_filter_item(self, item: FilterItem) -> "FilterModel":
        self._items.append(item)
        return self

    @property
    def items(self) -> list[FilterItem]:
        return list(self._items)

    def present_items(self) -> list[FilterItem]:
        return [item for item in self._items if item.is_present]

    def to_predicate(self) -> SqlPredicate:
        """Render present items as `WHERE a = :a_0 AND b = :b_1 ...`."""
        conditions = []
        params: dict[str, Any] = {}
        for index, item in enumerate(self.present_items()):
            placeholder = f"{item.key}_{index}"
            conditions.append(f"{item.key} = :{placeholder}")
            params[placeholder] = item.value

        if not conditions:
            return SqlPredicate()
        return SqlPredicate(clause="WHERE " + " AND ".join(conditions), params=params)

    def convert_filter_to_where(self) -> str:
        """WHERE fragment only; the values must come from to_predicate().params."""
        return self.to_predicate().clause

    def __len__(self) -> int:
        return len(self._items)

    def __repr__(self) -> str:
        return f"<FilterModel({', '.join(f'{i.key}={i.value!r}' for i in self._items)})>"
