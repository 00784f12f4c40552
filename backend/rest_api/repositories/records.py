"""
Plain records returned by repositories.

Repositories map database rows into these dataclasses so callers never
handle SQLAlchemy rows or sessions.
"""

from dataclasses import dataclass, field
from datetime import datetime


@dataclass
class OrderRecord:
    id: int
    restaurant: int
    client: int
    number_of_persons: int
    visit_time: str
    status: str
    cooks_status: str
    waiters_status: str
    comment: str | None = None
    menu: list[int] | None = None
    score: int | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass
class PerformerRecord:
    id: int
    performer_id: int
    order_id: int
    start_time: datetime
    end_time: datetime | None = None

    @property
    def is_open(self) -> bool:
        return self.end_time is None


@dataclass
class UserRecord:
    id: int
    email: str
    role: str
    first_name: str | None = None
    last_name: str | None = None


@dataclass
class ScoreRecord:
    id: int
    payment_token: str
    payment_amount: float
    created_at: datetime | None = None


@dataclass
class RestaurantRecord:
    id: int
    name: str
    capacity: int


@dataclass
class MenuItemRecord:
    id: int
    restaurant_id: int
    name: str
    price: float


@dataclass
class OrderCreateInfo:
    """Input for OrderRepository.add, straight from the request body."""

    restaurant: int | None = None
    client: int | None = None
    number_of_persons: int | None = None
    visit_start: datetime | None = None
    visit_end: datetime | None = None
    comment: str | None = None
    menu: list[int] | None = None
    payment_token: str | None = None


@dataclass
class OrderUpdatableInfo:
    """
    Partial update for OrderRepository.update.
    None means "leave unchanged"; cooks/waiters list users to attach.
    """

    status: str | None = None
    cooks_status: str | None = None
    waiters_status: str | None = None
    cooks: list[int] | None = None
    waiters: list[int] | None = None


@dataclass
class NewPerformer:
    """Input for PerformerRepository.add."""

    performer_id: int
    order_id: int


@dataclass
class FullOrderInfo:
    """API-facing composite of an order, its payment amount and its staff."""

    id: int
    restaurant: int
    client: int
    number_of_persons: int
    visit_time: dict[str, str]
    status: str
    cooks_status: str
    waiters_status: str
    comment: str | None = None
    menu: list[int] | None = None
    total_amount: float | None = None
    cooks: list[int] = field(default_factory=list)
    waiters: list[int] = field(default_factory=list)
    created_at: datetime | None = None
    updated_at: datetime | None = None
