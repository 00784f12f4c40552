"""
Order Models: Order, Performer.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import JSON, BigInteger, CheckConstraint, DateTime, ForeignKey, Index, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from shared.config.constants import CooksStatus, OrderStatus, WaitersStatus

from .base import Base, BigIntPk, TimestampMixin


class Order(TimestampMixin, Base):
    """
    A client's reservation at a restaurant.

    visit_time holds the visit range as a single literal, e.g.
    ``(2024-01-01 10:00,2024-01-01 12:00)``; it is reshaped into a
    start/end pair when the order is presented through the API.
    """

    __tablename__ = "orders"

    id: Mapped[int] = mapped_column(BigIntPk, primary_key=True, autoincrement=True)
    restaurant: Mapped[int] = mapped_column(
        BigInteger, ForeignKey("restaurants.id"), nullable=False, index=True
    )
    client: Mapped[int] = mapped_column(
        BigInteger, ForeignKey("app_user.id"), nullable=False, index=True
    )
    number_of_persons: Mapped[int] = mapped_column(Integer, nullable=False)
    visit_time: Mapped[str] = mapped_column(Text, nullable=False)
    comment: Mapped[Optional[str]] = mapped_column(Text)
    # Ordered list of menu item ids
    menu: Mapped[Optional[list[int]]] = mapped_column(JSON)
    score: Mapped[Optional[int]] = mapped_column(BigInteger, ForeignKey("scores.id"))
    status: Mapped[str] = mapped_column(Text, default=OrderStatus.PENDING, nullable=False, index=True)
    cooks_status: Mapped[str] = mapped_column(
        Text, default=CooksStatus.NOT_STARTED, nullable=False, index=True
    )
    waiters_status: Mapped[str] = mapped_column(
        Text, default=WaitersStatus.NOT_STARTED, nullable=False, index=True
    )

    __table_args__ = (
        CheckConstraint("number_of_persons > 0", name="chk_order_persons_positive"),
        Index("ix_orders_restaurant_status", "restaurant", "status"),
    )

    def __repr__(self) -> str:
        return f"<Order(id={self.id}, restaurant={self.restaurant}, status='{self.status}')>"


class Performer(Base):
    """
    One staff member's tenure working an order.
    end_time stays NULL while the assignment is open.
    """

    __tablename__ = "performers"

    id: Mapped[int] = mapped_column(BigIntPk, primary_key=True, autoincrement=True)
    performer_id: Mapped[int] = mapped_column(
        BigInteger, ForeignKey("app_user.id"), nullable=False, index=True
    )
    order_id: Mapped[int] = mapped_column(
        BigInteger, ForeignKey("orders.id"), nullable=False, index=True
    )
    start_time: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    end_time: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True))

    def __repr__(self) -> str:
        return f"<Performer(id={self.id}, performer_id={self.performer_id}, order_id={self.order_id})>"
