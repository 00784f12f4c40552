"""
Restaurant Models: Restaurant, MenuItem.
"""

from __future__ import annotations

from decimal import Decimal

from sqlalchemy import BigInteger, CheckConstraint, ForeignKey, Integer, Numeric, Text
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, BigIntPk, TimestampMixin


class Restaurant(TimestampMixin, Base):
    """
    A restaurant accepting orders.
    capacity is the number of persons it can seat at the same time.
    """

    __tablename__ = "restaurants"

    id: Mapped[int] = mapped_column(BigIntPk, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    capacity: Mapped[int] = mapped_column(Integer, nullable=False)

    __table_args__ = (
        CheckConstraint("capacity >= 0", name="chk_restaurant_capacity_non_negative"),
    )

    def __repr__(self) -> str:
        return f"<Restaurant(id={self.id}, name='{self.name}', capacity={self.capacity})>"


class MenuItem(TimestampMixin, Base):
    """A dish that can be pre-ordered with a reservation."""

    __tablename__ = "menu_items"

    id: Mapped[int] = mapped_column(BigIntPk, primary_key=True, autoincrement=True)
    restaurant_id: Mapped[int] = mapped_column(
        BigInteger, ForeignKey("restaurants.id"), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(Text, nullable=False)
    price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)

    __table_args__ = (
        CheckConstraint("price >= 0", name="chk_menu_item_price_non_negative"),
    )
