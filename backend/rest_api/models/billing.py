"""
Billing Model: Score.
"""

from __future__ import annotations

from decimal import Decimal

from sqlalchemy import Numeric, Text
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, BigIntPk, TimestampMixin


class Score(TimestampMixin, Base):
    """
    Payment record of an order placed with a pre-ordered menu.
    payment_token is the client's payment reference and can be used only once.
    """

    __tablename__ = "scores"

    id: Mapped[int] = mapped_column(BigIntPk, primary_key=True, autoincrement=True)
    payment_token: Mapped[str] = mapped_column(Text, nullable=False, unique=True)
    payment_amount: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)

    def __repr__(self) -> str:
        return f"<Score(id={self.id}, payment_amount={self.payment_amount})>"
