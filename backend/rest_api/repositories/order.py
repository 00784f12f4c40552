"""
Order Repository - creation, lookup and partial update of orders.
"""

from datetime import datetime, timezone
from typing import Any, Mapping

from sqlalchemy import Table
from sqlalchemy.ext.asyncio import AsyncSession

from rest_api.models import Order
from shared.config.constants import CooksStatus, OrderStatus, Roles, WaitersStatus
from shared.config.logging import orders_logger as logger
from shared.utils.exceptions import (
    IncorrectOrderParametersError,
    InvalidArgumentError,
    NoPlaceError,
    NotFoundError,
)
from shared.utils.visit_time import format_visit_time, parse_visit_time, ranges_overlap
from .base import BaseRepository
from .filters import FilterItem, FilterModel
from .performer import PerformerRepository
from .records import NewPerformer, OrderCreateInfo, OrderRecord, OrderUpdatableInfo
from .restaurant import RestaurantRepository
from .score import ScoreRepository
from .user import UserRepository


class OrderRepository(BaseRepository[OrderRecord]):
    """
    Repository for Order rows.

    Collaborating repositories share the same session, so everything done
    by add() or update() lands in the caller's transaction.
    """

    def __init__(self, db: AsyncSession):
        super().__init__(db)
        self._restaurants = RestaurantRepository(db)
        self._users = UserRepository(db)
        self._scores = ScoreRepository(db)
        self._performers = PerformerRepository(db)

    @property
    def table(self) -> Table:
        return Order.__table__

    @property
    def entity_name(self) -> str:
        return "Order"

    def _from_row(self, row: Mapping[str, Any]) -> OrderRecord:
        return OrderRecord(
            id=row["id"],
            restaurant=row["restaurant"],
            client=row["client"],
            number_of_persons=row["number_of_persons"],
            visit_time=row["visit_time"],
            comment=row["comment"],
            menu=row["menu"],
            score=row["score"],
            status=row["status"],
            cooks_status=row["cooks_status"],
            waiters_status=row["waiters_status"],
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )

    # ── CREATE ────────────────────────────────────────────

    async def add(self, create_info: OrderCreateInfo) -> OrderRecord:
        """
        Validate and insert a new order.

        Args:
            create_info: Values from the request body

        Returns:
            The created order with its id and timestamps

        Raises:
            InvalidArgumentError: Required properties missing
            IncorrectOrderParametersError: Values present but invalid
            NoPlaceError: Restaurant capacity exceeded for the visit time
            AlreadyExistsError: Payment token already used
        """
        self._check_required(create_info)
        await self._check_parties(create_info)

        # Stored literal is UTC; compare the normalized bounds
        visit_time = format_visit_time(create_info.visit_start, create_info.visit_end)
        visit_start, visit_end = parse_visit_time(visit_time)
        if visit_end <= visit_start:
            raise IncorrectOrderParametersError(
                "Visit end must be after visit start.", field="visitTime"
            )

        restaurant = await self._restaurants.lock(create_info.restaurant)
        await self._check_capacity(restaurant.id, restaurant.capacity, visit_time, create_info)

        score_id = None
        if create_info.menu is not None:
            amount = await self._menu_amount(restaurant.id, create_info.menu)
            score = await self._scores.add(create_info.payment_token, amount)
            score_id = score.id

        order = await self._insert(
            {
                "restaurant": create_info.restaurant,
                "client": create_info.client,
                "number_of_persons": create_info.number_of_persons,
                "visit_time": visit_time,
                "comment": create_info.comment,
                "menu": create_info.menu,
                "score": score_id,
                "status": OrderStatus.PENDING,
                "cooks_status": CooksStatus.NOT_STARTED,
                "waiters_status": WaitersStatus.NOT_STARTED,
            }
        )
        logger.info(
            "Order created",
            order_id=order.id,
            restaurant=order.restaurant,
            persons=order.number_of_persons,
        )
        return order

    @staticmethod
    def _check_required(create_info: OrderCreateInfo) -> None:
        if (
            create_info.restaurant is None
            or create_info.client is None
            or create_info.visit_start is None
            or create_info.visit_end is None
            or not create_info.number_of_persons
            or (create_info.menu is not None and not isinstance(create_info.menu, list))
            or (create_info.menu is not None and create_info.payment_token is None)
        ):
            raise InvalidArgumentError()

    async def _check_parties(self, create_info: OrderCreateInfo) -> None:
        if create_info.number_of_persons < 1:
            raise IncorrectOrderParametersError(
                "Number of persons must be positive.", field="numberOfPersons"
            )
        try:
            await self._restaurants.get_by_id(create_info.restaurant)
        except NotFoundError as exc:
            raise IncorrectOrderParametersError(exc.detail, field="restaurant") from exc
        try:
            await self._users.get_by_id(create_info.client)
        except NotFoundError as exc:
            raise IncorrectOrderParametersError(exc.detail, field="client") from exc

    async def _check_capacity(
        self,
        restaurant_id: int,
        capacity: int,
        visit_time: str,
        create_info: OrderCreateInfo,
    ) -> None:
        requested = parse_visit_time(visit_time)
        booked = 0
        for order in await self.get_all(FilterModel(FilterItem("restaurant", restaurant_id))):
            if order.status == OrderStatus.CANCELED:
                continue
            if ranges_overlap(requested, parse_visit_time(order.visit_time)):
                booked += order.number_of_persons

        if booked + create_info.number_of_persons > capacity:
            raise NoPlaceError(
                restaurant_id,
                booked=booked,
                requested=create_info.number_of_persons,
                capacity=capacity,
            )

    async def _menu_amount(self, restaurant_id: int, menu: list[int]) -> float:
        prices = {item.id: item.price for item in await self._restaurants.get_menu(restaurant_id)}
        unknown = [item_id for item_id in menu if item_id not in prices]
        if unknown:
            raise IncorrectOrderParametersError(
                f"Menu items {unknown} are not served by restaurant {restaurant_id}.",
                field="menu",
            )
        return round(sum(prices[item_id] for item_id in menu), 2)

    # ── UPDATE ────────────────────────────────────────────

    async def update(self, order_id: int, patch: OrderUpdatableInfo) -> OrderRecord:
        """
        Apply the fields present in patch.

        Everything is validated before the first write, so a rejected patch
        leaves the order untouched.

        Raises:
            NotFoundError: If the order does not exist
            IncorrectOrderParametersError: Unknown status or performer
        """
        order = await self.get_by_id(order_id)

        self._check_status(patch.status, OrderStatus.ALL, "orderStatus")
        self._check_status(patch.cooks_status, CooksStatus.ALL, "orderCooksStatus")
        self._check_status(patch.waiters_status, WaitersStatus.ALL, "orderWaitersStatus")
        new_performers = await self._resolve_performers(patch.cooks, Roles.COOK, "cooks")
        new_performers += await self._resolve_performers(patch.waiters, Roles.WAITER, "waiters")

        values: dict[str, Any] = {}
        if patch.status is not None:
            values["status"] = patch.status
        if patch.cooks_status is not None:
            values["cooks_status"] = patch.cooks_status
        if patch.waiters_status is not None:
            values["waiters_status"] = patch.waiters_status

        if values:
            values["updated_at"] = datetime.now(timezone.utc)
            order = await self._update(order_id, values)

        await self._attach_performers(order_id, new_performers)

        if patch.status in OrderStatus.CLOSED:
            await self._close_performers(order_id)

        logger.info("Order updated", order_id=order_id, fields=sorted(values))
        return order

    @staticmethod
    def _check_status(value: str | None, allowed: list[str], field: str) -> None:
        if value is not None and value not in allowed:
            raise IncorrectOrderParametersError(
                f"Unknown {field} '{value}'. Expected one of: {', '.join(allowed)}",
                field=field,
            )

    async def _resolve_performers(
        self, user_ids: list[int] | None, role: str, field: str
    ) -> list[int]:
        if user_ids is None:
            return []
        for user_id in user_ids:
            try:
                user = await self._users.get_by_id(user_id)
            except NotFoundError as exc:
                raise IncorrectOrderParametersError(exc.detail, field=field) from exc
            if user.role != role:
                raise IncorrectOrderParametersError(
                    f"User {user_id} is not a {role.lower()}.", field=field
                )
        return list(user_ids)

    async def _attach_performers(self, order_id: int, user_ids: list[int]) -> None:
        if not user_ids:
            return
        assigned = {p.performer_id for p in await self._performers.get_for_order(order_id)}
        for user_id in user_ids:
            if user_id in assigned:
                continue
            await self._performers.add(NewPerformer(performer_id=user_id, order_id=order_id))
            assigned.add(user_id)

    async def _close_performers(self, order_id: int) -> None:
        for performer in await self._performers.get_for_order(order_id):
            if performer.is_open:
                await self._performers.close(performer.id)


def get_order_repository(db: AsyncSession) -> OrderRepository:
    """Factory function for dependency injection."""
    return OrderRepository(db)
