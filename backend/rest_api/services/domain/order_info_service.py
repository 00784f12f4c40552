"""
Order Info Service.

Builds the "full order" view returned by the API: the stored order with its
visit time split into start/end instants, its payment amount instead of the
raw score reference, and the ids of the cooks and waiters working it.

Collaborators are injected as protocols so tests can pass in-memory fakes:

    service = OrderInfoService(performers, scores, users)
    full = await service.get_full_order_info(order)
"""

from __future__ import annotations

from typing import Protocol, Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from rest_api.repositories import (
    FilterItem,
    FilterModel,
    FullOrderInfo,
    OrderRecord,
    PerformerRecord,
    ScoreRecord,
    UserRecord,
    get_performer_repository,
    get_score_repository,
    get_user_repository,
)
from shared.config.constants import Roles
from shared.config.logging import get_logger
from shared.utils.visit_time import to_api_visit_time

logger = get_logger(__name__)


# ---- Ports ----
class PerformersReader(Protocol):
    async def get_all(self, filter: FilterModel | None = None) -> list[PerformerRecord]:
        ...


class ScoresReader(Protocol):
    async def get_by_id(self, entity_id: int) -> ScoreRecord:
        ...


class UsersReader(Protocol):
    async def get_by_id(self, entity_id: int) -> UserRecord:
        ...


# ---- Service ----
class OrderInfoService:
    """
    Composes orders with performers, scores and users.

    Owns no state. Any collaborator failure aborts the aggregation of the
    order being processed; partial views are never returned.
    """

    def __init__(
        self,
        performers: PerformersReader,
        scores: ScoresReader,
        users: UsersReader,
    ):
        self.performers = performers
        self.scores = scores
        self.users = users

    async def get_full_order_info(self, order: OrderRecord) -> FullOrderInfo:
        """
        Build the API view of one order.

        Raises:
            MalformedVisitTimeError: If the stored visit time is corrupt
            NotFoundError: If the referenced score or a performer's user is missing
        """
        visit_time = to_api_visit_time(order.visit_time)

        total_amount = None
        if order.score is not None:
            score = await self.scores.get_by_id(order.score)
            total_amount = score.payment_amount

        cooks, waiters = await self._staff_of(order.id)

        return FullOrderInfo(
            id=order.id,
            restaurant=order.restaurant,
            client=order.client,
            number_of_persons=order.number_of_persons,
            visit_time=visit_time,
            comment=order.comment,
            menu=order.menu,
            status=order.status,
            cooks_status=order.cooks_status,
            waiters_status=order.waiters_status,
            total_amount=total_amount,
            cooks=cooks,
            waiters=waiters,
            created_at=order.created_at,
            updated_at=order.updated_at,
        )

    async def get_full_orders_info(self, orders: Sequence[OrderRecord]) -> list[FullOrderInfo]:
        """
        Build the API view of several orders, in the given order.

        The first failing order aborts the whole list; it is logged with
        its id before the error propagates.
        """
        result = []
        for order in orders:
            try:
                result.append(await self.get_full_order_info(order))
            except Exception:
                logger.error("Failed to build full order info", order_id=order.id, exc_info=True)
                raise
        return result

    async def _staff_of(self, order_id: int) -> tuple[list[int], list[int]]:
        """Cook ids and waiter ids of an order, in assignment order."""
        filter = FilterModel(FilterItem("order_id", order_id))
        assignments = await self.performers.get_all(filter)

        # One session cannot run statements concurrently; resolve in order
        users = [await self.users.get_by_id(a.performer_id) for a in assignments]

        cooks = [user.id for user in users if user.role == Roles.COOK]
        waiters = [user.id for user in users if user.role == Roles.WAITER]
        return cooks, waiters


def get_order_info_service(db: AsyncSession) -> OrderInfoService:
    """Factory wiring the service to repositories sharing one session."""
    return OrderInfoService(
        performers=get_performer_repository(db),
        scores=get_score_repository(db),
        users=get_user_repository(db),
    )
