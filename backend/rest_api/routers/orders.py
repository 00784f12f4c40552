"""
Orders router.
Thin HTTP layer over OrderRepository and OrderInfoService.
"""

from dataclasses import asdict
from typing import Any

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from rest_api.repositories import (
    FilterItem,
    FilterModel,
    FullOrderInfo,
    OrderCreateInfo,
    OrderUpdatableInfo,
    get_order_repository,
)
from rest_api.services.domain import get_order_info_service
from shared.config.constants import ORDER_OPERATOR_ROLES
from shared.config.logging import orders_logger as logger
from shared.infrastructure.db import get_db, safe_commit
from shared.security.auth import current_user_context, role_guard
from shared.utils.exceptions import InvalidArgumentError
from shared.utils.schemas import (
    ErrorResponse,
    FullOrderOutput,
    OrderCreateRequest,
    OrderPatchRequest,
)


router = APIRouter(prefix="/orders", tags=["orders"])


def _to_output(info: FullOrderInfo) -> FullOrderOutput:
    return FullOrderOutput(**asdict(info))


@router.post(
    "",
    response_model=FullOrderOutput,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
async def create_order(
    body: OrderCreateRequest,
    db: AsyncSession = Depends(get_db),
    ctx: dict[str, Any] = Depends(current_user_context),
) -> FullOrderOutput:
    """
    Place an order.

    A pre-ordered menu requires a payment token; the payment amount is the
    sum of the menu item prices.
    """
    create_info = OrderCreateInfo(
        restaurant=body.restaurant,
        client=body.client,
        number_of_persons=body.number_of_persons,
        visit_start=body.visit_time.start if body.visit_time else None,
        visit_end=body.visit_time.end if body.visit_time else None,
        comment=body.comment,
        menu=body.menu,
        payment_token=body.payment_token,
    )

    order = await get_order_repository(db).add(create_info)
    full_order = await get_order_info_service(db).get_full_order_info(order)
    await safe_commit(db)

    logger.info("Order placed", order_id=order.id, user_id=ctx.get("sub"))
    return _to_output(full_order)


def _blank_to_none(value: str | None) -> str | None:
    return value if value else None


def order_list_filter(
    client: str | None = Query(default=None),
    status_: str | None = Query(default=None, alias="status"),
    cooks_status: str | None = Query(default=None),
    waiters_status: str | None = Query(default=None),
) -> FilterModel:
    """
    Dependency: FilterModel from the list query string.

    Blank values (``?client=&status=``) mean "no filter".
    """
    client = _blank_to_none(client)
    if client is not None:
        try:
            client = int(client)
        except ValueError:
            raise InvalidArgumentError(f"client must be an integer, got {client!r}", field="client")

    return FilterModel(
        FilterItem("client", client),
        FilterItem("status", _blank_to_none(status_)),
        FilterItem("cooks_status", _blank_to_none(cooks_status)),
        FilterItem("waiters_status", _blank_to_none(waiters_status)),
    )


@router.get("", response_model=list[FullOrderOutput], responses={400: {"model": ErrorResponse}})
async def get_all_orders(
    filter: FilterModel = Depends(order_list_filter),
    db: AsyncSession = Depends(get_db),
    ctx: dict[str, Any] = Depends(current_user_context),
) -> list[FullOrderOutput]:
    """List orders, optionally filtered by client and statuses (oldest first)."""
    orders = await get_order_repository(db).get_all(filter)
    full_orders = await get_order_info_service(db).get_full_orders_info(orders)
    return [_to_output(info) for info in full_orders]


@router.get(
    "/{order_id}",
    response_model=FullOrderOutput,
    responses={404: {"model": ErrorResponse}},
)
async def get_order_by_id(
    order_id: int,
    db: AsyncSession = Depends(get_db),
    ctx: dict[str, Any] = Depends(current_user_context),
) -> FullOrderOutput:
    """Get one order."""
    order = await get_order_repository(db).get_by_id(order_id)
    full_order = await get_order_info_service(db).get_full_order_info(order)
    return _to_output(full_order)


@router.patch(
    "/{order_id}",
    response_model=FullOrderOutput,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def patch_order(
    order_id: int,
    body: OrderPatchRequest,
    db: AsyncSession = Depends(get_db),
    ctx: dict[str, Any] = Depends(role_guard(ORDER_OPERATOR_ROLES)),
) -> FullOrderOutput:
    """
    Change order statuses and attach cooks/waiters.

    Requires MANAGER, COOK or WAITER role; other callers get 403 before
    the body is validated.
    """
    patch = OrderUpdatableInfo(
        status=body.order_status,
        cooks_status=body.order_cooks_status,
        waiters_status=body.order_waiters_status,
        cooks=body.cooks,
        waiters=body.waiters,
    )

    order = await get_order_repository(db).update(order_id, patch)
    full_order = await get_order_info_service(db).get_full_order_info(order)
    await safe_commit(db)
    return _to_output(full_order)
