"""
Tests for OrderRepository and its collaborating repositories.
"""

from datetime import datetime

import pytest

from rest_api.repositories import (
    FilterItem,
    FilterModel,
    OrderCreateInfo,
    OrderUpdatableInfo,
    get_order_repository,
    get_performer_repository,
    get_score_repository,
)
from shared.config.constants import CooksStatus, OrderStatus, WaitersStatus
from shared.utils.exceptions import (
    AlreadyExistsError,
    IncorrectOrderParametersError,
    InvalidArgumentError,
    NoPlaceError,
    NotFoundError,
)

pytestmark = pytest.mark.anyio


def make_create_info(restaurant_id, client_id, **overrides) -> OrderCreateInfo:
    values = {
        "restaurant": restaurant_id,
        "client": client_id,
        "number_of_persons": 2,
        "visit_start": datetime(2024, 1, 1, 10, 0),
        "visit_end": datetime(2024, 1, 1, 12, 0),
    }
    values.update(overrides)
    return OrderCreateInfo(**values)


class TestOrderCreation:
    async def test_add_sets_initial_statuses(self, db_session, seed_restaurant, seed_client_user):
        repo = get_order_repository(db_session)

        order = await repo.add(make_create_info(seed_restaurant.id, seed_client_user.id))

        assert order.id is not None
        assert order.visit_time == "(2024-01-01 10:00,2024-01-01 12:00)"
        assert order.status == OrderStatus.PENDING
        assert order.cooks_status == CooksStatus.NOT_STARTED
        assert order.waiters_status == WaitersStatus.NOT_STARTED
        assert order.score is None
        assert order.created_at is not None

    async def test_missing_properties(self, db_session, seed_restaurant):
        repo = get_order_repository(db_session)

        with pytest.raises(InvalidArgumentError) as exc_info:
            await repo.add(OrderCreateInfo(restaurant=seed_restaurant.id))

        assert exc_info.value.detail == "Properties not set."

    async def test_menu_without_payment_token_writes_nothing(
        self, db_session, seed_restaurant, seed_client_user, seed_menu
    ):
        repo = get_order_repository(db_session)
        info = make_create_info(
            seed_restaurant.id, seed_client_user.id, menu=[seed_menu[0].id]
        )

        with pytest.raises(InvalidArgumentError):
            await repo.add(info)

        assert await repo.get_all() == []
        assert await get_score_repository(db_session).get_all() == []

    async def test_unknown_restaurant(self, db_session, seed_client_user):
        repo = get_order_repository(db_session)

        with pytest.raises(IncorrectOrderParametersError):
            await repo.add(make_create_info(999, seed_client_user.id))

    async def test_unknown_client(self, db_session, seed_restaurant):
        repo = get_order_repository(db_session)

        with pytest.raises(IncorrectOrderParametersError):
            await repo.add(make_create_info(seed_restaurant.id, 999))

    async def test_end_before_start(self, db_session, seed_restaurant, seed_client_user):
        repo = get_order_repository(db_session)
        info = make_create_info(
            seed_restaurant.id,
            seed_client_user.id,
            visit_start=datetime(2024, 1, 1, 12, 0),
            visit_end=datetime(2024, 1, 1, 10, 0),
        )

        with pytest.raises(IncorrectOrderParametersError):
            await repo.add(info)

    async def test_menu_creates_score_with_total(
        self, db_session, seed_restaurant, seed_client_user, seed_menu
    ):
        repo = get_order_repository(db_session)
        info = make_create_info(
            seed_restaurant.id,
            seed_client_user.id,
            menu=[item.id for item in seed_menu],
            payment_token="tok-1",
        )

        order = await repo.add(info)

        score = await get_score_repository(db_session).get_by_id(order.score)
        assert score.payment_amount == 42.5
        assert score.payment_token == "tok-1"
        assert order.menu == [item.id for item in seed_menu]

    async def test_menu_item_from_elsewhere(
        self, db_session, seed_restaurant, seed_client_user, seed_menu
    ):
        repo = get_order_repository(db_session)
        info = make_create_info(
            seed_restaurant.id, seed_client_user.id, menu=[12345], payment_token="tok-2"
        )

        with pytest.raises(IncorrectOrderParametersError):
            await repo.add(info)

    async def test_reused_payment_token(
        self, db_session, seed_restaurant, seed_client_user, seed_menu
    ):
        repo = get_order_repository(db_session)
        menu = [seed_menu[0].id]
        await repo.add(
            make_create_info(
                seed_restaurant.id, seed_client_user.id, menu=menu, payment_token="tok-3"
            )
        )

        with pytest.raises(AlreadyExistsError):
            await repo.add(
                make_create_info(
                    seed_restaurant.id,
                    seed_client_user.id,
                    menu=menu,
                    payment_token="tok-3",
                    visit_start=datetime(2024, 1, 2, 10, 0),
                    visit_end=datetime(2024, 1, 2, 12, 0),
                )
            )


class TestCapacity:
    async def test_overlapping_orders_exceed_capacity(
        self, db_session, seed_restaurant, seed_client_user
    ):
        repo = get_order_repository(db_session)
        await repo.add(
            make_create_info(seed_restaurant.id, seed_client_user.id, number_of_persons=8)
        )

        with pytest.raises(NoPlaceError):
            await repo.add(
                make_create_info(
                    seed_restaurant.id,
                    seed_client_user.id,
                    number_of_persons=3,
                    visit_start=datetime(2024, 1, 1, 11, 0),
                    visit_end=datetime(2024, 1, 1, 13, 0),
                )
            )

    async def test_adjacent_visit_fits(self, db_session, seed_restaurant, seed_client_user):
        repo = get_order_repository(db_session)
        await repo.add(
            make_create_info(seed_restaurant.id, seed_client_user.id, number_of_persons=8)
        )

        order = await repo.add(
            make_create_info(
                seed_restaurant.id,
                seed_client_user.id,
                number_of_persons=8,
                visit_start=datetime(2024, 1, 1, 12, 0),
                visit_end=datetime(2024, 1, 1, 14, 0),
            )
        )

        assert order.id is not None

    async def test_canceled_orders_free_their_places(
        self, db_session, seed_restaurant, seed_client_user
    ):
        repo = get_order_repository(db_session)
        first = await repo.add(
            make_create_info(seed_restaurant.id, seed_client_user.id, number_of_persons=10)
        )
        await repo.update(first.id, OrderUpdatableInfo(status=OrderStatus.CANCELED))

        second = await repo.add(
            make_create_info(seed_restaurant.id, seed_client_user.id, number_of_persons=10)
        )

        assert second.id != first.id


class TestOrderQueries:
    async def test_get_by_id_not_found(self, db_session):
        with pytest.raises(NotFoundError) as exc_info:
            await get_order_repository(db_session).get_by_id(999)

        assert exc_info.value.status_code == 404

    async def test_get_all_filters_and_keeps_storage_order(
        self, db_session, seed_restaurant, seed_client_user, seed_manager
    ):
        repo = get_order_repository(db_session)
        first = await repo.add(make_create_info(seed_restaurant.id, seed_client_user.id))
        await repo.add(
            make_create_info(
                seed_restaurant.id,
                seed_manager.id,
                visit_start=datetime(2024, 1, 3, 10, 0),
                visit_end=datetime(2024, 1, 3, 11, 0),
            )
        )
        third = await repo.add(
            make_create_info(
                seed_restaurant.id,
                seed_client_user.id,
                visit_start=datetime(2024, 1, 2, 10, 0),
                visit_end=datetime(2024, 1, 2, 11, 0),
            )
        )

        orders = await repo.get_all(
            FilterModel(
                FilterItem("client", seed_client_user.id),
                FilterItem("status", None),
            )
        )

        assert [order.id for order in orders] == [first.id, third.id]
        assert len(await repo.get_all()) == 3
        assert await repo.get_all(FilterModel(FilterItem("status", OrderStatus.COMPLETED))) == []


class TestOrderUpdate:
    async def test_updates_statuses(self, db_session, seed_restaurant, seed_client_user):
        repo = get_order_repository(db_session)
        order = await repo.add(make_create_info(seed_restaurant.id, seed_client_user.id))

        updated = await repo.update(
            order.id,
            OrderUpdatableInfo(
                status=OrderStatus.IN_PROGRESS, cooks_status=CooksStatus.COOKING
            ),
        )

        assert updated.status == OrderStatus.IN_PROGRESS
        assert updated.cooks_status == CooksStatus.COOKING
        assert updated.waiters_status == WaitersStatus.NOT_STARTED
        assert updated.updated_at is not None

    async def test_unknown_status_leaves_order_unchanged(
        self, db_session, seed_restaurant, seed_client_user, seed_cooks
    ):
        repo = get_order_repository(db_session)
        order = await repo.add(make_create_info(seed_restaurant.id, seed_client_user.id))

        with pytest.raises(IncorrectOrderParametersError):
            await repo.update(
                order.id,
                OrderUpdatableInfo(
                    cooks_status=CooksStatus.COOKING,
                    waiters_status="DANCING",
                    cooks=[seed_cooks[0].id],
                ),
            )

        unchanged = await repo.get_by_id(order.id)
        assert unchanged.cooks_status == CooksStatus.NOT_STARTED
        assert await get_performer_repository(db_session).get_for_order(order.id) == []

    async def test_performer_with_wrong_role(
        self, db_session, seed_restaurant, seed_client_user, seed_waiter
    ):
        repo = get_order_repository(db_session)
        order = await repo.add(make_create_info(seed_restaurant.id, seed_client_user.id))

        with pytest.raises(IncorrectOrderParametersError):
            await repo.update(order.id, OrderUpdatableInfo(cooks=[seed_waiter.id]))

    async def test_missing_order(self, db_session):
        with pytest.raises(NotFoundError):
            await get_order_repository(db_session).update(
                999, OrderUpdatableInfo(status=OrderStatus.CONFIRMED)
            )

    async def test_attaches_performers_once(
        self, db_session, seed_restaurant, seed_client_user, seed_cooks, seed_waiter
    ):
        repo = get_order_repository(db_session)
        order = await repo.add(make_create_info(seed_restaurant.id, seed_client_user.id))
        cook_ids = [cook.id for cook in seed_cooks]

        await repo.update(order.id, OrderUpdatableInfo(cooks=cook_ids))
        await repo.update(
            order.id, OrderUpdatableInfo(cooks=[cook_ids[0]], waiters=[seed_waiter.id])
        )

        performers = await get_performer_repository(db_session).get_for_order(order.id)
        assert [p.performer_id for p in performers] == cook_ids + [seed_waiter.id]
        assert all(p.is_open for p in performers)

    async def test_completion_closes_assignments(
        self, db_session, seed_restaurant, seed_client_user, seed_cooks
    ):
        repo = get_order_repository(db_session)
        order = await repo.add(make_create_info(seed_restaurant.id, seed_client_user.id))
        await repo.update(order.id, OrderUpdatableInfo(cooks=[seed_cooks[0].id]))

        await repo.update(order.id, OrderUpdatableInfo(status=OrderStatus.COMPLETED))

        performers = await get_performer_repository(db_session).get_for_order(order.id)
        assert len(performers) == 1
        assert performers[0].end_time is not None
