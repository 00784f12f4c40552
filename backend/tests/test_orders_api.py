"""
Tests for the /orders endpoints.
"""

import pytest

from rest_api.models import Order

pytestmark = pytest.mark.anyio


def order_body(restaurant_id, client_id, **overrides):
    body = {
        "restaurant": restaurant_id,
        "client": client_id,
        "numberOfPersons": 2,
        "visitTime": {"start": "2024-01-01T10:00:00Z", "end": "2024-01-01T12:00:00Z"},
        "comment": "Window table",
    }
    body.update(overrides)
    return body


@pytest.fixture
async def placed_order(client, client_auth_headers, seed_restaurant, seed_client_user):
    response = await client.post(
        "/orders",
        json=order_body(seed_restaurant.id, seed_client_user.id),
        headers=client_auth_headers,
    )
    assert response.status_code == 201, response.json()
    return response.json()


class TestCreateOrder:
    async def test_create_returns_full_order(
        self, client, client_auth_headers, seed_restaurant, seed_client_user
    ):
        response = await client.post(
            "/orders",
            json=order_body(seed_restaurant.id, seed_client_user.id),
            headers=client_auth_headers,
        )

        assert response.status_code == 201
        data = response.json()
        assert data["restaurant"] == seed_restaurant.id
        assert data["numberOfPersons"] == 2
        assert data["visitTime"] == {"start": "2024-01-01T10:00Z", "end": "2024-01-01T12:00Z"}
        assert data["status"] == "PENDING"
        assert data["cooksStatus"] == "NOT_STARTED"
        assert data["waitersStatus"] == "NOT_STARTED"
        assert data["totalAmount"] is None
        assert data["cooks"] == []
        assert data["waiters"] == []

    async def test_create_with_menu(
        self, client, client_auth_headers, seed_restaurant, seed_client_user, seed_menu
    ):
        body = order_body(
            seed_restaurant.id,
            seed_client_user.id,
            menu=[item.id for item in seed_menu],
            paymentToken="tok-api-1",
        )

        response = await client.post("/orders", json=body, headers=client_auth_headers)

        assert response.status_code == 201
        assert response.json()["totalAmount"] == 42.5

    async def test_menu_without_token(
        self, client, client_auth_headers, seed_restaurant, seed_client_user, seed_menu
    ):
        body = order_body(seed_restaurant.id, seed_client_user.id, menu=[seed_menu[0].id])

        response = await client.post("/orders", json=body, headers=client_auth_headers)

        assert response.status_code == 400
        assert response.json()["detail"] == "Properties not set."

    async def test_reused_payment_token(
        self, client, client_auth_headers, seed_restaurant, seed_client_user, seed_menu
    ):
        body = order_body(
            seed_restaurant.id,
            seed_client_user.id,
            menu=[seed_menu[0].id],
            paymentToken="tok-api-2",
        )
        first = await client.post("/orders", json=body, headers=client_auth_headers)
        assert first.status_code == 201

        body["visitTime"] = {"start": "2024-01-05T10:00:00Z", "end": "2024-01-05T12:00:00Z"}
        second = await client.post("/orders", json=body, headers=client_auth_headers)

        assert second.status_code == 409

    async def test_no_place(self, client, client_auth_headers, seed_restaurant, seed_client_user):
        body = order_body(seed_restaurant.id, seed_client_user.id, numberOfPersons=11)

        response = await client.post("/orders", json=body, headers=client_auth_headers)

        assert response.status_code == 400
        assert "No free places" in response.json()["detail"]

    async def test_wrong_shape_is_bad_request(
        self, client, client_auth_headers, seed_restaurant, seed_client_user
    ):
        body = order_body(seed_restaurant.id, seed_client_user.id, numberOfPersons="many")

        response = await client.post("/orders", json=body, headers=client_auth_headers)

        assert response.status_code == 400
        assert response.json()["errors"]

    async def test_requires_authentication(self, client, seed_restaurant, seed_client_user):
        response = await client.post(
            "/orders", json=order_body(seed_restaurant.id, seed_client_user.id)
        )

        assert response.status_code == 401


class TestReadOrders:
    async def test_get_by_id(self, client, client_auth_headers, placed_order):
        response = await client.get(f"/orders/{placed_order['id']}", headers=client_auth_headers)

        assert response.status_code == 200
        assert response.json() == placed_order

    async def test_get_unknown_id(self, client, client_auth_headers):
        response = await client.get("/orders/999", headers=client_auth_headers)

        assert response.status_code == 404
        assert response.json()["detail"] == "Order 999 not found."

    async def test_list_with_filters(
        self, client, client_auth_headers, placed_order, seed_client_user
    ):
        response = await client.get(
            "/orders",
            params={"client": seed_client_user.id, "status": "PENDING"},
            headers=client_auth_headers,
        )

        assert response.status_code == 200
        assert [order["id"] for order in response.json()] == [placed_order["id"]]

        response = await client.get(
            "/orders", params={"status": "COMPLETED"}, headers=client_auth_headers
        )
        assert response.json() == []

    async def test_blank_query_values_are_ignored(
        self, client, client_auth_headers, placed_order
    ):
        response = await client.get(
            "/orders?client=&status=&cooks_status=&waiters_status=",
            headers=client_auth_headers,
        )

        assert response.status_code == 200
        assert [order["id"] for order in response.json()] == [placed_order["id"]]

    async def test_non_numeric_client_filter(self, client, client_auth_headers):
        response = await client.get(
            "/orders", params={"client": "abc"}, headers=client_auth_headers
        )

        assert response.status_code == 400

    async def test_list_passes_through_middleware_stack(
        self, client, client_auth_headers, placed_order
    ):
        response = await client.get("/orders", headers=client_auth_headers)

        assert response.status_code == 200
        assert response.headers["X-Content-Type-Options"] == "nosniff"
        assert "X-Request-ID" in response.headers

    async def test_corrupt_visit_time_is_internal_error(
        self, client, client_auth_headers, db_session, seed_restaurant, seed_client_user
    ):
        order = Order(
            restaurant=seed_restaurant.id,
            client=seed_client_user.id,
            number_of_persons=2,
            visit_time="sometime",
            status="PENDING",
            cooks_status="NOT_STARTED",
            waiters_status="NOT_STARTED",
        )
        db_session.add(order)
        await db_session.commit()

        response = await client.get(f"/orders/{order.id}", headers=client_auth_headers)

        assert response.status_code == 500
        assert response.json()["detail"].startswith("Internal Server Error. Error: ")


class TestPatchOrder:
    async def test_patch_statuses_and_staff(
        self,
        client,
        manager_auth_headers,
        placed_order,
        seed_cooks,
        seed_waiter,
    ):
        response = await client.patch(
            f"/orders/{placed_order['id']}",
            json={
                "orderStatus": "IN_PROGRESS",
                "orderCooksStatus": "COOKING",
                "cooks": [cook.id for cook in seed_cooks],
                "waiters": [seed_waiter.id],
            },
            headers=manager_auth_headers,
        )

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "IN_PROGRESS"
        assert data["cooksStatus"] == "COOKING"
        assert data["waitersStatus"] == "NOT_STARTED"
        assert data["cooks"] == [cook.id for cook in seed_cooks]
        assert data["waiters"] == [seed_waiter.id]
        assert data["updatedAt"] is not None

    async def test_unknown_status_leaves_order_unchanged(
        self, client, manager_auth_headers, placed_order
    ):
        response = await client.patch(
            f"/orders/{placed_order['id']}",
            json={"orderStatus": "DONE"},
            headers=manager_auth_headers,
        )

        assert response.status_code == 400

        after = await client.get(f"/orders/{placed_order['id']}", headers=manager_auth_headers)
        assert after.json()["status"] == "PENDING"

    async def test_unknown_order(self, client, manager_auth_headers):
        response = await client.patch(
            "/orders/999", json={"orderStatus": "CONFIRMED"}, headers=manager_auth_headers
        )

        assert response.status_code == 404

    async def test_client_cannot_patch(self, client, client_auth_headers, placed_order):
        response = await client.patch(
            f"/orders/{placed_order['id']}",
            json={"orderStatus": "CONFIRMED"},
            headers=client_auth_headers,
        )

        assert response.status_code == 403

    async def test_client_gets_403_even_with_invalid_body(
        self, client, client_auth_headers, placed_order
    ):
        response = await client.patch(
            f"/orders/{placed_order['id']}",
            json={"cooks": "everyone"},
            headers=client_auth_headers,
        )

        assert response.status_code == 403

    async def test_invalid_body_from_operator_is_bad_request(
        self, client, manager_auth_headers, placed_order
    ):
        response = await client.patch(
            f"/orders/{placed_order['id']}",
            json={"cooks": "everyone"},
            headers=manager_auth_headers,
        )

        assert response.status_code == 400
        assert response.json()["detail"] == "Properties not set."

    async def test_cook_can_patch(self, client, placed_order, cook_auth_headers):
        response = await client.patch(
            f"/orders/{placed_order['id']}",
            json={"orderCooksStatus": "COOKED"},
            headers=cook_auth_headers,
        )

        assert response.status_code == 200
        assert response.json()["cooksStatus"] == "COOKED"
