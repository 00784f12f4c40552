"""
Pytest configuration and fixtures for backend tests.

Async tests run on the anyio pytest plugin; mark modules with
``pytestmark = pytest.mark.anyio``.
"""

from decimal import Decimal

import httpx
import pytest
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from rest_api.main import app
from rest_api.models import Base, MenuItem, Restaurant, User
from shared.config.constants import Roles
from shared.infrastructure.db import get_db
from shared.security.auth import sign_jwt


# SQLite in-memory database for testing
SQLALCHEMY_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
async def test_engine():
    """
    Fresh in-memory database per test.
    StaticPool keeps the single connection (and its data) alive.
    """
    engine = create_async_engine(SQLALCHEMY_DATABASE_URL, poolclass=StaticPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    try:
        yield engine
    finally:
        await engine.dispose()


@pytest.fixture
async def db_session(test_engine):
    """Database session shared by the test and the app under test."""
    session_factory = async_sessionmaker(
        bind=test_engine, autoflush=False, expire_on_commit=False
    )
    async with session_factory() as session:
        yield session


@pytest.fixture
async def client(db_session):
    """
    HTTP client bound to the app with the database session override.
    Lifespan does not run; the schema comes from test_engine.
    """
    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    # Unhandled errors come back as the 500 response instead of raising
    transport = httpx.ASGITransport(app=app, raise_app_exceptions=False)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as test_client:
        yield test_client

    app.dependency_overrides.clear()


# =============================================================================
# Seed data
# =============================================================================


async def create_user(db_session, role: str, email: str) -> User:
    user = User(email=email, role=role, first_name="Test", last_name=role.title())
    db_session.add(user)
    await db_session.commit()
    return user


@pytest.fixture
async def seed_restaurant(db_session):
    """Restaurant seating 10 persons at a time."""
    restaurant = Restaurant(name="Test Restaurant", capacity=10)
    db_session.add(restaurant)
    await db_session.commit()
    return restaurant


@pytest.fixture
async def seed_menu(db_session, seed_restaurant):
    """Two dishes adding up to 42.50."""
    items = [
        MenuItem(restaurant_id=seed_restaurant.id, name="Steak", price=Decimal("30.00")),
        MenuItem(restaurant_id=seed_restaurant.id, name="Salad", price=Decimal("12.50")),
    ]
    db_session.add_all(items)
    await db_session.commit()
    return items


@pytest.fixture
async def seed_client_user(db_session):
    return await create_user(db_session, Roles.CLIENT, "client@test.com")


@pytest.fixture
async def seed_manager(db_session):
    return await create_user(db_session, Roles.MANAGER, "manager@test.com")


@pytest.fixture
async def seed_cooks(db_session):
    return [
        await create_user(db_session, Roles.COOK, "cook1@test.com"),
        await create_user(db_session, Roles.COOK, "cook2@test.com"),
    ]


@pytest.fixture
async def seed_waiter(db_session):
    return await create_user(db_session, Roles.WAITER, "waiter@test.com")


# =============================================================================
# Auth headers
# =============================================================================


def bearer_headers(user_id: int, role: str) -> dict[str, str]:
    token = sign_jwt({"sub": str(user_id), "roles": [role]})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def client_auth_headers(seed_client_user):
    return bearer_headers(seed_client_user.id, Roles.CLIENT)


@pytest.fixture
def manager_auth_headers(seed_manager):
    return bearer_headers(seed_manager.id, Roles.MANAGER)


@pytest.fixture
def cook_auth_headers(seed_cooks):
    return bearer_headers(seed_cooks[0].id, Roles.COOK)
